"""animelo: rank an anime list with Elo ratings through pairwise comparisons."""
