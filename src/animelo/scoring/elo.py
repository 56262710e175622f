"""Elo rating calculation for pairwise comparisons.

Ratings are integers. Each rating change is truncated toward zero, so the
points gained by the winner and lost by the loser need not be equal.
"""

import math

from animelo.models.anime import DEFAULT_ELO_RATING, Anime
from animelo.models.elo import EloUpdate

__all__ = [
    "DEFAULT_ELO_RATING",
    "K_FACTOR",
    "calculate_elo_update",
    "calculate_expected_score",
    "create_elo_update",
]

# Maximum rating points transferable in one comparison
K_FACTOR = 50


def calculate_expected_score(rating_a: float, rating_b: float) -> float:
    """Calculate expected score for A against B.

    Args:
        rating_a: Current Elo rating of A
        rating_b: Current Elo rating of B

    Returns:
        Probability that A is judged the winner (0.0 to 1.0)
    """
    return 1.0 / (1.0 + math.pow(10.0, (rating_b - rating_a) / 400.0))


def calculate_elo_update(
    winner_elo: int, loser_elo: int, k_factor: int = K_FACTOR
) -> tuple[int, int]:
    """Calculate new Elo ratings after a decision.

    Args:
        winner_elo: Current Elo rating of the chosen anime
        loser_elo: Current Elo rating of the other anime
        k_factor: Maximum points transferable

    Returns:
        Tuple of (new_winner_elo, new_loser_elo)
    """
    expected_winner = calculate_expected_score(winner_elo, loser_elo)
    expected_loser = 1.0 - expected_winner

    winner_change = math.trunc(k_factor * (1.0 - expected_winner))
    loser_change = math.trunc(k_factor * (0.0 - expected_loser))

    return winner_elo + winner_change, loser_elo + loser_change


def create_elo_update(winner: Anime, loser: Anime, k_factor: int = K_FACTOR) -> EloUpdate:
    """Create an EloUpdate with calculated new ratings.

    Args:
        winner: Anime chosen by the user
        loser: Anime not chosen
        k_factor: Maximum points transferable

    Returns:
        EloUpdate with before/after ratings, ready to persist
    """
    new_winner_elo, new_loser_elo = calculate_elo_update(winner.elo, loser.elo, k_factor)

    return EloUpdate(
        winner_id=winner.anidb_id,
        loser_id=loser.anidb_id,
        winner_elo_before=winner.elo,
        winner_elo_after=new_winner_elo,
        loser_elo_before=loser.elo,
        loser_elo_after=new_loser_elo,
        k_factor=k_factor,
    )
