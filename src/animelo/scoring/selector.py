"""Choosing the next pair of anime to compare."""

import logging

from animelo.db.repository import AnimeRepository, OrderPolicy
from animelo.models.elo import Matchup

logger = logging.getLogger(__name__)


class InsufficientCandidatesError(Exception):
    """Fewer than two eligible anime exist, so nothing can be compared."""


class PairSelector:
    """Pick two distinct eligible anime, least-compared first.

    Anime with the fewest fights surface first so coverage spreads across the
    whole list; ties are broken randomly by the store.
    """

    def __init__(self, repo: AnimeRepository) -> None:
        self.repo = repo

    def select(self) -> Matchup:
        """Select the next matchup.

        Raises:
            InsufficientCandidatesError: If fewer than two eligible anime exist
        """
        candidates = self.repo.sample_eligible(2, OrderPolicy.LEAST_COMPARED)
        if len(candidates) < 2:
            msg = (
                f"Need at least two anime with status '{self.repo.eligible_status}' "
                f"to compare, found {len(candidates)}"
            )
            raise InsufficientCandidatesError(msg)

        up, down = candidates
        logger.debug(
            "Selected %d (%d fights) vs %d (%d fights)",
            up.anidb_id,
            up.fights,
            down.anidb_id,
            down.fights,
        )
        return Matchup(up=up, down=down)
