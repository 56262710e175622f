"""Comparison session state machine.

The controller owns one matchup at a time. A decision updates both ratings
through the store, synchronously, before the next matchup is loaded, so
quitting never discards anything.
"""

import logging
from enum import Enum

from animelo.db.repository import AnimeRepository
from animelo.models.elo import EloUpdate, Matchup, Side
from animelo.scoring.elo import create_elo_update
from animelo.scoring.selector import PairSelector
from animelo.session.intents import Decide, Intent, MoveFocus, Quit

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a comparison session."""

    IDLE = "idle"
    AWAITING_DECISION = "awaiting_decision"
    RESOLVING = "resolving"
    TERMINATED = "terminated"


class SessionController:
    """Drive comparison rounds: select, decide, update, persist, repeat."""

    def __init__(self, repo: AnimeRepository, selector: PairSelector) -> None:
        self.repo = repo
        self.selector = selector
        self.state = SessionState.IDLE
        self.focus = Side.UP
        self.decisions = 0
        self._matchup: Matchup | None = None

    @property
    def matchup(self) -> Matchup:
        """The matchup currently on display."""
        if self._matchup is None:
            raise RuntimeError("Session has not been started")
        return self._matchup

    def start(self) -> Matchup:
        """Load the first matchup.

        Raises:
            InsufficientCandidatesError: If there is nothing to compare
        """
        self._matchup = self.selector.select()
        self.focus = Side.UP
        self.state = SessionState.AWAITING_DECISION
        logger.info("Session started")
        return self._matchup

    def handle(self, intent: Intent) -> EloUpdate | None:
        """Apply one intent. Returns the rating update when a decision was made."""
        if self.state is SessionState.TERMINATED:
            logger.debug("Ignoring %r after session ended", intent)
            return None

        if isinstance(intent, Quit):
            self.state = SessionState.TERMINATED
            logger.info("Session ended after %d decisions", self.decisions)
            return None

        if self.state is not SessionState.AWAITING_DECISION:
            raise RuntimeError(f"Cannot handle {intent!r} in state {self.state.value}")

        if isinstance(intent, MoveFocus):
            self.focus = intent.side
            return None

        return self._decide(intent.side or self.focus)

    def _decide(self, side: Side) -> EloUpdate:
        self.state = SessionState.RESOLVING
        winner = self.matchup.at(side)
        loser = self.matchup.at(side.other)

        update = create_elo_update(winner, loser)

        # Winner first, then loser; each write commits on its own
        self.repo.update_rating(update.winner_id, update.winner_elo_after)
        self.repo.update_rating(update.loser_id, update.loser_elo_after)
        self.decisions += 1

        logger.debug(
            "Decision %d: %s (%d → %d) beat %s (%d → %d)",
            self.decisions,
            winner.title,
            update.winner_elo_before,
            update.winner_elo_after,
            loser.title,
            update.loser_elo_before,
            update.loser_elo_after,
        )

        self._matchup = self.selector.select()
        self.focus = Side.UP
        self.state = SessionState.AWAITING_DECISION
        return update
