"""Tests for the comparison session state machine."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from animelo.db.exceptions import NotFoundError
from animelo.db.repository import AnimeRepository
from animelo.models.anime import Anime
from animelo.models.elo import Matchup, Side
from animelo.scoring.selector import InsufficientCandidatesError, PairSelector
from animelo.session.controller import SessionController, SessionState
from animelo.session.intents import Decide, MoveFocus, Quit


def _controller(repo: AnimeRepository) -> SessionController:
    return SessionController(repo, PairSelector(repo))


class TestStart:
    """Tests for starting a session."""

    def test_start_loads_matchup(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        add_anime(1)
        add_anime(2)
        controller = _controller(repo)

        assert controller.state is SessionState.IDLE
        matchup = controller.start()

        assert controller.state is SessionState.AWAITING_DECISION
        assert controller.matchup == matchup
        assert controller.focus is Side.UP

    def test_start_with_one_eligible(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        add_anime(1)
        add_anime(2, status="Dropped")

        with pytest.raises(InsufficientCandidatesError):
            _controller(repo).start()

    def test_matchup_before_start(self, repo: AnimeRepository) -> None:
        with pytest.raises(RuntimeError):
            _ = _controller(repo).matchup


class TestDecide:
    """Tests for deciding a matchup."""

    def test_a_beats_b(self, repo: AnimeRepository, add_anime: Callable[..., Anime]) -> None:
        """Two fresh anime: winner 1525, loser 1475, one fight each."""
        add_anime(1, title="A")
        add_anime(2, title="B")
        controller = _controller(repo)
        controller.start()
        a_side = Side.UP if controller.matchup.up.anidb_id == 1 else Side.DOWN

        update = controller.handle(Decide(a_side))

        assert update is not None
        assert update.winner_id == 1
        a, b = repo.get(1), repo.get(2)
        assert (a.elo, a.fights) == (1525, 1)
        assert (b.elo, b.fights) == (1475, 1)
        assert controller.decisions == 1
        assert controller.state is SessionState.AWAITING_DECISION

    def test_decide_focused_side(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        add_anime(1)
        add_anime(2)
        controller = _controller(repo)
        controller.start()
        bottom_id = controller.matchup.down.anidb_id

        controller.handle(MoveFocus(Side.DOWN))
        update = controller.handle(Decide())

        assert update is not None
        assert update.winner_id == bottom_id

    def test_only_participants_change(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        for anidb_id in range(1, 6):
            add_anime(anidb_id, fights=anidb_id)
        # Two least compared: 1 and 2
        before = {a.anidb_id: a for a in repo.sample_eligible(10)}
        controller = _controller(repo)
        controller.start()

        controller.handle(Decide(Side.UP))

        after = {a.anidb_id: a for a in repo.sample_eligible(10)}
        for anidb_id in (1, 2):
            assert after[anidb_id].fights == before[anidb_id].fights + 1
            assert after[anidb_id].elo != before[anidb_id].elo
        for anidb_id in (3, 4, 5):
            assert after[anidb_id] == before[anidb_id]

    def test_next_matchup_loaded_and_focus_reset(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        for anidb_id in range(1, 5):
            add_anime(anidb_id)
        controller = _controller(repo)
        first = controller.start()
        controller.handle(MoveFocus(Side.DOWN))

        controller.handle(Decide())

        second = controller.matchup
        # The two unjudged anime now have the fewest fights
        assert {second.up.anidb_id, second.down.anidb_id}.isdisjoint(
            {first.up.anidb_id, first.down.anidb_id}
        )
        assert controller.focus is Side.UP

    def test_writes_winner_then_loser(self) -> None:
        up = Anime(anidb_id=1, title="A", status="Completed", elo=1600)
        down = Anime(anidb_id=2, title="B", status="Completed", elo=1400)
        repo = MagicMock(spec=AnimeRepository)
        selector = MagicMock(spec=PairSelector)
        selector.select.return_value = Matchup(up=up, down=down)
        controller = SessionController(repo, selector)
        controller.start()

        controller.handle(Decide(Side.DOWN))

        assert [c.args for c in repo.update_rating.call_args_list] == [(2, 1437), (1, 1563)]

    def test_missing_anime_is_fatal(self) -> None:
        repo = MagicMock(spec=AnimeRepository)
        repo.update_rating.side_effect = NotFoundError(1)
        selector = MagicMock(spec=PairSelector)
        selector.select.return_value = Matchup(
            up=Anime(anidb_id=1, title="A", status="Completed"),
            down=Anime(anidb_id=2, title="B", status="Completed"),
        )
        controller = SessionController(repo, selector)
        controller.start()

        with pytest.raises(NotFoundError):
            controller.handle(Decide(Side.UP))


class TestFocusAndQuit:
    """Tests for intents that don't decide anything."""

    def test_move_focus_touches_no_store(self) -> None:
        repo = MagicMock(spec=AnimeRepository)
        selector = MagicMock(spec=PairSelector)
        selector.select.return_value = Matchup(
            up=Anime(anidb_id=1, title="A", status="Completed"),
            down=Anime(anidb_id=2, title="B", status="Completed"),
        )
        controller = SessionController(repo, selector)
        controller.start()

        assert controller.handle(MoveFocus(Side.DOWN)) is None
        assert controller.handle(MoveFocus(Side.UP)) is None
        assert controller.handle(MoveFocus(Side.DOWN)) is None

        assert controller.focus is Side.DOWN
        assert controller.state is SessionState.AWAITING_DECISION
        assert repo.method_calls == []
        assert selector.select.call_count == 1

    def test_quit(self, repo: AnimeRepository, add_anime: Callable[..., Anime]) -> None:
        add_anime(1)
        add_anime(2)
        controller = _controller(repo)
        controller.start()

        controller.handle(Quit())

        assert controller.state is SessionState.TERMINATED
        assert repo.get(1).fights == 0
        assert repo.get(2).fights == 0

    def test_quit_before_start(self, repo: AnimeRepository) -> None:
        controller = _controller(repo)
        controller.handle(Quit())
        assert controller.state is SessionState.TERMINATED

    def test_ignored_after_quit(
        self, repo: AnimeRepository, add_anime: Callable[..., Anime]
    ) -> None:
        add_anime(1)
        add_anime(2)
        controller = _controller(repo)
        controller.start()
        controller.handle(Quit())

        assert controller.handle(Decide(Side.UP)) is None

        assert controller.state is SessionState.TERMINATED
        assert repo.get(1).fights == 0

    def test_decide_before_start(self, repo: AnimeRepository) -> None:
        with pytest.raises(RuntimeError):
            _controller(repo).handle(Decide(Side.UP))
