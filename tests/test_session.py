from __future__ import annotations

from flipmatch.engine.events import EventBus
from flipmatch.engine.ledger import ScoreLedger
from flipmatch.engine.session import GameSession
from flipmatch.engine.types import SessionState


def _session() -> tuple[GameSession, ScoreLedger, EventBus]:
    ledger = ScoreLedger()
    bus = EventBus()
    return GameSession(ledger, bus), ledger, bus


def test_start_game_resets_ledger_and_announces_board() -> None:
    session, ledger, bus = _session()
    ledger.record_match()
    assert session.phase == "idle"

    state = session.start_game(2, 3)
    assert state == SessionState(rows=2, cols=3)
    assert session.total_pairs == 3
    assert session.phase == "active"
    assert ledger.score == 0
    assert bus.log == [{"type": "game_started", "rows": 2, "cols": 3}]


def test_dimensions_are_clamped_to_one() -> None:
    session, _, bus = _session()
    session.start_game(0, -3)
    assert (session.rows, session.cols) == (1, 1)
    assert session.total_pairs == 0
    assert bus.log[-1] == {"type": "game_started", "rows": 1, "cols": 1}


def test_completion_fires_exactly_once() -> None:
    session, ledger, bus = _session()
    session.start_game(2, 2)

    ledger.record_match()
    assert session.check_completion() is False
    ledger.record_match()
    assert session.check_completion() is True
    assert session.check_completion() is False
    assert session.check_completion() is False

    assert session.phase == "over"
    assert [e["type"] for e in bus.log].count("game_over") == 1


def test_degenerate_board_never_completes() -> None:
    session, _, bus = _session()
    session.start_game(1, 1)
    assert session.check_completion() is False
    assert session.phase == "active"
    assert all(e["type"] != "game_over" for e in bus.log)


def test_replay_reuses_dimensions_and_rearms_completion() -> None:
    session, ledger, bus = _session()
    session.start_game(2, 2)
    ledger.record_match()
    ledger.record_match()
    assert session.check_completion() is True

    session.replay()
    assert (session.rows, session.cols) == (2, 2)
    assert session.phase == "active"
    assert ledger.match_count == 0

    ledger.record_match()
    ledger.record_match()
    assert session.check_completion() is True
    assert [e["type"] for e in bus.log].count("game_over") == 2


def test_replay_before_start_uses_default_layout() -> None:
    session, _, _ = _session()
    session.replay()
    assert (session.rows, session.cols) == (3, 4)


def test_restore_of_finished_board_does_not_reemit() -> None:
    session, ledger, bus = _session()
    ledger.restore(score=220, turn_count=2, match_count=2)
    session.restore(SessionState(rows=2, cols=2), completed=True)
    assert session.phase == "over"
    assert session.check_completion() is False
    assert bus.log == []
