from __future__ import annotations

import pytest

from flipmatch.engine.ledger import LedgerState, ScoreLedger, ScoringConfig
from flipmatch.engine.types import CorruptSaveData


def test_consecutive_matches_earn_combo_bonus() -> None:
    for k in range(1, 11):
        ledger = ScoreLedger()
        for _ in range(k):
            ledger.record_match()
        assert ledger.score == 100 * k + 20 * k * (k - 1) // 2
        assert ledger.combo_streak == k
        assert ledger.match_count == k


def test_reset_combo_restarts_at_base_points() -> None:
    ledger = ScoreLedger()
    ledger.record_match()
    ledger.record_match()
    assert ledger.score == 220

    ledger.reset_combo()
    assert ledger.record_match() == 100
    assert ledger.score == 320
    assert ledger.combo_streak == 1


def test_turns_are_counted_independently() -> None:
    ledger = ScoreLedger()
    ledger.record_turn()
    ledger.record_turn()
    assert ledger.turn_count == 2
    assert ledger.match_count == 0
    assert ledger.score == 0


def test_reset_zeroes_everything() -> None:
    ledger = ScoreLedger()
    ledger.record_match()
    ledger.record_turn()
    ledger.reset()
    assert ledger.state == LedgerState()


def test_custom_scoring() -> None:
    ledger = ScoreLedger(ScoringConfig(base_points=10, combo_bonus=5))
    ledger.record_match()
    ledger.record_match()
    assert ledger.score == 10 + 15


def test_restore_keeps_score_verbatim() -> None:
    ledger = ScoreLedger()
    ledger.record_match()
    ledger.restore(score=220, turn_count=3, match_count=2)
    assert ledger.state == LedgerState(turn_count=3, match_count=2, score=220, combo_streak=0)


def test_restore_rejects_negative_counters() -> None:
    ledger = ScoreLedger()
    ledger.record_match()
    with pytest.raises(CorruptSaveData):
        ledger.restore(score=-1, turn_count=0, match_count=0)
    # nothing changed
    assert ledger.score == 100
