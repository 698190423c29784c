from __future__ import annotations

from dataclasses import dataclass

from .types import CorruptSaveData


@dataclass(frozen=True)
class ScoringConfig:
    base_points: int = 100
    combo_bonus: int = 20


@dataclass(frozen=True)
class LedgerState:
    turn_count: int = 0
    match_count: int = 0
    score: int = 0
    combo_streak: int = 0


class ScoreLedger:
    """Turn, match, score and combo bookkeeping.

    Pure counters: nothing here knows about cards or timing. Every counter
    only grows between resets except ``combo_streak``, which drops back to
    zero on a mismatch.
    """

    def __init__(self, scoring: ScoringConfig | None = None) -> None:
        self.scoring = scoring or ScoringConfig()
        self.turn_count = 0
        self.match_count = 0
        self.score = 0
        self.combo_streak = 0

    def reset(self) -> None:
        self.turn_count = 0
        self.match_count = 0
        self.score = 0
        self.combo_streak = 0

    def record_match(self) -> int:
        """Count a match and return the points it earned."""
        self.match_count += 1
        self.combo_streak += 1
        points = self.scoring.base_points + (self.combo_streak - 1) * self.scoring.combo_bonus
        self.score += points
        return points

    def record_turn(self) -> None:
        self.turn_count += 1

    def reset_combo(self) -> None:
        self.combo_streak = 0

    def restore(self, score: int, turn_count: int, match_count: int) -> None:
        if score < 0 or turn_count < 0 or match_count < 0:
            raise CorruptSaveData("Ledger counters must be non-negative.")
        self.score = score
        self.turn_count = turn_count
        self.match_count = match_count
        # the streak that produced the saved score is not persisted
        self.combo_streak = 0

    @property
    def state(self) -> LedgerState:
        return LedgerState(
            turn_count=self.turn_count,
            match_count=self.match_count,
            score=self.score,
            combo_streak=self.combo_streak,
        )
