from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Phase = Literal["idle", "active", "over"]


class EngineError(RuntimeError):
    pass


class InvalidConfiguration(EngineError):
    """Bad generator or layout inputs (e.g. a nonpositive face count)."""


class InvalidInput(EngineError):
    """A missing or ineligible card was handed to the engine."""


class CorruptSaveData(EngineError):
    """A snapshot failed structural or consistency validation."""


@dataclass(eq=False)
class CardState:
    """One card on the board.

    Compared by identity: two cards with the same face are still different
    cards, and the queue relies on that to detect duplicate entries.
    """

    id: int
    face_value: int
    is_matched: bool = False
    is_face_up: bool = False

    def mark_matched(self) -> None:
        self.is_matched = True
        self.is_face_up = True

    def __repr__(self) -> str:
        status = "matched" if self.is_matched else "up" if self.is_face_up else "down"
        return f"CardState(id={self.id}, face={self.face_value}, {status})"


@dataclass(frozen=True)
class SessionState:
    rows: int
    cols: int

    @property
    def total_pairs(self) -> int:
        return (self.rows * self.cols) // 2

    @property
    def card_count(self) -> int:
        # odd boards drop their last slot
        return self.total_pairs * 2
