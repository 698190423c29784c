from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Mapping, Sequence

from .ledger import LedgerState
from .session import GameSession
from .types import CardState, CorruptSaveData, SessionState

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class CardRecord:
    face_value: int
    is_matched: bool

    def to_dict(self) -> dict[str, object]:
        return {"face_value": self.face_value, "is_matched": self.is_matched}

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "CardRecord":
        return CardRecord(face_value=_require_int(d, "face_value"), is_matched=_require_bool(d, "is_matched"))


@dataclass(frozen=True)
class Snapshot:
    rows: int
    cols: int
    score: int
    turn_count: int
    match_count: int
    cards: tuple[CardRecord, ...]
    version: int = SNAPSHOT_VERSION

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "rows": self.rows,
            "cols": self.cols,
            "score": self.score,
            "turn_count": self.turn_count,
            "match_count": self.match_count,
            "cards": [c.to_dict() for c in self.cards],
        }

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "Snapshot":
        raw_cards = d.get("cards")
        if not isinstance(raw_cards, list):
            raise CorruptSaveData("Expected list for cards")
        cards: list[CardRecord] = []
        for item in raw_cards:
            if not isinstance(item, dict):
                raise CorruptSaveData("Expected object for card entry")
            cards.append(CardRecord.from_dict(item))
        version = d.get("version", SNAPSHOT_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            raise CorruptSaveData("Expected int for version")
        return Snapshot(
            rows=_require_int(d, "rows"),
            cols=_require_int(d, "cols"),
            score=_require_int(d, "score"),
            turn_count=_require_int(d, "turn_count"),
            match_count=_require_int(d, "match_count"),
            cards=tuple(cards),
            version=version,
        )


@dataclass(frozen=True)
class RestoredBoard:
    session: SessionState
    ledger: LedgerState
    cards: list[CardState]

    @property
    def completed(self) -> bool:
        return self.session.total_pairs > 0 and self.ledger.match_count >= self.session.total_pairs


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    # bool is an int subclass; a saved True is not a counter
    if not isinstance(v, int) or isinstance(v, bool):
        raise CorruptSaveData(f"Expected int for {key}")
    return v


def _require_bool(obj: Mapping[str, object], key: str) -> bool:
    v = obj.get(key)
    if not isinstance(v, bool):
        raise CorruptSaveData(f"Expected bool for {key}")
    return v


def capture(session: GameSession, cards: Sequence[CardState]) -> Snapshot:
    """Record the board and ledger as they stand.

    Take this only while the match queue is idle. A lone face-up card still
    waiting for its partner is saved as unmatched and comes back face down.
    """
    return Snapshot(
        rows=session.rows,
        cols=session.cols,
        score=session.ledger.score,
        turn_count=session.ledger.turn_count,
        match_count=session.ledger.match_count,
        cards=tuple(CardRecord(face_value=c.face_value, is_matched=c.is_matched) for c in cards),
    )


def validate(snapshot: Snapshot, face_count: int | None = None) -> None:
    if snapshot.rows < 1 or snapshot.cols < 1:
        raise CorruptSaveData(f"Invalid board size {snapshot.rows}x{snapshot.cols}.")
    if snapshot.score < 0 or snapshot.turn_count < 0 or snapshot.match_count < 0:
        raise CorruptSaveData("Ledger counters must be non-negative.")

    session = SessionState(rows=snapshot.rows, cols=snapshot.cols)
    if len(snapshot.cards) != session.card_count:
        raise CorruptSaveData(
            f"Expected {session.card_count} cards for {snapshot.rows}x{snapshot.cols}, got {len(snapshot.cards)}."
        )
    for i, rec in enumerate(snapshot.cards):
        if rec.face_value < 0 or (face_count is not None and rec.face_value >= face_count):
            raise CorruptSaveData(f"Card {i} has face id {rec.face_value} out of range.")

    if snapshot.match_count > session.total_pairs:
        raise CorruptSaveData(f"match_count {snapshot.match_count} exceeds {session.total_pairs} pairs.")
    if snapshot.turn_count < snapshot.match_count:
        raise CorruptSaveData("turn_count cannot be lower than match_count.")

    matched = Counter(rec.face_value for rec in snapshot.cards if rec.is_matched)
    if sum(matched.values()) != 2 * snapshot.match_count:
        raise CorruptSaveData("Matched cards do not agree with match_count.")
    for face, count in matched.items():
        if count % 2 != 0:
            raise CorruptSaveData(f"Face {face} has an unpaired matched card.")
    # a board with an odd face out can never be cleared
    for face, count in Counter(rec.face_value for rec in snapshot.cards).items():
        if count % 2 != 0:
            raise CorruptSaveData(f"Face {face} appears {count} times; every face must come in pairs.")


def restore(snapshot: Snapshot, face_count: int | None = None) -> RestoredBoard:
    """Rebuild session, ledger counters and cards exactly as captured.

    The score is taken verbatim: recomputing it from match_count would lose
    the combo bonuses earned in the original play.
    """
    validate(snapshot, face_count=face_count)
    cards = [
        CardState(id=i, face_value=rec.face_value, is_matched=rec.is_matched, is_face_up=rec.is_matched)
        for i, rec in enumerate(snapshot.cards)
    ]
    return RestoredBoard(
        session=SessionState(rows=snapshot.rows, cols=snapshot.cols),
        ledger=LedgerState(
            turn_count=snapshot.turn_count,
            match_count=snapshot.match_count,
            score=snapshot.score,
            combo_streak=0,
        ),
        cards=cards,
    )
