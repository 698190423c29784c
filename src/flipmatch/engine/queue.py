from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Literal

from .events import (
    EVENT_MATCHED,
    EVENT_MISMATCHED,
    EVENT_SCORE_CHANGED,
    EVENT_TURN_RECORDED,
    EventBus,
)
from .ledger import ScoreLedger
from .types import CardState, InvalidInput

OutcomeKind = Literal["matched", "mismatched", "skipped"]
SkipReason = Literal["stale", "duplicate"]


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    first: CardState
    second: CardState
    reason: SkipReason | None = None
    game_over: bool = False


class MatchQueue:
    """FIFO of face-up cards, compared two at a time in flip order.

    Stale entries (a card matched after it was queued) and the same card
    queued twice in one pair are skipped without touching the ledger. They
    are expected interleavings with the presentation layer, not errors.
    """

    def __init__(
        self,
        ledger: ScoreLedger,
        bus: EventBus,
        completion_check: Callable[[], bool] | None = None,
    ) -> None:
        self.ledger = ledger
        self.bus = bus
        self.completion_check = completion_check
        self._pending: deque[CardState] = deque()
        self._draining = False

    @property
    def pending(self) -> list[CardState]:
        return list(self._pending)

    @property
    def is_idle(self) -> bool:
        return not self._draining and len(self._pending) < 2

    def clear(self) -> None:
        self._pending.clear()

    def enqueue(self, card: CardState | None) -> list[Outcome]:
        """Queue a card that just turned face up.

        Returns the outcomes resolved by this call. A call made from a
        listener while a drain is already running returns an empty list;
        the running drain picks its card up.
        """
        if card is None:
            raise InvalidInput("Cannot enqueue a missing card.")
        if card.is_matched:
            raise InvalidInput(f"Card {card.id} is already matched.")

        self._pending.append(card)
        if self._draining:
            return []
        return self._drain()

    def _drain(self) -> list[Outcome]:
        self._draining = True
        outcomes: list[Outcome] = []
        try:
            while len(self._pending) >= 2:
                first = self._pending.popleft()
                second = self._pending.popleft()
                outcomes.append(self._compare(first, second))
        finally:
            self._draining = False
        return outcomes

    def _compare(self, first: CardState, second: CardState) -> Outcome:
        if first.is_matched or second.is_matched:
            return Outcome(kind="skipped", first=first, second=second, reason="stale")
        if first is second:
            return Outcome(kind="skipped", first=first, second=second, reason="duplicate")

        if first.face_value == second.face_value:
            first.mark_matched()
            second.mark_matched()
            self.ledger.record_match()
            self.ledger.record_turn()
            self.bus.emit(EVENT_MATCHED, first=first, second=second)
            self.bus.emit(EVENT_SCORE_CHANGED, score=self.ledger.score)
            self.bus.emit(EVENT_TURN_RECORDED, turn_count=self.ledger.turn_count)
            over = self.completion_check() if self.completion_check is not None else False
            return Outcome(kind="matched", first=first, second=second, game_over=over)

        self.ledger.record_turn()
        self.ledger.reset_combo()
        self.bus.emit(EVENT_MISMATCHED, first=first, second=second)
        self.bus.emit(EVENT_TURN_RECORDED, turn_count=self.ledger.turn_count)
        return Outcome(kind="mismatched", first=first, second=second)
