from __future__ import annotations

from typing import Callable

from blinker import Signal

from .types import CardState

Event = dict[str, object]
Listener = Callable[..., None]

# Lifecycle
EVENT_GAME_STARTED = "game_started"      # payload: rows=int, cols=int
EVENT_GAME_OVER = "game_over"            # payload: none

# Match resolution
EVENT_MATCHED = "matched"                # payload: first=CardState, second=CardState
EVENT_MISMATCHED = "mismatched"          # payload: first=CardState, second=CardState
EVENT_TURN_RECORDED = "turn_recorded"    # payload: turn_count=int
EVENT_SCORE_CHANGED = "score_changed"    # payload: score=int

# Board
EVENT_BOARD_BUILT = "board_built"        # payload: rows=int, cols=int, cards=list[CardState]
EVENT_BOARD_RESTORED = "board_restored"  # payload: rows=int, cols=int, cards=list[CardState]
EVENT_CARD_FLIPPED = "card_flipped"      # payload: card=CardState
EVENT_CARD_HIDDEN = "card_hidden"        # payload: card=CardState

ALL_EVENTS = (
    EVENT_GAME_STARTED,
    EVENT_GAME_OVER,
    EVENT_MATCHED,
    EVENT_MISMATCHED,
    EVENT_TURN_RECORDED,
    EVENT_SCORE_CHANGED,
    EVENT_BOARD_BUILT,
    EVENT_BOARD_RESTORED,
    EVENT_CARD_FLIPPED,
    EVENT_CARD_HIDDEN,
)


def _loggable(value: object) -> object:
    if isinstance(value, CardState):
        return value.id
    if isinstance(value, (list, tuple)):
        return [_loggable(v) for v in value]
    return value


class EventBus:
    """Named blinker signals plus a flat log of everything emitted.

    Listeners are called as ``fn(sender, **payload)``.
    """

    def __init__(self) -> None:
        self._signals: dict[str, Signal] = {}
        self.log: list[Event] = []

    def subscribe(self, name: str, fn: Listener) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # strong refs so bound methods of short-lived owners keep receiving
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Listener) -> None:
        sig = self._signals.get(name)
        if sig is not None:
            sig.disconnect(fn)

    def emit(self, name: str, **payload: object) -> None:
        rec: Event = {"type": name}
        for k, v in payload.items():
            rec[k] = _loggable(v)
        self.log.append(rec)
        sig = self._signals.get(name)
        if sig is not None:
            sig.send(self, **payload)
