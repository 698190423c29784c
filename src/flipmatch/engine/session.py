from __future__ import annotations

from .events import EVENT_GAME_OVER, EVENT_GAME_STARTED, EventBus
from .ledger import ScoreLedger
from .types import Phase, SessionState

DEFAULT_ROWS = 3
DEFAULT_COLS = 4


class GameSession:
    """Game lifecycle: idle -> active -> over, and back to active on start/replay.

    The session does not stop flips once the game is over; listeners of
    ``game_over`` are expected to stop feeding the queue.
    """

    def __init__(
        self,
        ledger: ScoreLedger,
        bus: EventBus,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ) -> None:
        self.ledger = ledger
        self.bus = bus
        self.phase: Phase = "idle"
        self.state = SessionState(rows=max(1, rows), cols=max(1, cols))
        self._over_emitted = False

    @property
    def rows(self) -> int:
        return self.state.rows

    @property
    def cols(self) -> int:
        return self.state.cols

    @property
    def total_pairs(self) -> int:
        return self.state.total_pairs

    def start_game(self, rows: int, cols: int) -> SessionState:
        self.state = SessionState(rows=max(1, rows), cols=max(1, cols))
        self.ledger.reset()
        self._over_emitted = False
        self.phase = "active"
        self.bus.emit(EVENT_GAME_STARTED, rows=self.state.rows, cols=self.state.cols)
        return self.state

    def replay(self) -> SessionState:
        return self.start_game(self.state.rows, self.state.cols)

    def check_completion(self) -> bool:
        """Return True the first time every pair has been found.

        Emits ``game_over`` on that call only; repeated calls return False.
        """
        if self._over_emitted:
            return False
        if self.total_pairs <= 0:
            return False
        if self.ledger.match_count < self.total_pairs:
            return False
        self._over_emitted = True
        self.phase = "over"
        self.bus.emit(EVENT_GAME_OVER)
        return True

    def restore(self, state: SessionState, completed: bool) -> None:
        self.state = state
        self._over_emitted = completed
        self.phase = "over" if completed else "active"
