from __future__ import annotations

from dataclasses import dataclass, field

from .events import (
    EVENT_BOARD_BUILT,
    EVENT_BOARD_RESTORED,
    EVENT_CARD_FLIPPED,
    EVENT_CARD_HIDDEN,
    EVENT_GAME_STARTED,
    EVENT_MISMATCHED,
    EventBus,
)
from .generator import PairGenerator, RandomPairGenerator
from .ledger import ScoreLedger, ScoringConfig
from .queue import MatchQueue, Outcome
from .session import DEFAULT_COLS, DEFAULT_ROWS, GameSession
from .snapshot import Snapshot, capture, restore
from .types import CardState, InvalidConfiguration, InvalidInput


@dataclass(frozen=True)
class GameConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    face_count: int = 12
    # hide mismatched pairs right away instead of waiting for the UI
    auto_flip_back: bool = False
    scoring: ScoringConfig = field(default_factory=ScoringConfig)


class MemoryGame:
    """Headless board: wires generator, ledger, session and queue together.

    The session announces a new game, the board answers by dealing fresh
    cards, and flips go through the match queue. Everything a renderer needs
    to react to arrives on ``bus``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        generator: PairGenerator | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or GameConfig()
        if self.config.face_count <= 0:
            raise InvalidConfiguration(f"face_count must be positive, got {self.config.face_count}")
        self.bus = bus or EventBus()
        self.generator: PairGenerator = generator or RandomPairGenerator()
        self.ledger = ScoreLedger(self.config.scoring)
        self.session = GameSession(self.ledger, self.bus, rows=self.config.rows, cols=self.config.cols)
        self.queue = MatchQueue(self.ledger, self.bus, completion_check=self.session.check_completion)
        self.cards: list[CardState] = []

        self.bus.subscribe(EVENT_GAME_STARTED, self._on_game_started)
        if self.config.auto_flip_back:
            self.bus.subscribe(EVENT_MISMATCHED, self._on_mismatched)

    # -------- Lifecycle --------
    def start(self, rows: int | None = None, cols: int | None = None) -> None:
        self.session.start_game(
            rows if rows is not None else self.config.rows,
            cols if cols is not None else self.config.cols,
        )

    def replay(self) -> None:
        self.session.replay()

    @property
    def is_active(self) -> bool:
        return self.session.phase == "active"

    @property
    def is_over(self) -> bool:
        return self.session.phase == "over"

    def _on_game_started(self, sender: object, rows: int, cols: int) -> None:
        self.queue.clear()
        ids = self.generator.generate(rows * cols, self.config.face_count)
        self.cards = [CardState(id=i, face_value=face) for i, face in enumerate(ids)]
        self.bus.emit(EVENT_BOARD_BUILT, rows=rows, cols=cols, cards=list(self.cards))

    # -------- Flips --------
    def card(self, index: int) -> CardState:
        if index < 0 or index >= len(self.cards):
            raise InvalidInput(f"No card at index {index}.")
        return self.cards[index]

    def flip(self, index: int) -> list[Outcome]:
        """Turn card ``index`` face up and hand it to the match queue.

        Matched and already face-up cards are ignored.
        """
        if not self.is_active:
            raise InvalidInput(f"Cannot flip while the game is {self.session.phase}.")
        card = self.card(index)
        if card.is_matched or card.is_face_up:
            return []
        card.is_face_up = True
        self.bus.emit(EVENT_CARD_FLIPPED, card=card)
        return self.queue.enqueue(card)

    def hide(self, index: int) -> bool:
        card = self.card(index)
        if card.is_matched or not card.is_face_up:
            return False
        card.is_face_up = False
        self.bus.emit(EVENT_CARD_HIDDEN, card=card)
        return True

    def _on_mismatched(self, sender: object, first: CardState, second: CardState) -> None:
        self.hide(first.id)
        self.hide(second.id)

    # -------- Save / Load --------
    def snapshot(self) -> Snapshot:
        return capture(self.session, self.cards)

    def load(self, snapshot: Snapshot) -> None:
        """Replace the current game with ``snapshot``.

        Raises CorruptSaveData before touching anything if the snapshot does
        not validate, so the running game survives a bad load.
        """
        restored = restore(snapshot, face_count=self.config.face_count)
        self.queue.clear()
        self.ledger.restore(
            score=restored.ledger.score,
            turn_count=restored.ledger.turn_count,
            match_count=restored.ledger.match_count,
        )
        self.session.restore(restored.session, completed=restored.completed)
        self.cards = restored.cards
        self.bus.emit(
            EVENT_BOARD_RESTORED,
            rows=restored.session.rows,
            cols=restored.session.cols,
            cards=list(self.cards),
        )
