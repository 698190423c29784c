from __future__ import annotations

import logging
from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from flipmatch.engine.events import (
    EVENT_BOARD_BUILT,
    EVENT_BOARD_RESTORED,
    EVENT_GAME_OVER,
    EVENT_MATCHED,
    EVENT_MISMATCHED,
)
from flipmatch.engine.game import MemoryGame
from flipmatch.engine.layouts import format_layout, parse_layout
from flipmatch.engine.types import CardState, CorruptSaveData

from ..app import GameContext
from ..grid import cell_rects
from ..scene_base import SceneTransition
from ..ui import Button, draw_text, draw_text_centered

log = logging.getLogger(__name__)


@dataclass
class FlipAnim:
    to_front: bool
    duration: float
    delay: float = 0.0
    elapsed: float = 0.0
    swapped: bool = False

    @property
    def scale_x(self) -> float:
        if self.delay > 0:
            return 1.0
        half = self.duration / 2
        if self.elapsed < half:
            return max(0.0, 1.0 - self.elapsed / half)
        return min(1.0, (self.elapsed - half) / half)


@dataclass
class CardView:
    index: int
    rect: pygame.Rect
    showing_front: bool = False
    anim: FlipAnim | None = None
    flash: float = 0.0


class BoardScene:
    def __init__(self, ctx: GameContext) -> None:
        assert ctx.game is not None and ctx.settings is not None
        self.ctx = ctx
        self.game: MemoryGame = ctx.game
        self.timing = ctx.settings.timing

        self._message: str = ""
        self._views: list[CardView] = []

        w, h = ctx.screen.get_size()
        self._board_rect = pygame.Rect(20, 70, w - 40, h - 150)

        self.btn_replay = Button(rect=pygame.Rect(w - 460, 14, 140, 40), text="Replay", on_click=self._on_replay)
        self.btn_save = Button(rect=pygame.Rect(w - 310, 14, 140, 40), text="Save", on_click=self._on_save)
        self.btn_load = Button(rect=pygame.Rect(w - 160, 14, 140, 40), text="Load", on_click=self._on_load)

        self._layout_buttons: list[tuple[tuple[int, int], Button]] = []
        x = 20
        for preset in ctx.settings.layouts:
            dims = parse_layout(preset)
            btn = Button(
                rect=pygame.Rect(x, h - 64, 80, 44),
                text=preset,
                on_click=lambda d=dims: self.game.start(*d),
            )
            self._layout_buttons.append((dims, btn))
            x += 90

        bus = self.game.bus
        bus.subscribe(EVENT_BOARD_BUILT, self._on_board_changed)
        bus.subscribe(EVENT_BOARD_RESTORED, self._on_board_changed)
        bus.subscribe(EVENT_MATCHED, self._on_matched)
        bus.subscribe(EVENT_MISMATCHED, self._on_mismatched)
        bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

        if self.game.session.phase == "idle":
            self.game.start()
        else:
            self._rebuild_views()

    # -------- Engine events --------
    def _rebuild_views(self) -> None:
        rects = cell_rects(self._board_rect, self.game.session.rows, self.game.session.cols, len(self.game.cards))
        self._views = [
            CardView(index=i, rect=rects[i], showing_front=card.is_face_up)
            for i, card in enumerate(self.game.cards)
        ]

    def _on_board_changed(self, sender: object, rows: int, cols: int, cards: list[CardState]) -> None:
        self._rebuild_views()
        self._message = f"Layout {format_layout(rows, cols)}"

    def _on_matched(self, sender: object, first: CardState, second: CardState) -> None:
        for card in (first, second):
            self._views[card.id].flash = self.timing.match_pause

    def _on_mismatched(self, sender: object, first: CardState, second: CardState) -> None:
        # flip both back after a pause; the player may keep flipping meanwhile
        for card in (first, second):
            self._views[card.id].anim = FlipAnim(
                to_front=False,
                duration=self.timing.flip_duration,
                delay=self.timing.mismatch_delay,
            )

    def _on_game_over(self, sender: object) -> None:
        self._message = "Game Over!"

    # -------- Buttons --------
    def _on_replay(self) -> None:
        self.game.replay()

    def _on_save(self) -> None:
        savegame = self.ctx.savegame
        if savegame is None:
            return
        savegame.save(self.game.snapshot())
        self._message = "Game saved."

    def _on_load(self) -> None:
        savegame = self.ctx.savegame
        if savegame is None:
            return
        try:
            snapshot = savegame.load()
            if snapshot is None:
                self._message = "No save file found."
                return
            self.game.load(snapshot)
        except CorruptSaveData as e:
            log.warning("Rejected save file: %s", e)
            self._message = "Save file is corrupt; keeping the current game."
            return
        self._message = "Game loaded."

    # -------- Scene --------
    def handle_event(self, event: pygame.event.Event) -> None:
        for btn in (self.btn_replay, self.btn_save, self.btn_load):
            if btn.handle_event(event):
                return
        for _, btn in self._layout_buttons:
            if btn.handle_event(event):
                return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        if not self.game.is_active:
            return
        for view in self._views:
            if not view.rect.collidepoint(pos):
                continue
            card = self.game.cards[view.index]
            if card.is_matched or card.is_face_up or view.anim is not None:
                return
            view.anim = FlipAnim(to_front=True, duration=self.timing.flip_duration)
            return

    def update(self, dt: float) -> SceneTransition | None:
        revealed: list[int] = []
        for view in self._views:
            if view.flash > 0:
                view.flash = max(0.0, view.flash - dt)
            anim = view.anim
            if anim is None:
                continue
            if anim.delay > 0:
                anim.delay -= dt
                continue
            anim.elapsed += dt
            if not anim.swapped and anim.elapsed >= anim.duration / 2:
                anim.swapped = True
                view.showing_front = anim.to_front
                if not anim.to_front:
                    self.game.hide(view.index)
            if anim.elapsed >= anim.duration:
                view.anim = None
                if anim.to_front:
                    revealed.append(view.index)

        # the engine hears about a flip once the card is fully face up
        for index in revealed:
            if self.game.is_active:
                self.game.flip(index)
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((14, 18, 26))
        fonts = self.ctx.assets.fonts
        ledger = self.game.ledger

        draw_text(screen, fonts.ui, f"Score: {ledger.score}", (20, 14))
        draw_text(screen, fonts.ui, f"Turns: {ledger.turn_count}", (180, 14))
        draw_text(
            screen,
            fonts.ui,
            f"Matches: {ledger.match_count}/{self.game.session.total_pairs}",
            (320, 14),
        )
        if ledger.combo_streak > 1:
            draw_text(screen, fonts.small, f"Combo x{ledger.combo_streak}", (20, 42), color=(240, 200, 120))

        self.btn_replay.draw(screen, fonts.ui)
        self.btn_save.draw(screen, fonts.ui)
        self.btn_load.draw(screen, fonts.ui)
        current = (self.game.session.rows, self.game.session.cols)
        for dims, btn in self._layout_buttons:
            btn.selected = dims == current
            btn.draw(screen, fonts.ui)

        for view in self._views:
            self._draw_card(screen, view)

        if self._message:
            draw_text(screen, fonts.ui, self._message, (20, screen.get_height() - 88), color=(240, 200, 120))

        if self.game.is_over:
            self._draw_game_over(screen)

    def _draw_card(self, screen: pygame.Surface, view: CardView) -> None:
        card = self.game.cards[view.index]
        size = (view.rect.width, view.rect.height)
        if view.showing_front and self.ctx.faces is not None:
            img = self.ctx.assets.face_image(self.ctx.faces.get(card.face_value), size)
        else:
            img = self.ctx.assets.card_back(size)

        scale = view.anim.scale_x if view.anim is not None else 1.0
        width = max(1, int(view.rect.width * scale))
        if width != view.rect.width:
            img = pygame.transform.scale(img, (width, view.rect.height))
        screen.blit(img, img.get_rect(center=view.rect.center).topleft)

        if card.is_matched:
            color = (250, 240, 140) if view.flash > 0 else (90, 200, 120)
            pygame.draw.rect(screen, color, view.rect, width=3, border_radius=10)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        screen.blit(overlay, (0, 0))
        cx, cy = screen.get_width() // 2, screen.get_height() // 2
        fonts = self.ctx.assets.fonts
        draw_text_centered(screen, fonts.big, "ALL PAIRS FOUND!", (cx, cy - 30))
        ledger = self.game.ledger
        draw_text_centered(
            screen,
            fonts.ui,
            f"Score {ledger.score} in {ledger.turn_count} turns",
            (cx, cy + 16),
        )
        self.btn_replay.draw(screen, fonts.ui)
