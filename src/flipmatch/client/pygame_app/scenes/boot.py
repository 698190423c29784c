from __future__ import annotations

import logging
import traceback

import pygame  # type: ignore[import-not-found]

from flipmatch.engine.game import MemoryGame
from flipmatch.engine.generator import RandomPairGenerator
from flipmatch.services.savegame import SaveGameService
from ..app import GameContext
from ..scene_base import SceneTransition, quit_game
from ..ui import Button, draw_text
from .board import BoardScene

log = logging.getLogger(__name__)


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            self.ctx.faces = self.ctx.content.load_faces()
            self.ctx.settings = self.ctx.content.load_settings(face_count=len(self.ctx.faces))

            generator = (
                RandomPairGenerator.seeded(self.ctx.seed) if self.ctx.seed is not None else RandomPairGenerator()
            )
            game = MemoryGame(config=self.ctx.settings.game, generator=generator)
            self.ctx.telemetry.attach(game.bus)
            self.ctx.game = game

            self.ctx.paths.userdata_dir.mkdir(parents=True, exist_ok=True)
            self.ctx.savegame = SaveGameService(
                path=self.ctx.paths.savegame_path,
                schema_dir=self.ctx.paths.schema_dir,
                face_count=len(self.ctx.faces),
            )

            self.ctx.telemetry.log("boot", {"ok": True})
            return SceneTransition(BoardScene(self.ctx))
        except Exception as e:
            log.exception("Boot failed")
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self.ctx.telemetry.log("boot", {"ok": False, "error": str(e)})
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 68, 140, 44),
                text="Quit",
                on_click=quit_game,
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        font = self.ctx.assets.fonts.big
        draw_text(screen, font, "FlipMatch", (20, 20))

        font2 = self.ctx.assets.fonts.ui
        if self._error is None:
            draw_text(screen, font2, "Booting... validating data.", (20, 80))
            draw_text(
                screen,
                self.ctx.assets.fonts.small,
                "Tip: run `python tools/generate_placeholder_assets.py` for face art",
                (20, 110),
            )
        else:
            draw_text(screen, font2, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, self.ctx.assets.fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, font2)
