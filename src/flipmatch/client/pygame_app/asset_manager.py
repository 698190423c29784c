from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from flipmatch.services.content import FaceDefinition

log = logging.getLogger(__name__)

CARD_BACK_PATH = "card_back.png"


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    def __init__(self, repo_root: Path, assets_dir: Path) -> None:
        self.repo_root = repo_root
        self.assets_dir = assets_dir
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 48),
        )

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str)
        if p.is_absolute():
            return p
        # Allow data files to reference "assets/..."
        if path_str.startswith("assets/"):
            return self.repo_root / path_str
        return self.assets_dir / path_str

    def _load(self, path_str: str, size: tuple[int, int]) -> pygame.Surface | None:
        path = self._resolve(path_str)
        if not path.exists():
            return None
        try:
            img = pygame.image.load(path.as_posix()).convert_alpha()
        except pygame.error as e:
            log.warning("Could not load %s: %s", path, e)
            return None
        return pygame.transform.smoothscale(img, size)

    def face_image(self, face: FaceDefinition, size: tuple[int, int]) -> pygame.Surface:
        key = (face.art_path, size[0], size[1])
        if key in self._cache:
            return self._cache[key]
        img = self._load(face.art_path, size)
        if img is None:
            # procedural face when no art has been generated
            img = pygame.Surface(size, pygame.SRCALPHA)
            pygame.draw.rect(img, (236, 232, 222), img.get_rect(), border_radius=10)
            radius = max(4, min(size) // 3)
            pygame.draw.circle(img, face.color, (size[0] // 2, size[1] // 2), radius)
            glyph = self.fonts.big.render(face.symbol, True, (20, 20, 20))
            img.blit(glyph, glyph.get_rect(center=(size[0] // 2, size[1] // 2)).topleft)
        self._cache[key] = img
        return img

    def card_back(self, size: tuple[int, int]) -> pygame.Surface:
        key = (CARD_BACK_PATH, size[0], size[1])
        if key in self._cache:
            return self._cache[key]
        img = self._load(CARD_BACK_PATH, size)
        if img is None:
            img = pygame.Surface(size, pygame.SRCALPHA)
            pygame.draw.rect(img, (44, 62, 110), img.get_rect(), border_radius=10)
            inner = img.get_rect().inflate(-12, -12)
            pygame.draw.rect(img, (90, 120, 190), inner, width=3, border_radius=8)
        self._cache[key] = img
        return img
