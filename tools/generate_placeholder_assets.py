from __future__ import annotations

import json
import os
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


FACE_SIZE = (160, 200)


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "flipmatch" / "data"
    assets_dir = root / "assets"
    faces_dir = assets_dir / "faces"
    faces_dir.mkdir(parents=True, exist_ok=True)

    faces = json.loads((data_dir / "faces.json").read_text(encoding="utf-8"))["faces"]

    pygame.init()
    pygame.font.init()
    font_big = pygame.font.SysFont(None, 96)
    font_small = pygame.font.SysFont(None, 24)

    for face in faces:
        color = tuple(face.get("color", (120, 120, 120)))
        surf = pygame.Surface(FACE_SIZE, pygame.SRCALPHA)
        pygame.draw.rect(surf, (236, 232, 222), surf.get_rect(), border_radius=14)
        pygame.draw.rect(surf, (0, 0, 0), surf.get_rect(), width=3, border_radius=14)
        center = (FACE_SIZE[0] // 2, FACE_SIZE[1] // 2 - 10)
        pygame.draw.circle(surf, color, center, 56)
        pygame.draw.circle(surf, (0, 0, 0), center, 56, width=3)

        glyph = font_big.render(face.get("symbol", "?"), True, (20, 20, 20))
        surf.blit(glyph, glyph.get_rect(center=center).topleft)
        name = font_small.render(face.get("name", ""), True, (40, 40, 40))
        surf.blit(name, name.get_rect(center=(FACE_SIZE[0] // 2, FACE_SIZE[1] - 22)).topleft)

        out_path = assets_dir / face["art_path"]
        out_path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(surf, out_path.as_posix())

    _make_card_back(assets_dir / "card_back.png")

    pygame.quit()
    print("Generated placeholder assets under ./assets/")


def _make_card_back(path: Path) -> None:
    surf = pygame.Surface(FACE_SIZE, pygame.SRCALPHA)
    pygame.draw.rect(surf, (44, 62, 110), surf.get_rect(), border_radius=14)
    inner = surf.get_rect().inflate(-20, -20)
    pygame.draw.rect(surf, (90, 120, 190), inner, width=4, border_radius=10)
    # diamond lattice
    for x in range(inner.left, inner.right, 20):
        pygame.draw.line(surf, (70, 96, 160), (x, inner.top), (x + 20, inner.bottom), 1)
        pygame.draw.line(surf, (70, 96, 160), (x + 20, inner.top), (x, inner.bottom), 1)
    pygame.image.save(surf, path.as_posix())


if __name__ == "__main__":
    generate_all()
