from __future__ import annotations

import pygame  # type: ignore[import-not-found]


def cell_rects(board: pygame.Rect, rows: int, cols: int, count: int, padding: int = 6) -> list[pygame.Rect]:
    """Lay ``count`` cards out row by row in a rows x cols grid over ``board``.

    Each cell is board width / cols by board height / rows; cards sit inside
    their cell with ``padding`` on every side.
    """
    rows = max(1, rows)
    cols = max(1, cols)
    cell_w = board.width / cols
    cell_h = board.height / rows
    rects: list[pygame.Rect] = []
    for i in range(count):
        r, c = divmod(i, cols)
        x = board.x + cell_w * c
        y = board.y + cell_h * r
        rect = pygame.Rect(int(x), int(y), int(cell_w), int(cell_h)).inflate(-2 * padding, -2 * padding)
        rects.append(rect)
    return rects
