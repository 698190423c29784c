from __future__ import annotations

from .types import InvalidConfiguration

LAYOUT_PRESETS: tuple[str, ...] = ("2x2", "2x3", "3x4", "4x4", "4x5", "5x6", "6x6")


def parse_layout(text: str) -> tuple[int, int]:
    """Parse a ``ROWSxCOLS`` preset such as ``"3x4"``."""
    parts = text.strip().lower().split("x")
    if len(parts) != 2:
        raise InvalidConfiguration(f"Layout must look like ROWSxCOLS, got {text!r}")
    try:
        rows, cols = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidConfiguration(f"Layout must look like ROWSxCOLS, got {text!r}") from e
    if rows < 1 or cols < 1:
        raise InvalidConfiguration(f"Layout dimensions must be positive, got {text!r}")
    return rows, cols


def format_layout(rows: int, cols: int) -> str:
    return f"{rows}x{cols}"
