from __future__ import annotations

import pytest

from flipmatch.engine.layouts import LAYOUT_PRESETS, format_layout, parse_layout
from flipmatch.engine.types import InvalidConfiguration


def test_presets_parse() -> None:
    for preset in LAYOUT_PRESETS:
        rows, cols = parse_layout(preset)
        assert format_layout(rows, cols) == preset


def test_parse_is_lenient_about_case_and_spaces() -> None:
    assert parse_layout(" 4X5 ") == (4, 5)


@pytest.mark.parametrize("text", ["", "3", "3x", "axb", "0x4", "3x-1", "2x3x4"])
def test_bad_layouts_are_rejected(text: str) -> None:
    with pytest.raises(InvalidConfiguration):
        parse_layout(text)
