from __future__ import annotations

import json
from pathlib import Path

from flipmatch.engine.game import GameConfig, MemoryGame
from flipmatch.services.telemetry import TelemetryService


class FixedGenerator:
    def generate(self, total_cards: int, distinct_face_count: int) -> list[int]:
        return [0, 1, 0, 1]


def test_engine_events_are_written_as_jsonl(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    game = MemoryGame(config=GameConfig(rows=2, cols=2, face_count=2), generator=FixedGenerator())
    TelemetryService(path).attach(game.bus)

    game.start()
    game.flip(0)
    game.flip(2)

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    types = [r["type"] for r in records]
    # board_built is emitted from inside a game_started listener
    assert sorted(types[:2]) == ["board_built", "game_started"]
    assert types[2:] == [
        "card_flipped",
        "card_flipped",
        "matched",
        "score_changed",
        "turn_recorded",
    ]
    started = next(r for r in records if r["type"] == "game_started")
    built = next(r for r in records if r["type"] == "board_built")
    assert started["payload"] == {"rows": 2, "cols": 2}
    assert len(built["payload"]["cards"]) == 4
    assert records[2]["payload"] == {"card": {"id": 0, "face_value": 0}}
    assert all("ts" in r for r in records)
