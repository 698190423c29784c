from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Mapping

from flipmatch.engine.events import ALL_EVENTS, EventBus
from flipmatch.engine.types import CardState


def _jsonable(value: object) -> object:
    if isinstance(value, CardState):
        return {"id": value.id, "face_value": value.face_value}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": {k: _jsonable(v) for k, v in payload.items()},
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def attach(self, bus: EventBus) -> None:
        """Record every engine event emitted on ``bus``."""
        for name in ALL_EVENTS:
            bus.subscribe(name, self._make_listener(name))

    def _make_listener(self, name: str) -> Callable[..., None]:
        def listener(sender: object, **payload: object) -> None:
            self.log(name, payload)

        return listener
