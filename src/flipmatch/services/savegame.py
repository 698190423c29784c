from __future__ import annotations

import json
import logging
from pathlib import Path

from flipmatch.engine.snapshot import Snapshot, validate
from flipmatch.engine.types import CorruptSaveData
from flipmatch.services.content import load_schema, schema_errors

log = logging.getLogger(__name__)


class SaveGameService:
    """Single-slot JSON save file for an in-progress game."""

    def __init__(self, path: Path, schema_dir: Path, face_count: int | None = None) -> None:
        self._path = path
        self._schema_path = schema_dir / "savegame.schema.json"
        self.face_count = face_count

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def save(self, snapshot: Snapshot) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding="utf-8")
        log.info("Saved game to %s", self._path)

    def load(self) -> Snapshot | None:
        """Read and validate the save file.

        Returns None when there is nothing saved. Anything unreadable raises
        CorruptSaveData; the caller keeps its current game.
        """
        if not self._path.exists():
            log.warning("No save file found at %s", self._path)
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptSaveData(f"Unreadable save file {self._path}: {e}") from e

        lines = schema_errors(raw, load_schema(self._schema_path), context=str(self._path))
        if lines:
            raise CorruptSaveData("\n".join(lines))
        if not isinstance(raw, dict):
            raise CorruptSaveData(f"{self._path} must hold an object")

        snapshot = Snapshot.from_dict(raw)
        validate(snapshot, face_count=self.face_count)
        log.info("Loaded game from %s", self._path)
        return snapshot

    def delete(self) -> None:
        if self._path.exists():
            self._path.unlink()
