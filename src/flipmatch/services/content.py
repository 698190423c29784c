from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from flipmatch.engine.game import GameConfig
from flipmatch.engine.layouts import LAYOUT_PRESETS, parse_layout
from flipmatch.engine.ledger import ScoringConfig
from flipmatch.engine.types import InvalidConfiguration

Color = tuple[int, int, int]


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def load_schema(path: Path) -> object:
    return _load_json(path)


def schema_errors(instance: object, schema: object, *, context: str) -> list[str]:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if not errors:
        return []
    lines = [f"Schema validation failed for {context}:"]
    for err in errors[:10]:
        loc = "/".join(str(p) for p in err.absolute_path)
        lines.append(f"- {loc}: {err.message}")
    return lines


def validate_json(instance: object, schema: object, *, context: str) -> None:
    lines = schema_errors(instance, schema, context=context)
    if lines:
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if not isinstance(v, (int, float)):
        raise ContentError(f"Expected number for {key}")
    return float(v)


def _parse_color(raw: object) -> Color:
    if not isinstance(raw, list) or len(raw) != 3 or not all(isinstance(c, int) for c in raw):
        raise ContentError("color must be [r, g, b]")
    return (raw[0], raw[1], raw[2])


@dataclass(frozen=True)
class FaceDefinition:
    id: int
    name: str
    symbol: str
    color: Color
    art_path: str


@dataclass(frozen=True)
class FaceCatalog:
    faces: tuple[FaceDefinition, ...]

    def __len__(self) -> int:
        return len(self.faces)

    def get(self, face_id: int) -> FaceDefinition:
        return self.faces[face_id]


@dataclass(frozen=True)
class TimingConfig:
    flip_duration: float = 0.2
    mismatch_delay: float = 0.4
    match_pause: float = 0.15


@dataclass(frozen=True)
class GameSettings:
    game: GameConfig
    timing: TimingConfig
    layouts: tuple[str, ...] = LAYOUT_PRESETS


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_faces(self) -> FaceCatalog:
        path = self._data_dir / "faces.json"
        raw = _load_json(path)
        validate_json(raw, load_schema(self._schema_dir / "faces.schema.json"), context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("faces.json must be an object")
        raw_faces = raw.get("faces")
        if not isinstance(raw_faces, list):
            raise ContentError("faces.json.faces must be a list")

        faces: list[FaceDefinition] = []
        for item in raw_faces:
            if not isinstance(item, dict):
                continue
            faces.append(
                FaceDefinition(
                    id=_require_int(item, "id"),
                    name=_require_str(item, "name"),
                    symbol=_require_str(item, "symbol"),
                    color=_parse_color(item.get("color")),
                    art_path=_require_str(item, "art_path"),
                )
            )
        faces.sort(key=lambda f: f.id)
        # face ids index straight into the catalog
        if [f.id for f in faces] != list(range(len(faces))):
            raise ContentError("faces.json ids must be contiguous from 0")
        if not faces:
            raise ContentError("faces.json must define at least one face")
        return FaceCatalog(faces=tuple(faces))

    def load_settings(self, face_count: int) -> GameSettings:
        path = self._data_dir / "game.json"
        raw = _load_json(path)
        validate_json(raw, load_schema(self._schema_dir / "game.schema.json"), context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("game.json must be an object")

        board = raw.get("board", {})
        scoring_raw = raw.get("scoring", {})
        timing_raw = raw.get("timing", {})
        if not isinstance(board, dict) or not isinstance(scoring_raw, dict) or not isinstance(timing_raw, dict):
            raise ContentError("game.json sections must be objects")

        layouts_raw = board.get("layouts", list(LAYOUT_PRESETS))
        layouts: list[str] = []
        if isinstance(layouts_raw, list):
            for s in layouts_raw:
                if not isinstance(s, str):
                    continue
                try:
                    parse_layout(s)
                except InvalidConfiguration as e:
                    raise ContentError(str(e)) from e
                layouts.append(s)

        game = GameConfig(
            rows=_require_int(board, "rows"),
            cols=_require_int(board, "cols"),
            face_count=face_count,
            scoring=ScoringConfig(
                base_points=_require_int(scoring_raw, "base_points"),
                combo_bonus=_require_int(scoring_raw, "combo_bonus"),
            ),
        )
        timing = TimingConfig(
            flip_duration=_require_number(timing_raw, "flip_duration"),
            mismatch_delay=_require_number(timing_raw, "mismatch_delay"),
            match_pause=_require_number(timing_raw, "match_pause"),
        )
        return GameSettings(game=game, timing=timing, layouts=tuple(layouts))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        faces = self.load_faces()
        _ = self.load_settings(face_count=len(faces))
