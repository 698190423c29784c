from __future__ import annotations

from typing import Sequence

import pytest

from flipmatch.engine.game import GameConfig, MemoryGame
from flipmatch.engine.snapshot import CardRecord, Snapshot, capture, restore
from flipmatch.engine.types import CorruptSaveData


class FixedGenerator:
    def __init__(self, ids: Sequence[int]) -> None:
        self.ids = list(ids)

    def generate(self, total_cards: int, distinct_face_count: int) -> list[int]:
        return list(self.ids)


def _played_game() -> MemoryGame:
    # 2x3 board cleared with three matches in a row
    game = MemoryGame(config=GameConfig(rows=2, cols=3, face_count=3), generator=FixedGenerator([0, 1, 2, 0, 1, 2]))
    game.start()
    for i in (0, 3, 1, 4):
        game.flip(i)
    game.flip(2)
    game.flip(5)
    return game


def _valid_dict() -> dict[str, object]:
    return {
        "version": 1,
        "rows": 2,
        "cols": 2,
        "score": 100,
        "turn_count": 3,
        "match_count": 1,
        "cards": [
            {"face_value": 0, "is_matched": True},
            {"face_value": 1, "is_matched": False},
            {"face_value": 0, "is_matched": True},
            {"face_value": 1, "is_matched": False},
        ],
    }


def test_capture_then_restore_reproduces_the_game() -> None:
    game = _played_game()
    assert game.ledger.score == 100 + 120 + 140
    snap = game.snapshot()

    restored = restore(snap, face_count=3)
    assert (restored.session.rows, restored.session.cols) == (2, 3)
    assert restored.ledger.score == game.ledger.score
    assert restored.ledger.turn_count == game.ledger.turn_count
    assert restored.ledger.match_count == game.ledger.match_count
    assert [(c.face_value, c.is_matched) for c in restored.cards] == [
        (c.face_value, c.is_matched) for c in game.cards
    ]
    assert restored.completed


def test_score_is_not_recomputed_from_counts() -> None:
    game = MemoryGame(config=GameConfig(rows=2, cols=3, face_count=3), generator=FixedGenerator([0, 1, 2, 0, 1, 2]))
    game.start()
    for i in (0, 3, 1, 4):
        game.flip(i)
    snap = game.snapshot()
    assert snap.score == 220  # 100 + 120 with the combo

    restored = restore(snap)
    assert restored.ledger.score == 220
    assert restored.ledger.combo_streak == 0


def test_restored_cards_face_state() -> None:
    game = MemoryGame(config=GameConfig(rows=2, cols=2, face_count=2), generator=FixedGenerator([0, 1, 0, 1]))
    game.start()
    game.flip(0)
    game.flip(2)
    game.flip(1)  # left waiting for a partner

    restored = restore(game.snapshot())
    assert [(c.is_matched, c.is_face_up) for c in restored.cards] == [
        (True, True),
        (False, False),
        (True, True),
        (False, False),
    ]
    assert [c.id for c in restored.cards] == [0, 1, 2, 3]


def test_load_replaces_current_game() -> None:
    source = _played_game()
    target = MemoryGame(config=GameConfig(rows=2, cols=2, face_count=3), generator=FixedGenerator([0, 0, 1, 1]))
    target.start()
    target.flip(0)

    target.load(source.snapshot())
    assert target.snapshot() == source.snapshot()
    assert target.queue.pending == []
    assert target.is_over
    assert target.bus.log[-1]["type"] == "board_restored"


def test_load_of_unfinished_game_can_be_played_on() -> None:
    target = MemoryGame(config=GameConfig(rows=2, cols=2, face_count=2))
    target.load(Snapshot.from_dict(_valid_dict()))
    assert target.is_active
    target.flip(1)
    outcomes = target.flip(3)
    assert outcomes[0].kind == "matched"
    assert outcomes[0].game_over
    assert target.ledger.turn_count == 4
    assert target.ledger.score == 200


def test_corrupt_load_keeps_current_game() -> None:
    game = _played_game()
    before = game.snapshot()
    bad = _valid_dict()
    bad["match_count"] = 2
    with pytest.raises(CorruptSaveData):
        game.load(Snapshot.from_dict(bad))
    assert game.snapshot() == before


def test_dict_round_trip() -> None:
    snap = Snapshot.from_dict(_valid_dict())
    assert snap.cards[0] == CardRecord(face_value=0, is_matched=True)
    assert snap.to_dict() == _valid_dict()


@pytest.mark.parametrize("missing", ["rows", "cols", "score", "turn_count", "match_count", "cards"])
def test_missing_fields_are_corrupt(missing: str) -> None:
    d = _valid_dict()
    del d[missing]
    with pytest.raises(CorruptSaveData):
        Snapshot.from_dict(d)


def test_mistyped_fields_are_corrupt() -> None:
    d = _valid_dict()
    d["score"] = True
    with pytest.raises(CorruptSaveData):
        Snapshot.from_dict(d)

    d = _valid_dict()
    d["cards"] = [{"face_value": 0, "is_matched": 1}] * 4
    with pytest.raises(CorruptSaveData):
        Snapshot.from_dict(d)


def _corrupt(**changes: object) -> Snapshot:
    d = _valid_dict()
    d.update(changes)
    return Snapshot.from_dict(d)


@pytest.mark.parametrize(
    "snap",
    [
        _corrupt(rows=3),  # 6 cards expected
        _corrupt(cols=0),
        _corrupt(score=-5),
        _corrupt(match_count=3),
        _corrupt(match_count=2),  # only two cards flagged matched
        _corrupt(turn_count=0),
        _corrupt(
            cards=[
                {"face_value": 0, "is_matched": True},
                {"face_value": 1, "is_matched": True},
                {"face_value": 0, "is_matched": False},
                {"face_value": 1, "is_matched": False},
            ]
        ),
        _corrupt(  # nothing pairs up, so the board could never be cleared
            match_count=0,
            cards=[
                {"face_value": 0, "is_matched": False},
                {"face_value": 1, "is_matched": False},
                {"face_value": 2, "is_matched": False},
                {"face_value": 3, "is_matched": False},
            ],
        ),
    ],
)
def test_inconsistent_snapshots_are_corrupt(snap: Snapshot) -> None:
    with pytest.raises(CorruptSaveData):
        restore(snap)


def test_face_out_of_range_is_corrupt() -> None:
    snap = _corrupt(
        cards=[
            {"face_value": 0, "is_matched": True},
            {"face_value": 9, "is_matched": False},
            {"face_value": 0, "is_matched": True},
            {"face_value": 9, "is_matched": False},
        ]
    )
    restore(snap)  # fine without a catalog bound
    with pytest.raises(CorruptSaveData):
        restore(snap, face_count=2)


def test_capture_reads_counters_from_the_session() -> None:
    game = _played_game()
    snap = capture(game.session, game.cards)
    assert (snap.rows, snap.cols) == (2, 3)
    assert (snap.score, snap.turn_count, snap.match_count) == (360, 3, 3)
    assert snap == game.snapshot()


def test_unpairable_board_is_not_loaded() -> None:
    game = _played_game()
    before = game.snapshot()
    unpairable = Snapshot(
        rows=2,
        cols=2,
        score=0,
        turn_count=0,
        match_count=0,
        cards=tuple(CardRecord(face_value=f, is_matched=False) for f in (0, 1, 2, 3)),
    )
    with pytest.raises(CorruptSaveData):
        game.load(unpairable)
    assert game.snapshot() == before
