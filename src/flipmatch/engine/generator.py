from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol

from .types import InvalidConfiguration


class PairGenerator(Protocol):
    def generate(self, total_cards: int, distinct_face_count: int) -> list[int]: ...


def _shuffle(rng: random.Random, items: list[int]) -> None:
    # Fisher-Yates, swap source drawn from [i, n)
    n = len(items)
    for i in range(n):
        r = rng.randrange(i, n)
        items[i], items[r] = items[r], items[i]


def generate_pairs(total_cards: int, distinct_face_count: int, rng: random.Random) -> list[int]:
    """Return a shuffled list of face ids forming ``total_cards // 2`` pairs.

    Odd totals lose their last slot so no card is ever left unpaired. Faces
    are handed out cyclically, so boards with more pairs than distinct faces
    reuse faces.
    """
    if distinct_face_count <= 0:
        raise InvalidConfiguration(f"distinct_face_count must be positive, got {distinct_face_count}")

    total = max(0, total_cards)
    if total % 2 != 0:
        total -= 1

    ids: list[int] = []
    face = 0
    for _ in range(total // 2):
        ids.append(face)
        ids.append(face)
        face = (face + 1) % distinct_face_count

    _shuffle(rng, ids)
    return ids


@dataclass
class RandomPairGenerator:
    rng: random.Random = field(default_factory=random.Random)

    @staticmethod
    def seeded(seed: int) -> "RandomPairGenerator":
        return RandomPairGenerator(rng=random.Random(seed))

    def generate(self, total_cards: int, distinct_face_count: int) -> list[int]:
        return generate_pairs(total_cards, distinct_face_count, self.rng)
