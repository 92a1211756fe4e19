"""Uniform random permutations."""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class Shuffler:
    """Fisher-Yates shuffle over an injectable random source.

    Pass a seed (or a seeded ``random.Random``) to make splits and
    rotations reproducible.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a new list with the same elements in uniformly random order.

        The input is never mutated.
        """
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled
