"""Unique identifiers for players and matches."""

import random
import string
import time
from collections.abc import Callable

_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class IdGenerator:
    """Builds ids of the form ``<epoch-ms>-<base36 suffix>``.

    The time prefix keeps ids roughly sortable by creation; the random suffix
    separates ids created within the same millisecond.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._rng = rng or random.SystemRandom()
        self._clock = clock

    def __call__(self) -> str:
        suffix = "".join(self._rng.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
        return f"{self._clock()}-{suffix}"


_default_generator = IdGenerator()


def generate_id() -> str:
    """Return a new id from the process-wide generator."""
    return _default_generator()
