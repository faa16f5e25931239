"""A random source that replays queued values, for exact rule checks."""
from __future__ import annotations

from typing import Iterable, List


class ScriptedRNG:
    """
    Returns queued floats from ``random()`` and queued ints from ``randrange()``.

    Consulting an empty queue fails the test, so a test can assert that a
    rule never touched the RNG. ``randint`` is only used for identifiers and
    returns its lower bound without consuming anything.
    """

    def __init__(self, floats: Iterable[float] = (), ints: Iterable[int] = ()) -> None:
        self.floats: List[float] = list(floats)
        self.ints: List[int] = list(ints)
        self.random_calls = 0

    def random(self) -> float:
        self.random_calls += 1
        if not self.floats:
            raise AssertionError("random() consulted with no scripted values left")
        return self.floats.pop(0)

    def randrange(self, n: int) -> int:
        if not self.ints:
            raise AssertionError("randrange() consulted with no scripted values left")
        value = self.ints.pop(0)
        assert 0 <= value < n
        return value

    def randint(self, a: int, b: int) -> int:
        return a
