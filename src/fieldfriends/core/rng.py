"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random
from typing import Any, Dict

RNGStatePayload = Dict[str, Any]


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def randrange(self, n: int) -> int:
        """Return a random integer N such that 0 <= N < n."""
        if n <= 0:
            raise ValueError("randrange() upper bound must be positive.")
        return self._random.randrange(n)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def export_state(self) -> RNGStatePayload:
        """Return a JSON-friendly snapshot of the generator state."""
        version, internal, gauss_next = self._random.getstate()
        return {"version": version, "internal": list(internal), "gauss_next": gauss_next}

    def restore_state(self, payload: RNGStatePayload) -> None:
        """Restore a snapshot produced by export_state."""
        try:
            version = payload["version"]
            internal = payload["internal"]
            gauss_next = payload.get("gauss_next")
        except (KeyError, TypeError) as exc:
            raise ValueError("RNG state payload is missing fields.") from exc
        if not isinstance(version, int) or not isinstance(internal, list):
            raise ValueError("RNG state payload has invalid field types.")
        if not all(isinstance(value, int) for value in internal):
            raise ValueError("RNG internal state must contain integers.")
        try:
            self._random.setstate((version, tuple(internal), gauss_next))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"RNG state could not be restored: {exc}") from exc
