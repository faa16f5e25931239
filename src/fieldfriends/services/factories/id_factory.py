"""Utilities for creating deterministic battle identifiers."""
from __future__ import annotations

from typing import Protocol


class _IntSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def make_instance_id(prefix: str, rng: _IntSource) -> str:
    """Generate an identifier such as ``battle_123456`` from the provided RNG."""
    suffix = rng.randint(100000, 999999)
    return f"{prefix}_{suffix}"
