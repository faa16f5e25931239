"""Runtime entity exports."""

from .creature import HP_MULTIPLIER, CreatureInstance
from .party import MAX_PARTY_SIZE, Party

__all__ = [
    "CreatureInstance",
    "HP_MULTIPLIER",
    "MAX_PARTY_SIZE",
    "Party",
]
