"""Factory helpers for runtime entities."""

from .creature_factory import create_creature, create_creature_by_id, create_wild_creature
from .id_factory import make_instance_id

__all__ = [
    "create_creature",
    "create_creature_by_id",
    "create_wild_creature",
    "make_instance_id",
]
