"""Creature species definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from fieldfriends.core.types import AbilityId, CreatureType


@dataclass(frozen=True, slots=True)
class CreatureDef:
    """Immutable species definition loaded once from creatures.json."""

    id: str
    name: str
    creature_type: CreatureType
    hp: int
    attack: int
    defense: int
    speed: int
    ability: AbilityId
    upgraded_ability: AbilityId = "none"
    has_upgrade: bool = False
    is_large: bool = False
    idle_text: str = ""
