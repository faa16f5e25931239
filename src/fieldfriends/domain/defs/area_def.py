"""Area and encounter table definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from fieldfriends.core.types import EncounterRarity

RARITY_WEIGHTS: Dict[EncounterRarity, int] = {
    "common": 60,
    "uncommon": 30,
    "rare": 10,
}


@dataclass(frozen=True, slots=True)
class EncounterSlotDef:
    """One row of an area's encounter table."""

    creature_id: str
    rarity: EncounterRarity

    @property
    def weight(self) -> int:
        return RARITY_WEIGHTS.get(self.rarity, 0)


@dataclass(frozen=True, slots=True)
class AreaDef:
    """Describes a walkable area and its wild encounters."""

    id: str
    name: str
    has_encounters: bool
    encounter_rate: float
    encounters: Tuple[EncounterSlotDef, ...]
    connections: Tuple[str, ...]
    near_water: bool = False
    is_home: bool = False
