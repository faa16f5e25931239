"""Domain definition exports."""

from .area_def import RARITY_WEIGHTS, AreaDef, EncounterSlotDef
from .creature_def import CreatureDef

__all__ = [
    "AreaDef",
    "CreatureDef",
    "EncounterSlotDef",
    "RARITY_WEIGHTS",
]
