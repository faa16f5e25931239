"""Service layer exports."""

from .errors import BattleInProgressError, FactoryError, SaveLoadError, TravelBlockedError
from .battle_service import BattleService, BattleView, calculate_damage
from .encounter_service import EncounterService
from .overworld_service import OverworldService, StepResult
from .save_service import SaveService

__all__ = [
    "BattleInProgressError",
    "FactoryError",
    "SaveLoadError",
    "TravelBlockedError",
    "BattleService",
    "BattleView",
    "calculate_damage",
    "EncounterService",
    "OverworldService",
    "StepResult",
    "SaveService",
]
