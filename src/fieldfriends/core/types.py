"""Shared type aliases for the core and domain layers."""
from typing import Literal, Tuple

CreatureType = Literal["field", "wind", "water", "meadow"]
CreatureState = Literal["active", "resting"]
EncounterRarity = Literal["common", "uncommon", "rare"]
BattleAction = Literal["move", "wait", "back"]
BattlePhase = Literal["active", "wait_nullify", "ended"]

AbilityId = Literal[
    "none",
    # Field
    "part_the_grass",
    "root_hold",
    "snare_step",
    "dig_cache",
    # Wind
    "hop_lift",
    "quick_return",
    "scout_ahead",
    "gentle_gust",
    # Water
    "stream_glide",
    "find_shine",
    "clear_pool",
    "slip_away",
    # Meadow
    "soft_light",
    "steady_field",
    "calm_field",
    "wait",
]

CREATURE_TYPES: Tuple[CreatureType, ...] = ("field", "wind", "water", "meadow")
CREATURE_STATES: Tuple[CreatureState, ...] = ("active", "resting")
ENCOUNTER_RARITIES: Tuple[EncounterRarity, ...] = ("common", "uncommon", "rare")
BATTLE_ACTIONS: Tuple[BattleAction, ...] = ("move", "wait", "back")
ABILITY_IDS: Tuple[AbilityId, ...] = (
    "none",
    "part_the_grass",
    "root_hold",
    "snare_step",
    "dig_cache",
    "hop_lift",
    "quick_return",
    "scout_ahead",
    "gentle_gust",
    "stream_glide",
    "find_shine",
    "clear_pool",
    "slip_away",
    "soft_light",
    "steady_field",
    "calm_field",
    "wait",
)

__all__ = [
    "ABILITY_IDS",
    "AbilityId",
    "BATTLE_ACTIONS",
    "BattleAction",
    "BattlePhase",
    "CREATURE_STATES",
    "CREATURE_TYPES",
    "CreatureState",
    "CreatureType",
    "ENCOUNTER_RARITIES",
    "EncounterRarity",
]
