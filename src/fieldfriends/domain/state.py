"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field

from fieldfriends.core.rng import RNG
from fieldfriends.domain.abilities import AreaAbilityFlags
from fieldfriends.domain.entities import Party

HOME_AREA_ID = "willow_end"


@dataclass
class GameState:
    """Everything the overworld needs between two player inputs."""

    seed: int
    rng: RNG
    party: Party = field(default_factory=Party)
    current_area_id: str = HOME_AREA_ID
    area_flags: AreaAbilityFlags = field(default_factory=AreaAbilityFlags)
    steps_since_encounter: int = 0
    total_steps: int = 0
    in_battle: bool = False
    grove_encounter_done: bool = False
