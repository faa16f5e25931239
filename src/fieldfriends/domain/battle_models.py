"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from fieldfriends.core.types import BattleAction, BattlePhase
from fieldfriends.domain.abilities import AreaAbilityFlags
from fieldfriends.domain.entities import CreatureInstance, Party

EndReason = Literal["victory", "defeat", "fled", "stalled", "no_active_creature"]


@dataclass(slots=True)
class BattleState:
    """
    One encounter between the party and a wild creature.

    The battle state doubles as the handle callers pass back to the engine. It
    owns the references for the whole encounter; nothing else should mutate
    the creatures while ``phase != "ended"``.
    """

    battle_id: str
    enemy: CreatureInstance
    party: Party
    player: CreatureInstance | None = None
    phase: BattlePhase = "active"
    round_number: int = 0
    player_first: bool = True
    awaiting_input: bool = False
    last_action: BattleAction | None = None
    won: bool | None = None
    end_reason: EndReason | None = None
    area_flags: AreaAbilityFlags | None = None
    upgraded_at_start: List[CreatureInstance] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.phase == "ended"


@dataclass(slots=True)
class BattleCreatureView:
    """Read-only snapshot of one side for rendering."""

    name: str
    creature_type: str
    current_hp: int
    max_hp: int
    is_resting: bool

    @property
    def hp_display(self) -> str:
        return f"{self.current_hp}/{self.max_hp}"
