"""Runtime creature instances."""
from __future__ import annotations

from dataclasses import dataclass

from fieldfriends.core.types import AbilityId, CreatureState, CreatureType
from fieldfriends.domain.friendship import UPGRADE_THRESHOLD, WILD_FRIENDSHIP

HP_MULTIPLIER = 3


@dataclass(slots=True, eq=False)
class CreatureInstance:
    """
    A live creature, either owned by the party or met in the wild.

    Stats are copied from the species when the instance is created and are
    never re-derived afterwards, so saved creatures survive species
    rebalancing. ``current_hp == 0`` if and only if ``state == "resting"``.
    """

    species_name: str
    creature_type: CreatureType
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    speed: int
    ability: AbilityId
    upgraded_ability: AbilityId = "none"
    has_upgrade: bool = False
    state: CreatureState = "active"
    friendship: int = 0

    @property
    def name(self) -> str:
        return self.species_name

    @property
    def is_resting(self) -> bool:
        return self.state == "resting"

    @property
    def is_wild(self) -> bool:
        return self.friendship == WILD_FRIENDSHIP

    @property
    def is_ability_upgraded(self) -> bool:
        return self.has_upgrade and self.friendship >= UPGRADE_THRESHOLD

    @property
    def active_ability(self) -> AbilityId:
        """Upgraded ability once friendship reaches the threshold, else the base one."""
        return self.upgraded_ability if self.is_ability_upgraded else self.ability

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamp at zero and return the HP actually lost."""
        before = self.current_hp
        self.current_hp = max(0, self.current_hp - max(0, amount))
        if self.current_hp == 0:
            self.state = "resting"
        return before - self.current_hp

    def heal(self, amount: int) -> int:
        """Restore HP up to max_hp and return the HP actually gained."""
        before = self.current_hp
        self.current_hp = min(self.max_hp, self.current_hp + max(0, amount))
        if self.current_hp > 0:
            self.state = "active"
        return self.current_hp - before

    def full_heal(self) -> None:
        self.current_hp = self.max_hp
        self.state = "active"
