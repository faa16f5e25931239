"""
Ability capability table.

Each ability maps to the hooks it grants. Battle and overworld rules ask
"does this actor (or anyone in the party) have hook X" instead of matching
ability ids at every call site, so a new ability is added here as data.

Scopes:
- ``actor``: only the acting creature's active ability counts (the battler in
  battle, the lead on the overworld).
- ``party``: any non-resting party member with the ability active counts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Literal, Protocol, Tuple

from fieldfriends.core.types import AbilityId

if TYPE_CHECKING:
    from fieldfriends.domain.entities import CreatureInstance, Party

logger = logging.getLogger(__name__)

HookName = Literal[
    # battle
    "nullify_enemy_turn",
    "slow_notice",
    "suppress_enemy_turn",
    "post_battle_heal",
    "guaranteed_flee",
    "flee_once_per_area",
    "flee_second_chance",
    # overworld
    "reveal_hidden",
    "dig_cache",
    "speed_boost",
    "cross_gaps",
    "halve_encounter_rate",
    "water_traversal",
    "find_shine",
]
HookScope = Literal["actor", "party"]


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class AbilityHook:
    """A single behavioral hook granted by an ability."""

    name: HookName
    scope: HookScope
    chance: float = 1.0
    value: float = 0.0
    interval: int = 0


CAPABILITIES: Dict[AbilityId, Tuple[AbilityHook, ...]] = {
    "none": (),
    # Field
    "part_the_grass": (AbilityHook("reveal_hidden", "actor"),),
    "root_hold": (),
    "snare_step": (AbilityHook("slow_notice", "actor", chance=0.25),),
    "dig_cache": (AbilityHook("dig_cache", "actor", chance=0.40, value=6, interval=25),),
    # Wind
    "hop_lift": (
        AbilityHook("speed_boost", "actor", value=1.3),
        AbilityHook("cross_gaps", "actor"),
    ),
    "quick_return": (AbilityHook("flee_once_per_area", "actor"),),
    "scout_ahead": (AbilityHook("halve_encounter_rate", "party", value=0.5),),
    "gentle_gust": (AbilityHook("flee_second_chance", "party", chance=0.30),),
    # Water
    "stream_glide": (AbilityHook("water_traversal", "actor"),),
    "find_shine": (AbilityHook("find_shine", "actor", chance=0.15, value=8),),
    "clear_pool": (AbilityHook("post_battle_heal", "party", value=6),),
    "slip_away": (AbilityHook("guaranteed_flee", "actor"),),
    # Meadow
    "soft_light": (),
    "steady_field": (),
    "calm_field": (AbilityHook("suppress_enemy_turn", "party", chance=0.70),),
    "wait": (AbilityHook("nullify_enemy_turn", "actor", chance=0.30),),
}


def hooks_for(ability: AbilityId) -> Tuple[AbilityHook, ...]:
    return CAPABILITIES.get(ability, ())


def has_active_ability(creature: CreatureInstance | None, ability: AbilityId) -> bool:
    if creature is None:
        return False
    return creature.active_ability == ability


def has_ability_form(creature: CreatureInstance | None, ability: AbilityId) -> bool:
    """True when ``ability`` is the creature's base form or its upgrade, active or not."""
    if creature is None or ability == "none":
        return False
    if creature.ability == ability:
        return True
    return creature.has_upgrade and creature.upgraded_ability == ability


def party_has_ability(party: Party | None, ability: AbilityId) -> bool:
    if party is None:
        return False
    return party.party_has_ability(ability)


def actor_hook(creature: CreatureInstance | None, name: HookName) -> AbilityHook | None:
    """Return the actor-scoped hook the creature's active ability grants, if any."""
    if creature is None:
        return None
    for hook in hooks_for(creature.active_ability):
        if hook.name == name and hook.scope == "actor":
            return hook
    return None


def find_party_hook(
    party: Party | None, name: HookName
) -> Tuple[CreatureInstance, AbilityHook] | None:
    """Return the first non-resting member granting a party-scoped hook, with the hook."""
    if party is None:
        return None
    for member in party.get_active_party():
        for hook in hooks_for(member.active_ability):
            if hook.name == name and hook.scope == "party":
                return member, hook
    return None


def party_hook(party: Party | None, name: HookName) -> AbilityHook | None:
    found = find_party_hook(party, name)
    return found[1] if found else None


def roll_hook(hook: AbilityHook, rng: RandomSource) -> bool:
    """Roll a probability-gated hook; certain hooks never consult the RNG."""
    if hook.chance >= 1.0:
        return True
    if hook.chance <= 0.0:
        return False
    result = rng.random() < hook.chance
    logger.debug("Rolled %s (chance %.2f): %s", hook.name, hook.chance, result)
    return result


@dataclass(slots=True)
class AreaAbilityFlags:
    """Once-per-area ability bookkeeping, reset whenever the party changes area."""

    area_id: str | None = None
    quick_return_used: bool = False
    revealed_this_area: bool = False
    steps_since_dig: int = 0

    def reset(self, area_id: str | None) -> None:
        self.area_id = area_id
        self.quick_return_used = False
        self.revealed_this_area = False
        self.steps_since_dig = 0

    def try_quick_return(self, creature: CreatureInstance | None) -> bool:
        """Consume the per-area auto-escape if the creature has it active."""
        if self.quick_return_used or actor_hook(creature, "flee_once_per_area") is None:
            return False
        self.quick_return_used = True
        return True

    def try_reveal(self, creature: CreatureInstance | None) -> bool:
        if self.revealed_this_area or actor_hook(creature, "reveal_hidden") is None:
            return False
        self.revealed_this_area = True
        return True
