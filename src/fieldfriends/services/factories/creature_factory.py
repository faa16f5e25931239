"""Factories turning species definitions into runtime creatures."""
from __future__ import annotations

from fieldfriends.data.repositories import CreaturesRepository
from fieldfriends.domain.defs import CreatureDef
from fieldfriends.domain.entities import HP_MULTIPLIER, CreatureInstance
from fieldfriends.domain.friendship import WILD_FRIENDSHIP
from fieldfriends.services.errors import FactoryError


def create_creature(creature_def: CreatureDef) -> CreatureInstance:
    """Instantiate an owned creature with full HP and zero friendship."""
    max_hp = creature_def.hp * HP_MULTIPLIER
    return CreatureInstance(
        species_name=creature_def.name,
        creature_type=creature_def.creature_type,
        max_hp=max_hp,
        current_hp=max_hp,
        attack=creature_def.attack,
        defense=creature_def.defense,
        speed=creature_def.speed,
        ability=creature_def.ability,
        upgraded_ability=creature_def.upgraded_ability,
        has_upgrade=creature_def.has_upgrade,
        state="active",
        friendship=0,
    )


def create_wild_creature(creature_def: CreatureDef) -> CreatureInstance:
    """Instantiate a wild opponent; wild creatures never accrue friendship."""
    creature = create_creature(creature_def)
    creature.friendship = WILD_FRIENDSHIP
    return creature


def create_creature_by_id(
    creature_id: str,
    *,
    creatures_repo: CreaturesRepository,
    wild: bool = False,
) -> CreatureInstance:
    """Look up a species by id or name and instantiate it."""
    creature_def = creatures_repo.find_by_name(creature_id)
    if creature_def is None:
        raise FactoryError(f"Creature '{creature_id}' not found.")
    if wild:
        return create_wild_creature(creature_def)
    return create_creature(creature_def)
