"""Wild encounter selection while walking."""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from fieldfriends.data.repositories import AreasRepository
from fieldfriends.domain.abilities import party_hook
from fieldfriends.domain.defs import AreaDef, EncounterSlotDef
from fieldfriends.domain.entities import Party
from fieldfriends.domain.state import GameState

MIN_STEPS_BETWEEN_ENCOUNTERS = 4

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randrange(self, n: int) -> int: ...


def effective_rate(area: AreaDef, party: Party | None = None) -> float:
    """Area encounter rate after party-wide modifiers (Scout Ahead halves it)."""
    rate = area.encounter_rate
    hook = party_hook(party, "halve_encounter_rate")
    if hook is not None:
        rate *= hook.value
    return rate


def select_weighted(slots: Sequence[EncounterSlotDef], rng: RandomSource) -> str | None:
    """
    Pick a creature id from an encounter table using integer weights.

    Returns None for an empty or zero-weight table.
    """
    total_weight = sum(slot.weight for slot in slots)
    if total_weight <= 0:
        return None
    roll = rng.randrange(total_weight)
    cumulative = 0
    for slot in slots:
        cumulative += slot.weight
        if roll < cumulative:
            return slot.creature_id
    return slots[-1].creature_id


def roll_encounter(area: AreaDef, rng: RandomSource, *, party: Party | None = None) -> str | None:
    """Roll the area's rate once and, on a hit, draw which creature appears."""
    if not area.has_encounters or not area.encounters:
        return None
    rate = effective_rate(area, party)
    draw = rng.random()
    if draw > rate:
        return None
    return select_weighted(area.encounters, rng)


class EncounterService:
    """Tracks steps between encounters and rolls the current area's table."""

    def __init__(self, *, areas_repo: AreasRepository, rng: RandomSource) -> None:
        self._areas_repo = areas_repo
        self._rng = rng

    def on_step(self, state: GameState) -> str | None:
        """Advance the step counter and return an encountered creature id, if any."""
        area = self._areas_repo.find(state.current_area_id)
        if area is None or not area.has_encounters or not area.encounters:
            return None

        state.steps_since_encounter += 1
        if state.steps_since_encounter < MIN_STEPS_BETWEEN_ENCOUNTERS:
            return None

        rate = effective_rate(area, state.party)
        draw = self._rng.random()
        if draw > rate:
            return None

        state.steps_since_encounter = 0
        creature_id = select_weighted(area.encounters, self._rng)
        if creature_id is None:
            return None
        logger.info("Encounter in %s: %s (rate %.3f)", area.id, creature_id, rate)
        return creature_id
