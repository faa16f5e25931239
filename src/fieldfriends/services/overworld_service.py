"""Application service for walking, area changes and encounter hand-off."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from fieldfriends.core.rng import RNG
from fieldfriends.data.repositories import AreasRepository, CreaturesRepository
from fieldfriends.domain import friendship
from fieldfriends.domain.abilities import actor_hook, roll_hook
from fieldfriends.domain.defs import AreaDef
from fieldfriends.domain.entities import CreatureInstance, Party
from fieldfriends.domain.state import GameState
from fieldfriends.services.encounter_service import EncounterService
from fieldfriends.services.errors import FactoryError, TravelBlockedError
from fieldfriends.services.factories import create_creature, create_creature_by_id

STARTER_CREATURE_ID = "mossbit"
GROVE_AREA_ID = "quiet_grove"
GROVE_CREATURE_ID = "still"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OverworldEvent:
    """Base class for overworld events."""


@dataclass(slots=True)
class AreaEnteredEvent(OverworldEvent):
    area_id: str
    area_name: str


@dataclass(slots=True)
class RestedAtHomeEvent(OverworldEvent):
    area_name: str


@dataclass(slots=True)
class HiddenPathRevealedEvent(OverworldEvent):
    creature_name: str


@dataclass(slots=True)
class DigCacheFoundEvent(OverworldEvent):
    creature_name: str
    healed: int


@dataclass(slots=True)
class FindShineFoundEvent(OverworldEvent):
    creature_name: str
    healed: int


@dataclass(slots=True)
class EncounterStartedEvent(OverworldEvent):
    creature_name: str


@dataclass(slots=True)
class ReturnedHomeEvent(OverworldEvent):
    area_name: str


@dataclass(slots=True)
class StepResult:
    """Return payload from a single overworld step."""

    events: List[OverworldEvent] = field(default_factory=list)
    encounter: CreatureInstance | None = None


class OverworldService:
    """Applies the per-step and per-area rules the overworld controller relies on."""

    def __init__(
        self,
        *,
        creatures_repo: CreaturesRepository,
        areas_repo: AreasRepository,
        encounter_service: EncounterService,
        rng: RNG,
    ) -> None:
        self._creatures_repo = creatures_repo
        self._areas_repo = areas_repo
        self._encounter_service = encounter_service
        self._rng = rng

    def start_new_game(self, seed: int) -> GameState:
        """Create a fresh state at the home base with the starter creature."""
        starter = create_creature(self._creatures_repo.get(STARTER_CREATURE_ID))
        home = self._areas_repo.home_area()
        state = GameState(seed=seed, rng=self._rng, party=Party([starter]), current_area_id=home.id)
        state.area_flags.reset(home.id)
        logger.info("New game started with seed %s", seed)
        return state

    def get_current_area(self, state: GameState) -> AreaDef:
        return self._areas_repo.get(state.current_area_id)

    def list_destinations(self, state: GameState) -> List[AreaDef]:
        area = self.get_current_area(state)
        return [self._areas_repo.get(area_id) for area_id in area.connections]

    # -----------------------
    # Walking
    # -----------------------
    def take_step(self, state: GameState) -> StepResult:
        """Apply one step: friendship, lead abilities, then the encounter roll."""
        result = StepResult()
        if state.in_battle:
            return result

        state.total_steps += 1
        friendship.on_step(state.party)
        self._apply_step_abilities(state, result.events)

        creature_id = self._encounter_service.on_step(state)
        if creature_id is not None:
            result.encounter = self.begin_encounter(state, creature_id)
            if result.encounter is not None:
                result.events.append(EncounterStartedEvent(creature_name=result.encounter.name))
        return result

    def _apply_step_abilities(self, state: GameState, events: List[OverworldEvent]) -> None:
        lead = state.party.get_lead()
        if lead is None:
            return

        dig = actor_hook(lead, "dig_cache")
        if dig is not None:
            state.area_flags.steps_since_dig += 1
            if state.area_flags.steps_since_dig >= dig.interval:
                state.area_flags.steps_since_dig = 0
                if roll_hook(dig, self._rng) and lead.current_hp < lead.max_hp:
                    healed = lead.heal(max(1, lead.max_hp // int(dig.value)))
                    events.append(DigCacheFoundEvent(creature_name=lead.name, healed=healed))

        shine = actor_hook(lead, "find_shine")
        if shine is not None and self.get_current_area(state).near_water:
            if roll_hook(shine, self._rng):
                healed = 0
                for member in state.party.get_active_party():
                    healed += member.heal(max(1, member.max_hp // int(shine.value)))
                events.append(FindShineFoundEvent(creature_name=lead.name, healed=healed))

    # -----------------------
    # Areas
    # -----------------------
    def travel(self, state: GameState, destination_id: str) -> List[OverworldEvent]:
        """Move to a connected area."""
        if state.in_battle:
            raise TravelBlockedError("Cannot travel during a battle.")
        current = self.get_current_area(state)
        if destination_id not in current.connections:
            raise TravelBlockedError(f"'{destination_id}' is not reachable from '{current.id}'.")
        return self.enter_area(state, destination_id)

    def enter_area(self, state: GameState, area_id: str) -> List[OverworldEvent]:
        """Arrive in an area: reset once-per-area abilities and rest at home."""
        area = self._areas_repo.find(area_id)
        if area is None:
            raise ValueError(f"Unknown area '{area_id}'.")
        state.current_area_id = area.id
        state.area_flags.reset(area.id)
        logger.info("Entered %s", area.name)

        events: List[OverworldEvent] = [AreaEnteredEvent(area_id=area.id, area_name=area.name)]
        if area.is_home:
            state.party.heal_all()
            for member in state.party.members:
                friendship.on_rest_at_home(member)
            events.append(RestedAtHomeEvent(area_name=area.name))

        lead = state.party.get_lead()
        if state.area_flags.try_reveal(lead):
            assert lead is not None
            events.append(HiddenPathRevealedEvent(creature_name=lead.name))
        return events

    # -----------------------
    # Movement capabilities
    # -----------------------
    def speed_multiplier(self, party: Party) -> float:
        hook = actor_hook(party.get_lead(), "speed_boost")
        return hook.value if hook is not None else 1.0

    def can_cross_gaps(self, party: Party) -> bool:
        return actor_hook(party.get_lead(), "cross_gaps") is not None

    def can_traverse_water(self, party: Party) -> bool:
        return actor_hook(party.get_lead(), "water_traversal") is not None

    # -----------------------
    # Battles
    # -----------------------
    def begin_encounter(self, state: GameState, creature_id: str) -> CreatureInstance | None:
        """Build the wild opponent; returns None for unknown species or a busy state."""
        if state.in_battle:
            return None
        try:
            enemy = create_creature_by_id(creature_id, creatures_repo=self._creatures_repo, wild=True)
        except FactoryError as exc:
            logger.warning("Encounter skipped: %s", exc)
            return None
        state.in_battle = True
        return enemy

    def trigger_grove_encounter(self, state: GameState) -> CreatureInstance | None:
        """The single optional encounter waiting in the Quiet Grove."""
        if state.current_area_id != GROVE_AREA_ID or state.grove_encounter_done:
            return None
        creature = self.begin_encounter(state, GROVE_CREATURE_ID)
        if creature is not None:
            state.grove_encounter_done = True
        return creature

    def resolve_battle_end(self, state: GameState, won: bool) -> List[OverworldEvent]:
        """Release the overworld; a wiped party is healed and sent home."""
        state.in_battle = False
        if won or not state.party.all_resting():
            return []
        state.party.heal_all()
        home = self._areas_repo.home_area()
        events = self.enter_area(state, home.id)
        events.append(ReturnedHomeEvent(area_name=home.name))
        return events
