from __future__ import annotations

import pytest

from fieldfriends.data.repositories import AreasRepository, CreaturesRepository
from fieldfriends.domain.entities import Party
from fieldfriends.domain.state import GameState
from fieldfriends.services import EncounterService, OverworldService, TravelBlockedError
from fieldfriends.services.overworld_service import (
    AreaEnteredEvent,
    DigCacheFoundEvent,
    EncounterStartedEvent,
    FindShineFoundEvent,
    HiddenPathRevealedEvent,
    RestedAtHomeEvent,
    ReturnedHomeEvent,
)
from tests.helpers.creatures import make_creature
from tests.helpers.scripted_rng import ScriptedRNG


def _build_overworld(rng: ScriptedRNG | None = None) -> tuple[OverworldService, ScriptedRNG]:
    rng = rng or ScriptedRNG()
    creatures = CreaturesRepository()
    areas = AreasRepository(creatures_repo=creatures)
    service = OverworldService(
        creatures_repo=creatures,
        areas_repo=areas,
        encounter_service=EncounterService(areas_repo=areas, rng=rng),
        rng=rng,
    )
    return service, rng


def _make_state(*members, area_id: str = "willow_end") -> GameState:
    state = GameState(seed=1, rng=None, party=Party(members), current_area_id=area_id)
    state.area_flags.reset(area_id)
    return state


def test_new_game_starts_home_with_mossbit() -> None:
    service, _ = _build_overworld()

    state = service.start_new_game(seed=5)

    assert state.current_area_id == "willow_end"
    assert [member.name for member in state.party] == ["Mossbit"]
    lead = state.party.get_lead()
    assert lead.current_hp == 24
    assert lead.friendship == 0


def test_step_at_home_grows_friendship_without_rolls() -> None:
    service, rng = _build_overworld()
    state = service.start_new_game(seed=5)

    result = service.take_step(state)

    assert result.encounter is None
    assert state.party.get_lead().friendship == 1
    assert state.total_steps == 1
    assert rng.random_calls == 0


def test_step_during_battle_is_ignored() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)
    state.in_battle = True

    result = service.take_step(state)

    assert result.events == []
    assert state.party.get_lead().friendship == 0


def test_step_can_start_an_encounter() -> None:
    service, _ = _build_overworld(ScriptedRNG([0.0], ints=[60]))
    state = _make_state(make_creature(), area_id="south_field")
    state.steps_since_encounter = 3

    result = service.take_step(state)

    assert result.encounter is not None
    assert result.encounter.name == "Bramblet"
    assert result.encounter.is_wild
    assert isinstance(result.events[-1], EncounterStartedEvent)
    assert state.in_battle


def test_dig_cache_heals_lead_every_interval() -> None:
    service, _ = _build_overworld(ScriptedRNG([0.1]))
    loamle = make_creature("Loamle", "field", hp=21, ability="dig_cache")
    loamle.take_damage(10)
    state = _make_state(loamle, area_id="quiet_grove")
    state.area_flags.steps_since_dig = 24

    result = service.take_step(state)

    found = [event for event in result.events if isinstance(event, DigCacheFoundEvent)]
    assert found[0].healed == 3
    assert loamle.current_hp == 14
    assert state.area_flags.steps_since_dig == 0


def test_dig_cache_skips_heal_at_full_hp() -> None:
    service, rng = _build_overworld(ScriptedRNG([0.1]))
    loamle = make_creature("Loamle", "field", hp=21, ability="dig_cache")
    state = _make_state(loamle, area_id="quiet_grove")
    state.area_flags.steps_since_dig = 24

    result = service.take_step(state)

    assert result.events == []
    assert rng.random_calls == 1


def test_find_shine_heals_active_party_near_water() -> None:
    service, _ = _build_overworld(ScriptedRNG([0.1]))
    plen = make_creature("Plen", "water", hp=18, ability="stream_glide", upgraded_ability="find_shine", friendship=100)
    mossbit = make_creature(hp=24)
    plen.take_damage(10)
    mossbit.take_damage(5)
    state = _make_state(plen, mossbit, area_id="stonebridge")

    result = service.take_step(state)

    found = [event for event in result.events if isinstance(event, FindShineFoundEvent)]
    assert found[0].healed == 5
    assert plen.current_hp == 10
    assert mossbit.current_hp == 22


def test_find_shine_needs_water() -> None:
    service, rng = _build_overworld()
    plen = make_creature("Plen", "water", ability="stream_glide", upgraded_ability="find_shine", friendship=100)
    state = _make_state(plen, area_id="hill_road")

    service.take_step(state)

    assert rng.random_calls == 0


def test_travel_requires_connection() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)

    with pytest.raises(TravelBlockedError):
        service.travel(state, "quiet_grove")


def test_travel_resets_area_flags_and_reveals() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)
    state.area_flags.quick_return_used = True

    events = service.travel(state, "south_field")

    assert state.current_area_id == "south_field"
    assert not state.area_flags.quick_return_used
    assert isinstance(events[0], AreaEnteredEvent)
    assert any(isinstance(event, HiddenPathRevealedEvent) for event in events)


def test_entering_home_heals_and_grants_rest_bonus() -> None:
    service, _ = _build_overworld()
    first = make_creature(hp=24)
    second = make_creature("Plen", "water", hp=18)
    first.take_damage(24)
    state = _make_state(first, second, area_id="south_field")

    events = service.enter_area(state, "willow_end")

    assert any(isinstance(event, RestedAtHomeEvent) for event in events)
    assert first.current_hp == 24 and not first.is_resting
    assert first.friendship == 10
    assert second.friendship == 10


def test_enter_unknown_area_raises() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)

    with pytest.raises(ValueError):
        service.enter_area(state, "moon")


def test_movement_capabilities_follow_lead() -> None:
    service, _ = _build_overworld()
    skirl = make_creature("Skirl", "wind", ability="hop_lift")
    plen = make_creature("Plen", "water", ability="stream_glide")

    assert service.speed_multiplier(Party([skirl])) == 1.3
    assert service.can_cross_gaps(Party([skirl]))
    assert service.speed_multiplier(Party([plen, skirl])) == 1.0
    assert service.can_traverse_water(Party([plen]))
    assert not service.can_traverse_water(Party([skirl, plen]))


def test_begin_encounter_unknown_species_returns_none() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)

    assert service.begin_encounter(state, "ghost") is None
    assert not state.in_battle


def test_begin_encounter_builds_wild_creature_and_locks_state() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)

    enemy = service.begin_encounter(state, "plen")

    assert enemy is not None and enemy.name == "Plen"
    assert enemy.is_wild
    assert enemy.current_hp == enemy.max_hp
    assert state.in_battle
    assert service.begin_encounter(state, "plen") is None


def test_grove_encounter_happens_once() -> None:
    service, _ = _build_overworld()
    state = service.start_new_game(seed=5)
    assert service.trigger_grove_encounter(state) is None

    state.current_area_id = "quiet_grove"
    still = service.trigger_grove_encounter(state)
    assert still is not None and still.name == "Still"
    assert state.grove_encounter_done

    service.resolve_battle_end(state, won=True)
    assert service.trigger_grove_encounter(state) is None


def test_wiped_party_is_sent_home() -> None:
    service, _ = _build_overworld()
    member = make_creature()
    member.take_damage(member.max_hp)
    state = _make_state(member, area_id="hill_road")
    state.in_battle = True

    events = service.resolve_battle_end(state, won=False)

    assert not state.in_battle
    assert state.current_area_id == "willow_end"
    assert not member.is_resting
    assert isinstance(events[-1], ReturnedHomeEvent)


def test_fleeing_keeps_party_in_place() -> None:
    service, _ = _build_overworld()
    state = _make_state(make_creature(), area_id="hill_road")
    state.in_battle = True

    assert service.resolve_battle_end(state, won=False) == []
    assert state.current_area_id == "hill_road"
