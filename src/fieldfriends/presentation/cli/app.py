"""Console-driven UI loops for Field Friends."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Dict, List, Literal

from fieldfriends.core.rng import RNG
from fieldfriends.core.types import BattleAction
from fieldfriends.data.errors import DataError
from fieldfriends.data.repositories import AreasRepository, CreaturesRepository
from fieldfriends.domain.entities import CreatureInstance
from fieldfriends.domain.state import GameState
from fieldfriends.presentation.cli import config as cli_config
from fieldfriends.presentation.cli.render import (
    debug_enabled,
    describe_battle_event,
    describe_overworld_event,
    render_battle_view,
    render_heading,
    render_lines,
    render_menu,
)
from fieldfriends.presentation.cli.save_slots import SaveSlotStore
from fieldfriends.services import (
    BattleService,
    EncounterService,
    OverworldService,
    SaveLoadError,
    SaveService,
    TravelBlockedError,
)
from fieldfriends.services.battle_service import BattleEvent
from fieldfriends.services.controllers import BattleController
from fieldfriends.services.overworld_service import OverworldEvent

MenuAction = Literal["new_game", "load_game", "options", "quit"]
_MAX_RANDOM_SEED = 2**31 - 1
_BATTLE_ACTIONS: List[tuple[BattleAction, str]] = [("move", "Move"), ("wait", "Wait"), ("back", "Back")]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Repositories:
    creatures: CreaturesRepository
    areas: AreasRepository


@dataclass(slots=True)
class _Session:
    """Services bound to one game's RNG."""

    state: GameState
    overworld: OverworldService
    battles: BattleController
    saves: SaveService


def main() -> None:
    """Start the interactive CLI session."""
    config = cli_config.load_config()
    _configure_logging(config)
    try:
        repos = _load_repositories()
    except DataError as exc:
        logger.error("Game data failed to load: %s", exc)
        print(f"Game data failed to load: {exc}")
        return
    slots = SaveSlotStore()
    print("=== Field Friends ===")
    while True:
        action = _main_menu_loop()
        if action == "quit":
            break
        if action == "options":
            config = _options_menu(config)
            continue
        if action == "new_game":
            session = _new_session(repos, _prompt_seed())
        else:
            session = _load_session(repos, slots)
            if session is None:
                continue
        _run_overworld_loop(session, slots, config)
    print("Thank you for walking.")


def _configure_logging(config: Dict[str, str]) -> None:
    level = logging.DEBUG if debug_enabled() else getattr(logging, config.get("log_level", "WARNING"))
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_repositories() -> _Repositories:
    creatures = CreaturesRepository()
    return _Repositories(creatures=creatures, areas=AreasRepository(creatures_repo=creatures))


def _build_session(repos: _Repositories, rng: RNG, state: GameState | None, seed: int) -> _Session:
    encounters = EncounterService(areas_repo=repos.areas, rng=rng)
    overworld = OverworldService(
        creatures_repo=repos.creatures,
        areas_repo=repos.areas,
        encounter_service=encounters,
        rng=rng,
    )
    if state is None:
        state = overworld.start_new_game(seed)
    battles = BattleController(BattleService(rng=rng), event_sink=_print_battle_event)
    saves = SaveService(areas_repo=repos.areas)
    return _Session(state=state, overworld=overworld, battles=battles, saves=saves)


def _new_session(repos: _Repositories, seed: int) -> _Session:
    session = _build_session(repos, RNG(seed), None, seed)
    print(f"Game started with seed: {seed}")
    return session


def _load_session(repos: _Repositories, slots: SaveSlotStore) -> _Session | None:
    slot = _prompt_slot(slots, "Load from which slot?")
    if slot is None:
        return None
    saves = SaveService(areas_repo=repos.areas)
    try:
        state = saves.deserialize(slots.read_slot(slot))
    except SaveLoadError as exc:
        print(f"Could not load: {exc}")
        return None
    print("Save loaded.")
    return _build_session(repos, state.rng, state, state.seed)


def _main_menu_loop() -> MenuAction:
    options: List[tuple[MenuAction, str]] = [
        ("new_game", "New Game"),
        ("load_game", "Load Game"),
        ("options", "Options"),
        ("quit", "Quit"),
    ]
    render_menu("Main Menu", [label for _, label in options])
    return options[_prompt_index(len(options))][0]


def _options_menu(config: Dict[str, str]) -> Dict[str, str]:
    current = config.get("text_display_mode", "instant")
    render_menu(f"Options (text: {current})", ["Instant text", "Step text", "Back"])
    choice = _prompt_index(3)
    if choice == 2:
        return config
    updated = dict(config)
    updated["text_display_mode"] = "instant" if choice == 0 else "step"
    cli_config.save_config(updated)
    return updated


def _prompt_seed() -> int:
    while True:
        raw_value = input("Enter seed (blank for random): ").strip()
        if not raw_value:
            return secrets.randbelow(_MAX_RANDOM_SEED)
        try:
            return int(raw_value)
        except ValueError:
            print("Invalid seed. Please enter a valid integer.")


def _prompt_index(count: int, prompt: str = "Select an option: ") -> int:
    while True:
        raw = input(prompt).strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < count:
            return index
        print(f"Please enter a value between 1 and {count}.")


def _prompt_slot(slots: SaveSlotStore, title: str) -> int | None:
    listing = slots.list_slots()
    render_menu(title, [entry.label for entry in listing] + ["Cancel"])
    index = _prompt_index(len(listing) + 1)
    if index == len(listing):
        return None
    return listing[index].slot


# -----------------------
# Overworld
# -----------------------
def _run_overworld_loop(session: _Session, slots: SaveSlotStore, config: Dict[str, str]) -> None:
    step_mode = config.get("text_display_mode") == "step"
    state = session.state
    while True:
        area = session.overworld.get_current_area(state)
        render_heading(area.name)
        _render_party(state)
        options = ["Walk", "Travel", "Change order", "Save", "Quit to menu"]
        grove_available = area.id == "quiet_grove" and not state.grove_encounter_done
        if grove_available:
            options.insert(1, "Look around")
        render_menu("Actions", options)
        choice = options[_prompt_index(len(options))]

        if choice == "Walk":
            result = session.overworld.take_step(state)
            _print_overworld_events(result.events, step_mode)
            if result.encounter is not None:
                _run_battle(session, result.encounter, step_mode)
        elif choice == "Look around":
            print("Something is here.")
            enemy = session.overworld.trigger_grove_encounter(state)
            if enemy is not None:
                _run_battle(session, enemy, step_mode)
        elif choice == "Travel":
            _travel_menu(session, step_mode)
        elif choice == "Change order":
            _reorder_menu(state)
        elif choice == "Save":
            _save_game(session, slots)
        else:
            return


def _render_party(state: GameState) -> None:
    for idx, member in enumerate(state.party.members, start=1):
        status = "resting" if member.is_resting else f"HP {member.current_hp}/{member.max_hp}"
        line = f"{idx}. {member.name:<10} [{member.creature_type}] {status}"
        if debug_enabled():
            line += f" (friendship {member.friendship}, {member.active_ability})"
        print(line)


def _travel_menu(session: _Session, step_mode: bool) -> None:
    destinations = session.overworld.list_destinations(session.state)
    render_menu("Travel", [area.name for area in destinations] + ["Stay"])
    index = _prompt_index(len(destinations) + 1)
    if index == len(destinations):
        return
    try:
        events = session.overworld.travel(session.state, destinations[index].id)
    except TravelBlockedError as exc:
        print(exc)
        return
    _print_overworld_events(events, step_mode)


def _reorder_menu(state: GameState) -> None:
    if len(state.party) < 2:
        print("There is no one to swap with.")
        return
    first = _prompt_index(len(state.party), "Swap which creature? ")
    second = _prompt_index(len(state.party), "With which creature? ")
    if state.party.swap_order(first, second):
        print("The order changes.")


def _save_game(session: _Session, slots: SaveSlotStore) -> None:
    slot = _prompt_slot(slots, "Save to which slot?")
    if slot is None:
        return
    try:
        slots.write_slot(slot, session.saves.serialize(session.state))
    except (SaveLoadError, OSError) as exc:
        print(f"Could not save: {exc}")
        return
    print("Game saved.")


def _print_overworld_events(events: List[OverworldEvent], step_mode: bool) -> None:
    for event in events:
        render_lines(describe_overworld_event(event), step=step_mode)


# -----------------------
# Battle
# -----------------------
def _print_battle_event(event: BattleEvent) -> None:
    render_lines(describe_battle_event(event))


def _run_battle(session: _Session, enemy: CreatureInstance, step_mode: bool) -> None:
    controller = session.battles
    battle_state, _ = controller.start_battle(
        enemy, session.state.party, area_flags=session.state.area_flags
    )
    while controller.is_awaiting_input(battle_state):
        render_battle_view(controller.get_battle_view(battle_state))
        render_menu("What will you do?", [label for _, label in _BATTLE_ACTIONS])
        action = _BATTLE_ACTIONS[_prompt_index(len(_BATTLE_ACTIONS))][0]
        controller.submit_action(battle_state, action)
        if step_mode:
            input()
    events = session.overworld.resolve_battle_end(session.state, bool(battle_state.won))
    _print_overworld_events(events, step_mode)
