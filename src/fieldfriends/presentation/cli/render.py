"""Shared CLI rendering helpers: event narration and battle panels."""
from __future__ import annotations

import os
from typing import Iterable, List, Sequence

from fieldfriends.core.types import AbilityId
from fieldfriends.domain.battle_models import BattleCreatureView
from fieldfriends.services.battle_service import (
    AbilityTriggeredEvent,
    AbilityUpgradedEvent,
    AllRestingEvent,
    AttackResolvedEvent,
    BattleEvent,
    BattleResolvedEvent,
    BattleStalledEvent,
    BattleStartedEvent,
    BattleView,
    CreatureRestingEvent,
    FleeAttemptedEvent,
    FriendshipGainedEvent,
    HpChangedEvent,
    SwapInEvent,
    WaitResolvedEvent,
)
from fieldfriends.services.overworld_service import (
    AreaEnteredEvent,
    DigCacheFoundEvent,
    EncounterStartedEvent,
    FindShineFoundEvent,
    HiddenPathRevealedEvent,
    OverworldEvent,
    RestedAtHomeEvent,
    ReturnedHomeEvent,
)


def debug_enabled() -> bool:
    """Return True only when FIELDFRIENDS_DEBUG is explicitly set to '1'."""
    return os.getenv("FIELDFRIENDS_DEBUG") == "1"


def ability_display_name(ability: AbilityId) -> str:
    """``part_the_grass`` -> ``Part The Grass``."""
    return " ".join(word.capitalize() for word in ability.split("_"))


def describe_battle_event(event: BattleEvent) -> List[str]:
    """Return the narration lines for one battle event (possibly none)."""
    if isinstance(event, BattleStartedEvent):
        return [f"A wild {event.enemy_name} appeared.", f"{event.player_name} steps forward."]
    if isinstance(event, AttackResolvedEvent):
        if event.by_player:
            lines = [f"{event.attacker_name} nudges forward."]
        else:
            lines = [f"{event.attacker_name} moves closer."]
        if event.effectiveness == "strong":
            lines.append("It lands well.")
        elif event.effectiveness == "weak":
            lines.append("It barely connects.")
        else:
            lines.append(f"{event.target_name} takes a hit.")
        return lines
    if isinstance(event, HpChangedEvent):
        # The HP panel already shows this.
        return []
    if isinstance(event, CreatureRestingEvent):
        if event.side == "enemy":
            return ["They look tired."]
        return [f"{event.creature_name} needs to rest."]
    if isinstance(event, WaitResolvedEvent):
        lines = [f"{event.creature_name} waits quietly."]
        if event.nullified:
            lines.append("Nothing happens.")
        return lines
    if isinstance(event, FriendshipGainedEvent):
        return [f"{event.creature_name} seems closer."] if debug_enabled() else []
    if isinstance(event, AbilityTriggeredEvent):
        return _describe_ability(event)
    if isinstance(event, FleeAttemptedEvent):
        return ["You try to step back.", "You slip away." if event.success else "You can't get away."]
    if isinstance(event, SwapInEvent):
        return [f"{event.creature_name} steps forward."]
    if isinstance(event, AllRestingEvent):
        return ["Everyone needs to rest."]
    if isinstance(event, AbilityUpgradedEvent):
        return [f"{event.creature_name} learned {ability_display_name(event.ability)}."]
    if isinstance(event, BattleStalledEvent):
        return ["Neither side gives way."]
    if isinstance(event, BattleResolvedEvent):
        if event.won:
            return ["You keep moving."]
        if event.reason in ("defeat", "stalled", "no_active_creature"):
            return ["You head back for now."]
        return []
    return [str(event)]


def _describe_ability(event: AbilityTriggeredEvent) -> List[str]:
    if event.hook == "suppress_enemy_turn":
        return [f"{event.creature_name} calms the air."]
    if event.hook == "post_battle_heal":
        return [f"{event.creature_name} clears the water."]
    if event.hook == "slow_notice":
        return ["Something holds them back."]
    if event.hook == "flee_second_chance":
        return ["The wind shifts."]
    if event.hook in ("guaranteed_flee", "flee_once_per_area"):
        return []
    return [f"{event.creature_name} uses {ability_display_name(event.ability)}."]


def describe_overworld_event(event: OverworldEvent) -> List[str]:
    if isinstance(event, AreaEnteredEvent):
        return [f"You arrive at {event.area_name}."]
    if isinstance(event, RestedAtHomeEvent):
        return ["You rest for a bit."]
    if isinstance(event, HiddenPathRevealedEvent):
        return [f"{event.creature_name} parts the grass. Something was hidden here."]
    if isinstance(event, DigCacheFoundEvent):
        return [f"{event.creature_name} digs something up. It feels better."]
    if isinstance(event, FindShineFoundEvent):
        return [f"{event.creature_name} finds something shiny by the water."]
    if isinstance(event, EncounterStartedEvent):
        return []
    if isinstance(event, ReturnedHomeEvent):
        return [f"You are back at {event.area_name}."]
    return [str(event)]


def format_creature_line(view: BattleCreatureView | None, *, label: str) -> str:
    if view is None:
        return f"{label:<6} -"
    status = "resting" if view.is_resting else view.hp_display
    return f"{label:<6} {view.name:<10} [{view.creature_type}] HP {status}"


def render_battle_view(view: BattleView) -> None:
    render_heading(f"Round {view.round_number}")
    print(format_creature_line(view.enemy, label="Wild"))
    print(format_creature_line(view.player, label="You"))
    if debug_enabled():
        print(f"[{view.battle_id}]")


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_lines(lines: Iterable[str], *, step: bool = False) -> None:
    """Print narration lines; in step mode wait for Enter after each one."""
    for line in lines:
        print(line)
        if step:
            input()
