"""Battle controller lifecycle without any presentation layer."""
from __future__ import annotations

from typing import List

import pytest

from fieldfriends.domain.entities import Party
from fieldfriends.services import BattleInProgressError, BattleService
from fieldfriends.services.battle_service import BattleEvent, BattleResolvedEvent, BattleStartedEvent
from fieldfriends.services.controllers import BattleController
from tests.helpers.creatures import make_creature, make_wild
from tests.helpers.scripted_rng import ScriptedRNG


def _build_battle_controller(rng: ScriptedRNG | None = None) -> tuple[BattleController, List[BattleEvent], dict]:
    sink: List[BattleEvent] = []
    calls: dict = {"started": 0, "ended": []}

    def on_started() -> None:
        calls["started"] += 1

    def on_ended(won: bool) -> None:
        calls["ended"].append(won)

    controller = BattleController(
        BattleService(rng=rng or ScriptedRNG()),
        on_started=on_started,
        on_ended=on_ended,
        event_sink=sink.append,
    )
    return controller, sink, calls


def test_controller_forwards_events_and_fires_started() -> None:
    controller, sink, calls = _build_battle_controller()

    battle_state, events = controller.start_battle(make_wild(speed=1), Party([make_creature(speed=5)]))

    assert sink == events
    assert isinstance(sink[0], BattleStartedEvent)
    assert calls["started"] == 1
    assert controller.has_active_battle()
    assert controller.is_awaiting_input(battle_state)


def test_controller_rejects_second_battle() -> None:
    controller, _, _ = _build_battle_controller()
    party = Party([make_creature(speed=5)])
    controller.start_battle(make_wild(speed=1), party)

    with pytest.raises(BattleInProgressError):
        controller.start_battle(make_wild(speed=1), party)


def test_controller_fires_ended_once_and_frees_slot() -> None:
    controller, sink, calls = _build_battle_controller()
    party = Party([make_creature(attack=10, speed=5)])
    battle_state, _ = controller.start_battle(make_wild(hp=3, defense=0, speed=1), party)

    controller.submit_action(battle_state, "move")
    controller.submit_action(battle_state, "move")

    assert calls["ended"] == [True]
    assert isinstance(sink[-1], BattleResolvedEvent)
    assert not controller.has_active_battle()
    assert controller.current_battle is None
    controller.start_battle(make_wild(speed=1), party)


def test_controller_battle_ending_at_start_skips_started() -> None:
    controller, _, calls = _build_battle_controller()
    player = make_creature()
    player.take_damage(player.max_hp)

    battle_state, _ = controller.start_battle(make_wild(), Party([player]))

    assert battle_state.is_over
    assert calls["started"] == 0
    assert calls["ended"] == [False]
    assert not controller.has_active_battle()


def test_controller_view_matches_service() -> None:
    controller, _, _ = _build_battle_controller()
    battle_state, _ = controller.start_battle(make_wild("Drift", "water", speed=1), Party([make_creature(speed=5)]))

    view = controller.get_battle_view(battle_state)

    assert view.enemy.name == "Drift"
    assert view.round_number == 1
