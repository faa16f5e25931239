from fieldfriends.presentation.cli import render
from fieldfriends.services.battle_service import (
    AbilityTriggeredEvent,
    AbilityUpgradedEvent,
    AttackResolvedEvent,
    BattleResolvedEvent,
    BattleStartedEvent,
    CreatureRestingEvent,
    FleeAttemptedEvent,
    HpChangedEvent,
    WaitResolvedEvent,
)
from fieldfriends.services.overworld_service import RestedAtHomeEvent


def test_encounter_start_text() -> None:
    lines = render.describe_battle_event(
        BattleStartedEvent(battle_id="battle_1", enemy_name="Plen", player_name="Mossbit")
    )
    assert lines == ["A wild Plen appeared.", "Mossbit steps forward."]


def test_attack_text_reflects_effectiveness() -> None:
    strong = AttackResolvedEvent(
        attacker_name="Mossbit", target_name="Plen", damage=5, target_hp=13, effectiveness="strong", by_player=True
    )
    weak = AttackResolvedEvent(
        attacker_name="Plen", target_name="Skirl", damage=1, target_hp=11, effectiveness="weak", by_player=False
    )

    assert render.describe_battle_event(strong) == ["Mossbit nudges forward.", "It lands well."]
    assert render.describe_battle_event(weak) == ["Plen moves closer.", "It barely connects."]


def test_hp_changes_are_silent() -> None:
    event = HpChangedEvent(creature_name="Plen", side="enemy", current_hp=3, max_hp=18)
    assert render.describe_battle_event(event) == []


def test_resting_text_by_side() -> None:
    assert render.describe_battle_event(CreatureRestingEvent(creature_name="Plen", side="enemy")) == [
        "They look tired."
    ]
    assert render.describe_battle_event(CreatureRestingEvent(creature_name="Skirl", side="player")) == [
        "Skirl needs to rest."
    ]


def test_wait_and_flee_text() -> None:
    assert render.describe_battle_event(WaitResolvedEvent(creature_name="Still", nullified=True)) == [
        "Still waits quietly.",
        "Nothing happens.",
    ]
    assert render.describe_battle_event(FleeAttemptedEvent(success=False))[-1] == "You can't get away."


def test_ability_and_result_text() -> None:
    calm = AbilityTriggeredEvent(creature_name="Petalyn", ability="calm_field", hook="suppress_enemy_turn")
    upgraded = AbilityUpgradedEvent(creature_name="Mossbit", ability="root_hold")

    assert render.describe_battle_event(calm) == ["Petalyn calms the air."]
    assert render.describe_battle_event(upgraded) == ["Mossbit learned Root Hold."]
    assert render.describe_battle_event(BattleResolvedEvent(won=True, reason="victory")) == ["You keep moving."]
    assert render.describe_battle_event(BattleResolvedEvent(won=False, reason="defeat")) == [
        "You head back for now."
    ]
    assert render.describe_battle_event(BattleResolvedEvent(won=False, reason="fled")) == []


def test_rest_text() -> None:
    assert render.describe_overworld_event(RestedAtHomeEvent(area_name="Willow End")) == ["You rest for a bit."]


def test_debug_enabled_only_for_exact_flag(monkeypatch) -> None:
    monkeypatch.setenv("FIELDFRIENDS_DEBUG", "1")
    assert render.debug_enabled()
    monkeypatch.setenv("FIELDFRIENDS_DEBUG", "true")
    assert not render.debug_enabled()
    monkeypatch.delenv("FIELDFRIENDS_DEBUG")
    assert not render.debug_enabled()
