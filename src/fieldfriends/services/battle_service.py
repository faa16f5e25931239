"""Battle service resolving one-on-one encounters deterministically."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Literal, Protocol

from fieldfriends.core.types import BATTLE_ACTIONS, AbilityId, BattleAction
from fieldfriends.domain import friendship
from fieldfriends.domain.abilities import (
    AreaAbilityFlags,
    HookName,
    actor_hook,
    find_party_hook,
    roll_hook,
)
from fieldfriends.domain.battle_models import BattleCreatureView, BattleState, EndReason
from fieldfriends.domain.entities import CreatureInstance, Party
from fieldfriends.domain.type_chart import Effectiveness, effectiveness
from fieldfriends.services.factories import make_instance_id

BASE_DAMAGE = 2
BASE_FLEE_CHANCE = 0.50
DEFAULT_MAX_ROUNDS = 50

Side = Literal["player", "enemy"]

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


@dataclass(slots=True)
class BattleView:
    """Presentation view for the current battle state."""

    battle_id: str
    player: BattleCreatureView | None
    enemy: BattleCreatureView
    round_number: int
    awaiting_input: bool


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class BattleStartedEvent(BattleEvent):
    battle_id: str
    enemy_name: str
    player_name: str


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    attacker_name: str
    target_name: str
    damage: int
    target_hp: int
    effectiveness: Effectiveness
    by_player: bool


@dataclass(slots=True)
class HpChangedEvent(BattleEvent):
    creature_name: str
    side: Side
    current_hp: int
    max_hp: int


@dataclass(slots=True)
class CreatureRestingEvent(BattleEvent):
    creature_name: str
    side: Side


@dataclass(slots=True)
class WaitResolvedEvent(BattleEvent):
    creature_name: str
    nullified: bool


@dataclass(slots=True)
class FriendshipGainedEvent(BattleEvent):
    creature_name: str
    amount: int
    friendship: int


@dataclass(slots=True)
class AbilityTriggeredEvent(BattleEvent):
    creature_name: str
    ability: AbilityId
    hook: HookName
    amount: int = 0


@dataclass(slots=True)
class FleeAttemptedEvent(BattleEvent):
    success: bool


@dataclass(slots=True)
class SwapInEvent(BattleEvent):
    creature_name: str


@dataclass(slots=True)
class AllRestingEvent(BattleEvent):
    pass


@dataclass(slots=True)
class AbilityUpgradedEvent(BattleEvent):
    creature_name: str
    ability: AbilityId


@dataclass(slots=True)
class BattleStalledEvent(BattleEvent):
    rounds: int


@dataclass(slots=True)
class BattleResolvedEvent(BattleEvent):
    won: bool
    reason: EndReason


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (7.5 -> 8, -7.5 -> -8)."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def calculate_damage(attacker: CreatureInstance, defender: CreatureInstance) -> int:
    """
    Damage dealt by one attack.

    ``raw = round((BASE_DAMAGE + ATK) * type_multiplier)`` rounded half away
    from zero, reduced by ``DEF // 2`` and never lower than 1.
    """
    multiplier, _ = effectiveness(attacker.creature_type, defender.creature_type)
    raw = round_half_away_from_zero((BASE_DAMAGE + attacker.attack) * multiplier)
    return max(1, raw - defender.defense // 2)


class BattleService:
    """
    Turn-based battle orchestrator for one wild creature against the party.

    Every round the faster side acts first; ties go to the player. The
    service runs synchronously until player input is needed and returns the
    narrated events, so presentation timing never affects the outcome.
    """

    def __init__(self, *, rng: RandomSource, max_rounds: int = DEFAULT_MAX_ROUNDS) -> None:
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1.")
        self._rng = rng
        self._max_rounds = max_rounds

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def start_battle(
        self,
        enemy: CreatureInstance,
        party: Party,
        *,
        area_flags: AreaAbilityFlags | None = None,
    ) -> tuple[BattleState, List[BattleEvent]]:
        """Open a battle and run it up to the first player decision."""
        battle_state = BattleState(
            battle_id=make_instance_id("battle", self._rng),
            enemy=enemy,
            party=party,
            player=party.get_lead(),
            area_flags=area_flags,
            upgraded_at_start=[member for member in party.members if member.is_ability_upgraded],
        )
        events: List[BattleEvent] = []
        if battle_state.player is None:
            logger.info("Battle %s aborted: no active creature in party", battle_state.battle_id)
            events.append(AllRestingEvent())
            self._end(battle_state, events, won=False, reason="no_active_creature")
            return battle_state, events

        logger.info(
            "Battle %s started: %s vs wild %s",
            battle_state.battle_id,
            battle_state.player.name,
            enemy.name,
        )
        events.append(
            BattleStartedEvent(
                battle_id=battle_state.battle_id,
                enemy_name=enemy.name,
                player_name=battle_state.player.name,
            )
        )
        self._next_round(battle_state, events)
        return battle_state, events

    def submit_action(self, battle_state: BattleState, action: BattleAction) -> List[BattleEvent]:
        """
        Resolve the player's action and the rest of the round.

        Submissions while the battle is over or not waiting for input are
        ignored and produce no events.
        """
        if battle_state.is_over or not battle_state.awaiting_input:
            logger.debug("Ignoring action %r for battle %s", action, battle_state.battle_id)
            return []
        if action not in BATTLE_ACTIONS:
            logger.debug("Ignoring unknown action %r", action)
            return []

        events: List[BattleEvent] = []
        battle_state.awaiting_input = False
        battle_state.last_action = action
        self._player_turn(battle_state, action, events)
        if battle_state.is_over:
            return events
        if battle_state.player_first:
            self._enemy_turn(battle_state, events)
        self._close_round(battle_state, events)
        if not battle_state.is_over:
            self._next_round(battle_state, events)
        return events

    def get_battle_view(self, battle_state: BattleState) -> BattleView:
        """Return structured information for rendering."""
        player = battle_state.player
        return BattleView(
            battle_id=battle_state.battle_id,
            player=self._to_view(player) if player is not None else None,
            enemy=self._to_view(battle_state.enemy),
            round_number=battle_state.round_number,
            awaiting_input=battle_state.awaiting_input,
        )

    # -----------------------
    # Round flow
    # -----------------------
    def _next_round(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        while not battle_state.is_over:
            if battle_state.round_number >= self._max_rounds:
                events.append(BattleStalledEvent(rounds=battle_state.round_number))
                self._end(battle_state, events, won=False, reason="stalled")
                return

            player = battle_state.player
            assert player is not None
            battle_state.round_number += 1
            # Re-evaluated every round since a swap-in changes the player's speed.
            battle_state.player_first = player.speed >= battle_state.enemy.speed
            if battle_state.player_first:
                battle_state.awaiting_input = True
                return

            self._enemy_turn(battle_state, events)
            if not player.is_resting:
                battle_state.awaiting_input = True
                return
            self._close_round(battle_state, events)

    def _close_round(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        if battle_state.phase == "wait_nullify":
            battle_state.phase = "active"
        if battle_state.enemy.is_resting:
            self._handle_win(battle_state, events)
            return
        player = battle_state.player
        if player is None or player.is_resting:
            self._swap_in(battle_state, events)

    def _player_turn(self, battle_state: BattleState, action: BattleAction, events: List[BattleEvent]) -> None:
        player = battle_state.player
        if player is None or player.is_resting:
            return
        if action == "move":
            self._execute_move(player, battle_state.enemy, by_player=True, events=events)
        elif action == "wait":
            self._resolve_wait(battle_state, player, events)
        else:
            self._attempt_flee(battle_state, player, events)

    def _enemy_turn(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        enemy = battle_state.enemy
        player = battle_state.player
        if enemy.is_resting or player is None or player.is_resting:
            return
        if battle_state.phase == "wait_nullify":
            battle_state.phase = "active"
            logger.debug("Enemy turn nullified by Wait")
            return

        found = find_party_hook(battle_state.party, "suppress_enemy_turn")
        if found is not None:
            member, hook = found
            if roll_hook(hook, self._rng):
                events.append(
                    AbilityTriggeredEvent(
                        creature_name=member.name,
                        ability=member.active_ability,
                        hook=hook.name,
                    )
                )
                return

        self._execute_move(enemy, player, by_player=False, events=events)

    # -----------------------
    # Actions
    # -----------------------
    def _execute_move(
        self,
        attacker: CreatureInstance,
        defender: CreatureInstance,
        *,
        by_player: bool,
        events: List[BattleEvent],
    ) -> None:
        _, kind = effectiveness(attacker.creature_type, defender.creature_type)
        damage = calculate_damage(attacker, defender)
        defender.take_damage(damage)
        defender_side: Side = "enemy" if by_player else "player"
        logger.debug("%s hits %s for %d (%s)", attacker.name, defender.name, damage, kind)

        events.append(
            AttackResolvedEvent(
                attacker_name=attacker.name,
                target_name=defender.name,
                damage=damage,
                target_hp=defender.current_hp,
                effectiveness=kind,
                by_player=by_player,
            )
        )
        events.append(
            HpChangedEvent(
                creature_name=defender.name,
                side=defender_side,
                current_hp=defender.current_hp,
                max_hp=defender.max_hp,
            )
        )

        if by_player:
            snare = actor_hook(attacker, "slow_notice")
            if snare is not None and roll_hook(snare, self._rng):
                events.append(
                    AbilityTriggeredEvent(
                        creature_name=attacker.name,
                        ability=attacker.active_ability,
                        hook=snare.name,
                    )
                )

        if defender.is_resting:
            events.append(CreatureRestingEvent(creature_name=defender.name, side=defender_side))

    def _resolve_wait(
        self, battle_state: BattleState, player: CreatureInstance, events: List[BattleEvent]
    ) -> None:
        gained = friendship.on_wait_used(player)
        if gained:
            events.append(
                FriendshipGainedEvent(
                    creature_name=player.name,
                    amount=gained,
                    friendship=player.friendship,
                )
            )
        hook = actor_hook(player, "nullify_enemy_turn")
        nullified = hook is not None and roll_hook(hook, self._rng)
        if nullified:
            battle_state.phase = "wait_nullify"
        events.append(WaitResolvedEvent(creature_name=player.name, nullified=nullified))

    def _attempt_flee(
        self, battle_state: BattleState, player: CreatureInstance, events: List[BattleEvent]
    ) -> None:
        success = False
        guaranteed = actor_hook(player, "guaranteed_flee")
        if guaranteed is not None:
            success = True
            events.append(
                AbilityTriggeredEvent(
                    creature_name=player.name,
                    ability=player.active_ability,
                    hook=guaranteed.name,
                )
            )

        if not success and battle_state.area_flags is not None:
            if battle_state.area_flags.try_quick_return(player):
                success = True
                events.append(
                    AbilityTriggeredEvent(
                        creature_name=player.name,
                        ability=player.active_ability,
                        hook="flee_once_per_area",
                    )
                )

        if not success:
            success = self._rng.random() < BASE_FLEE_CHANCE

        if not success:
            found = find_party_hook(battle_state.party, "flee_second_chance")
            if found is not None:
                member, hook = found
                if roll_hook(hook, self._rng):
                    success = True
                    events.append(
                        AbilityTriggeredEvent(
                            creature_name=member.name,
                            ability=member.active_ability,
                            hook=hook.name,
                        )
                    )

        events.append(FleeAttemptedEvent(success=success))
        if success:
            self._end(battle_state, events, won=False, reason="fled")

    # -----------------------
    # Resolution
    # -----------------------
    def _handle_win(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        lead = battle_state.player
        if lead is not None:
            found = find_party_hook(battle_state.party, "post_battle_heal")
            if found is not None:
                member, hook = found
                healed = lead.heal(max(1, lead.max_hp // int(hook.value)))
                events.append(
                    AbilityTriggeredEvent(
                        creature_name=member.name,
                        ability=member.active_ability,
                        hook=hook.name,
                        amount=healed,
                    )
                )
                events.append(
                    HpChangedEvent(
                        creature_name=lead.name,
                        side="player",
                        current_hp=lead.current_hp,
                        max_hp=lead.max_hp,
                    )
                )

            already_upgraded = any(member is lead for member in battle_state.upgraded_at_start)
            if not already_upgraded and friendship.has_reached_upgrade(lead):
                events.append(AbilityUpgradedEvent(creature_name=lead.name, ability=lead.upgraded_ability))
        self._end(battle_state, events, won=True, reason="victory")

    def _swap_in(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        candidates = battle_state.party.get_active_party()
        if not candidates:
            events.append(AllRestingEvent())
            self._end(battle_state, events, won=False, reason="defeat")
            return
        battle_state.player = candidates[0]
        logger.debug("%s swaps in", battle_state.player.name)
        events.append(SwapInEvent(creature_name=battle_state.player.name))

    def _end(
        self,
        battle_state: BattleState,
        events: List[BattleEvent],
        *,
        won: bool,
        reason: EndReason,
    ) -> None:
        battle_state.phase = "ended"
        battle_state.awaiting_input = False
        battle_state.won = won
        battle_state.end_reason = reason
        logger.info("Battle %s ended: %s", battle_state.battle_id, reason)
        events.append(BattleResolvedEvent(won=won, reason=reason))

    @staticmethod
    def _to_view(creature: CreatureInstance) -> BattleCreatureView:
        return BattleCreatureView(
            name=creature.name,
            creature_type=creature.creature_type,
            current_hp=creature.current_hp,
            max_hp=creature.max_hp,
            is_resting=creature.is_resting,
        )
