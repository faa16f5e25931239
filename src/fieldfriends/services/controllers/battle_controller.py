"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

import logging
from typing import Callable, List

from fieldfriends.core.types import BattleAction
from fieldfriends.domain.abilities import AreaAbilityFlags
from fieldfriends.domain.battle_models import BattleState
from fieldfriends.domain.entities import CreatureInstance, Party
from fieldfriends.services.battle_service import BattleEvent, BattleService, BattleView
from fieldfriends.services.errors import BattleInProgressError

EventSink = Callable[[BattleEvent], None]

logger = logging.getLogger(__name__)


class BattleController:
    """
    UI-agnostic controller for battle lifecycle.

    Wraps BattleService, allows a single running battle at a time, forwards
    every event to an optional sink and fires ``on_started`` / ``on_ended``.

    Non-responsibilities (handled by presentation layer):
    - Rendering events or HP bars
    - Prompting for input
    - Pacing text display
    """

    def __init__(
        self,
        battle_service: BattleService,
        *,
        on_started: Callable[[], None] | None = None,
        on_ended: Callable[[bool], None] | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        self._service = battle_service
        self._on_started = on_started
        self._on_ended = on_ended
        self._event_sink = event_sink
        self._current: BattleState | None = None

    @property
    def current_battle(self) -> BattleState | None:
        return self._current

    def has_active_battle(self) -> bool:
        return self._current is not None and not self._current.is_over

    def start_battle(
        self,
        enemy: CreatureInstance,
        party: Party,
        *,
        area_flags: AreaAbilityFlags | None = None,
    ) -> tuple[BattleState, List[BattleEvent]]:
        """Start a battle; raises BattleInProgressError if one is still running."""
        if self.has_active_battle():
            raise BattleInProgressError("A battle is already in progress for this party.")
        battle_state, events = self._service.start_battle(enemy, party, area_flags=area_flags)
        self._current = battle_state
        if not battle_state.is_over and self._on_started is not None:
            self._on_started()
        self._dispatch(battle_state, events)
        return battle_state, events

    def submit_action(self, battle_state: BattleState, action: BattleAction) -> List[BattleEvent]:
        """Apply a player decision and return the resulting events."""
        events = self._service.submit_action(battle_state, action)
        self._dispatch(battle_state, events)
        return events

    def get_battle_view(self, battle_state: BattleState) -> BattleView:
        return self._service.get_battle_view(battle_state)

    def is_awaiting_input(self, battle_state: BattleState) -> bool:
        return battle_state.awaiting_input and not battle_state.is_over

    def _dispatch(self, battle_state: BattleState, events: List[BattleEvent]) -> None:
        if self._event_sink is not None:
            for event in events:
                self._event_sink(event)
        if events and battle_state.is_over:
            if battle_state is self._current:
                self._current = None
            if self._on_ended is not None:
                self._on_ended(bool(battle_state.won))
