"""Controller exports."""

from .battle_controller import BattleController, EventSink

__all__ = ["BattleController", "EventSink"]
