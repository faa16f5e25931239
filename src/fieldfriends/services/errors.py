"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime creature cannot be created."""


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""


class BattleInProgressError(Exception):
    """Raised when a second battle is started while one is still running."""


class TravelBlockedError(Exception):
    """Raised when travel is attempted to an unreachable area or during a battle."""
