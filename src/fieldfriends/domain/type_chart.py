"""Type effectiveness chart: Field > Water > Wind > Field, Meadow is neutral."""
from __future__ import annotations

from typing import Dict, Literal, Tuple

from fieldfriends.core.types import CreatureType

ADVANTAGE_MULTIPLIER = 1.5
DISADVANTAGE_MULTIPLIER = 0.75
NEUTRAL_MULTIPLIER = 1.0

Effectiveness = Literal["strong", "weak", "neutral"]

# attacker -> defender it is strong against
_STRONG_AGAINST: Dict[CreatureType, CreatureType] = {
    "field": "water",
    "water": "wind",
    "wind": "field",
}


def get_multiplier(attacker: CreatureType, defender: CreatureType) -> float:
    """Return 1.5, 0.75 or 1.0 for every ordered pair of types."""
    if attacker == "meadow" or defender == "meadow":
        return NEUTRAL_MULTIPLIER
    if _STRONG_AGAINST.get(attacker) == defender:
        return ADVANTAGE_MULTIPLIER
    if _STRONG_AGAINST.get(defender) == attacker:
        return DISADVANTAGE_MULTIPLIER
    return NEUTRAL_MULTIPLIER


def classify(multiplier: float) -> Effectiveness:
    if multiplier > NEUTRAL_MULTIPLIER:
        return "strong"
    if multiplier < NEUTRAL_MULTIPLIER:
        return "weak"
    return "neutral"


def effectiveness(attacker: CreatureType, defender: CreatureType) -> Tuple[float, Effectiveness]:
    multiplier = get_multiplier(attacker, defender)
    return multiplier, classify(multiplier)
