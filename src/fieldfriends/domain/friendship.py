"""
Hidden friendship progression.

Friendship grows from walking together, from not reshuffling the party, from
choosing Wait in battle and from resting at the home base. Once an eligible
creature reaches ``UPGRADE_THRESHOLD`` its active ability switches to the
upgraded form. There is no upgrade event: the check is re-evaluated every time
the active ability is read.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from fieldfriends.domain.entities import CreatureInstance, Party

UPGRADE_THRESHOLD = 100
WILD_FRIENDSHIP = -1

WALK_BONUS = 1
LOYALTY_BONUS = 2
LOYALTY_STEP_THRESHOLD = 20
WAIT_ACTION_BONUS = 3
REST_AREA_BONUS = 10


def can_accrue(creature: CreatureInstance | None) -> bool:
    """Wild creatures never accrue; owned ones must have a non-negative counter."""
    return creature is not None and creature.friendship != WILD_FRIENDSHIP and creature.friendship >= 0


def step_bonus(steps_since_swap: int) -> int:
    """Friendship granted per step given the steps walked since the last swap."""
    if steps_since_swap > LOYALTY_STEP_THRESHOLD:
        return WALK_BONUS + LOYALTY_BONUS
    return WALK_BONUS


def on_step(party: Party) -> List[CreatureInstance]:
    """Record a step for the party and return the members that gained friendship."""
    bonus = step_bonus(party.record_step())
    gained: List[CreatureInstance] = []
    for member in party.members:
        if member.is_resting or not can_accrue(member):
            continue
        member.friendship += bonus
        gained.append(member)
    return gained


def on_wait_used(creature: CreatureInstance | None) -> int:
    """Apply the Wait bonus and return the amount granted."""
    if creature is None or creature.is_resting or not can_accrue(creature):
        return 0
    creature.friendship += WAIT_ACTION_BONUS
    return WAIT_ACTION_BONUS


def on_rest_at_home(creature: CreatureInstance | None) -> int:
    if not can_accrue(creature):
        return 0
    assert creature is not None
    creature.friendship += REST_AREA_BONUS
    return REST_AREA_BONUS


def has_reached_upgrade(creature: CreatureInstance | None) -> bool:
    if creature is None:
        return False
    return creature.has_upgrade and creature.friendship >= UPGRADE_THRESHOLD
