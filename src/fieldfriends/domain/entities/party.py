"""The player's ordered party of creatures."""
from __future__ import annotations

import logging
from typing import Iterable, List

from fieldfriends.core.types import AbilityId
from fieldfriends.domain.entities.creature import CreatureInstance

MAX_PARTY_SIZE = 3

logger = logging.getLogger(__name__)


class Party:
    """
    Ordered sequence of up to three creatures.

    Index 0 is the front of the line; the lead is the first member that is
    not resting.
    """

    def __init__(self, members: Iterable[CreatureInstance] = ()) -> None:
        self._members: List[CreatureInstance] = []
        self.steps_since_swap = 0
        for member in members:
            if not self.add(member):
                raise ValueError(f"A party holds at most {MAX_PARTY_SIZE} creatures.")

    @property
    def members(self) -> List[CreatureInstance]:
        """Return a copy of the party in order."""
        return list(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self):
        return iter(list(self._members))

    def add(self, creature: CreatureInstance) -> bool:
        """Append a creature; return False when the party is already full."""
        if len(self._members) >= MAX_PARTY_SIZE:
            return False
        self._members.append(creature)
        return True

    def remove(self, index: int) -> CreatureInstance | None:
        if index < 0 or index >= len(self._members):
            return None
        return self._members.pop(index)

    def swap_order(self, index_a: int, index_b: int) -> bool:
        """Swap two members and reset the loyalty step counter."""
        count = len(self._members)
        if not (0 <= index_a < count and 0 <= index_b < count):
            return False
        self._members[index_a], self._members[index_b] = self._members[index_b], self._members[index_a]
        self.steps_since_swap = 0
        logger.debug("Party order swapped (%d <-> %d)", index_a, index_b)
        return True

    def record_step(self) -> int:
        self.steps_since_swap += 1
        return self.steps_since_swap

    def get_lead(self) -> CreatureInstance | None:
        for member in self._members:
            if not member.is_resting:
                return member
        return None

    def get_active_party(self) -> List[CreatureInstance]:
        return [member for member in self._members if not member.is_resting]

    def all_resting(self) -> bool:
        return all(member.is_resting for member in self._members)

    def party_has_ability(self, ability: AbilityId) -> bool:
        """True when any non-resting member currently has ``ability`` active."""
        return any(member.active_ability == ability for member in self.get_active_party())

    def heal_all(self) -> None:
        for member in self._members:
            member.full_heal()
