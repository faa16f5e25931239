"""Creature species repository."""
from __future__ import annotations

from typing import Dict

from fieldfriends.core.types import ABILITY_IDS, CREATURE_TYPES
from fieldfriends.data.errors import DataValidationError
from fieldfriends.data.repositories.base import RepositoryBase
from fieldfriends.domain.defs import CreatureDef

MIN_BASE_STAT = 1
MAX_BASE_STAT = 10


class CreaturesRepository(RepositoryBase[CreatureDef]):
    """Loads and validates the species list."""

    def __init__(self, base_path=None) -> None:
        super().__init__("creatures.json", base_path)

    def find_by_name(self, name: str) -> CreatureDef | None:
        """Look a species up by id or display name, ignoring case."""
        needle = name.strip().lower()
        found = self.find(needle)
        if found is not None:
            return found
        for creature in self.all():
            if creature.name.lower() == needle:
                return creature
        return None

    def _build(self, raw: dict[str, object]) -> Dict[str, CreatureDef]:
        creatures: Dict[str, CreatureDef] = {}
        seen_names: set[str] = set()
        for raw_id, payload in raw.items():
            context = f"creature '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "type", "base_stats", "ability"},
                context,
                optional_fields={"upgraded_ability", "is_large", "idle_text"},
            )
            name = self._require_str(data["name"], f"{context} name").strip()
            if not name:
                raise DataValidationError(f"{context} name must not be empty.")
            if name.lower() in seen_names:
                raise DataValidationError(f"Duplicate creature name '{name}'.")
            seen_names.add(name.lower())

            stats = self._require_mapping(data["base_stats"], f"{context} base_stats")
            self._assert_exact_fields(stats, {"hp", "atk", "def", "spd"}, f"{context} base_stats")
            ability = self._require_choice(data["ability"], ABILITY_IDS, f"{context} ability")
            if ability == "none":
                raise DataValidationError(f"{context} must define a base ability.")
            upgraded = self._require_choice(
                data.get("upgraded_ability", "none"), ABILITY_IDS, f"{context} upgraded_ability"
            )
            if upgraded == ability:
                raise DataValidationError(f"{context} upgraded_ability must differ from ability.")

            creatures[raw_id] = CreatureDef(
                id=raw_id,
                name=name,
                creature_type=self._require_choice(data["type"], CREATURE_TYPES, f"{context} type"),
                hp=self._require_stat(stats["hp"], f"{context} base_stats.hp"),
                attack=self._require_stat(stats["atk"], f"{context} base_stats.atk"),
                defense=self._require_stat(stats["def"], f"{context} base_stats.def"),
                speed=self._require_stat(stats["spd"], f"{context} base_stats.spd"),
                ability=ability,
                upgraded_ability=upgraded,
                has_upgrade=upgraded != "none",
                is_large=self._require_bool(data.get("is_large", False), f"{context} is_large"),
                idle_text=self._require_str(data.get("idle_text", ""), f"{context} idle_text"),
            )
        return creatures

    def _require_stat(self, value: object, context: str) -> int:
        stat = self._require_int(value, context)
        if not MIN_BASE_STAT <= stat <= MAX_BASE_STAT:
            raise DataValidationError(f"{context} must be between {MIN_BASE_STAT} and {MAX_BASE_STAT}.")
        return stat
