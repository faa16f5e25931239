"""Repository for overworld area definitions."""
from __future__ import annotations

from typing import Dict, List

from fieldfriends.core.types import ENCOUNTER_RARITIES
from fieldfriends.data.errors import DataReferenceError, DataValidationError
from fieldfriends.data.repositories.base import RepositoryBase
from fieldfriends.data.repositories.creatures_repo import CreaturesRepository
from fieldfriends.domain.defs import AreaDef, EncounterSlotDef

MAX_ENCOUNTER_RATE = 0.12


class AreasRepository(RepositoryBase[AreaDef]):
    """Loads and validates areas, their connections and encounter tables."""

    def __init__(self, base_path=None, *, creatures_repo: CreaturesRepository | None = None) -> None:
        super().__init__("areas.json", base_path)
        self._creatures_repo = creatures_repo

    def home_area(self) -> AreaDef:
        for area in self.all():
            if area.is_home:
                return area
        raise DataValidationError("areas.json must define a home area.")

    def _build(self, raw: dict[str, object]) -> Dict[str, AreaDef]:
        container = self._require_mapping(raw, "areas.json")
        raw_areas = self._require_list(container.get("areas"), "areas.json.areas")
        staged: Dict[str, dict[str, object]] = {}
        for entry in raw_areas:
            area_map = self._require_mapping(entry, "area entry")
            area_id = self._require_str(area_map.get("id"), "area.id").strip()
            if not area_id:
                raise DataValidationError("area.id must not be empty.")
            if area_id in staged:
                raise DataValidationError(f"Duplicate area id '{area_id}'.")
            staged[area_id] = area_map

        definitions: Dict[str, AreaDef] = {}
        for area_id, area_map in staged.items():
            context = f"area '{area_id}'"
            name = self._require_str(area_map.get("name"), f"{context} name")
            has_encounters = self._require_bool(area_map.get("has_encounters"), f"{context} has_encounters")
            rate = area_map.get("encounter_rate", 0.0)
            if isinstance(rate, bool) or not isinstance(rate, (int, float)):
                raise DataValidationError(f"{context} encounter_rate must be a number.")
            if not 0.0 <= rate <= MAX_ENCOUNTER_RATE:
                raise DataValidationError(
                    f"{context} encounter_rate must be between 0 and {MAX_ENCOUNTER_RATE}."
                )
            encounters = self._parse_encounters(area_map.get("encounters", []), context)

            connections: List[str] = []
            for index, to_id in enumerate(self._require_list(area_map.get("connections"), f"{context} connections")):
                target = self._require_str(to_id, f"{context} connections[{index}]").strip()
                if target not in staged:
                    raise DataReferenceError(f"{context} connection references unknown area '{target}'.")
                connections.append(target)

            definitions[area_id] = AreaDef(
                id=area_id,
                name=name,
                has_encounters=has_encounters,
                encounter_rate=float(rate),
                encounters=tuple(encounters),
                connections=tuple(connections),
                near_water=self._require_bool(area_map.get("near_water", False), f"{context} near_water"),
                is_home=self._require_bool(area_map.get("is_home", False), f"{context} is_home"),
            )
        return definitions

    def _parse_encounters(self, raw_value: object, context: str) -> List[EncounterSlotDef]:
        slots: List[EncounterSlotDef] = []
        for index, entry in enumerate(self._require_list(raw_value, f"{context} encounters")):
            slot_context = f"{context} encounters[{index}]"
            slot_map = self._require_mapping(entry, slot_context)
            self._assert_exact_fields(slot_map, {"creature", "rarity"}, slot_context)
            creature_id = self._require_str(slot_map["creature"], f"{slot_context}.creature")
            if self._creatures_repo is not None and self._creatures_repo.find(creature_id) is None:
                raise DataReferenceError(f"{slot_context} references unknown creature '{creature_id}'.")
            rarity = self._require_choice(slot_map["rarity"], ENCOUNTER_RARITIES, f"{slot_context}.rarity")
            slots.append(EncounterSlotDef(creature_id=creature_id, rarity=rarity))
        return slots
