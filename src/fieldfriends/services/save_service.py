"""Serialization helpers for manual save/load."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from fieldfriends.core.rng import RNG, RNGStatePayload
from fieldfriends.core.types import ABILITY_IDS, CREATURE_STATES, CREATURE_TYPES
from fieldfriends.data.repositories import AreasRepository
from fieldfriends.domain.abilities import AreaAbilityFlags
from fieldfriends.domain.entities import CreatureInstance, Party
from fieldfriends.domain.entities.party import MAX_PARTY_SIZE
from fieldfriends.domain.friendship import WILD_FRIENDSHIP
from fieldfriends.domain.state import GameState
from fieldfriends.services.errors import SaveLoadError

SavePayload = Dict[str, Any]

logger = logging.getLogger(__name__)


class SaveService:
    """Converts runtime state to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def __init__(self, *, areas_repo: AreasRepository) -> None:
        self._areas_repo = areas_repo

    def serialize(self, state: GameState) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        if state.in_battle:
            raise SaveLoadError("Cannot save during a battle.")
        return {
            "save_version": self.SAVE_VERSION,
            "metadata": self._build_metadata(state),
            "rng": state.rng.export_state(),
            "state": self._serialize_state(state),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameState:
        """Rehydrate a GameState + RNG from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        if payload.get("save_version") != self.SAVE_VERSION:
            raise SaveLoadError("Save format is not supported. Please start a new game.")
        rng_payload = payload.get("rng")
        state_payload = payload.get("state")
        if not isinstance(rng_payload, Mapping) or not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing required sections.")

        seed = self._require_int(state_payload.get("seed"), "state.seed")
        rng = RNG(seed)
        try:
            rng.restore_state(self._coerce_rng_payload(rng_payload))
        except ValueError as exc:
            raise SaveLoadError(f"Invalid RNG state: {exc}") from exc

        area_id = self._require_str(state_payload.get("current_area_id"), "state.current_area_id")
        if self._areas_repo.find(area_id) is None:
            raise SaveLoadError(f"Unknown area '{area_id}' in save data.")

        party = self._coerce_party(state_payload.get("party"))
        party.steps_since_swap = self._coerce_non_negative_int(
            state_payload.get("steps_since_swap"), "state.steps_since_swap", default=0
        )

        state = GameState(seed=seed, rng=rng, party=party, current_area_id=area_id)
        state.steps_since_encounter = self._coerce_non_negative_int(
            state_payload.get("steps_since_encounter"), "state.steps_since_encounter", default=0
        )
        state.total_steps = self._coerce_non_negative_int(
            state_payload.get("total_steps"), "state.total_steps", default=0
        )
        state.grove_encounter_done = self._coerce_bool(
            state_payload.get("grove_encounter_done"), "state.grove_encounter_done", default=False
        )
        state.area_flags = self._coerce_area_flags(state_payload.get("area_flags"), area_id)
        logger.info("Loaded save at %s with %d creature(s)", area_id, len(party))
        return state

    def _build_metadata(self, state: GameState) -> Dict[str, Any]:
        lead = state.party.get_lead()
        return {
            "current_area_id": state.current_area_id,
            "lead_name": lead.name if lead else None,
            "party_size": len(state.party),
            "seed": state.seed,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def _serialize_state(self, state: GameState) -> Dict[str, Any]:
        return {
            "seed": state.seed,
            "current_area_id": state.current_area_id,
            "party": [self._serialize_creature(member) for member in state.party.members],
            "steps_since_swap": state.party.steps_since_swap,
            "steps_since_encounter": state.steps_since_encounter,
            "total_steps": state.total_steps,
            "grove_encounter_done": state.grove_encounter_done,
            "area_flags": {
                "quick_return_used": state.area_flags.quick_return_used,
                "revealed_this_area": state.area_flags.revealed_this_area,
                "steps_since_dig": state.area_flags.steps_since_dig,
            },
        }

    @staticmethod
    def _serialize_creature(creature: CreatureInstance) -> Dict[str, Any]:
        return {
            "species_name": creature.species_name,
            "creature_type": creature.creature_type,
            "current_hp": creature.current_hp,
            "max_hp": creature.max_hp,
            "attack": creature.attack,
            "defense": creature.defense,
            "speed": creature.speed,
            "ability": creature.ability,
            "upgraded_ability": creature.upgraded_ability,
            "has_upgrade": creature.has_upgrade,
            "friendship": creature.friendship,
            "state": creature.state,
        }

    def _coerce_party(self, value: Any) -> Party:
        if not isinstance(value, list):
            raise SaveLoadError("state.party must be a list.")
        if len(value) > MAX_PARTY_SIZE:
            raise SaveLoadError(f"state.party holds at most {MAX_PARTY_SIZE} creatures.")
        members: List[CreatureInstance] = []
        for index, entry in enumerate(value):
            members.append(self._coerce_creature(entry, f"state.party[{index}]"))
        return Party(members)

    def _coerce_creature(self, value: Any, context: str) -> CreatureInstance:
        data = self._require_dict(value, context)
        species_name = self._require_str(data.get("species_name"), f"{context}.species_name")

        max_hp = self._require_int(data.get("max_hp"), f"{context}.max_hp")
        if max_hp <= 0:
            raise SaveLoadError(f"{context}.max_hp must be positive.")
        current_hp = self._require_int(data.get("current_hp"), f"{context}.current_hp")
        if not 0 <= current_hp <= max_hp:
            raise SaveLoadError(f"{context}.current_hp must be between 0 and max_hp.")
        state = self._require_choice(data.get("state"), CREATURE_STATES, f"{context}.state")
        if (current_hp == 0) != (state == "resting"):
            raise SaveLoadError(f"{context} is resting if and only if its HP is zero.")

        friendship = self._require_int(data.get("friendship"), f"{context}.friendship")
        if friendship < 0 and friendship != WILD_FRIENDSHIP:
            raise SaveLoadError(f"{context}.friendship must be non-negative.")

        ability = self._require_choice(data.get("ability"), ABILITY_IDS, f"{context}.ability")
        upgraded = self._require_choice(
            data.get("upgraded_ability", "none"), ABILITY_IDS, f"{context}.upgraded_ability"
        )
        return CreatureInstance(
            species_name=species_name,
            creature_type=self._require_choice(
                data.get("creature_type"), CREATURE_TYPES, f"{context}.creature_type"
            ),
            max_hp=max_hp,
            current_hp=current_hp,
            attack=self._require_int(data.get("attack"), f"{context}.attack"),
            defense=self._require_int(data.get("defense"), f"{context}.defense"),
            speed=self._require_int(data.get("speed"), f"{context}.speed"),
            ability=ability,
            upgraded_ability=upgraded,
            has_upgrade=self._coerce_bool(
                data.get("has_upgrade"), f"{context}.has_upgrade", default=upgraded != "none"
            ),
            state=state,
            friendship=friendship,
        )

    def _coerce_area_flags(self, value: Any, area_id: str) -> AreaAbilityFlags:
        flags = AreaAbilityFlags(area_id=area_id)
        if value is None:
            return flags
        data = self._require_dict(value, "state.area_flags")
        flags.quick_return_used = self._coerce_bool(
            data.get("quick_return_used"), "state.area_flags.quick_return_used", default=False
        )
        flags.revealed_this_area = self._coerce_bool(
            data.get("revealed_this_area"), "state.area_flags.revealed_this_area", default=False
        )
        flags.steps_since_dig = self._coerce_non_negative_int(
            data.get("steps_since_dig"), "state.area_flags.steps_since_dig", default=0
        )
        return flags

    def _coerce_rng_payload(self, payload: Mapping[str, Any]) -> RNGStatePayload:
        version = self._require_int(payload.get("version"), "rng.version")
        internal = payload.get("internal")
        if not isinstance(internal, list):
            raise SaveLoadError("Invalid RNG state payload.")
        return {"version": version, "internal": internal, "gauss_next": payload.get("gauss_next")}

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_choice(value: Any, choices: tuple, context: str) -> Any:
        if value not in choices:
            raise SaveLoadError(f"{context} has invalid value: {value!r}")
        return value

    def _coerce_non_negative_int(self, value: Any, context: str, *, default: int) -> int:
        if value is None:
            return default
        value_int = self._require_int(value, context)
        if value_int < 0:
            raise SaveLoadError(f"{context} must be a non-negative integer.")
        return value_int

    @staticmethod
    def _coerce_bool(value: Any, context: str, *, default: bool) -> bool:
        if value is None:
            return default
        if not isinstance(value, bool):
            raise SaveLoadError(f"{context} must be a boolean.")
        return value

    @staticmethod
    def _require_dict(value: Any, context: str) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        return dict(value)
