"""File-system helpers for save slot storage."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from fieldfriends.presentation.cli import config
from fieldfriends.services.errors import SaveLoadError

DEFAULT_SLOT_COUNT = 3

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SlotMetadata:
    """Describes the contents of a save slot for menu display."""

    slot: int
    exists: bool
    metadata: Dict[str, Any] | None = None
    is_corrupt: bool = False

    @property
    def label(self) -> str:
        if not self.exists:
            return f"Slot {self.slot}: empty"
        if self.is_corrupt or self.metadata is None:
            return f"Slot {self.slot}: unreadable"
        lead = self.metadata.get("lead_name") or "nobody"
        area = self.metadata.get("current_area_id", "?")
        return f"Slot {self.slot}: {lead} at {area}"


class SaveSlotStore:
    """Handles slot-based persistence of save payloads on disk."""

    def __init__(self, base_dir: Path | str | None = None, slot_count: int = DEFAULT_SLOT_COUNT) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()
        self._slot_count = slot_count

    @property
    def slot_count(self) -> int:
        return self._slot_count

    def list_slots(self) -> List[SlotMetadata]:
        slots: List[SlotMetadata] = []
        for slot_index in range(1, self._slot_count + 1):
            path = self._slot_path(slot_index)
            if not path.exists():
                slots.append(SlotMetadata(slot=slot_index, exists=False))
                continue
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                logger.warning("Save slot %d is unreadable", slot_index)
                slots.append(SlotMetadata(slot=slot_index, exists=True, is_corrupt=True))
                continue
            raw_metadata = payload.get("metadata") if isinstance(payload, dict) else None
            metadata = raw_metadata if isinstance(raw_metadata, dict) else None
            slots.append(SlotMetadata(slot=slot_index, exists=True, metadata=metadata))
        return slots

    def slot_exists(self, slot: int) -> bool:
        self._validate_slot(slot)
        return self._slot_path(slot).exists()

    def read_slot(self, slot: int) -> Dict[str, Any]:
        """Load and parse the payload stored in the requested slot."""
        self._validate_slot(slot)
        path = self._slot_path(slot)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise SaveLoadError(f"Slot {slot} is empty.") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise SaveLoadError(f"Slot {slot} could not be read: {exc}") from exc
        if not isinstance(payload, dict):
            raise SaveLoadError(f"Slot {slot} does not hold a save object.")
        return payload

    def write_slot(self, slot: int, payload: Dict[str, Any]) -> None:
        """Persist the payload, replacing the slot file only once it is fully written."""
        self._validate_slot(slot)
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._slot_path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(path)
        logger.info("Wrote save slot %d", slot)

    def delete_slot(self, slot: int) -> None:
        self._validate_slot(slot)
        try:
            self._slot_path(slot).unlink()
        except FileNotFoundError:
            return

    def _slot_path(self, slot: int) -> Path:
        return self._base_dir / f"slot_{slot}.json"

    def _validate_slot(self, slot: int) -> None:
        if not 1 <= slot <= self._slot_count:
            raise ValueError(f"Slot index must be between 1 and {self._slot_count}.")
