from pathlib import Path

import pytest

from fieldfriends.presentation.cli.save_slots import SaveSlotStore
from fieldfriends.services.errors import SaveLoadError


def test_write_read_and_list_slots(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path)
    payload = {"save_version": 1, "metadata": {"lead_name": "Mossbit", "current_area_id": "south_field"}}

    store.write_slot(2, payload)

    assert store.read_slot(2) == payload
    slots = store.list_slots()
    assert [slot.exists for slot in slots] == [False, True, False]
    assert slots[1].label == "Slot 2: Mossbit at south_field"
    assert slots[0].label == "Slot 1: empty"


def test_corrupt_slot_is_flagged(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path)
    (tmp_path / "slot_1.json").write_text("{broken", encoding="utf-8")

    assert store.list_slots()[0].is_corrupt
    with pytest.raises(SaveLoadError):
        store.read_slot(1)


def test_missing_slot_read_raises(tmp_path: Path) -> None:
    with pytest.raises(SaveLoadError):
        SaveSlotStore(tmp_path).read_slot(3)


def test_slot_index_validated(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path)
    with pytest.raises(ValueError):
        store.write_slot(0, {})
    with pytest.raises(ValueError):
        store.slot_exists(4)


def test_delete_slot(tmp_path: Path) -> None:
    store = SaveSlotStore(tmp_path)
    store.write_slot(1, {"metadata": {}})

    store.delete_slot(1)
    store.delete_slot(1)

    assert not store.slot_exists(1)
