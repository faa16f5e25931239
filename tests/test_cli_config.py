from pathlib import Path

from fieldfriends.presentation.cli import config


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "missing.json") == {
        "text_display_mode": "instant",
        "log_level": "WARNING",
    }


def test_save_then_load_config(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    config.save_config({"text_display_mode": "step", "log_level": "debug"}, path)

    assert config.load_config(path) == {"text_display_mode": "step", "log_level": "DEBUG"}


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"text_display_mode": "slow", "log_level": "LOUD"}', encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_corrupt_config_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")

    assert config.load_config(path) == config.default_config()
