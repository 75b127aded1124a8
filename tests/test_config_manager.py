import json

import pytest

from KeypadCalc import config_manager
from KeypadCalc import error as E


def test_missing_config_falls_back_to_defaults(temp_config):
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
    assert config_manager.load_setting_value("history_length") == 20


def test_corrupt_config_falls_back_to_defaults(temp_config):
    config_path, _ = temp_config
    config_path.write_text("{not json", encoding="utf-8")
    assert config_manager.load_setting_value("darkmode") is False


def test_file_values_override_defaults(temp_config):
    config_path, _ = temp_config
    config_path.write_text(json.dumps({"darkmode": True}), encoding="utf-8")
    settings = config_manager.load_setting_value("all")
    assert settings["darkmode"] is True
    assert settings["show_history"] is True


def test_unknown_key_returns_zero(temp_config):
    assert config_manager.load_setting_value("no_such_setting") == 0


def test_save_and_reload(temp_config):
    settings = config_manager.load_setting_value("all")
    settings["history_length"] = 5
    assert config_manager.save_setting(settings) == settings
    assert config_manager.load_setting_value("history_length") == 5


def test_save_to_unwritable_path_returns_empty(temp_config, monkeypatch, tmp_path):
    monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing_dir" / "config.json")
    assert config_manager.save_setting({"darkmode": True}) == {}


def test_load_setting_description(temp_config):
    _, strings_path = temp_config
    assert config_manager.load_setting_description("all") == {}
    strings_path.write_text(json.dumps({"darkmode": "Darkmode"}), encoding="utf-8")
    assert config_manager.load_setting_description("darkmode") == "Darkmode"


def test_validate_setting():
    assert config_manager.validate_setting("darkmode", True) is True
    assert config_manager.validate_setting("history_length", "7") == 7


@pytest.mark.parametrize("key, value", [
    ("history_length", "0"),
    ("history_length", "abc"),
    ("darkmode", "yes"),
    ("colour", True),
])
def test_validate_setting_rejects(key, value):
    with pytest.raises(E.ConfigurationError) as excinfo:
        config_manager.validate_setting(key, value)
    assert excinfo.value.code == "5001"


def test_shipped_files_are_in_sync():
    values = json.loads((config_manager.PROJECT_ROOT / "config.json").read_text(encoding="utf-8"))
    descriptions = json.loads((config_manager.PROJECT_ROOT / "ui_strings.json").read_text(encoding="utf-8"))
    assert set(values) == set(descriptions) == set(config_manager.DEFAULT_SETTINGS)
