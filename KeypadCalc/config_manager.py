# config_manager.py
import sys
import json
from pathlib import Path

from . import error as E

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

config_json = PROJECT_ROOT / "config.json"
ui_strings = PROJECT_ROOT / "ui_strings.json"


# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "darkmode": False,
    "english_messages": False,
    "show_history": True,
    "history_length": 20,
}

# Lower bounds for integer settings
MINIMUM_VALUES = {
    "history_length": 1,
}



def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict.update(json.load(f))

    except (FileNotFoundError, json.JSONDecodeError):
        pass


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def validate_setting(key_value, value):
    """Check one setting against its default's type and minimum; return the cleaned value."""
    if key_value not in DEFAULT_SETTINGS:
        raise E.ConfigurationError(f"Unknown setting: {key_value}", code="5001", equation=key_value)

    default = DEFAULT_SETTINGS[key_value]

    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise E.ConfigurationError(f"'{value}' is not True or False.", code="5001", equation=key_value)
        return value

    try:
        value_int = int(value)
    except (TypeError, ValueError):
        raise E.ConfigurationError(f"'{value}' is not a whole number.", code="5001", equation=key_value)

    minimum = MINIMUM_VALUES.get(key_value)
    if minimum is not None and value_int < minimum:
        raise E.ConfigurationError(f"'{value_int}' is too small. Minimum is {minimum}.",
                                   code="5001", equation=key_value)
    return value_int


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return{}
