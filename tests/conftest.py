import pytest

from KeypadCalc import MathEngine, config_manager, keymap


@pytest.fixture
def settings():
    return dict(config_manager.DEFAULT_SETTINGS)


@pytest.fixture
def calculator(settings):
    return MathEngine.Calculator(settings)


@pytest.fixture
def press(calculator):
    """Press button labels in order, e.g. press("3", "+", "4", "=")."""
    def _press(*labels):
        for label in labels:
            action, value = keymap.action_for_button(label)
            calculator.press(action, value)
        return calculator
    return _press


@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config.json"
    strings_path = tmp_path / "ui_strings.json"
    monkeypatch.setattr(config_manager, "config_json", config_path)
    monkeypatch.setattr(config_manager, "ui_strings", strings_path)
    return config_path, strings_path
