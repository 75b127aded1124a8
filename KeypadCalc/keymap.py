# keymap.py
"""
Translates physical keys and on-screen button labels into the logical
(action, value) pairs understood by MathEngine.Calculator.press().
"""

DIGITS = "0123456789"

# Keyboard keys (Qt key names for the non-printable ones)
KEY_ACTIONS = {
    ",": ("decimal", None),
    ".": ("decimal", None),
    "+": ("operator", "+"),
    "-": ("operator", "-"),
    "*": ("operator", "*"),
    "/": ("operator", "/"),
    "=": ("equals", None),
    "Enter": ("equals", None),
    "Backspace": ("backspace", None),
    "Delete": ("clear-entry", None),
    "Escape": ("clear", None),
    "%": ("percent", None),
}

# On-screen buttons
BUTTON_ACTIONS = {
    "MC": ("memory-clear", None),
    "MR": ("memory-recall", None),
    "M+": ("memory-add", None),
    "M-": ("memory-subtract", None),
    "MS": ("memory-store", None),
    "%": ("percent", None),
    "CE": ("clear-entry", None),
    "C": ("clear", None),
    "⌫": ("backspace", None),
    "1/x": ("reciprocal", None),
    "x²": ("square", None),
    "√x": ("sqrt", None),
    "÷": ("operator", "/"),
    "×": ("operator", "*"),
    "-": ("operator", "-"),
    "+": ("operator", "+"),
    "±": ("toggle-sign", None),
    ",": ("decimal", None),
    "=": ("equals", None),
}


def action_for_key(key):
    """Return (action, value) for a keyboard key, or None if the key is not bound."""
    if len(key) == 1 and key in DIGITS:
        return ("digit", key)
    return KEY_ACTIONS.get(key)


def action_for_button(label):
    """Return (action, value) for a button label, or None for non-calculator buttons."""
    if len(label) == 1 and label in DIGITS:
        return ("digit", label)
    return BUTTON_ACTIONS.get(label)
