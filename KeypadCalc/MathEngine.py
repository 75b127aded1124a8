# MathEngine.py
"""""
Core state machine for the Keypad Calculator.

Pipeline
--------
1) Key operations: every calculator key is one method on Calculator
   (digits, decimal comma, operators, equals, clear keys, unary keys, memory keys).
2) Chaining: binary operators are folded left to right as soon as the next
   operator is pressed, so '2 + 3 × 4 =' gives 20 (no precedence).
3) Live preview: while an operation is pending, the display shows the result
   of 'previous <operator> entry' for the number being typed.
4) Formatter: renders floats for the display (12 significant digits,
   scientific notation outside 1e-8 .. 1e12, decimal comma).

Errors never reach the caller. ScientificEngine raises E.NonFiniteResult,
the engine catches it and switches into the error state; the next key press
silently resets the calculator and then applies the key.
"""""

import re
import math
import inspect

from . import config_manager as config_manager
from . import ScientificEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = False

# Supported operators and how they appear in the history line
Operations = ["+", "-", "*", "/"]
OPERATOR_SYMBOLS = {"+": "+", "-": "-", "*": "×", "/": "÷"}
OPERATOR_ALIASES = {"×": "*", "÷": "/", "−": "-", "x": "*"}

MEMORY_FLAGS = ["MS", "M+", "M-", "MR", "MC"]

# Actions that need a value (the digit or the operator)
VALUE_ACTIONS = ["digit", "operator"]

# Non-breaking space keeps the history line from collapsing when empty
EMPTY_HISTORY = "\u00A0"

DIGITS = "0123456789"
NUMBER_PATTERN = re.compile(r"(-?)([0-9]+)(?:[.,]([0-9]+))?")


# -----------------------------
# Utilities / small helpers
# -----------------------------

def get_line_number():
    """Return the caller line number (small debug helper)."""
    return inspect.currentframe().f_back.f_lineno


def format_number(value, error_token=E.ERROR_TOKEN):
    """Render a float for the display, always with '.' as decimal separator.

    - inf / NaN               -> error_token
    - 0                       -> "0"
    - |v| >= 1e12 or < 1e-8   -> "1.234568e12" (6 mantissa decimals, no '+', no padding)
    - otherwise               -> 12 significant digits, trailing zeros stripped
    """
    if not math.isfinite(value):
        return error_token

    # Round to 12 significant digits first; rounding can carry into 1e12
    value = float(f"{value:.11e}")
    magnitude = abs(value)
    if magnitude == 0:
        return "0"

    if magnitude >= 1e12 or magnitude < 1e-8:
        mantissa, exponent = f"{value:.6e}".split("e")
        return f"{mantissa}e{int(exponent)}"

    decimals = max(12 - 1 - math.floor(math.log10(magnitude)), 0)
    formatted = f"{value:.{decimals}f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def to_number(text):
    """Parse display notation ('-12,5') into a float."""
    return float(text.replace(",", "."))


def to_display(value, error_token=E.ERROR_TOKEN):
    return format_number(value, error_token).replace(".", ",")


def normalize_operator(operator):
    """Map display symbols (×, ÷, −) to the internal operator; None if unknown."""
    operator = OPERATOR_ALIASES.get(operator, operator)
    return operator if operator in Operations else None


# -----------------------------
# State
# -----------------------------

class CalculatorState:
    """All mutable data of one calculator session."""

    def __init__(self):
        self.entry = "0"            # number being typed, display notation
        self.current = "0"          # what the display shows right now
        self.previous = None        # left operand of the pending operation
        self.operator = None        # pending operator, one of Operations
        self.overwrite = True       # next digit replaces entry
        self.error = False
        self.tokens = []            # history expression under construction
        self.memory_entries = []
        self.memory_pointer = -1
        self.memory_flags = dict.fromkeys(MEMORY_FLAGS, False)

        self.has_operand = False    # entry holds a right operand for the pending operator
        self.repeat_operand = None  # right operand of the last '=', for repeated '='
        self.last_expression = ""   # e.g. "3 + 4 + 5 =" until the next edit

    def __repr__(self):
        return (f"CalculatorState(entry={self.entry!r}, current={self.current!r}, "
                f"previous={self.previous!r}, operator={self.operator!r}, "
                f"overwrite={self.overwrite}, error={self.error}, tokens={self.tokens!r})")


# -----------------------------
# Engine
# -----------------------------

class Calculator:
    """Keypad calculator. One method per key, plus read accessors for the UI."""

    def __init__(self, settings=None):
        if settings is None:
            settings = config_manager.load_setting_value("all")
        self.error_token = E.error_token(settings.get("english_messages", False))
        self.history_length = settings.get("history_length", config_manager.DEFAULT_SETTINGS["history_length"])

        self.state = CalculatorState()
        self.history = []       # completed calculations of this session
        self.last_error = None  # MathError behind the current error display

        self.actions = {
            "digit": self.input_digit,
            "decimal": self.input_decimal,
            "operator": self.set_operator,
            "equals": self.equals,
            "clear": self.clear_all,
            "clear-entry": self.clear_entry,
            "backspace": self.backspace,
            "toggle-sign": self.toggle_sign,
            "percent": self.percent,
            "reciprocal": self.reciprocal,
            "square": self.square,
            "sqrt": self.sqrt,
            "memory-clear": self.memory_clear,
            "memory-recall": self.memory_recall,
            "memory-add": self.memory_add,
            "memory-subtract": self.memory_subtract,
            "memory-store": self.memory_store,
        }

    def apply_settings(self, settings):
        """Take over changed settings without losing the running calculation."""
        self.error_token = E.error_token(settings.get("english_messages", False))
        self.history_length = settings.get("history_length", self.history_length)
        if self.state.error:
            self.state.current = self.error_token
        self._trim_history()

    # --- Dispatch ---

    def press(self, action, value=None):
        """Run the operation for a logical action id. Returns False for unknown actions."""
        handler = self.actions.get(action)
        if handler is None or (action in VALUE_ACTIONS and value is None):
            if debug:
                print(f"[{get_line_number()}] Ignoring unknown action: {action!r}")
            return False

        # Only digit and operator take a value; keymap passes None for the rest
        if action in VALUE_ACTIONS:
            handler(value)
        else:
            handler()

        if debug:
            print(f"[{get_line_number()}] {action} {value or ''} -> {self.state}")
        return True

    def enter_text(self, text):
        """Type a pasted number ('-12,5', '3.25') as a fresh entry. Returns False if it is not a number."""
        match = NUMBER_PATTERN.fullmatch(text.strip())
        if match is None:
            return False
        sign, integer_part, fraction_part = match.groups()

        entry = integer_part.lstrip("0") or "0"
        if fraction_part is not None:
            entry += "," + fraction_part
        if sign and entry != "0":
            entry = "-" + entry

        self._start_edit()
        s = self.state
        s.entry = entry
        s.overwrite = False
        s.has_operand = True
        self._refresh()
        return True

    # --- Read accessors ---

    def current_display(self):
        return self.state.current

    def history_display(self):
        if self.state.tokens:
            return " ".join(self.state.tokens)
        if self.state.last_expression:
            return self.state.last_expression
        return EMPTY_HISTORY

    def active_memory_flags(self):
        return {flag for flag, lit in self.state.memory_flags.items() if lit}

    def history_log(self):
        return list(self.history)

    # --- Entry editing ---

    def input_digit(self, digit):
        digit = str(digit)
        if len(digit) != 1 or digit not in DIGITS:
            return
        self._start_edit()
        s = self.state
        if s.overwrite:
            s.entry = digit
            s.overwrite = False
        elif s.entry == "0":
            s.entry = digit
        else:
            s.entry += digit
        s.has_operand = True
        self._refresh()

    def input_decimal(self):
        self._start_edit()
        s = self.state
        if s.overwrite:
            s.entry = "0,"
            s.overwrite = False
        elif "," not in s.entry:
            s.entry += ","
        s.has_operand = True
        self._refresh()

    def toggle_sign(self):
        self._start_edit()
        s = self.state
        if s.entry == "0":
            return
        s.entry = s.entry[1:] if s.entry.startswith("-") else "-" + s.entry
        s.has_operand = True
        self._refresh()

    def clear_entry(self):
        self._start_edit()
        s = self.state
        s.entry = "0"
        s.overwrite = True
        s.has_operand = False
        self._refresh()

    def backspace(self):
        self._start_edit()
        s = self.state
        if s.overwrite:
            return
        if len(s.entry) <= 1 or (len(s.entry) == 2 and s.entry.startswith("-")):
            s.entry = "0"
            s.overwrite = True
            s.has_operand = False
        else:
            s.entry = s.entry[:-1]
        self._refresh()

    def clear_all(self):
        """Full clear. Memory contents are kept, only the badges go out."""
        s = self.state
        s.entry = "0"
        s.current = "0"
        s.previous = None
        s.operator = None
        s.overwrite = True
        s.error = False
        s.tokens = []
        s.memory_flags = dict.fromkeys(MEMORY_FLAGS, False)
        s.has_operand = False
        s.repeat_operand = None
        s.last_expression = ""
        self.last_error = None

    # --- Binary operations ---

    def set_operator(self, operator):
        operator = normalize_operator(operator)
        if operator is None:
            return
        self._reset_if_error()
        s = self.state
        s.repeat_operand = None
        s.last_expression = ""

        if s.operator is not None and s.has_operand:
            # Fold the pending operation before arming the new one
            try:
                result = ScientificEngine.apply_operator(s.operator, s.previous, to_number(s.entry))
            except E.MathError as e:
                self._fail(e)
                return
            s.tokens.append(self._operand_token(s.entry))
            s.previous = result
        else:
            if s.previous is None:
                try:
                    s.previous = ScientificEngine.check_finite(to_number(s.entry), equation=s.entry)
                except E.MathError as e:
                    self._fail(e)
                    return
            if s.has_operand or not s.tokens:
                s.tokens.append(self._operand_token(s.entry))

        symbol = OPERATOR_SYMBOLS[operator]
        if s.tokens and s.tokens[-1] in OPERATOR_SYMBOLS.values():
            s.tokens[-1] = symbol
        else:
            s.tokens.append(symbol)

        s.current = to_display(s.previous, self.error_token)
        s.operator = operator
        s.overwrite = True
        s.entry = "0"
        s.has_operand = False

    def equals(self):
        s = self.state
        # The error display stays until a key that starts a new entry
        if s.error:
            return
        if s.operator is None or s.previous is None:
            return

        repeating = s.repeat_operand is not None and not s.has_operand
        operand = s.repeat_operand if repeating else to_number(s.entry)
        operand_token = to_display(operand, self.error_token)
        symbol = OPERATOR_SYMBOLS[s.operator]

        if repeating or not s.tokens:
            s.tokens = [to_display(s.previous, self.error_token), symbol, operand_token]
        elif s.tokens[-1] in OPERATOR_SYMBOLS.values():
            s.tokens.append(operand_token)
        else:
            s.tokens[-1] = operand_token

        operator = s.operator
        try:
            result = ScientificEngine.apply_operator(operator, s.previous, operand)
        except E.MathError as e:
            self._fail(e)
            return

        expression = " ".join(s.tokens + ["="])
        s.tokens = []
        self._commit(result, clear_pending=True)

        # Re-arm so another '=' repeats the same operation on the new result
        s.previous = result
        s.operator = operator
        s.repeat_operand = operand
        s.last_expression = expression
        self._log(f"{expression} {s.current}")

    # --- Unary operations ---

    def percent(self):
        self._start_edit()
        s = self.state
        base = s.previous if s.operator is not None else None
        self._apply_unary(ScientificEngine.percent, to_number(s.entry), base)

    def reciprocal(self):
        self._start_edit()
        self._apply_unary(ScientificEngine.reciprocal, to_number(self.state.entry))

    def square(self):
        self._start_edit()
        self._apply_unary(ScientificEngine.square, to_number(self.state.entry))

    def sqrt(self):
        self._start_edit()
        self._apply_unary(ScientificEngine.square_root, to_number(self.state.entry))

    # --- Memory ---

    def memory_store(self):
        self._memory_push("MS", 1)

    def memory_add(self):
        self._memory_push("M+", 1)

    def memory_subtract(self):
        self._memory_push("M-", -1)

    def memory_recall(self):
        self._start_edit()
        s = self.state
        if not s.memory_entries:
            return
        s.memory_pointer = (s.memory_pointer + 1) % len(s.memory_entries)
        s.memory_flags["MR"] = True
        self._commit(s.memory_entries[s.memory_pointer], clear_pending=False)

    def memory_clear(self):
        self._reset_if_error()
        s = self.state
        s.memory_entries = []
        s.memory_pointer = -1
        s.memory_flags = dict.fromkeys(MEMORY_FLAGS, False)

    # --- Internal state transitions ---

    def _memory_push(self, flag, sign):
        self._reset_if_error()
        s = self.state
        try:
            value = ScientificEngine.check_finite(to_number(s.current), equation=s.current)
        except E.MathError as e:
            self._fail(e)
            return
        s.memory_entries.append(sign * value)
        s.memory_pointer = len(s.memory_entries) - 1
        s.memory_flags = dict.fromkeys(MEMORY_FLAGS, False)
        s.memory_flags[flag] = True

    def _reset_if_error(self):
        s = self.state
        if not s.error:
            return
        s.entry = "0"
        s.current = "0"
        s.previous = None
        s.operator = None
        s.tokens = []
        s.memory_flags = dict.fromkeys(MEMORY_FLAGS, False)
        s.overwrite = True
        s.error = False
        s.has_operand = False
        s.repeat_operand = None
        s.last_expression = ""

    def _start_edit(self):
        """Prepare for a key that changes the entry: leave the error state and drop a finished calculation."""
        self._reset_if_error()
        s = self.state
        if s.repeat_operand is not None:
            s.previous = None
            s.operator = None
            s.repeat_operand = None
        s.last_expression = ""

    def _refresh(self):
        """Recompute the display from entry, previewing a pending operation."""
        s = self.state
        if s.operator is not None and s.previous is not None and s.has_operand:
            try:
                value = ScientificEngine.apply_operator(s.operator, s.previous, to_number(s.entry))
            except E.MathError as e:
                self._fail(e)
                return
            s.current = to_display(value, self.error_token)
        else:
            s.current = s.entry

    def _apply_unary(self, function, *args):
        try:
            value = function(*args)
        except E.MathError as e:
            self._fail(e)
            return
        self._commit(value, clear_pending=False)

    def _commit(self, value, clear_pending):
        """Store a finite result.

        clear_pending=True  ('='): result becomes the display, pending operation is dropped.
        clear_pending=False (unary, recall): result becomes the operand of the pending
        operation and goes through the live preview.
        """
        s = self.state
        s.entry = to_display(value, self.error_token)
        s.overwrite = True
        if clear_pending:
            s.current = s.entry
            s.previous = None
            s.operator = None
            s.has_operand = False
        else:
            s.has_operand = True
            self._refresh()

    def _fail(self, error):
        s = self.state
        s.current = self.error_token
        s.error = True
        s.entry = "0"
        s.overwrite = True
        s.previous = None
        s.operator = None
        s.tokens = []
        s.has_operand = False
        s.repeat_operand = None
        s.last_expression = ""
        self.last_error = error
        if debug:
            print(f"[{get_line_number()}] {E.describe(error)} ({error.equation})")

    def _operand_token(self, entry):
        return to_display(to_number(entry), self.error_token)

    def _log(self, line):
        self.history.append(line)
        self._trim_history()

    def _trim_history(self):
        if len(self.history) > self.history_length:
            del self.history[:len(self.history) - self.history_length]


def test_main():
    """Simple REPL-like runner: type action ids (e.g. 'digit 3', 'operator +', 'equals')."""
    calculator = Calculator(config_manager.DEFAULT_SETTINGS)
    print("Enter actions, empty line to quit: ")
    while True:
        line = input().split()
        if not line:
            break
        calculator.press(line[0], line[1] if len(line) > 1 else None)
        print(calculator.history_display())
        print(calculator.current_display())


if __name__ == "__main__":
    test_main()
