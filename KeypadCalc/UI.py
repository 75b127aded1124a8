# UI.py
""""PySide6 user interface for the Keypad Calculator.

Structure
---------
- Calculator UI: main window with history line, display, memory row and key grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Translate button clicks and key presses into MathEngine actions (via keymap)
- Render the display, the history line and the lit memory badges after every action
- Keep the display readable (auto-resizing font, dark/light mode)
- Clipboard integration (Shift + 📋 copies, 📋 pastes a number)


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input via config_manager.validate_setting
- Save and apply theme changes immediately


Threading Note
--------------
Every calculator operation is a handful of float operations, so everything runs
on the Qt event loop; MathEngine never blocks and never raises into the UI.
"""""

# Ui.py
from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QTimer
import sys
from pynput.keyboard import Controller
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module
from . import keymap as keymap

PROJECT_ROOT = config_manager.PROJECT_ROOT

# Qt keys without printable text, named like keymap.KEY_ACTIONS
QT_KEY_NAMES = {
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
    Qt.Key.Key_Backspace: "Backspace",
    Qt.Key.Key_Delete: "Delete",
    Qt.Key.Key_Escape: "Escape",
}

DARK_BUTTON_STYLE = "background-color: #121212; color: white; font-weight: bold;"
LIT_MEMORY_STYLE = "background-color: #2e7d32; color: white; font-weight: bold;"
EQUALS_STYLE = "background-color: #007bff; color: white; font-weight: bold;"


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "Shift + 📋 copies" behaviour of the clipboard button.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening an error
    message if something went wrong.

    All of the Settings can be separated into two categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as a whole number)

    """""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Setting key -> widget, read back in save_settings

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = config_manager.MINIMUM_VALUES.get(key_value)
                label_text = description if minimum is None else f"{description} (min. {minimum}):"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_value = widget.isChecked()
            else:
                # Blank input keeps the old value
                new_value = widget.text().strip() or new_settings[key_value]

            try:
                new_settings[key_value] = config_manager.validate_setting(key_value, new_value)
            except E.ConfigurationError as e:
                # Show an error box and STOP the save process
                QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                               f"{E.describe(e)}'{key_value}'\n\n{e.message}\n\nPlease correct your input.")
                return

        saved_settings = config_manager.save_setting(new_settings)

        if saved_settings != {}:
            self.setting_value_list = saved_settings
            self.accept()
            self.update_darkmode()
        else:
            QtWidgets.QMessageBox.critical(self, "Error", E.ERROR_MESSAGES["5002"])

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    shift_is_held = False
    initial_delay = 500
    repeat_interval = 100
    was_held = False
    held_button_value = None

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Engine and Instance State ---
        self.calculator = MathEngine.Calculator(self.setting_value_list)
        self.first_run = True  # For font resizing logic
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)
        self.button_objects = {}

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.setWindowTitle("Calculator")
        self.resize(320, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Tool Row (settings, clipboard, history) ---
        tool_row = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(tool_row)
        for text, handler in (('⚙️', self.open_settings), ('📋', self.handle_clipboard), ('🕘', self.open_history)):
            button = QtWidgets.QPushButton(text)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(handler)
            tool_row.addWidget(button)
            self.button_objects[text] = button
        tool_row.addStretch(1)

        # --- 5. History Line and Display ---
        self.history_label = QtWidgets.QLabel(MathEngine.EMPTY_HISTORY)
        self.history_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        main_v_layout.addWidget(self.history_label)

        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(36)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 6. Memory Row ---
        memory_row = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(memory_row)
        for text in ("MC", "MR", "M+", "M-", "MS"):
            button = QtWidgets.QPushButton(text)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            memory_row.addWidget(button)
            self.button_objects[text] = button

        # --- 7. Key Grid ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(2)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            ('%', 0, 0), ('CE', 0, 1), ('C', 0, 2), ('⌫', 0, 3),
            ('1/x', 1, 0), ('x²', 1, 1), ('√x', 1, 2), ('÷', 1, 3),
            ('7', 2, 0), ('8', 2, 1), ('9', 2, 2), ('×', 2, 3),
            ('4', 3, 0), ('5', 3, 1), ('6', 3, 2), ('-', 3, 3),
            ('1', 4, 0), ('2', 4, 1), ('3', 4, 2), ('+', 4, 3),
            ('±', 5, 0), ('0', 5, 1), (',', 5, 2), ('=', 5, 3),
        ]

        for i in range(6):
            button_grid.setRowStretch(i, 1)
        for j in range(4):
            button_grid.setColumnStretch(j, 1)

        # Buttons that support "press and hold"
        HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', '⌫']

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)

            if text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.update_darkmode()
        self.refresh_display()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click that ends a hold must not add one more digit
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)

        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Window/Key Event Handlers ---
    def resizeEvent(self, event):
        super().resizeEvent(event)

        for button_text, button_instance in self.button_objects.items():
            font = button_instance.font()
            if self.first_run:
                font.setPointSize(12)
            else:
                # Scale the label with the button height
                font.setPointSize(max(12, int(button_instance.height() / 4)))
            button_instance.setFont(font)
        self.first_run = False

        self.update_font_size_display()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
            super().keyPressEvent(event)
            return

        key = QT_KEY_NAMES.get(event.key(), event.text())
        mapped = keymap.action_for_key(key) if key else None
        if mapped is None:
            super().keyPressEvent(event)
            return

        action, value = mapped
        self.calculator.press(action, value)
        self.refresh_display()

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
        super().keyReleaseEvent(event)

    def handle_button_press(self, value):
        mapped = keymap.action_for_button(value)
        if mapped is None:
            return

        action, action_value = mapped
        self.calculator.press(action, action_value)
        self.refresh_display()

    def handle_clipboard(self):
        # Shift held -> copy the display, otherwise paste a number from the clipboard
        if self.shift_is_held or is_shift_pressed():
            pyperclip.copy(self.display.text())
            return

        clipboard_text = QtWidgets.QApplication.clipboard().text()
        if not clipboard_text:
            return

        if not self.calculator.enter_text(clipboard_text):
            error_box = QtWidgets.QMessageBox(self)
            error_box.setIcon(QtWidgets.QMessageBox.Warning)
            error_box.setWindowTitle("Paste")
            error_box.setText(f"Error 4001: {E.ERROR_MESSAGES['4001']}")
            error_box.setInformativeText(clipboard_text[:80])
            error_box.setStyleSheet(self.get_message_box_stylesheet())
            error_box.exec()
            return
        self.refresh_display()

    # --- Rendering ---
    def refresh_display(self):
        """Copy the engine's derived outputs into the widgets."""
        self.display.setText(self.calculator.current_display())

        if self.setting_value_list["show_history"]:
            self.history_label.setText(self.calculator.history_display())
            self.history_label.show()
        else:
            self.history_label.hide()

        if self.calculator.state.error and self.calculator.last_error is not None:
            self.display.setToolTip(E.describe(self.calculator.last_error))
        else:
            self.display.setToolTip("")

        self.update_memory_badges()
        self.update_font_size_display()

    def update_memory_badges(self):
        lit = self.calculator.active_memory_flags()
        for flag in MathEngine.MEMORY_FLAGS:
            button = self.button_objects.get(flag)
            if button is None:
                continue
            if flag in lit:
                button.setStyleSheet(LIT_MEMORY_STYLE)
            elif self.setting_value_list["darkmode"]:
                button.setStyleSheet(DARK_BUTTON_STYLE)
            else:
                button.setStyleSheet("")

    def update_font_size_display(self):
        # --- Dynamic Font Resizing for Display ---
        MAX_FONT_SIZE = 48
        MIN_FONT_SIZE = 10
        current_text = self.display.text()

        font = self.display.font()
        available_width = self.display.width() - (self.display.textMargins().left() +
                                                  self.display.textMargins().right() + 10)

        # Largest size whose text still fits
        size = MAX_FONT_SIZE
        while size > MIN_FONT_SIZE:
            font.setPointSize(size)
            if QtGui.QFontMetrics(font).horizontalAdvance(current_text) <= available_width:
                break
            size -= 1

        font.setPointSize(size)
        self.display.setFont(font)

    def update_darkmode(self):
        # --- Apply Dark/Light Mode to all buttons ---
        if self.setting_value_list["darkmode"]:
            for text, button in self.button_objects.items():
                button.setStyleSheet(EQUALS_STYLE if text == '=' else DARK_BUTTON_STYLE)
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.history_label.setStyleSheet("color: #aaaaaa;")
        else:
            for text, button in self.button_objects.items():
                button.setStyleSheet(EQUALS_STYLE if text == '=' else "")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.history_label.setStyleSheet("color: #666666;")
        self.update_memory_badges()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload so darkmode / history changes apply; the running calculation is kept
        self.setting_value_list = config_manager.load_setting_value("all")
        self.calculator.apply_settings(self.setting_value_list)
        self.update_darkmode()
        self.refresh_display()

    def open_history(self):
        lines = self.calculator.history_log()
        history_box = QtWidgets.QMessageBox(self)
        history_box.setWindowTitle("History")
        history_box.setText("\n".join(reversed(lines)) if lines else "No calculations yet.")
        history_box.setStyleSheet(self.get_message_box_stylesheet())
        history_box.exec()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"]:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
                QPushButton:hover {
                    background-color: #444444;
                }
            """
        else:
            return ""


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
