"""Mapping between keyboard scancode names and classic DOS key numbers."""

from __future__ import annotations

DK_ESCAPE = 1
MAX_JOY_BUTTONS = 32
MAX_DOS_KEY = 177
JOY_KEYS_START = 512
JOY_AXIS_THRESHOLD = 10000
UNKNOWN_DOS_KEY = 89

_DOS_TO_SCANCODE: tuple[str | None, ...] = (
    None, "ESCAPE",
    "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
    "MINUS", "EQUALS", "BACKSPACE", "TAB",
    "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P",
    "LEFTBRACKET", "RIGHTBRACKET", "RETURN", "LCTRL",
    "A", "S", "D", "F", "G", "H", "J", "K", "L",
    "SEMICOLON", "APOSTROPHE", "GRAVE", "LSHIFT", "BACKSLASH",
    "Z", "X", "C", "V", "B", "N", "M",
    "COMMA", "PERIOD", "SLASH", "RSHIFT", "KP_MULTIPLY",
    "LALT", "SPACE", "CAPSLOCK",
    "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10",
    "NUMLOCKCLEAR", "SCROLLLOCK",
    "KP_7", "KP_8", "KP_9", "KP_MINUS", "KP_4", "KP_5", "KP_6", "KP_PLUS",
    "KP_1", "KP_2", "KP_3", "KP_0", "KP_PERIOD",
    None, None,
    "NONUSBACKSLASH", "F11", "F12",
    *(None,) * 27,
    "KP_ENTER",
    "RCTRL",
    *(None,) * 12,
    "PRINTSCREEN",
    *(None,) * 10,
    "KP_DIVIDE",
    None,
    "PRINTSCREEN",
    "RALT",
    *(None,) * 14,
    "HOME", "UP", "PAGEUP", None, "LEFT", None, "RIGHT", None,
    "END", "DOWN", "PAGEDOWN", "INSERT", "DELETE",
    *(None,) * 5,
)

# Later entries win, as duplicated scancodes map to their last DOS key.
_SCANCODE_TO_DOS: dict[str, int] = {
    name: index for index, name in enumerate(_DOS_TO_SCANCODE) if name is not None
}


def dos_key_for_scancode(name: str) -> int:
    """DOS key number for a scancode name, or 89 if it has none."""
    return _SCANCODE_TO_DOS.get(name, UNKNOWN_DOS_KEY)


def scancode_for_dos_key(key: int) -> str | None:
    """Scancode name for a DOS key number, or None if there is none."""
    if 0 <= key < len(_DOS_TO_SCANCODE):
        return _DOS_TO_SCANCODE[key]
    return None


def dos_key_for_event(name: str) -> int:
    """DOS key number for a key event, limited to the classic key range."""
    key = dos_key_for_scancode(name)
    if key >= MAX_DOS_KEY:
        return UNKNOWN_DOS_KEY
    return key


def joy_button_to_ex_key(joy_num: int, joy_button: int) -> int:
    """Extended key number for a joystick button."""
    return JOY_KEYS_START + MAX_JOY_BUTTONS * joy_num + joy_button


def is_extended_key(key: int) -> bool:
    """Whether a key number lies outside the classic DOS range."""
    return key >= MAX_DOS_KEY