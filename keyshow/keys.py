"""Linux input key codes, their display labels and the key event record."""

from __future__ import annotations

from dataclasses import dataclass

_KEY_CODES: dict[str, int] = {
    "KEY_RESERVED": 0,
    "KEY_ESC": 1,
    "KEY_1": 2,
    "KEY_2": 3,
    "KEY_3": 4,
    "KEY_4": 5,
    "KEY_5": 6,
    "KEY_6": 7,
    "KEY_7": 8,
    "KEY_8": 9,
    "KEY_9": 10,
    "KEY_0": 11,
    "KEY_MINUS": 12,
    "KEY_EQUAL": 13,
    "KEY_BACKSPACE": 14,
    "KEY_TAB": 15,
    "KEY_Q": 16,
    "KEY_W": 17,
    "KEY_E": 18,
    "KEY_R": 19,
    "KEY_T": 20,
    "KEY_Y": 21,
    "KEY_U": 22,
    "KEY_I": 23,
    "KEY_O": 24,
    "KEY_P": 25,
    "KEY_LEFTBRACE": 26,
    "KEY_RIGHTBRACE": 27,
    "KEY_ENTER": 28,
    "KEY_LEFTCTRL": 29,
    "KEY_A": 30,
    "KEY_S": 31,
    "KEY_D": 32,
    "KEY_F": 33,
    "KEY_G": 34,
    "KEY_H": 35,
    "KEY_J": 36,
    "KEY_K": 37,
    "KEY_L": 38,
    "KEY_SEMICOLON": 39,
    "KEY_APOSTROPHE": 40,
    "KEY_GRAVE": 41,
    "KEY_LEFTSHIFT": 42,
    "KEY_BACKSLASH": 43,
    "KEY_Z": 44,
    "KEY_X": 45,
    "KEY_C": 46,
    "KEY_V": 47,
    "KEY_B": 48,
    "KEY_N": 49,
    "KEY_M": 50,
    "KEY_COMMA": 51,
    "KEY_DOT": 52,
    "KEY_SLASH": 53,
    "KEY_RIGHTSHIFT": 54,
    "KEY_KPASTERISK": 55,
    "KEY_LEFTALT": 56,
    "KEY_SPACE": 57,
    "KEY_CAPSLOCK": 58,
    "KEY_F1": 59,
    "KEY_F2": 60,
    "KEY_F3": 61,
    "KEY_F4": 62,
    "KEY_F5": 63,
    "KEY_F6": 64,
    "KEY_F7": 65,
    "KEY_F8": 66,
    "KEY_F9": 67,
    "KEY_F10": 68,
    "KEY_NUMLOCK": 69,
    "KEY_SCROLLLOCK": 70,
    "KEY_KP7": 71,
    "KEY_KP8": 72,
    "KEY_KP9": 73,
    "KEY_KPMINUS": 74,
    "KEY_KP4": 75,
    "KEY_KP5": 76,
    "KEY_KP6": 77,
    "KEY_KPPLUS": 78,
    "KEY_KP1": 79,
    "KEY_KP2": 80,
    "KEY_KP3": 81,
    "KEY_KP0": 82,
    "KEY_KPDOT": 83,
    "KEY_ZENKAKUHANKAKU": 85,
    "KEY_102ND": 86,
    "KEY_F11": 87,
    "KEY_F12": 88,
    "KEY_RO": 89,
    "KEY_KATAKANA": 90,
    "KEY_HIRAGANA": 91,
    "KEY_HENKAN": 92,
    "KEY_KATAKANAHIRAGANA": 93,
    "KEY_MUHENKAN": 94,
    "KEY_KPJPCOMMA": 95,
    "KEY_KPENTER": 96,
    "KEY_RIGHTCTRL": 97,
    "KEY_KPSLASH": 98,
    "KEY_SYSRQ": 99,
    "KEY_RIGHTALT": 100,
    "KEY_LINEFEED": 101,
    "KEY_HOME": 102,
    "KEY_UP": 103,
    "KEY_PAGEUP": 104,
    "KEY_LEFT": 105,
    "KEY_RIGHT": 106,
    "KEY_END": 107,
    "KEY_DOWN": 108,
    "KEY_PAGEDOWN": 109,
    "KEY_INSERT": 110,
    "KEY_DELETE": 111,
    "KEY_MACRO": 112,
    "KEY_MUTE": 113,
    "KEY_VOLUMEDOWN": 114,
    "KEY_VOLUMEUP": 115,
    "KEY_POWER": 116,
    "KEY_KPEQUAL": 117,
    "KEY_KPPLUSMINUS": 118,
    "KEY_PAUSE": 119,
    "KEY_SCALE": 120,
    "KEY_KPCOMMA": 121,
    "KEY_HANGEUL": 122,
    "KEY_HANJA": 123,
    "KEY_YEN": 124,
    "KEY_LEFTMETA": 125,
    "KEY_RIGHTMETA": 126,
    "KEY_COMPOSE": 127,
    "KEY_STOP": 128,
    "KEY_AGAIN": 129,
    "KEY_PROPS": 130,
    "KEY_UNDO": 131,
    "KEY_FRONT": 132,
    "KEY_COPY": 133,
    "KEY_OPEN": 134,
    "KEY_PASTE": 135,
    "KEY_FIND": 136,
    "KEY_CUT": 137,
    "KEY_HELP": 138,
    "KEY_MENU": 139,
    "KEY_CALC": 140,
    "KEY_F13": 183,
    "KEY_F14": 184,
    "KEY_F15": 185,
    "KEY_F16": 186,
    "KEY_F17": 187,
    "KEY_F18": 188,
    "KEY_F19": 189,
    "KEY_F20": 190,
    "KEY_F21": 191,
    "KEY_F22": 192,
    "KEY_F23": 193,
    "KEY_F24": 194,
}

_NAMES: dict[int, str] = {code: name for name, code in _KEY_CODES.items()}

KEY_A = _KEY_CODES["KEY_A"]
KEY_ENTER = _KEY_CODES["KEY_ENTER"]
KEY_SPACE = _KEY_CODES["KEY_SPACE"]

_MODIFIER_LABELS = {
    "KEY_LEFTSHIFT": "SHIFT",
    "KEY_RIGHTSHIFT": "SHIFT",
    "KEY_LEFTCTRL": "CTRL",
    "KEY_RIGHTCTRL": "CTRL",
    "KEY_LEFTALT": "ALT",
    "KEY_RIGHTALT": "ALT",
    "KEY_LEFTMETA": "META",
    "KEY_RIGHTMETA": "META",
}

_SPECIAL_LABELS = {
    "KEY_SPACE": "SPACE",
    "KEY_ENTER": "ENTER",
    "KEY_BACKSPACE": "BKSP",
    "KEY_TAB": "TAB",
    "KEY_ESC": "ESC",
    "KEY_DELETE": "DEL",
    "KEY_HOME": "HOME",
    "KEY_END": "END",
    "KEY_PAGEUP": "PGUP",
    "KEY_PAGEDOWN": "PGDN",
    "KEY_UP": "UP",
    "KEY_DOWN": "DOWN",
    "KEY_LEFT": "LEFT",
    "KEY_RIGHT": "RIGHT",
    "KEY_COMMA": ",",
    "KEY_DOT": ".",
    "KEY_SLASH": "/",
    "KEY_SEMICOLON": ";",
    "KEY_APOSTROPHE": "'",
    "KEY_LEFTBRACE": "[",
    "KEY_RIGHTBRACE": "]",
    "KEY_BACKSLASH": "\\",
    "KEY_MINUS": "-",
    "KEY_EQUAL": "=",
    "KEY_GRAVE": "`",
}


def _build_labels() -> dict[int, str]:
    labels: dict[str, str] = {}
    for char in "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789":
        labels[f"KEY_{char}"] = char
    for number in range(1, 13):
        labels[f"KEY_F{number}"] = f"F{number}"
    labels.update(_SPECIAL_LABELS)
    labels.update(_MODIFIER_LABELS)
    return {_KEY_CODES[name]: label for name, label in labels.items()}


_LABELS = _build_labels()
_MODIFIER_CODES = frozenset(_KEY_CODES[name] for name in _MODIFIER_LABELS)


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release, already turned into a display label."""

    key: str
    pressed: bool
    is_modifier: bool


def key_name(code: int) -> str:
    """Return the symbolic kernel name of a key code, e.g. ``KEY_A``."""
    try:
        return _NAMES[code]
    except KeyError:
        return f"unknown key: {code}"


def format_key_name(code: int) -> str:
    """Return the short label shown for a key code."""
    return _LABELS.get(code) or key_name(code)


def is_modifier_key(code: int) -> bool:
    """Tell whether the code is one of the shift, ctrl, alt or meta keys."""
    return code in _MODIFIER_CODES


def make_key_event(code: int, value: int) -> KeyEvent:
    """Build a key event from a code and an event value (1 means pressed)."""
    return KeyEvent(
        key=format_key_name(code),
        pressed=value == 1,
        is_modifier=is_modifier_key(code),
    )