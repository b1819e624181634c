"""
adjacentwm.core.combo_parser - Keyboard combo parser.

Turns the hotkey strings stored in the settings into the (modifiers, vk)
pair that RegisterHotKey / HotkeyManager.register() need.

Two spellings are accepted:
    - Plus form:         "ctrl+alt+left", "Win+Shift+H"
    - Accelerator form:  "<Control><Alt>Left", "<Super>h"

A settings value may also hold several bindings separated by "::"
("<Control><Alt>Left::" or "ctrl+alt+left::alt+h"); `split_bindings()`
returns the non-empty ones.  A value of "" or "::" means "unbound".

Features:
    - Aliases: win = super = windows, ctrl = control = primary, alt = menu.
    - Case-insensitive.
    - Clear error on invalid combos (ComboParseError).

The modifier and key codes are the Win32 values; they are defined here so
the parser can be used without loading user32.
"""

from __future__ import annotations

import logging
import re

log = logging.getLogger(__name__)


# Modifier flags for RegisterHotKey
MOD_ALT = 0x0001
MOD_CONTROL = 0x0002
MOD_SHIFT = 0x0004
MOD_WIN = 0x0008
MOD_NOREPEAT = 0x4000

BINDING_SEPARATOR = "::"


# ============================================================================
# Modifier aliases -> modifier flag
# ============================================================================
_MODIFIER_MAP: dict[str, int] = {
    "alt": MOD_ALT,
    "menu": MOD_ALT,
    "ctrl": MOD_CONTROL,
    "control": MOD_CONTROL,
    "primary": MOD_CONTROL,
    "shift": MOD_SHIFT,
    "win": MOD_WIN,
    "super": MOD_WIN,
    "windows": MOD_WIN,
    "mod4": MOD_WIN,
}

_CANONICAL_MODIFIER: dict[int, str] = {
    MOD_ALT: "alt",
    MOD_CONTROL: "control",
    MOD_SHIFT: "shift",
    MOD_WIN: "win",
}


# ============================================================================
# Virtual key name -> VK code
# ============================================================================
_VK_MAP: dict[str, int] = {}


def _build_vk_map() -> None:
    """Populate the VK name map on first use."""
    if _VK_MAP:
        return

    # Letters A-Z (VK 0x41 - 0x5A)
    for i in range(26):
        _VK_MAP[chr(ord("a") + i)] = 0x41 + i

    # Digits 0-9 (VK 0x30 - 0x39)
    for i in range(10):
        _VK_MAP[str(i)] = 0x30 + i

    # Function keys F1-F24
    for i in range(1, 25):
        _VK_MAP[f"f{i}"] = 0x70 + (i - 1)

    _VK_MAP.update(
        {
            "return": 0x0D,
            "enter": 0x0D,
            "escape": 0x1B,
            "esc": 0x1B,
            "space": 0x20,
            "tab": 0x09,
            "backspace": 0x08,
            "delete": 0x2E,
            "del": 0x2E,
            "insert": 0x2D,
            "home": 0x24,
            "end": 0x23,
            "pageup": 0x21,
            "page_up": 0x21,
            "prior": 0x21,
            "pagedown": 0x22,
            "page_down": 0x22,
            "next": 0x22,
            # Arrow keys
            "left": 0x25,
            "up": 0x26,
            "right": 0x27,
            "down": 0x28,
            # Keypad arrows as stored by accelerator strings
            "kp_left": 0x25,
            "kp_up": 0x26,
            "kp_right": 0x27,
            "kp_down": 0x28,
            # Numpad
            **{f"numpad{i}": 0x60 + i for i in range(10)},
            **{f"kp_{i}": 0x60 + i for i in range(10)},
            # OEM keys
            "semicolon": 0xBA,
            "equals": 0xBB,
            "equal": 0xBB,
            "comma": 0xBC,
            "minus": 0xBD,
            "period": 0xBE,
            "slash": 0xBF,
            "grave": 0xC0,
            "backquote": 0xC0,
            "bracketleft": 0xDB,
            "backslash": 0xDC,
            "bracketright": 0xDD,
            "apostrophe": 0xDE,
            "quote": 0xDE,
        }
    )


# ============================================================================
# Public API
# ============================================================================

class ComboParseError(ValueError):
    """Raised when a combo string cannot be parsed."""
    pass


_ACCEL_MODIFIER = re.compile(r"<([^<>]+)>")


def split_bindings(value: object) -> list[str]:
    """
    Split a stored hotkey value into its individual bindings.

    Returns an empty list for None, "", "::" and other values holding no
    binding at all.
    """
    if not isinstance(value, str):
        return []
    return [part.strip() for part in value.split(BINDING_SEPARATOR) if part.strip()]


def _tokenize(combo: str) -> list[str]:
    """Return the lowercase tokens of a plus-form or accelerator-form combo."""
    text = combo.strip()
    if text.startswith("<"):
        modifiers = _ACCEL_MODIFIER.findall(text)
        key = _ACCEL_MODIFIER.sub("", text).strip()
        return [m.strip().lower() for m in modifiers] + ([key.lower()] if key else [])

    parts = [p.strip().lower() for p in text.split("+")]
    return [p for p in parts if p]  # remove empty from "win + + q"


def parse_combo(combo: str) -> tuple[int, int]:
    """
    Parse a keyboard combo string into (modifiers, vk) for RegisterHotKey.

    Args:
        combo: "ctrl+alt+left" or "<Control><Alt>Left".  Case-insensitive.

    Returns:
        Tuple of (modifiers_flags, virtual_key_code).

    Raises:
        ComboParseError: If the combo is empty, has no key part, contains
                         unknown tokens, or has duplicate modifiers.
    """
    _build_vk_map()

    if not combo or not combo.strip():
        raise ComboParseError("Empty combo string")

    parts = _tokenize(combo)
    if not parts:
        raise ComboParseError(f"No valid parts in combo: {combo!r}")

    modifiers = 0
    vk: int | None = None
    seen_mods: set[str] = set()

    for part in parts:
        if part in _MODIFIER_MAP:
            flag = _MODIFIER_MAP[part]
            canonical = _CANONICAL_MODIFIER[flag]
            if canonical in seen_mods:
                raise ComboParseError(
                    f"Duplicate modifier {part!r} in combo: {combo!r}"
                )
            seen_mods.add(canonical)
            modifiers |= flag
        elif part in _VK_MAP:
            if vk is not None:
                raise ComboParseError(
                    f"Multiple key parts in combo: {combo!r}. "
                    f"Only one non-modifier key is allowed."
                )
            vk = _VK_MAP[part]
        else:
            raise ComboParseError(
                f"Unknown key or modifier: {part!r} in combo: {combo!r}"
            )

    if vk is None:
        raise ComboParseError(
            f"No key found in combo: {combo!r}. "
            f"A combo must have exactly one non-modifier key."
        )

    return modifiers, vk


def combo_to_str(modifiers: int, vk: int) -> str:
    """
    Convert (modifiers, vk) back to a human-readable string.

    Useful for logging and error messages.
    """
    _build_vk_map()

    parts: list[str] = []
    if modifiers & MOD_WIN:
        parts.append("Win")
    if modifiers & MOD_CONTROL:
        parts.append("Ctrl")
    if modifiers & MOD_ALT:
        parts.append("Alt")
    if modifiers & MOD_SHIFT:
        parts.append("Shift")

    # First name registered for a code is the preferred spelling
    vk_name = None
    for name, code in _VK_MAP.items():
        if code == vk:
            vk_name = name.upper() if len(name) == 1 else name.capitalize()
            break

    if vk_name is None:
        vk_name = f"0x{vk:02X}"

    parts.append(vk_name)
    return "+".join(parts)


def is_valid_combo(combo: str) -> bool:
    """Check if a combo string is valid without raising."""
    try:
        parse_combo(combo)
        return True
    except ComboParseError:
        return False
