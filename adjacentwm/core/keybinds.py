"""
adjacentwm.core.keybinds - Global hotkeys.

Registers system-wide hotkeys via RegisterHotKey.  The hotkeys are posted
as WM_HOTKEY to the thread that registered them, so registration and the
message loop must run on the same thread.

The HotkeyManager:
    1. Registers key combos with callbacks and hands out their ids.
    2. Dispatches WM_HOTKEY ids from the message loop to the callbacks.
    3. Unregisters everything on shutdown.

Typical use:
    hk = HotkeyManager()
    hk_id = hk.register(MOD_CONTROL | MOD_ALT, 0x25, on_left)
    # ... MessageLoop dispatches WM_HOTKEY ...
    hk.unregister(hk_id)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from adjacentwm.core import win32
from adjacentwm.core.combo_parser import combo_to_str

log = logging.getLogger(__name__)


# Type for hotkey callbacks: called with no arguments
HotkeyCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Hotkey:
    """Represents a registered hotkey binding."""

    id: int
    modifiers: int
    vk: int
    callback: HotkeyCallback
    description: str


class HotkeyManager:
    """
    Manages global hotkeys for one thread.

    Each hotkey gets a unique id.  Holding a combo down does not repeat:
    MOD_NOREPEAT is always added, so one press activates one window.
    """

    def __init__(self) -> None:
        # hotkey_id -> Hotkey
        self._hotkeys: dict[int, Hotkey] = {}
        # Auto-incrementing ID counter (starting at 1)
        self._next_id: int = 1

    @property
    def count(self) -> int:
        """Number of registered hotkeys."""
        return len(self._hotkeys)

    @property
    def hotkeys(self) -> list[Hotkey]:
        return list(self._hotkeys.values())

    def register(
        self,
        modifiers: int,
        vk: int,
        callback: HotkeyCallback,
        description: str = "",
    ) -> int | None:
        """
        Register a global hotkey.

        Args:
            modifiers:   Combination of MOD_ALT, MOD_CONTROL, MOD_SHIFT, MOD_WIN.
            vk:          Virtual key code.
            callback:    Function to call when the hotkey is pressed.
            description: Human-readable description for logging.

        Returns:
            The hotkey ID if registered successfully, None if the combo is
            already bound here or the OS refused it.
        """
        combo = combo_to_str(modifiers, vk)

        existing = self.find_by_combo(modifiers, vk)
        if existing is not None:
            log.error(
                "Hotkey %s already bound to %r, not registering %r",
                combo,
                existing.description,
                description,
            )
            return None

        hotkey_id = self._next_id
        if not win32.register_hotkey(hotkey_id, modifiers | win32.MOD_NOREPEAT, vk):
            log.error("Failed to register hotkey: %s (%s)", combo, description)
            return None

        self._hotkeys[hotkey_id] = Hotkey(
            id=hotkey_id,
            modifiers=modifiers,
            vk=vk,
            callback=callback,
            description=description,
        )
        self._next_id += 1

        log.info("Hotkey registered: id=%d %s  %s", hotkey_id, combo, description)
        return hotkey_id

    def find_by_combo(self, modifiers: int, vk: int) -> Hotkey | None:
        """Find a registered hotkey by its modifier+VK combination."""
        for hk in self._hotkeys.values():
            if hk.modifiers == modifiers and hk.vk == vk:
                return hk
        return None

    def unregister(self, hotkey_id: int) -> bool:
        """Unregister a hotkey by its ID."""
        hotkey = self._hotkeys.pop(hotkey_id, None)
        if hotkey is None:
            return False

        win32.unregister_hotkey(hotkey_id)
        log.info("Hotkey unregistered: id=%d %s", hotkey_id, hotkey.description)
        return True

    def unregister_all(self) -> None:
        """Unregister all hotkeys. Call this on shutdown."""
        for hotkey_id in list(self._hotkeys.keys()):
            win32.unregister_hotkey(hotkey_id)
        count = len(self._hotkeys)
        self._hotkeys.clear()
        log.info("All hotkeys unregistered (%d total)", count)

    def dispatch(self, hotkey_id: int) -> bool:
        """
        Dispatch a WM_HOTKEY event to the appropriate callback.

        Args:
            hotkey_id: The wParam from WM_HOTKEY (the registered ID).

        Returns:
            True if a callback was found and executed.
        """
        hotkey = self._hotkeys.get(hotkey_id)
        if hotkey is None:
            log.warning("Unknown hotkey id: %d", hotkey_id)
            return False

        log.debug("Hotkey dispatched: %s", hotkey.description)
        try:
            hotkey.callback()
        except Exception:
            log.exception("Error in hotkey callback: %s", hotkey.description)

        return True

    def dump_state(self) -> str:
        """Return a formatted string of all registered hotkeys."""
        lines = [f"=== HotkeyManager: {len(self._hotkeys)} hotkeys ===", ""]
        for hk in self._hotkeys.values():
            lines.append(
                f"  id={hk.id:3d}  {combo_to_str(hk.modifiers, hk.vk)}  {hk.description}"
            )
        return "\n".join(lines)
