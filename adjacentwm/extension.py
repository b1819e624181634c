"""
adjacentwm.extension - The enable/disable lifecycle.

`AdjacentWindows` owns everything that must be released when the feature
is turned off: its settings subscriptions and the ids of the hotkeys it
registered.  There is no module-level instance; the entry point creates
one, enables it, and disables it on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

from adjacentwm.config.hotkeys import register_direction_hotkeys
from adjacentwm.config.settings import HOTKEY_KEYS, Settings
from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import WindowRef
from adjacentwm.selection.selector import DirectionalWindowSelector

if TYPE_CHECKING:
    from adjacentwm.core.keybinds import HotkeyManager

log = logging.getLogger(__name__)


# Runs a callable on the thread that owns the hotkeys
Scheduler = Callable[[Callable[[], None]], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class AdjacentWindows:
    """
    Hotkey-driven adjacent window activation.

    Usage:
        ext = AdjacentWindows(settings, selector, hk_manager)
        ext.enable()     # subscribe + register hotkeys
        ...
        ext.disable()    # unregister hotkeys + unsubscribe

    Hotkeys are registered with RegisterHotKey, which binds them to the
    calling thread.  When settings can change on another thread, pass a
    *scheduler* that runs the re-registration on the message loop thread
    (see MessageLoop.call_soon).
    """

    def __init__(
        self,
        settings: Settings,
        selector: DirectionalWindowSelector,
        hk_manager: HotkeyManager,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self._settings = settings
        self._selector = selector
        self._hk_manager = hk_manager
        self._scheduler: Scheduler = scheduler or _call_now

        self._enabled: bool = False
        self._handler_ids: list[int] = []
        self._hotkey_ids: list[int] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def hotkey_ids(self) -> list[int]:
        return list(self._hotkey_ids)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def enable(self) -> None:
        if self._enabled:
            return
        for key in HOTKEY_KEYS:
            self._handler_ids.append(
                self._settings.connect(key, self._on_hotkey_setting_changed)
            )
        self._enabled = True
        self.register_hotkeys()
        log.info("Adjacent windows enabled (%d hotkeys)", len(self._hotkey_ids))

    def disable(self) -> None:
        if not self._enabled:
            return
        self.remove_hotkeys()
        for handler_id in self._handler_ids:
            self._settings.disconnect(handler_id)
        self._handler_ids.clear()
        self._enabled = False
        log.info("Adjacent windows disabled")

    # ------------------------------------------------------------------
    # Hotkeys
    # ------------------------------------------------------------------
    def register_hotkeys(self) -> None:
        self._hotkey_ids.extend(
            register_direction_hotkeys(self._hk_manager, self._settings, self.perform_hotkey)
        )

    def remove_hotkeys(self) -> None:
        for hotkey_id in self._hotkey_ids:
            self._hk_manager.unregister(hotkey_id)
        self._hotkey_ids.clear()

    def update_hotkeys(self) -> None:
        """Drop and re-register all direction hotkeys from current settings."""
        if not self._enabled:
            return
        self.remove_hotkeys()
        self.register_hotkeys()

    def _on_hotkey_setting_changed(self, key: str, value: Any) -> None:
        log.info("Setting %s changed to %r, updating hotkeys", key, value)
        self._scheduler(self.update_hotkeys)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def perform_hotkey(self, direction: Direction) -> Optional[WindowRef]:
        return self._selector.on_directional_command(direction)
