"""
adjacentwm.core.host - Win32 implementations of the selector's host interfaces.

    Win32WindowEnumerator  snapshots the active desktop as WindowRef tuples
    Win32ActivationSink    brings the selected window to the foreground

Windows has no per-window "last user time", so recency is derived from the
z-order EnumWindows reports: the topmost window gets the highest user_time.
"""

from __future__ import annotations

import logging
from typing import Optional

from adjacentwm.core import win32
from adjacentwm.core.filter import enumerate_desktop_windows, is_interesting
from adjacentwm.core.monitor import get_monitors, get_window_monitor_name, monitor_index
from adjacentwm.core.window import Window
from adjacentwm.selection.model import WindowRef
from adjacentwm.selection.selector import ActivationSink, WindowEnumerator

log = logging.getLogger(__name__)


class Win32WindowEnumerator(WindowEnumerator):
    """Snapshot provider reading the live Win32 window list."""

    def list_windows_on_active_workspace(self) -> tuple[WindowRef, ...]:
        monitors = get_monitors()
        windows = enumerate_desktop_windows()
        count = len(windows)

        refs: list[WindowRef] = []
        for z, window in enumerate(windows):
            monitor_id = monitor_index(monitors, get_window_monitor_name(window.hwnd))
            refs.append(self._to_ref(window, user_time=count - z, monitor_id=monitor_id))

        log.debug("Enumerated %d windows on the active desktop", len(refs))
        return tuple(refs)

    def get_focused_window(self) -> Optional[WindowRef]:
        hwnd = win32.get_foreground_window()
        if not hwnd:
            return None
        for ref in self.list_windows_on_active_workspace():
            if ref.handle == hwnd:
                return ref
        log.debug("Foreground window %#010x is not on the active desktop", hwnd)
        return None

    @staticmethod
    def _to_ref(window: Window, user_time: int, monitor_id: int) -> WindowRef:
        return WindowRef(
            handle=window.hwnd,
            rect=window.frame,
            monitor_id=monitor_id,
            minimized=window.is_minimized,
            user_time=user_time,
            is_interesting=is_interesting(window),
            title=window.title,
        )


class Win32ActivationSink(ActivationSink):
    """Restores (if minimized) and focuses the selected window."""

    def activate(self, window: WindowRef) -> None:
        hwnd = int(window.handle)  # type: ignore[call-overload]
        target = Window(hwnd)
        if not target.is_valid:
            log.warning("Cannot activate %s: window no longer exists", window)
            return
        if not target.activate():
            log.warning("SetForegroundWindow refused for %s", window)
