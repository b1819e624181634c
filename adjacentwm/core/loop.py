"""
adjacentwm.core.loop - The Win32 message loop.

Blocks in GetMessage on the main thread and:

    - dispatches WM_HOTKEY to the HotkeyManager,
    - runs callables queued from other threads with call_soon()
      (woken up by a private WM_APP message),
    - exits on WM_QUIT, stop(), SIGINT or SIGTERM.
"""

from __future__ import annotations

import logging
import queue
import signal
from collections.abc import Callable

from adjacentwm.core import win32
from adjacentwm.core.keybinds import HotkeyManager

log = logging.getLogger(__name__)

# Posted to the loop thread when call_soon() queued work
WM_APP_CALL = win32.WM_APP + 1


class MessageLoop:
    """
    Usage:
        loop = MessageLoop(hk_manager)
        loop.call_soon(fn)   # any thread
        loop.run()           # blocks until stop()
    """

    def __init__(self, hk_manager: HotkeyManager) -> None:
        self._hotkey_manager = hk_manager
        self._pending: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._running: bool = False
        # Thread ID of the message loop (needed for cross-thread posts)
        self._loop_thread_id: int = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def call_soon(self, fn: Callable[[], None]) -> None:
        """Run *fn* on the loop thread.  Safe to call from any thread."""
        self._pending.put(fn)
        if self._loop_thread_id:
            win32.post_thread_message(self._loop_thread_id, WM_APP_CALL, 0, 0)

    def run(self) -> None:
        """Enter the message loop.  Blocks until stop() is called."""

        def _signal_handler(sig: int, frame: object) -> None:
            log.info("Signal %d received, stopping...", sig)
            self.stop()

        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        self._running = True
        self._loop_thread_id = win32.get_current_thread_id()
        log.info("Entering message loop (%d hotkeys)", self._hotkey_manager.count)

        # Work queued before the loop existed
        self._run_pending()

        while self._running:
            got_msg, msg = win32.get_message()
            if not got_msg:
                break

            if msg.message == win32.WM_HOTKEY:
                self._hotkey_manager.dispatch(msg.wParam)
                continue

            if msg.message == WM_APP_CALL:
                self._run_pending()
                continue

            win32.translate_and_dispatch(msg)

        self._running = False
        self._loop_thread_id = 0
        log.info("Message loop stopped.")

    def stop(self) -> None:
        """
        Request the loop to stop.
        Safe to call from any thread or from within a callback.
        """
        self._running = False
        # PostThreadMessage with WM_QUIT to wake up GetMessage from any thread
        if self._loop_thread_id:
            win32.post_thread_message(self._loop_thread_id, win32.WM_QUIT, 0, 0)
        else:
            win32.post_quit_message(0)

    def _run_pending(self) -> None:
        while True:
            try:
                fn = self._pending.get_nowait()
            except queue.Empty:
                return
            try:
                fn()
            except Exception:
                log.exception("Error in queued callback %r", fn)
