"""
adjacentwm.core.filter - Window classification rules.

Two questions are answered for every top-level window:

    is_on_active_desktop()  Is it a real, visible window on the current
                            virtual desktop?  Only these are enumerated;
                            they are the stack the selector reasons about.
    is_interesting()        Is it a normal application window the user can
                            be moved to?  Taskbar, desktop, tray, tool
                            palettes and other shell surfaces are not.

Minimized windows count as "on the active desktop": whether they may be
selected is a configuration decision made by the selection core.
"""

from __future__ import annotations

import logging

from adjacentwm.core import win32
from adjacentwm.core.window import Window

log = logging.getLogger(__name__)

# ============================================================================
# Known system class names to ALWAYS ignore
# ============================================================================
IGNORED_CLASSES: frozenset[str] = frozenset({
    # Windows shell / explorer
    "Shell_TrayWnd",            # Taskbar
    "Shell_SecondaryTrayWnd",   # Secondary monitor taskbar
    "Progman",                  # Desktop Program Manager
    "WorkerW",                  # Desktop wallpaper worker
    "DV2ControlHost",           # Start menu
    "Windows.UI.Core.CoreWindow",  # Some UWP overlays

    # System UI
    "NotifyIconOverflowWindow", # System tray overflow
    "TopLevelWindowForOverflowXamlIsland",  # Tray overflow (Win11)
    "Shell_InputSwitchTopLevelWindow",  # Language switcher
    "MultitaskingViewFrame",    # Alt-Tab / Task View
    "TaskListThumbnailWnd",     # Taskbar thumbnails
    "ForegroundStaging",        # Focus transition overlay
    "EdgeUiInputTopWndClass",   # Edge gestures
    "EdgeUiInputWndClass",      # Edge gestures

    # Other
    "tooltips_class32",         # Tooltips
    "IME",                      # Input method editor
    "MSCTFIME UI",              # Text input framework
    "#32768",                   # Popup menus
    "#32769",                   # Desktop
})

# Process names that are always excluded
IGNORED_PROCESSES: frozenset[str] = frozenset({
    "SearchUI.exe",
    "SearchHost.exe",
    "ShellExperienceHost.exe",
    "StartMenuExperienceHost.exe",
    "TextInputHost.exe",
    "LockApp.exe",
    "ScreenClippingHost.exe",
})

# Window titles to ignore (exact match)
IGNORED_TITLES: frozenset[str] = frozenset({
    "",
    "Program Manager",
    "Windows Shell Experience Host",
    "Microsoft Text Input Application",
    "Windows Input Experience",
})


def is_on_active_desktop(window: Window) -> bool:
    """
    Return True if *window* is a live top-level window on this desktop.

    The rules, in order:
        1. Must still exist (valid HWND).
        2. Must be visible (minimized windows are still visible).
        3. Must not be cloaked (other virtual desktops, suspended UWP).
        4. Must not be a child window.
    """
    if not window.is_valid:
        return False
    if not window.is_visible:
        return False
    if window.is_cloaked:
        return False
    if window.is_child:
        return False
    return True


def is_interesting(window: Window) -> bool:
    """
    Return True if *window* is a regular, user-facing application window.

    The rules, in order:
        1. Class name must not be in the ignore list.
        2. Process name must not be in the ignore list.
        3. Title must not be in the ignore list.
        4. Must not be a tool window (WS_EX_TOOLWINDOW) unless it is also
           marked WS_EX_APPWINDOW.
        5. Must not have WS_EX_NOACTIVATE (non-interactive overlays).
        6. Must have a non-zero size, unless minimized.
        7. Must not be the shell or desktop window.
    """
    hwnd = window.hwnd

    cls = window.class_name
    if cls in IGNORED_CLASSES:
        log.debug("Filtered %#010x: ignored class %r", hwnd, cls)
        return False

    proc = window.process_name
    if proc in IGNORED_PROCESSES:
        log.debug("Filtered %#010x: ignored process %r", hwnd, proc)
        return False

    title = window.title
    if title in IGNORED_TITLES:
        log.debug("Filtered %#010x: ignored title %r", hwnd, title)
        return False

    if window.is_tool_window and not window.is_app_window:
        log.debug("Filtered %#010x: tool window without APPWINDOW", hwnd)
        return False

    if window.is_no_activate:
        log.debug("Filtered %#010x: WS_EX_NOACTIVATE", hwnd)
        return False

    if not window.is_minimized and window.width <= 0 and window.height <= 0:
        log.debug("Filtered %#010x: zero size", hwnd)
        return False

    if hwnd in (win32.get_shell_window(), win32.get_desktop_window()):
        log.debug("Filtered %#010x: shell/desktop window", hwnd)
        return False

    return True


def enumerate_desktop_windows() -> list[Window]:
    """
    Snapshot: every window on the active desktop, topmost first.

    EnumWindows reports top-level windows in z-order; that order is kept.
    """
    results: list[Window] = []

    def _callback(hwnd: int, _: int) -> bool:
        w = Window(hwnd)
        if is_on_active_desktop(w):
            results.append(w)
        return True  # continue enumeration

    win32.enum_windows(_callback)
    return results
