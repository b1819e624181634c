"""
adjacentwm.core - Win32 host adapter.

This package contains:
    - win32        : Low-level Win32 API bindings via ctypes
    - window       : Live handle to a top-level window
    - filter       : Which windows are on the desktop / interesting
    - monitor      : Monitor enumeration via pywin32
    - host         : WindowEnumerator / ActivationSink implementations
    - combo_parser : Hotkey string parsing (platform independent)
    - keybinds     : Global hotkey registration and dispatch
    - loop         : The Win32 message loop

Nothing is imported here: combo_parser must stay importable on systems
without user32.
"""
