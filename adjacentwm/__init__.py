"""
adjacentwm - Activate the neighbouring window in a direction.

Packages:
    - selection : platform independent neighbour selection
    - config    : settings store, file watcher and hotkey bindings
    - core      : Win32 host adapter (window enumeration, hotkeys, loop)
"""

__version__ = "1.0.0"
