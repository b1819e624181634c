"""
adjacentwm.config - Settings and hotkey configuration.

This package contains:
    - settings : JSON-backed Settings store and SettingsConfigProvider
    - watcher  : watchdog-based reload of the settings file
    - hotkeys  : Binding of the "*-key" settings to directions
"""
