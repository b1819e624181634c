"""
adjacentwm.config.settings - Settings store and config provider.

Settings live in a small JSON file.  Keys keep the names the hotkeys and
options have always had ("left-key", "include-minimized", ...).  Values
are held in memory and refreshed by `Settings.load()`, which notifies
subscribers of every key whose value changed, so hotkeys can be
re-registered while the program runs.

`SettingsConfigProvider` converts the current values into a
SelectionConfig every time the selector asks for one.
"""

from __future__ import annotations

import itertools
import json
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

from adjacentwm.selection.model import SelectionConfig, SelectionPolicy
from adjacentwm.selection.selector import ConfigProvider

log = logging.getLogger(__name__)


# ============================================================================
# Keys and defaults
# ============================================================================
LEFT_KEY = "left-key"
RIGHT_KEY = "right-key"
UP_KEY = "up-key"
DOWN_KEY = "down-key"
INCLUDE_MINIMIZED = "include-minimized"
INCLUDE_OTHER_MONITORS = "include-other-monitors"
SELECTION_POLICY = "selection-policy"

HOTKEY_KEYS: tuple[str, ...] = (LEFT_KEY, RIGHT_KEY, UP_KEY, DOWN_KEY)

DEFAULTS: dict[str, Any] = {
    LEFT_KEY: "ctrl+alt+left",
    RIGHT_KEY: "ctrl+alt+right",
    UP_KEY: "ctrl+alt+up",
    DOWN_KEY: "ctrl+alt+down",
    INCLUDE_MINIMIZED: False,
    INCLUDE_OTHER_MONITORS: False,
    SELECTION_POLICY: SelectionPolicy.CLOSEST.value,
}

# (key, new_value)
ChangeCallback = Callable[[str, Any], None]


def default_settings_path() -> Path:
    """%APPDATA%/adjacentwm/settings.json, or ~/.config/adjacentwm/settings.json."""
    base = os.environ.get("APPDATA")
    root = Path(base) if base else Path.home() / ".config"
    return root / "adjacentwm" / "settings.json"


# ============================================================================
# Settings
# ============================================================================
class Settings:
    """
    Named settings values backed by an optional JSON file.

    Usage:
        settings = Settings(path)
        settings.load()
        hid = settings.connect("left-key", on_changed)
        settings.get_value("left-key")
        settings.disconnect(hid)

    Thread safety: values may be reloaded from a watcher thread while the
    main thread reads them.  Callbacks run on the thread that caused the
    change, outside the internal lock.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        defaults: Optional[dict[str, Any]] = None,
    ) -> None:
        self._path = Path(path) if path is not None else None
        self._defaults: dict[str, Any] = dict(DEFAULTS if defaults is None else defaults)
        self._values: dict[str, Any] = dict(self._defaults)
        self._lock = threading.Lock()

        # handler_id -> (key, callback)
        self._handlers: dict[int, tuple[str, ChangeCallback]] = {}
        self._ids = itertools.count(1)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    def get_value(self, key: str) -> Any:
        """Return the value for *key*, or None if it is unknown."""
        with self._lock:
            return self._values.get(key)

    def set_value(self, key: str, value: Any) -> None:
        """Change one value, notify subscribers and persist if file-backed."""
        with self._lock:
            old = self._values.get(key)
            self._values[key] = value
        if old != value:
            self._emit(key, value)
            if self._path is not None:
                self.save()

    def snapshot(self) -> dict[str, Any]:
        """A copy of all current values."""
        with self._lock:
            return dict(self._values)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """
        (Re)read the settings file.

        Keys missing from the file take their default.  Unknown keys are
        kept.  If the file is missing or invalid the current values stay
        untouched.

        Returns:
            True if the file was read successfully.
        """
        if self._path is None:
            return False
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            log.info("Settings file not found: %s (using defaults)", self._path)
            return False
        except (OSError, ValueError) as e:
            log.error("Error loading settings from %s: %s", self._path, e)
            return False

        if not isinstance(data, dict):
            log.error("Invalid settings file %s: root must be an object", self._path)
            return False

        new_values = dict(self._defaults)
        new_values.update(data)

        with self._lock:
            old_values = self._values
            self._values = new_values

        changed = [
            key
            for key in sorted(set(old_values) | set(new_values))
            if old_values.get(key) != new_values.get(key)
        ]
        log.debug("Settings loaded from %s (%d changed)", self._path, len(changed))
        for key in changed:
            self._emit(key, new_values.get(key))
        return True

    def save(self) -> bool:
        """Write the current values to the settings file."""
        if self._path is None:
            return False
        data = self.snapshot()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as e:
            log.error("Error saving settings to %s: %s", self._path, e)
            return False
        log.debug("Settings saved to %s", self._path)
        return True

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def connect(self, key: str, callback: ChangeCallback) -> int:
        """Call *callback(key, value)* whenever *key* changes.  Returns a handler id."""
        handler_id = next(self._ids)
        self._handlers[handler_id] = (key, callback)
        return handler_id

    def disconnect(self, handler_id: int) -> bool:
        return self._handlers.pop(handler_id, None) is not None

    def disconnect_all(self) -> None:
        self._handlers.clear()

    def _emit(self, key: str, value: Any) -> None:
        for handler_key, callback in list(self._handlers.values()):
            if handler_key != key:
                continue
            try:
                callback(key, value)
            except Exception:
                log.exception("Error in settings callback for %r", key)


# ============================================================================
# SettingsConfigProvider
# ============================================================================
def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "on", "1"):
            return True
        if text in ("false", "no", "off", "0"):
            return False
    return default


class SettingsConfigProvider(ConfigProvider):
    """Builds a SelectionConfig from the current settings on every call."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def read_config(self) -> SelectionConfig:
        values = self._settings.snapshot()

        raw_policy = values.get(SELECTION_POLICY)
        policy = SelectionPolicy.parse(raw_policy)
        if policy is None:
            log.warning("Unrecognised %s %r, using closest", SELECTION_POLICY, raw_policy)
            policy = SelectionPolicy.CLOSEST

        return SelectionConfig(
            include_minimized=_as_bool(values.get(INCLUDE_MINIMIZED), False),
            include_other_monitors=_as_bool(values.get(INCLUDE_OTHER_MONITORS), False),
            policy=policy,
        )
