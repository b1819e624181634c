"""
adjacentwm.config.watcher - Reload settings when the file changes on disk.

Uses a watchdog Observer on the settings file's directory.  Events for
other files in the same directory are ignored.  The reload runs on the
observer thread; subscribers that need another thread must marshal the
work themselves.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from adjacentwm.config.settings import Settings

log = logging.getLogger(__name__)


class _SettingsFileHandler(FileSystemEventHandler):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings
        assert settings.path is not None
        self._target = os.path.normcase(os.path.abspath(settings.path))

    def _matches(self, path: object) -> bool:
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        return os.path.normcase(os.path.abspath(str(path))) == self._target

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in ("created", "modified", "moved"):
            return
        dest = getattr(event, "dest_path", "")
        if not (self._matches(event.src_path) or (dest and self._matches(dest))):
            return
        log.debug("Settings file %s: %s", event.event_type, event.src_path)
        self._settings.load()


class SettingsWatcher:
    """
    Watches the settings file and calls Settings.load() on change.

    Usage:
        watcher = SettingsWatcher(settings)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(self, settings: Settings) -> None:
        if settings.path is None:
            raise ValueError("SettingsWatcher needs a file-backed Settings")
        self._settings = settings
        self._handler = _SettingsFileHandler(settings)
        self._observer: Optional[Observer] = None

    @property
    def handler(self) -> FileSystemEventHandler:
        return self._handler

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        assert self._settings.path is not None
        directory = self._settings.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        observer = Observer()
        observer.schedule(self._handler, str(directory), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        log.info("Watching settings file %s", self._settings.path)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=2.0)
        self._observer = None
        log.info("Settings watcher stopped")
