import json

import pytest
from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from adjacentwm.config.settings import LEFT_KEY, Settings
from adjacentwm.config.watcher import SettingsWatcher


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({LEFT_KEY: "alt+h"}), encoding="utf-8")
    return path


def test_modified_event_reloads(settings_file):
    settings = Settings(settings_file)
    watcher = SettingsWatcher(settings)

    watcher.handler.dispatch(FileModifiedEvent(str(settings_file)))
    assert settings.get_value(LEFT_KEY) == "alt+h"


def test_replace_by_rename_reloads(settings_file, tmp_path):
    settings = Settings(settings_file)
    watcher = SettingsWatcher(settings)

    watcher.handler.dispatch(FileMovedEvent(str(tmp_path / "settings.tmp"), str(settings_file)))
    assert settings.get_value(LEFT_KEY) == "alt+h"


def test_other_files_are_ignored(settings_file, tmp_path):
    settings = Settings(settings_file)
    watcher = SettingsWatcher(settings)

    watcher.handler.dispatch(FileCreatedEvent(str(tmp_path / "other.json")))
    assert settings.get_value(LEFT_KEY) == "ctrl+alt+left"


def test_reload_notifies_subscribers(settings_file):
    settings = Settings(settings_file)
    seen = []
    settings.connect(LEFT_KEY, lambda key, value: seen.append(value))
    watcher = SettingsWatcher(settings)

    watcher.handler.dispatch(FileModifiedEvent(str(settings_file)))
    watcher.handler.dispatch(FileModifiedEvent(str(settings_file)))
    assert seen == ["alt+h"]


def test_requires_a_file_backed_settings():
    with pytest.raises(ValueError):
        SettingsWatcher(Settings())


def test_start_and_stop(settings_file):
    watcher = SettingsWatcher(Settings(settings_file))
    watcher.start()
    try:
        assert watcher.is_running
    finally:
        watcher.stop()
    assert not watcher.is_running
