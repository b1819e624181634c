from __future__ import annotations

from collections.abc import Callable
from typing import Optional

import pytest

from adjacentwm.selection.geometry import Rect
from adjacentwm.selection.model import SelectionConfig, WindowRef
from adjacentwm.selection.selector import ActivationSink, ConfigProvider, WindowEnumerator


def make_window(
    handle: str,
    x: int,
    y: int,
    w: int = 100,
    h: int = 100,
    **kwargs,
) -> WindowRef:
    return WindowRef(handle=handle, rect=Rect(x, y, w, h), title=handle, **kwargs)


class FakeEnumerator(WindowEnumerator):
    def __init__(self, focused: Optional[WindowRef], windows: list[WindowRef]) -> None:
        self.focused = focused
        self.windows = windows
        self.fail = False
        self.list_calls = 0

    def list_windows_on_active_workspace(self) -> list[WindowRef]:
        self.list_calls += 1
        if self.fail:
            raise OSError("enumeration unavailable")
        return list(self.windows)

    def get_focused_window(self) -> Optional[WindowRef]:
        return self.focused


class FakeSink(ActivationSink):
    def __init__(self) -> None:
        self.activated: list[WindowRef] = []

    def activate(self, window: WindowRef) -> None:
        self.activated.append(window)


class FakeConfig(ConfigProvider):
    def __init__(self, config: Optional[SelectionConfig] = None) -> None:
        self.config = config or SelectionConfig()
        self.reads = 0

    def read_config(self) -> SelectionConfig:
        self.reads += 1
        return self.config


class FakeHotkeyManager:
    """Records registrations the way HotkeyManager hands out ids."""

    def __init__(self) -> None:
        self.hotkeys: dict[int, tuple[int, int, Callable[[], None], str]] = {}
        self.unregistered: list[int] = []
        self._next_id = 1

    def register(self, modifiers, vk, callback, description=""):
        hotkey_id = self._next_id
        self._next_id += 1
        self.hotkeys[hotkey_id] = (modifiers, vk, callback, description)
        return hotkey_id

    def unregister(self, hotkey_id):
        self.unregistered.append(hotkey_id)
        return self.hotkeys.pop(hotkey_id, None) is not None

    def press(self, vk: int) -> None:
        for _mods, key, callback, _desc in list(self.hotkeys.values()):
            if key == vk:
                callback()


@pytest.fixture
def window():
    return make_window


@pytest.fixture
def hk_manager():
    return FakeHotkeyManager()
