from __future__ import annotations

import logging

from adjacentwm.config.settings import Settings, SettingsConfigProvider
from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import SelectionConfig, SelectionPolicy
from adjacentwm.selection.selector import DirectionalWindowSelector

from conftest import FakeConfig, FakeEnumerator, FakeSink, make_window


def build(focused, windows, config=None):
    enumerator = FakeEnumerator(focused, windows)
    sink = FakeSink()
    provider = FakeConfig(config)
    return DirectionalWindowSelector(enumerator, sink, provider), enumerator, sink, provider


def test_activates_the_selected_window_once():
    focused = make_window("f", 0, 0)
    a = make_window("A", 150, 0)
    selector, _enum, sink, _cfg = build(focused, [focused, a])

    assert selector.on_directional_command(Direction.RIGHT) == a
    assert sink.activated == [a]


def test_no_candidate_means_no_activation():
    focused = make_window("f", 0, 0)
    a = make_window("A", 150, 0)
    selector, _enum, sink, _cfg = build(focused, [focused, a])

    assert selector.on_directional_command(Direction.LEFT) is None
    assert sink.activated == []


def test_no_focused_window_is_a_silent_noop():
    selector, enumerator, sink, _cfg = build(None, [make_window("A", 150, 0)])

    assert selector.on_directional_command(Direction.RIGHT) is None
    assert sink.activated == []
    assert enumerator.list_calls == 0


def test_uninteresting_focused_window_is_a_silent_noop():
    desktop = make_window("desktop", 0, 0, 1920, 1080, is_interesting=False)
    selector, _enum, sink, _cfg = build(desktop, [desktop, make_window("A", 150, 0)])

    assert selector.on_directional_command(Direction.RIGHT) is None
    assert sink.activated == []


def test_enumeration_failure_is_treated_as_empty(caplog):
    focused = make_window("f", 0, 0)
    selector, enumerator, sink, _cfg = build(focused, [focused, make_window("A", 150, 0)])
    enumerator.fail = True

    with caplog.at_level(logging.ERROR):
        assert selector.on_directional_command(Direction.RIGHT) is None
    assert sink.activated == []
    assert "enumeration failed" in caplog.text


def test_configuration_is_read_on_every_command():
    focused = make_window("f", 0, 0, user_time=20)
    a = make_window("A", 150, 0, user_time=5)
    b = make_window("B", 300, 0, user_time=10)
    selector, _enum, sink, provider = build(focused, [focused, a, b])

    assert selector.on_directional_command(Direction.RIGHT) == a
    provider.config = SelectionConfig(policy=SelectionPolicy.HIGHEST_Z_ORDER)
    assert selector.on_directional_command(Direction.RIGHT) == b
    assert provider.reads == 2
    assert sink.activated == [a, b]


def test_repeated_commands_on_same_snapshot_agree():
    focused = make_window("f", 500, 500)
    windows = [focused, make_window("A", 100, 480), make_window("B", 300, 520)]
    selector, _enum, _sink, _cfg = build(focused, windows)

    assert selector.on_directional_command(Direction.LEFT) == selector.on_directional_command(
        Direction.LEFT
    )


def test_malformed_policy_falls_back_to_closest(caplog):
    settings = Settings()
    settings.set_value("selection-policy", "most-recent-please")
    focused = make_window("f", 0, 0, user_time=20)
    a = make_window("A", 150, 0, user_time=5)
    b = make_window("B", 300, 0, user_time=10)
    sink = FakeSink()
    selector = DirectionalWindowSelector(
        FakeEnumerator(focused, [focused, a, b]), sink, SettingsConfigProvider(settings)
    )

    with caplog.at_level(logging.WARNING):
        assert selector.on_directional_command(Direction.RIGHT) == a
    assert "most-recent-please" in caplog.text
