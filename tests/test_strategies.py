from __future__ import annotations

import itertools

import pytest

from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import SelectionConfig, SelectionPolicy
from adjacentwm.selection.strategies import (
    ClosestStrategy,
    ClosestVisibleCornerStrategy,
    HighestZOrderStrategy,
    STRATEGIES,
    closest_in_direction,
    get_strategy,
)
from adjacentwm.selection.selector import select_neighbor

from conftest import make_window

ALL_POLICIES = list(SelectionPolicy)


def cfg(policy: SelectionPolicy, **kwargs) -> SelectionConfig:
    return SelectionConfig(policy=policy, **kwargs)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_every_policy_has_a_strategy():
    for policy in SelectionPolicy:
        assert get_strategy(policy).policy is policy
    assert set(STRATEGIES) == set(SelectionPolicy)


# ---------------------------------------------------------------------------
# Shared properties
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("policy", ALL_POLICIES)
@pytest.mark.parametrize("direction", list(Direction))
def test_focused_window_is_never_returned(policy, direction):
    focused = make_window("f", 100, 100, user_time=1)
    # Same handle, different geometry: a second snapshot of the focused window
    ghost = make_window("f", 0, 0, user_time=50)
    others = [make_window(f"w{i}", x, y, user_time=i) for i, (x, y) in enumerate(
        [(0, 100), (300, 100), (100, 0), (100, 300)], start=2
    )]
    result = select_neighbor(focused, [focused, ghost, *others], direction, cfg(policy))
    assert result is not None
    assert result != focused


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_empty_workspace_returns_none(policy):
    focused = make_window("f", 0, 0)
    for direction in Direction:
        assert select_neighbor(focused, [focused], direction, cfg(policy)) is None
        assert select_neighbor(focused, [], direction, cfg(policy)) is None


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_selection_is_idempotent(policy):
    focused = make_window("f", 200, 200, user_time=10)
    windows = [
        focused,
        make_window("a", 400, 180, user_time=3),
        make_window("b", 350, 260, user_time=7),
        make_window("c", 0, 200, user_time=5),
    ]
    for direction in Direction:
        first = select_neighbor(focused, windows, direction, cfg(policy))
        second = select_neighbor(focused, windows, direction, cfg(policy))
        assert first == second


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------
def test_closest_and_highest_z_order_disagree_on_recency():
    focused = make_window("f", 0, 0, user_time=20)
    a = make_window("A", 150, 0, user_time=5)
    b = make_window("B", 300, 0, user_time=10)
    windows = [focused, a, b]

    assert select_neighbor(focused, windows, Direction.RIGHT, cfg(SelectionPolicy.CLOSEST)) == a
    assert select_neighbor(
        focused, windows, Direction.RIGHT, cfg(SelectionPolicy.HIGHEST_Z_ORDER)
    ) == b


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_minimized_candidate_is_skipped(policy):
    focused = make_window("f", 0, 0, user_time=20)
    a = make_window("A", 150, 0, minimized=True, user_time=15)
    b = make_window("B", 300, 0, user_time=10)
    result = select_neighbor(
        focused, [focused, a, b], Direction.RIGHT, cfg(policy, include_minimized=False)
    )
    assert result == b


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_other_monitor_candidate_is_skipped(policy):
    focused = make_window("f", 0, 0, monitor_id=0)
    other = make_window("O", 1920, 0, monitor_id=1)
    result = select_neighbor(
        focused, [focused, other], Direction.RIGHT, cfg(policy, include_other_monitors=False)
    )
    assert result is None


@pytest.mark.parametrize("policy", ALL_POLICIES)
def test_other_monitor_candidate_allowed_when_configured(policy):
    focused = make_window("f", 0, 0, monitor_id=0, user_time=2)
    other = make_window("O", 1920, 0, monitor_id=1, user_time=1)
    result = select_neighbor(
        focused, [focused, other], Direction.RIGHT, cfg(policy, include_other_monitors=True)
    )
    assert result == other


# ---------------------------------------------------------------------------
# Closest
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "direction, near, far",
    [
        (Direction.RIGHT, (150, 0), (300, 0)),
        (Direction.LEFT, (-150, 0), (-300, 0)),
        (Direction.DOWN, (0, 150), (0, 300)),
        (Direction.UP, (0, -150), (0, -300)),
    ],
)
def test_closest_prefers_nearer_leading_edge_in_any_order(direction, near, far):
    focused = make_window("f", 0, 0)
    a = make_window("near", *near)
    b = make_window("far", *far)
    for order in itertools.permutations([a, b]):
        assert ClosestStrategy().select(focused, list(order), direction, SelectionConfig()) == a


def test_closest_ignores_windows_behind_the_leading_edge():
    focused = make_window("f", 100, 100)
    level = make_window("level", 100, 400)  # same x: not to the right
    assert closest_in_direction(focused, [level], Direction.RIGHT) is None


def test_closest_ties_keep_first_encountered():
    focused = make_window("f", 0, 0)
    first = make_window("first", 200, 0)
    second = make_window("second", 200, 500)
    assert closest_in_direction(focused, [first, second], Direction.RIGHT) == first
    assert closest_in_direction(focused, [second, first], Direction.RIGHT) == second


def test_closest_honours_include_minimized():
    focused = make_window("f", 0, 0)
    minimized = make_window("m", 150, 0, minimized=True)
    normal = make_window("n", 300, 0)
    config = SelectionConfig(include_minimized=True)
    assert ClosestStrategy().select(focused, [minimized, normal], Direction.RIGHT, config) == minimized


# ---------------------------------------------------------------------------
# HighestZOrder
# ---------------------------------------------------------------------------
def test_highest_z_order_returns_maximal_user_time():
    focused = make_window("f", 0, 0, user_time=100)
    candidates = [make_window(f"w{t}", 150 + t, 0, user_time=t) for t in (3, 42, 7, 41)]
    result = HighestZOrderStrategy().select(
        focused, [focused, *candidates], Direction.RIGHT, SelectionConfig()
    )
    assert result is not None
    assert all(result.user_time >= c.user_time for c in candidates)
    assert result.handle == "w42"


def test_highest_z_order_only_considers_the_direction():
    focused = make_window("f", 500, 0)
    left = make_window("left", 0, 0, user_time=99)
    right = make_window("right", 900, 0, user_time=1)
    assert HighestZOrderStrategy().select(
        focused, [left, right], Direction.RIGHT, SelectionConfig()
    ) == right


def test_highest_z_order_never_picks_minimized():
    focused = make_window("f", 0, 0)
    minimized = make_window("m", 150, 0, minimized=True, user_time=50)
    normal = make_window("n", 300, 0, user_time=5)
    config = SelectionConfig(include_minimized=True)
    assert HighestZOrderStrategy().select(focused, [minimized, normal], Direction.RIGHT, config) == normal


def test_highest_z_order_ties_keep_first_encountered():
    focused = make_window("f", 0, 0)
    a = make_window("a", 150, 0, user_time=5)
    b = make_window("b", 300, 0, user_time=5)
    assert HighestZOrderStrategy().select(focused, [b, a], Direction.RIGHT, SelectionConfig()) == b


# ---------------------------------------------------------------------------
# ClosestVisibleCorner
# ---------------------------------------------------------------------------
def _right_row(*extra):
    focused = make_window("f", 0, 0, user_time=10)
    a = make_window("A", 150, 0, user_time=5)
    b = make_window("B", 300, 0, user_time=8)
    return focused, a, b, [focused, a, b, *extra]


def test_visible_corner_picks_closest_when_nothing_is_covered():
    focused, a, _b, windows = _right_row()
    assert ClosestVisibleCornerStrategy().select(
        focused, windows, Direction.RIGHT, SelectionConfig()
    ) == a


def test_visible_corner_skips_candidate_with_hidden_facing_corners():
    # A panel above both hides A's right corners and B's left corners
    panel = make_window("panel", 200, -10, 100, 120, user_time=9, is_interesting=False)
    focused, _a, b, windows = _right_row(panel)
    assert ClosestVisibleCornerStrategy().select(
        focused, windows, Direction.RIGHT, SelectionConfig()
    ) == b


def test_visible_corner_returns_none_when_no_candidate_qualifies():
    panel = make_window("panel", 200, -10, 250, 120, user_time=9, is_interesting=False)
    focused, _a, _b, windows = _right_row(panel)
    assert ClosestVisibleCornerStrategy().select(
        focused, windows, Direction.RIGHT, SelectionConfig()
    ) is None


def test_visible_corner_returns_lone_candidate_even_if_covered():
    focused = make_window("f", 0, 0, user_time=10)
    a = make_window("A", 150, 0, user_time=1)
    cover = make_window("cover", 100, -10, 200, 200, user_time=9, is_interesting=False)
    assert ClosestVisibleCornerStrategy().select(
        focused, [focused, a, cover], Direction.RIGHT, SelectionConfig()
    ) == a


def test_visible_corner_uses_edge_extension_for_right_and_down():
    focused = make_window("f", 0, 0, 300, 300, user_time=10)
    inner = make_window("inner", 100, 100, 50, 50, user_time=5)
    windows = [focused, inner]

    for direction in (Direction.RIGHT, Direction.DOWN):
        assert ClosestStrategy().select(focused, windows, direction, SelectionConfig()) == inner
        assert ClosestVisibleCornerStrategy().select(
            focused, windows, direction, SelectionConfig()
        ) is None


def test_visible_corner_ignores_include_minimized():
    focused = make_window("f", 0, 0, user_time=10)
    minimized = make_window("m", 150, 0, minimized=True, user_time=9)
    normal = make_window("n", 300, 0, user_time=5)
    config = SelectionConfig(include_minimized=True)
    windows = [focused, minimized, normal]
    assert ClosestStrategy().select(focused, windows, Direction.RIGHT, config) == minimized
    assert ClosestVisibleCornerStrategy().select(focused, windows, Direction.RIGHT, config) == normal


def test_visible_corner_left_checks_left_corners():
    focused = make_window("f", 500, 0, user_time=10)
    near = make_window("near", 300, 0, user_time=5)
    far = make_window("far", 100, 0, user_time=6)
    # Covers near's left corners (300, 0) and (300, 100) only
    strip = make_window("strip", 250, -10, 60, 120, user_time=9, is_interesting=False)
    assert ClosestVisibleCornerStrategy().select(
        focused, [focused, near, far, strip], Direction.LEFT, SelectionConfig()
    ) == far
