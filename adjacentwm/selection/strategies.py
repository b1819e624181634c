"""
adjacentwm.selection.strategies - Interchangeable tie-break policies.

Each strategy is a class implementing the `SelectionStrategy` interface.
It receives the focused window and every window on the active workspace,
applies the inclusion filter and its own directional rule, and returns at
most one winner.

Available strategies:
    - ClosestStrategy              : nearest leading edge along the axis
    - HighestZOrderStrategy        : most recently used eligible window
    - ClosestVisibleCornerStrategy : nearest window with a visible corner
                                     on the side facing the direction
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from adjacentwm.selection.candidates import (
    crosses_leading_edge,
    extends_past,
    filter_candidates,
)
from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import SelectionConfig, SelectionPolicy, WindowRef
from adjacentwm.selection.visibility import stack_visibility, z_order

log = logging.getLogger(__name__)


def is_nearer(candidate: WindowRef, best: WindowRef, direction: Direction) -> bool:
    """
    True if *candidate* is strictly nearer than *best* along *direction*.

    Only the leading coordinate is compared: for LEFT the greater x wins,
    for RIGHT the smaller x, for UP the greater y, for DOWN the smaller y.
    Equal coordinates are not nearer, so the first one encountered stays.
    """
    c, b = candidate.rect, best.rect
    if direction == Direction.LEFT:
        return c.x > b.x
    if direction == Direction.RIGHT:
        return c.x < b.x
    if direction == Direction.UP:
        return c.y > b.y
    return c.y < b.y


def closest_in_direction(
    focused: WindowRef,
    candidates: Iterable[WindowRef],
    direction: Direction,
) -> Optional[WindowRef]:
    """Nearest candidate whose leading edge lies beyond the focused one."""
    best: Optional[WindowRef] = None
    for candidate in candidates:
        if not crosses_leading_edge(focused, candidate, direction):
            continue
        if best is None or is_nearer(candidate, best, direction):
            best = candidate
    return best


# ============================================================================
# SelectionStrategy (abstract base)
# ============================================================================
class SelectionStrategy(abc.ABC):
    """
    Interface for a neighbour selection policy.

    Implementations must be side-effect free: the same snapshot and
    configuration always yield the same result.
    """

    @property
    @abc.abstractmethod
    def policy(self) -> SelectionPolicy:
        """The policy this strategy implements."""
        ...

    @abc.abstractmethod
    def select(
        self,
        focused: WindowRef,
        windows: Sequence[WindowRef],
        direction: Direction,
        config: SelectionConfig,
    ) -> Optional[WindowRef]:
        """
        Pick the neighbour of *focused* in *direction*.

        Args:
            focused:   The focused window.
            windows:   Every window on the active workspace, in
                       enumeration order.  May include *focused*.
            direction: The requested direction.
            config:    Inclusion settings for this command.

        Returns:
            The selected window, or None if nothing qualifies.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.policy.value}>"


# ============================================================================
# Closest
# ============================================================================
class ClosestStrategy(SelectionStrategy):
    """
    Nearest window by leading edge.

    LEFT picks the greatest x left of the focused window, RIGHT the
    smallest x right of it, UP and DOWN the same on the y axis.
    """

    @property
    def policy(self) -> SelectionPolicy:
        return SelectionPolicy.CLOSEST

    def select(
        self,
        focused: WindowRef,
        windows: Sequence[WindowRef],
        direction: Direction,
        config: SelectionConfig,
    ) -> Optional[WindowRef]:
        candidates = filter_candidates(focused, windows, config)
        return closest_in_direction(focused, candidates, direction)


# ============================================================================
# HighestZOrder
# ============================================================================
class HighestZOrderStrategy(SelectionStrategy):
    """Most recently used window among those in the direction."""

    @property
    def policy(self) -> SelectionPolicy:
        return SelectionPolicy.HIGHEST_Z_ORDER

    def select(
        self,
        focused: WindowRef,
        windows: Sequence[WindowRef],
        direction: Direction,
        config: SelectionConfig,
    ) -> Optional[WindowRef]:
        best: Optional[WindowRef] = None
        for candidate in filter_candidates(focused, windows, config):
            # Minimized windows are never stacked, whatever the config says
            if candidate.minimized:
                continue
            if not crosses_leading_edge(focused, candidate, direction):
                continue
            if best is None or candidate.user_time > best.user_time:
                best = candidate
        return best


# ============================================================================
# ClosestVisibleCorner
# ============================================================================
class ClosestVisibleCornerStrategy(SelectionStrategy):
    """
    Nearest window that shows a corner on the side facing the direction.

    The workspace is stacked front-to-back by user_time and every window's
    corner visibility is computed against the windows above it.  Among the
    candidates that extend past the focused window, the nearest one with a
    visible facing corner wins.  A lone candidate is returned even if it
    is completely covered.  This strategy ignores include_minimized.
    """

    @property
    def policy(self) -> SelectionPolicy:
        return SelectionPolicy.CLOSEST_VISIBLE_CORNER

    def select(
        self,
        focused: WindowRef,
        windows: Sequence[WindowRef],
        direction: Direction,
        config: SelectionConfig,
    ) -> Optional[WindowRef]:
        stack = z_order(windows)
        visibility = stack_visibility(stack)

        candidates = [
            w
            for w in filter_candidates(focused, windows, config)
            if not w.minimized and extends_past(focused, w, direction)
        ]
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        best: Optional[WindowRef] = None
        for candidate in candidates:
            if not visibility[candidate].faces(direction):
                log.debug("Skipping %s: no visible %s corner", candidate, direction.value)
                continue
            if best is None or is_nearer(candidate, best, direction):
                best = candidate
        return best


# ============================================================================
# Registry
# ============================================================================
STRATEGIES: dict[SelectionPolicy, SelectionStrategy] = {
    s.policy: s
    for s in (
        ClosestStrategy(),
        HighestZOrderStrategy(),
        ClosestVisibleCornerStrategy(),
    )
}


def get_strategy(policy: SelectionPolicy) -> SelectionStrategy:
    """Look up the strategy for *policy*, falling back to Closest."""
    strategy = STRATEGIES.get(policy)
    if strategy is None:
        log.warning("No strategy for policy %r, using closest", policy)
        return STRATEGIES[SelectionPolicy.CLOSEST]
    return strategy
