"""
adjacentwm.selection.candidates - Candidate filtering.

Two independent questions are answered here:

    1. Inclusion: may this window be selected at all?  (not the focused
       window, an interesting window, minimized/monitor policy.)
    2. Direction: does this window lie in the requested direction?

Direction is policy specific.  The simple strategies use a strict
leading-edge comparison in all four directions.  The visible-corner
strategy adds an edge-extension requirement for RIGHT and DOWN: the
candidate must also reach past the focused window's far edge.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import SelectionConfig, WindowRef

log = logging.getLogger(__name__)


def is_included(
    focused: WindowRef,
    window: WindowRef,
    config: SelectionConfig,
) -> bool:
    """Return True if *window* passes the inclusion policy."""
    if window == focused:
        return False
    if not window.is_interesting:
        return False
    if window.minimized and not config.include_minimized:
        return False
    if not config.include_other_monitors and window.monitor_id != focused.monitor_id:
        return False
    return True


def filter_candidates(
    focused: WindowRef,
    windows: Iterable[WindowRef],
    config: SelectionConfig,
) -> list[WindowRef]:
    """
    Apply the inclusion policy to *windows*, keeping enumeration order.

    Args:
        focused: The currently focused window (never included).
        windows: Every window on the active workspace.
        config:  The configuration read for this command.

    Returns:
        The included windows, in the order they were given.
    """
    result = [w for w in windows if is_included(focused, w, config)]
    log.debug("Candidates after inclusion filter: %d", len(result))
    return result


# ============================================================================
# Directional membership
# ============================================================================
def crosses_leading_edge(
    focused: WindowRef,
    window: WindowRef,
    direction: Direction,
) -> bool:
    """
    Strict leading-edge test.

    LEFT:  window.x < focused.x        RIGHT: window.x > focused.x
    UP:    window.y < focused.y        DOWN:  window.y > focused.y
    """
    f, w = focused.rect, window.rect
    if direction == Direction.LEFT:
        return w.x < f.x
    if direction == Direction.RIGHT:
        return w.x > f.x
    if direction == Direction.UP:
        return w.y < f.y
    return w.y > f.y


def extends_past(
    focused: WindowRef,
    window: WindowRef,
    direction: Direction,
) -> bool:
    """
    Leading-edge test plus edge extension for RIGHT and DOWN.

    For RIGHT the window's right edge must also lie beyond the focused
    window's right edge; for DOWN the same holds for the bottom edge.
    LEFT and UP use the plain leading-edge test.
    """
    if not crosses_leading_edge(focused, window, direction):
        return False
    f, w = focused.rect, window.rect
    if direction == Direction.RIGHT:
        return w.right > f.right
    if direction == Direction.DOWN:
        return w.bottom > f.bottom
    return True
