"""
adjacentwm.selection.visibility - Corner visibility analysis.

Answers, for each window on the workspace, "which of my four corner points
are not covered by a window stacked above me?".  This is a point-coverage
test: occluders are never merged or clipped, a corner is hidden as soon as
any single higher window covers it.

The z-order is approximated by user_time: the most recently used window is
topmost.  The stack is built once per command as an immutable tuple and
every window is analysed against the slice in front of it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from adjacentwm.selection.geometry import Rect
from adjacentwm.selection.model import CornerVisibility, WindowRef

log = logging.getLogger(__name__)


def corner_visibility(target: Rect, above: Iterable[Rect]) -> CornerVisibility:
    """
    Compute the visibility of the four corners of *target*.

    Args:
        target: Rectangle of the window being analysed.
        above:  Rectangles of every window stacked above it.

    Returns:
        CornerVisibility where a corner is False if any rectangle in
        *above* covers that point (inclusive bounds).
    """
    corners = [target.top_left, target.top_right, target.bottom_left, target.bottom_right]
    visible = [True, True, True, True]

    for rect in above:
        for i, (cx, cy) in enumerate(corners):
            if visible[i] and rect.covers_point(cx, cy):
                visible[i] = False
        if not any(visible):
            break

    return CornerVisibility(*visible)


def z_order(windows: Iterable[WindowRef]) -> tuple[WindowRef, ...]:
    """
    Return *windows* front-to-back: highest user_time first.

    The sort is stable, so windows with the same user_time keep their
    enumeration order.  Minimized windows are not on screen and are left
    out of the stack.
    """
    stacked = [w for w in windows if not w.minimized]
    return tuple(sorted(stacked, key=lambda w: w.user_time, reverse=True))


def stack_visibility(stack: Sequence[WindowRef]) -> dict[WindowRef, CornerVisibility]:
    """
    Analyse every window of a front-to-back *stack*.

    Window i is tested only against windows 0..i-1, so stack[0] always
    has all four corners visible.
    """
    rects = tuple(w.rect for w in stack)
    result: dict[WindowRef, CornerVisibility] = {}
    for index, window in enumerate(stack):
        vis = corner_visibility(window.rect, rects[:index])
        result[window] = vis
        log.debug("Z%-2d %s -> %s", index, window, vis)
    return result
