"""
adjacentwm.selection.model - Snapshot types consumed by the selector.

Everything here is immutable and rebuilt for every directional command from
a fresh enumeration of the active workspace.  Nothing survives between
commands except the configuration the host reads.
"""

from __future__ import annotations

import enum
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Optional

from adjacentwm.selection.geometry import Direction, Rect


# ============================================================================
# SelectionPolicy enum
# ============================================================================
class SelectionPolicy(enum.Enum):
    """Which strategy ranks the directionally eligible candidates."""
    CLOSEST = "closest"
    HIGHEST_Z_ORDER = "highest-z-order"
    CLOSEST_VISIBLE_CORNER = "closest-visible-corner"

    @classmethod
    def parse(cls, value: object) -> Optional[SelectionPolicy]:
        """
        Resolve a stored setting into a policy.

        Accepts a SelectionPolicy, its string value (case-insensitive,
        '_' and '-' interchangeable) or its ordinal (0, 1, 2).

        Returns:
            The policy, or None if *value* is not recognised.
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True/False are never valid ordinals
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            return None
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for policy in cls:
                if policy.value == key:
                    return policy
        return None


# ============================================================================
# SelectionConfig
# ============================================================================
@dataclass(frozen=True, slots=True)
class SelectionConfig:
    """Configuration values read fresh for each directional command."""

    include_minimized: bool = False
    include_other_monitors: bool = False
    policy: SelectionPolicy = SelectionPolicy.CLOSEST


# ============================================================================
# WindowRef
# ============================================================================
@dataclass(frozen=True, slots=True)
class WindowRef:
    """
    Opaque reference to one window, frozen at enumeration time.

    Equality and hashing are based solely on *handle*, so two snapshots of
    the same window compare equal even if their geometry differs.

    Attributes:
        handle:         Host-specific identifier (an HWND on Windows).
        rect:           Frame rectangle.
        monitor_id:     Index of the monitor the window is on.
        minimized:      True if the window is iconified.
        user_time:      Recency stamp; higher means more recently used.
        is_interesting: True for normal application windows (not desktop,
                        panels, docks or other shell surfaces).
        title:          Only used for logging.
    """

    handle: Hashable
    rect: Rect = field(compare=False)
    monitor_id: int = field(default=0, compare=False)
    minimized: bool = field(default=False, compare=False)
    user_time: int = field(default=0, compare=False)
    is_interesting: bool = field(default=True, compare=False)
    title: str = field(default="", compare=False)

    def __str__(self) -> str:
        flags = " min" if self.minimized else ""
        return (
            f"[{self.handle}] {self.title!r} | {self.rect} | "
            f"mon:{self.monitor_id} t:{self.user_time}{flags}"
        )


# ============================================================================
# CornerVisibility
# ============================================================================
@dataclass(frozen=True, slots=True)
class CornerVisibility:
    """Which of the four corner points of a window are not covered."""

    top_left: bool = True
    top_right: bool = True
    bottom_left: bool = True
    bottom_right: bool = True

    @property
    def any_visible(self) -> bool:
        return self.top_left or self.top_right or self.bottom_left or self.bottom_right

    @property
    def all_visible(self) -> bool:
        return self.top_left and self.top_right and self.bottom_left and self.bottom_right

    def faces(self, direction: Direction) -> bool:
        """
        True if at least one corner on the *direction* side is visible.

        LEFT checks the two left corners, RIGHT the two right corners,
        UP the two top corners and DOWN the two bottom corners.
        """
        if direction == Direction.LEFT:
            return self.top_left or self.bottom_left
        if direction == Direction.RIGHT:
            return self.top_right or self.bottom_right
        if direction == Direction.UP:
            return self.top_left or self.top_right
        return self.bottom_left or self.bottom_right
