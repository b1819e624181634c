"""
adjacentwm.selection - Platform independent neighbour selection.

This package contains:
    - geometry   : Rect and Direction primitives
    - model      : WindowRef, SelectionPolicy, SelectionConfig, CornerVisibility
    - candidates : Inclusion policy and directional membership tests
    - visibility : Corner visibility against higher-z windows
    - strategies : Closest, HighestZOrder and ClosestVisibleCorner
    - selector   : DirectionalWindowSelector and the host interfaces
"""

from adjacentwm.selection.geometry import Direction, Rect
from adjacentwm.selection.model import (
    CornerVisibility,
    SelectionConfig,
    SelectionPolicy,
    WindowRef,
)
from adjacentwm.selection.strategies import (
    ClosestStrategy,
    ClosestVisibleCornerStrategy,
    HighestZOrderStrategy,
    SelectionStrategy,
    get_strategy,
)
from adjacentwm.selection.selector import (
    ActivationSink,
    ConfigProvider,
    DirectionalWindowSelector,
    WindowEnumerator,
    select_neighbor,
)

__all__ = [
    "Direction",
    "Rect",
    "CornerVisibility",
    "SelectionConfig",
    "SelectionPolicy",
    "WindowRef",
    "SelectionStrategy",
    "ClosestStrategy",
    "HighestZOrderStrategy",
    "ClosestVisibleCornerStrategy",
    "get_strategy",
    "WindowEnumerator",
    "ActivationSink",
    "ConfigProvider",
    "DirectionalWindowSelector",
    "select_neighbor",
]
