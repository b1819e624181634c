"""
adjacentwm.selection.selector - DirectionalWindowSelector.

The single entry point of the selection core.  For every directional
command it:

    1. Reads the configuration (fresh, never cached).
    2. Takes one snapshot of the focused window and the active workspace.
    3. Runs the configured strategy over that snapshot.
    4. Asks the host to activate the winner, if there is one.

The host side is reached only through the three small interfaces below,
so the core never touches a concrete windowing API.  Tests supply
in-memory fakes.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Sequence
from typing import Optional

from adjacentwm.selection.geometry import Direction
from adjacentwm.selection.model import SelectionConfig, WindowRef
from adjacentwm.selection.strategies import get_strategy

log = logging.getLogger(__name__)


# ============================================================================
# Host interfaces
# ============================================================================
class WindowEnumerator(abc.ABC):
    """Read-only snapshot provider for the active workspace."""

    @abc.abstractmethod
    def list_windows_on_active_workspace(self) -> Sequence[WindowRef]:
        ...

    @abc.abstractmethod
    def get_focused_window(self) -> Optional[WindowRef]:
        ...


class ActivationSink(abc.ABC):
    """Receives the selected window.  Best effort, no result expected."""

    @abc.abstractmethod
    def activate(self, window: WindowRef) -> None:
        ...


class ConfigProvider(abc.ABC):
    """Source of the selection settings."""

    @abc.abstractmethod
    def read_config(self) -> SelectionConfig:
        """
        Return the current configuration.

        Must not raise: unrecognised values fall back to defaults.
        """
        ...


# ============================================================================
# Pure selection
# ============================================================================
def select_neighbor(
    focused: WindowRef,
    windows: Sequence[WindowRef],
    direction: Direction,
    config: SelectionConfig,
) -> Optional[WindowRef]:
    """
    Select the neighbour of *focused* in *direction* from a snapshot.

    Side-effect free: calling it twice with the same arguments returns the
    same window.
    """
    strategy = get_strategy(config.policy)
    target = strategy.select(focused, windows, direction, config)
    if target == focused:
        # Strategies filter the focused window out; keep the guarantee here
        log.error("%r selected the focused window, ignoring", strategy)
        return None
    return target


# ============================================================================
# DirectionalWindowSelector
# ============================================================================
class DirectionalWindowSelector:
    """
    Glue between the host collaborators and the selection strategies.

    Usage:
        selector = DirectionalWindowSelector(enumerator, sink, config)
        selector.on_directional_command(Direction.LEFT)
    """

    def __init__(
        self,
        enumerator: WindowEnumerator,
        sink: ActivationSink,
        config: ConfigProvider,
    ) -> None:
        self._enumerator = enumerator
        self._sink = sink
        self._config = config

    def on_directional_command(self, direction: Direction) -> Optional[WindowRef]:
        """
        Handle one directional command.

        A missing or uninteresting focused window is a silent no-op.  An
        enumerator failure is treated as an empty workspace.

        Returns:
            The window that was handed to the activation sink, or None.
        """
        config = self._config.read_config()

        focused = self._snapshot_focused()
        if focused is None:
            log.debug("%s: no focused window", direction.value)
            return None
        if not focused.is_interesting:
            log.debug("%s: focused window %s is not selectable", direction.value, focused)
            return None

        windows = self._snapshot_windows()
        target = select_neighbor(focused, windows, direction, config)
        if target is None:
            log.debug(
                "%s: no window found in that direction (%s, %d windows)",
                direction.value,
                config.policy.value,
                len(windows),
            )
            return None

        log.info("adjacent_%s: %s -> %s", direction.value, focused, target)
        self._sink.activate(target)
        return target

    # ------------------------------------------------------------------
    # Snapshot helpers
    # ------------------------------------------------------------------
    def _snapshot_focused(self) -> Optional[WindowRef]:
        try:
            return self._enumerator.get_focused_window()
        except Exception:
            log.exception("Could not query the focused window")
            return None

    def _snapshot_windows(self) -> tuple[WindowRef, ...]:
        try:
            return tuple(self._enumerator.list_windows_on_active_workspace())
        except Exception:
            log.exception("Window enumeration failed, treating as empty")
            return ()
