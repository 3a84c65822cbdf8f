"""
Navigation state machine: zoom-in, undo and reset.

The state is an explicit immutable value (NavigationState). Each
transition is a plain function returning a new state; the caller
(the explorer window, a script, a test) holds on to whichever state
is current and threads it into the next call.

The history stack holds previous viewports only, never the current one.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from .logging_setup import get_logger
from .viewport import DEFAULT_VIEWPORT, Viewport


MAX_ITER_CAP = 1000
ZOOM_FACTOR = 2.0


def iteration_budget(scale: float) -> int:
    """
    Iteration budget for a given scale: min(1000, floor(100 * log2(scale))).

    Never below 1, so shallow scales still give a valid Viewport. The cap
    is applied before converting to int, so a scale that has saturated to
    infinity gets the full budget.
    """
    budget = min(float(MAX_ITER_CAP), 100 * math.log2(scale))
    return max(1, int(math.floor(budget)))


@dataclass(frozen=True)
class NavigationState:
    """Current viewport plus the stack of viewports it was reached from."""

    current: Viewport = DEFAULT_VIEWPORT
    history: Tuple[Viewport, ...] = field(default_factory=tuple)

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    @property
    def depth(self) -> int:
        return len(self.history)


def zoom_in(state: NavigationState, px: float, py: float,
            width: int, height: int) -> NavigationState:
    """
    Zoom 2x into the plane point under pixel (px, py).

    The current viewport is pushed onto the history; the new viewport is
    centered on the clicked point with a budget recomputed for its scale.
    """
    current = state.current
    center_x, center_y = current.pixel_to_plane(px, py, width, height)
    new_scale = current.scale * ZOOM_FACTOR
    new_view = Viewport(
        center_x=center_x,
        center_y=center_y,
        scale=new_scale,
        max_iter=iteration_budget(new_scale),
    )
    get_logger().info("Zoom in to %s (max_iter=%s, depth=%s)",
                      new_view.describe(), new_view.max_iter, state.depth + 1)
    return NavigationState(current=new_view, history=state.history + (current,))


def undo(state: NavigationState) -> NavigationState:
    """
    Restore the most recent previous viewport exactly, budget included.

    With an empty history the state is returned unchanged.
    """
    if not state.history:
        return state
    previous = state.history[-1]
    get_logger().info("Undo zoom to %s", previous.describe())
    return NavigationState(current=previous, history=state.history[:-1])


def reset() -> NavigationState:
    """Default viewport (0, 0, 200, 100) with an empty history."""
    get_logger().info("Reset view")
    return NavigationState()
