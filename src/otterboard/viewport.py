"""Pan/zoom gesture engine for the canvas.

The transform is a plain mutable object that never goes through widget
reactivity. Every tick that changes it calls ``surface.apply_transform``
once, which the canvas implements as a single style update on one
widget. The zoom percentage shown to the user is a separate cold value
refreshed only when a gesture ends or a zoom button is pressed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Protocol

MIN_SCALE = 0.2
MAX_SCALE = 3.0
ZOOM_STEP = 0.1
PINCH_SENSITIVITY = 0.005

Point = tuple[float, float]


def clamp_scale(scale: float) -> float:
    return min(max(scale, MIN_SCALE), MAX_SCALE)


@dataclass
class Transform:
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0


class Surface(Protocol):
    def apply_transform(self, transform: Transform) -> None: ...


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class GestureEngine:
    """Turns pointer and touch streams into transform updates.

    ``is_blocked(target)`` decides whether a gesture may start on a
    target; the canvas passes a check for buttons, inputs and widgets
    marked ``no-drag``. ``on_zoom_changed(percent)`` fires at gesture
    boundaries only.
    """

    def __init__(
        self,
        surface: Surface,
        is_blocked: Callable[[Any], bool] = lambda target: False,
        on_zoom_changed: Callable[[int], None] | None = None,
    ) -> None:
        self.surface = surface
        self.is_blocked = is_blocked
        self.on_zoom_changed = on_zoom_changed
        self.transform = Transform()
        self.zoom_percent = 100
        self._panning = False
        self._last_point: Point | None = None
        self._pinch_distance: float | None = None

    @property
    def active(self) -> bool:
        return self._panning

    def _apply(self) -> None:
        self.surface.apply_transform(self.transform)

    def _refresh_zoom(self) -> None:
        percent = round(self.transform.scale * 100)
        if percent != self.zoom_percent:
            self.zoom_percent = percent
            if self.on_zoom_changed is not None:
                self.on_zoom_changed(percent)

    def _pan_to(self, point: Point) -> None:
        last = self._last_point
        self.transform.x += point[0] - last[0]
        self.transform.y += point[1] - last[1]
        self._last_point = point
        self._apply()

    # -- pointer --

    def press(self, x: float, y: float, target: Any = None) -> bool:
        """Start a pan. Returns False if target is an interactive control."""
        if self.is_blocked(target):
            return False
        self._panning = True
        self._last_point = (x, y)
        self._pinch_distance = None
        return True

    def move(self, x: float, y: float) -> None:
        if not self._panning or self._last_point is None:
            return
        self._pan_to((x, y))

    def release(self) -> None:
        """End the gesture. The transform is kept."""
        self._panning = False
        self._last_point = None
        self._pinch_distance = None
        self._refresh_zoom()

    # -- touch --

    def touch_start(self, points: list[Point], target: Any = None) -> bool:
        if self.is_blocked(target):
            return False
        if len(points) == 2:
            self._panning = True
            self._pinch_distance = _distance(points[0], points[1])
            self._last_point = None
            return True
        if len(points) == 1:
            self._panning = True
            self._last_point = points[0]
            self._pinch_distance = None
            return True
        return False

    def touch_move(self, points: list[Point]) -> None:
        if not self._panning:
            return
        if len(points) == 2 and self._pinch_distance is not None:
            distance = _distance(points[0], points[1])
            delta = distance - self._pinch_distance
            self.transform.scale = clamp_scale(self.transform.scale + delta * PINCH_SENSITIVITY)
            self._pinch_distance = distance
            self._apply()
        elif len(points) == 1 and self._last_point is not None:
            self._pan_to(points[0])

    def touch_end(self) -> None:
        self.release()

    # -- buttons --

    def zoom_by(self, delta: float) -> None:
        self.transform.scale = clamp_scale(self.transform.scale + delta)
        self._apply()
        self._refresh_zoom()

    def zoom_in(self) -> None:
        self.zoom_by(ZOOM_STEP)

    def zoom_out(self) -> None:
        self.zoom_by(-ZOOM_STEP)

    def reset(self) -> None:
        self.transform = Transform()
        self._apply()
        self._refresh_zoom()
