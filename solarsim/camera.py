#!/usr/bin/env python3
"""
Camera utilities for a top-down view of the orbital plane.

World positions are 3D sim-unit vectors; the camera looks down the z axis, so
only x and y reach the screen. Screen y grows downwards, world y upwards.
"""
from typing import Optional, Sequence, Tuple

from .constants import (
    DEFAULT_UNITS_PER_PIXEL,
    MAX_UNITS_PER_PIXEL,
    MIN_UNITS_PER_PIXEL,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import clamp


class Camera2D:
    """
    Maps world coordinates (sim units) to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), units_per_pixel=DEFAULT_UNITS_PER_PIXEL):
        self.center = [center[0], center[1]]
        self.upp = units_per_pixel
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Sequence[float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) / self.upp + self.viewport_size[0] / 2
        py = -(pos[1] - cy) / self.upp + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.upp + cx
        wy = -(screen[1] - self.viewport_size[1] / 2) * self.upp + cy
        return (wx, wy)

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        """Zoom so that the world point under ``pivot_screen`` stays put."""
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.upp = clamp(self.upp * (1.0 / factor), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
        if pivot_screen is not None and before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.center[0] -= dx_pixels * self.upp
        self.center[1] += dy_pixels * self.upp

    def frame(self, points: Sequence[Sequence[float]], margin: float = 1.3) -> None:
        """Center on ``points`` and zoom out until they all fit with ``margin``."""
        if not points:
            self.center = [0.0, 0.0]
            self.upp = DEFAULT_UNITS_PER_PIXEL
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        minx, maxx = min(xs), max(xs)
        miny, maxy = min(ys), max(ys)
        width = (maxx - minx) * margin + 1.0
        height = (maxy - miny) * margin + 1.0
        upp_x = width / max(self.viewport_size[0], 1)
        upp_y = height / max(self.viewport_size[1], 1)
        self.center = [(minx + maxx) / 2, (miny + maxy) / 2]
        self.upp = clamp(max(upp_x, upp_y), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
