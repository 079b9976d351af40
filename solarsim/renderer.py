#!/usr/bin/env python3
"""
Pygame viewport: draws bodies, trails, grid and orbit events, and turns key
presses into SimulationController commands.

The renderer is a consumer of the simulation: it reads positions, trails and
the latest orbit event per body, and issues start/stop/reset, time-step and
add/remove requests. It never touches bodies directly.

Controls
- Space: start/stop       R: reset          +/-: double/halve dt
- A: add a body           Delete/Backspace: remove the last body
- Wheel: zoom             Drag: pan         Arrows: pan
"""
import logging
import math
import time
from typing import Optional, Tuple

import pygame
from pygame import gfxdraw

from .camera import Camera2D
from .constants import (
    BACKGROUND_COLOR,
    CONFIRMED_COLOR,
    GRID_COLOR,
    GRID_FINE_COLOR,
    HUD_COLOR,
    PENDING_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .errors import SimulationError
from .simulation import SimulationController
from .utils import format_elapsed
from .vector_utils import vec_len

logger = logging.getLogger(__name__)

SAFE_COORD_LIMIT = 30000


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameRenderer:
    """
    Pygame loop: one batch of simulation ticks, then one frame.
    """
    def __init__(self, sim: SimulationController, ticks_per_frame: int = 1, fps: int = 60):
        self.sim = sim
        self.ticks_per_frame = max(1, int(ticks_per_frame))
        self.fps = fps
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.running = True

    def auto_frame_camera(self):
        """Fit every body's orbit (its distance from the origin in all directions) into view."""
        positions = self.sim.positions()
        reach = max((vec_len(p) for p in positions), default=0.0)
        self.camera.frame([(-reach, -reach), (reach, reach)], margin=1.1)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Solar Orbit Simulator")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 16)
        self.auto_frame_camera()

        last_time = time.perf_counter()
        try:
            while self.running:
                now = time.perf_counter()
                real_dt = now - last_time
                last_time = now

                self.handle_events(real_dt)
                for _ in range(self.ticks_per_frame):
                    self.sim.tick()
                self.draw()
                self.clock.tick(self.fps)
        finally:
            pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2, 3):
                self.dragging = True
                self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 2, 3):
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                mouse = pygame.mouse.get_pos()
                self.camera.pan_pixels(mouse[0] - self.drag_start_screen[0],
                                       mouse[1] - self.drag_start_screen[1])
                self.drag_start_screen = mouse

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key):
        sim = self.sim
        if key == pygame.K_SPACE:
            sim.toggle()
        elif key == pygame.K_r:
            sim.reset()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            sim.set_time_step(sim.time_step * 2.0)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            sim.set_time_step(sim.time_step / 2.0)
        elif key == pygame.K_a:
            sim.add_body()
        elif key in (pygame.K_DELETE, pygame.K_BACKSPACE):
            try:
                sim.remove_body(len(sim.registry) - 1)
            except SimulationError as exc:
                logger.warning("Cannot remove body: %s", exc)

    def draw_grid(self, surf):
        w, h = self.camera.viewport_size
        upp = self.camera.upp

        # Grid lines roughly 100 pixels apart, rounded to a 1-2-5 sequence
        spacing_units = upp * 100
        pow10 = 10 ** math.floor(math.log10(spacing_units)) if spacing_units > 0 else 1
        mant = spacing_units / pow10
        if mant < 2:
            spacing = 1 * pow10
        elif mant < 5:
            spacing = 2 * pow10
        else:
            spacing = 5 * pow10
        fine = spacing / 5

        left, top = self.camera.screen_to_world((0, 0))
        right, bottom = self.camera.screen_to_world((w, h))
        for step, color in ((fine, GRID_FINE_COLOR), (spacing, GRID_COLOR)):
            x = math.floor(left / step) * step
            while x <= right:
                sx, _ = self.camera.world_to_screen((x, 0.0))
                pygame.draw.line(surf, color, (sx, 0), (sx, h), 1)
                x += step
            y = math.floor(bottom / step) * step
            while y <= top:
                _, sy = self.camera.world_to_screen((0.0, y))
                pygame.draw.line(surf, color, (0, sy), (w, sy), 1)
                y += step

    def draw_text(self, surf, text, x, y, color=HUD_COLOR):
        surf.blit(self.font.render(text, True, color), (x, y))

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.draw_grid(surf)

        # Snapshot for consistency during draw
        with self.sim.lock:
            bodies = [(b.name, b.color, b.radius, b.position, list(b.trail)) for b in self.sim.bodies]
            events = dict(self.sim.latest_events)
            sim_time = self.sim.time
            dt = self.sim.time_step
            running = self.sim.running

        for _, color, _, _, trail in bodies:
            pts = [p for p in (_safe_point(self.camera.world_to_screen(t)) for t in trail) if p]
            if len(pts) > 1:
                pygame.draw.aalines(surf, color, False, pts)

        for _, color, radius, position, _ in bodies:
            sp = _safe_point(self.camera.world_to_screen(position))
            if sp is None:
                continue
            vis_r = min(50, max(2, int(radius / self.camera.upp)))
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, color)

        self.draw_text(surf, "Space: start/stop | R: reset | +/-: dt | A: add | Del: remove | Wheel: zoom | Drag: pan", 10, 10)
        self.draw_text(surf, f"t = {sim_time:.1f} s ({format_elapsed(sim_time)})  dt = {dt:g} s  "
                             f"[{'Running' if running else 'Stopped'}]", 10, 30)

        y = 55
        for index, (name, color, _, _, _) in enumerate(bodies):
            event = events.get(index)
            if event is None:
                continue
            label = "confirmed" if event.is_confirmed else "pending"
            self.draw_text(surf, f"{name}: orbit {event.orbit_count} ({label}) at "
                                 f"{event.sim_time:.1f} s ({format_elapsed(event.sim_time)})",
                           10, y, CONFIRMED_COLOR if event.is_confirmed else PENDING_COLOR)
            y += 18

        pygame.display.flip()
