#!/usr/bin/env python3
"""
Simulation controller: the single owner of all simulation state.

SimulationController holds the body registry, the physics engine, the
simulation clock, the run flag and the time step. Viewers and front ends talk
to it only through its methods; every method takes the controller's lock, so
at most one tick runs at a time even if a renderer lives on another thread.

Per tick
1) Forces from a snapshot of all positions, semi-implicit Euler update.
2) Every body's new position is appended to its trail.
3) Every non-central body is handed to its OrbitTracker.
4) The clock advances by dt.
Orbit events from step 3 are returned and passed to registered listeners.
"""
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional

from .constants import DEFAULT_DT
from .data_models import Body, BodyConfig, OrbitEvent
from .errors import InvalidOperation
from .physics import NBodyPhysics
from .presets_loader import default_new_body_config, solar_system_configs
from .registry import BodyRegistry
from .utils import try_float
from .vector_utils import Vec3

logger = logging.getLogger(__name__)

OrbitListener = Callable[[OrbitEvent], None]


class SimulationController:
    """
    Shared simulation state guarded by a re-entrant lock.
    """
    def __init__(self, configs: Optional[Iterable[BodyConfig]] = None, time_step: float = DEFAULT_DT):
        self.lock = threading.RLock()
        self.registry = BodyRegistry(solar_system_configs() if configs is None else configs)
        self.physics = NBodyPhysics()
        self.time = 0.0
        self.running = False
        self.time_step = DEFAULT_DT
        self.set_time_step(time_step)
        self.latest_events: Dict[int, OrbitEvent] = {}
        self._listeners: List[OrbitListener] = []
        self._in_tick = False

    # -- accessors ---------------------------------------------------------

    @property
    def bodies(self) -> List[Body]:
        return self.registry.bodies

    def positions(self) -> List[Vec3]:
        with self.lock:
            return [b.position for b in self.registry.bodies]

    def trails(self) -> List[List[Vec3]]:
        with self.lock:
            return [list(b.trail) for b in self.registry.bodies]

    def add_orbit_listener(self, callback: OrbitListener) -> None:
        with self.lock:
            self._listeners.append(callback)

    def remove_orbit_listener(self, callback: OrbitListener) -> None:
        with self.lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    # -- run control -------------------------------------------------------

    def start(self) -> None:
        with self.lock:
            self.running = True
            logger.info("Simulation started at t=%.1f", self.time)

    def stop(self) -> None:
        with self.lock:
            self.running = False
            logger.info("Simulation stopped at t=%.1f", self.time)

    def toggle(self) -> bool:
        with self.lock:
            if self.running:
                self.stop()
            else:
                self.start()
            return self.running

    def set_time_step(self, value) -> float:
        """
        Set dt from any user input.

        Non-numeric, zero or negative values fall back to DEFAULT_DT.
        """
        with self.lock:
            dt = try_float(value)
            if dt is None or dt <= 0.0:
                if value is not None:
                    logger.warning("Invalid time step %r, using %.1f", value, DEFAULT_DT)
                dt = DEFAULT_DT
            self.time_step = dt
            return dt

    def reset(self, configs: Optional[Iterable[BodyConfig]] = None) -> None:
        """
        Stop, zero the clock and restore every body and tracker to its configured state.

        Passing ``configs`` replaces the scene (e.g. when a preset is loaded).
        """
        with self.lock:
            self.registry.reset_all(configs)
            self.running = False
            self.time = 0.0
            self.latest_events.clear()
            logger.info("Simulation reset with %d bodies", len(self.registry))

    # -- configuration -----------------------------------------------------

    def configure_body(self, index: int, field: str, value) -> BodyConfig:
        """Edit one config field; every body is reinitialized from its config."""
        with self.lock:
            config = self.registry.update_body(index, field, value)
            self.latest_events.clear()
            return config

    def add_body(self, config: Optional[BodyConfig] = None) -> int:
        with self.lock:
            if config is None:
                config = default_new_body_config(len(self.registry))
            index = self.registry.add_body(config)
            self.latest_events.clear()
            return index

    def remove_body(self, index: int) -> BodyConfig:
        with self.lock:
            removed = self.registry.remove_body(index)
            self.latest_events.clear()
            return removed

    # -- stepping ----------------------------------------------------------

    def tick(self) -> List[OrbitEvent]:
        """Advance one tick if running; otherwise do nothing."""
        with self.lock:
            if not self.running:
                return []
            return self.step()

    def step(self) -> List[OrbitEvent]:
        """
        Advance exactly one tick of ``time_step`` seconds regardless of the run flag.

        Listeners run inside the tick; a listener that tries to step again
        raises InvalidOperation.
        """
        with self.lock:
            if self._in_tick:
                raise InvalidOperation("cannot start a tick from inside another tick")
            self._in_tick = True
            try:
                dt = self.time_step
                bodies = self.registry.bodies
                self.physics.euler_step(bodies, dt)

                events: List[OrbitEvent] = []
                for i, body in enumerate(bodies):
                    body.add_trail_point()
                    tracker = self.registry.tracker(i)
                    if tracker is not None:
                        events.extend(tracker.update(body.position, self.time))

                self.time += dt

                for event in events:
                    self.latest_events[event.body_index] = event
                    for listener in list(self._listeners):
                        listener(event)
            finally:
                self._in_tick = False
            return events

    def run_for(self, duration: float) -> List[OrbitEvent]:
        """Step until ``duration`` more simulation seconds have elapsed."""
        with self.lock:
            end = self.time + duration
            events: List[OrbitEvent] = []
            while self.time < end:
                events.extend(self.step())
            return events
