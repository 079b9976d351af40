#!/usr/bin/env python3
"""
Solar orbit simulator entry point.

What this module does
- Builds a SimulationController from the built-in solar system or a JSON
  template (templates/*.json).
- Either opens the Pygame viewport, or runs headless for a fixed span of
  simulation time and logs every completed orbit.

Units and conventions
- Sim units: 1 distance unit = 1e6 km, 1 mass unit = 1e24 kg, time in seconds.
- dt is simulation seconds per tick. Earth needs about 3.16e7 simulation
  seconds for one revolution, so interactive runs usually want a large dt or
  several ticks per frame.

Running
1) Install: `pip install -e .`
2) Viewport: `python solar_sim.py --preset solar_system.json --dt 3600 --ticks-per-frame 24`
3) Headless: `python solar_sim.py --headless --preset sun_earth.json --dt 3600 --duration 3.3e7`
"""

import argparse
import logging
import sys
from typing import List, Optional

from solarsim.data_models import OrbitEvent
from solarsim.errors import SimulationError
from solarsim.presets_loader import list_templates, load_template, solar_system_configs
from solarsim.renderer import PygameRenderer
from solarsim.simulation import SimulationController
from solarsim.utils import format_elapsed

logger = logging.getLogger("solar_sim")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate planets around a star and detect completed orbits.")
    parser.add_argument("--preset", help="template file name under templates/ (default: built-in solar system)")
    parser.add_argument("--list-presets", action="store_true", help="list available templates and exit")
    parser.add_argument("--dt", default=None, help="simulation seconds per tick (default 1.0, or the preset's)")
    parser.add_argument("--ticks-per-frame", type=int, default=1, help="ticks run per rendered frame")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--duration", type=float, default=3.16e7,
                        help="simulation seconds to run in headless mode (default: about one year)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_simulation(preset: Optional[str], dt) -> SimulationController:
    if preset:
        configs, preset_dt, name = load_template(preset)
        logger.info("Using preset %r", name)
    else:
        configs, preset_dt = solar_system_configs(), None
    return SimulationController(configs, time_step=dt if dt is not None else preset_dt)


def run_headless(sim: SimulationController, duration: float) -> List[OrbitEvent]:
    sim.start()
    events = sim.run_for(duration)
    sim.stop()
    confirmed = [e for e in events if e.is_confirmed]
    for index, body in enumerate(sim.bodies):
        if index == 0:
            continue
        tracker = sim.registry.tracker(index)
        last = next((e for e in reversed(confirmed) if e.body_index == index), None)
        when = format_elapsed(last.sim_time) if last else "-"
        print(f"{body.name:<10} orbits={tracker.orbit_count:<4} last={when}")
    return confirmed


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(levelname)s - %(module)s - %(message)s")

    if args.list_presets:
        for file_name, display in list_templates():
            print(f"{file_name}: {display}")
        return 0

    try:
        sim = build_simulation(args.preset, args.dt)
    except SimulationError as exc:
        logger.error("Cannot build simulation: %s", exc)
        return 2

    if args.headless:
        run_headless(sim, args.duration)
        return 0

    PygameRenderer(sim, ticks_per_frame=args.ticks_per_frame).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
