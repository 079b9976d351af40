#!/usr/bin/env python3
"""
Shared constants for the solar orbit simulator.

Simulation units
- 1 sim distance unit = 1e6 km
- 1 sim mass unit = 1e24 kg
- time is in seconds throughout

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Scale factors
DIST_SCALE = 1e6  # km per sim distance unit
RADIUS_SCALE = 1e6  # km per sim distance unit (body radii)
MASS_SCALE = 1e24  # kg per sim mass unit
MIN_RADIUS = 0.5  # sim units; display floor so small bodies stay visible

# Physical constants
G_SI = 6.67430e-20  # km^3 kg^-1 s^-2
G_SIM = G_SI * DIST_SCALE ** -3 * MASS_SCALE  # sim_unit^3 sim_mass^-1 s^-2

# Integrator controls
DEFAULT_DT = 1.0  # simulation seconds per tick
TRAIL_CAPACITY = 500  # samples kept per body

# Orbit detection
FRAME_RATE = 60  # frames per simulation second used for detection timestamps
ORBIT_THRESHOLD_RATIO = 0.10  # entry threshold as a fraction of the initial radius
ORBIT_EXIT_FACTOR = 2.0  # exit threshold multiplier (hysteresis band)

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (0, 0, 17)
GRID_COLOR = (68, 68, 68)
GRID_FINE_COLOR = (34, 34, 34)
HUD_COLOR = (220, 220, 220)
CONFIRMED_COLOR = (0, 255, 0)
PENDING_COLOR = (255, 200, 0)
DEFAULT_BODY_COLOR = (200, 200, 255)

# Camera zoom bounds (sim units per pixel)
DEFAULT_UNITS_PER_PIXEL = 1.5
MIN_UNITS_PER_PIXEL = 1e-3
MAX_UNITS_PER_PIXEL = 1e3
