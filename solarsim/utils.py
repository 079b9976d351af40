#!/usr/bin/env python3
"""
General utilities for the solar orbit simulator.
"""
import math
from typing import Optional, Tuple

from .constants import DEFAULT_BODY_COLOR

SECONDS_PER_DAY = 24 * 3600


def try_float(val) -> Optional[float]:
    """Parse ``val`` as a finite float, or return None."""
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f


def format_elapsed(sim_seconds: float) -> str:
    """Human readable elapsed time: hours under a day, days under a year, else years."""
    days = sim_seconds / SECONDS_PER_DAY
    if days < 1:
        return f"{days * 24:.2f} h"
    if days < 365:
        return f"{days:.2f} d"
    return f"{days / 365:.3f} y"


def coerce_color(c, default: Tuple[int, int, int] = DEFAULT_BODY_COLOR) -> Tuple[int, int, int]:
    """
    Turn ``"#rrggbb"`` or an ``[r, g, b]`` sequence into a clamped RGB tuple.

    Anything unparseable yields ``default``.
    """
    try:
        if isinstance(c, str):
            h = c.strip().lstrip("#")
            if len(h) != 6:
                return default
            r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
        else:
            r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError):
        return default
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)
