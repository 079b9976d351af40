#!/usr/bin/env python3
"""
Exceptions raised by the simulation core.
"""


class SimulationError(Exception):
    """Base class for all simulator errors."""


class InvalidConfiguration(SimulationError, ValueError):
    """A body configuration or scene template holds an unusable value."""


class InvalidOperation(SimulationError):
    """A structural request that would break a registry invariant."""
