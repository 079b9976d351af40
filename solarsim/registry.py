#!/usr/bin/env python3
"""
Body registry: configured bodies, their live state and their orbit trackers.

The configs are the source of truth. Live bodies and trackers are derived from
them by reinitialize_from_config(), an O(n) rebuild that every structural or
field edit goes through: editing one field restores every body to its
configured position and velocity, clears all trails and restarts all orbit
tracking. Index 0 is the central body; it is never tracked and cannot be
removed.
"""
import logging
from typing import Dict, Iterable, List, Optional

from .data_models import CONFIG_FIELDS, Body, BodyConfig
from .errors import InvalidConfiguration, InvalidOperation
from .orbit_detector import OrbitTracker
from .utils import coerce_color, try_float

logger = logging.getLogger(__name__)

CENTRAL_INDEX = 0


class BodyRegistry:
    def __init__(self, configs: Optional[Iterable[BodyConfig]] = None):
        self.configs: List[BodyConfig] = []
        self.bodies: List[Body] = []
        self.trackers: Dict[int, OrbitTracker] = {}
        self.reset_all(configs or [])

    def __len__(self) -> int:
        return len(self.configs)

    @property
    def central_body(self) -> Optional[Body]:
        return self.bodies[CENTRAL_INDEX] if self.bodies else None

    def tracker(self, index: int) -> Optional[OrbitTracker]:
        return self.trackers.get(index)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.configs):
            raise InvalidOperation(f"no body at index {index} (have {len(self.configs)})")

    def reinitialize_from_config(self) -> None:
        """Rebuild every body and tracker from the configs; trails start empty."""
        self.bodies = [Body.from_config(c) for c in self.configs]
        self.trackers = {
            i: OrbitTracker.create(i, b.position, b.velocity)
            for i, b in enumerate(self.bodies)
            if i != CENTRAL_INDEX
        }

    def reset_all(self, configs: Optional[Iterable[BodyConfig]] = None) -> None:
        """Restore configured state, optionally replacing the whole config list first."""
        if configs is not None:
            new_configs = [c.copy().validate() for c in configs]
            self.configs = new_configs
        self.reinitialize_from_config()

    def add_body(self, config: BodyConfig) -> int:
        config = config.copy().validate()
        self.configs.append(config)
        self.reinitialize_from_config()
        index = len(self.configs) - 1
        logger.info("Added body %d (%s)", index, config.name)
        return index

    def remove_body(self, index: int) -> BodyConfig:
        if index == CENTRAL_INDEX:
            raise InvalidOperation("the central body cannot be removed")
        self._check_index(index)
        removed = self.configs.pop(index)
        self.reinitialize_from_config()
        logger.info("Removed body %d (%s)", index, removed.name)
        return removed

    def update_body(self, index: int, field: str, value) -> BodyConfig:
        """
        Set one config field and reinitialize all bodies.

        Unparseable numbers keep the previous value. A non-positive mass raises
        InvalidConfiguration and leaves the config untouched.
        """
        self._check_index(index)
        if field not in CONFIG_FIELDS:
            raise InvalidConfiguration(f"unknown body field {field!r}")

        current = self.configs[index]
        updated = current.copy()
        if field == "color":
            updated.color = coerce_color(value, default=current.color)
        else:
            number = try_float(value)
            if number is None:
                logger.warning("Ignoring non-numeric %s=%r for body %d", field, value, index)
            else:
                setattr(updated, field, number)

        self.configs[index] = updated.validate()
        self.reinitialize_from_config()
        return updated
