"""Passive sensors that keep a field sample in step with the charge registry."""
from __future__ import annotations

import logging
import math
from enum import Enum, auto
from typing import List

from pygame.math import Vector2

from field import FieldSample, sample_field, sample_field_delta
from objects import Capability, ChargeEvent, ChargeEventKind, ChargeRegistry, PointLike, as_vector
from simulation_config import PlayArea

logger = logging.getLogger(__name__)


class SensorKind(Enum):
    """Kinds of sensors placed in the play area."""

    ELECTRIC_FIELD = auto()
    ELECTRIC_POTENTIAL = auto()
    GRID = auto()

    def capabilities(self) -> Capability:
        if self is SensorKind.ELECTRIC_FIELD:
            return Capability.POSITIONABLE | Capability.USER_CONTROLLABLE | Capability.ANIMATABLE
        if self is SensorKind.ELECTRIC_POTENTIAL:
            return Capability.POSITIONABLE | Capability.USER_CONTROLLABLE
        return Capability.POSITIONABLE


class Sensor:
    """Hold the field sample at a position and refresh it on registry changes.

    A sensor only re-samples in response to :meth:`on_charges_changed` or its
    own moves; it does nothing until :meth:`attach` subscribes it.
    """

    def __init__(self, kind: SensorKind, position: PointLike, registry: ChargeRegistry) -> None:
        self.kind = kind
        self.registry = registry
        self.initial_position = as_vector(position)
        self.is_active = False
        self._attached = False
        self.sample: FieldSample = sample_field(self.initial_position, registry)

    @property
    def position(self) -> Vector2:
        return Vector2(self.sample.position)

    @property
    def electric_field(self) -> Vector2:
        return Vector2(self.sample.field)

    @property
    def electric_potential(self) -> float:
        return self.sample.potential

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.kind.capabilities()

    def attach(self) -> None:
        if not self._attached:
            self.registry.subscribe(self.on_charges_changed)
            self._attached = True
            self.update()

    def detach(self) -> None:
        if self._attached:
            self.registry.unsubscribe(self.on_charges_changed)
            self._attached = False

    def update(self) -> None:
        """Re-sample the field from scratch at the current position."""

        self.sample = sample_field(self.sample.position, self.registry)

    def move_to(self, position: PointLike) -> None:
        self.sample = sample_field(as_vector(position), self.registry)

    def on_charges_changed(self, event: ChargeEvent) -> None:
        if event.kind is ChargeEventKind.MOVED and self.sample.is_finite():
            self.sample = sample_field_delta(
                self.sample, event.old_position, event.new_position, event.charge.sign
            )
        else:
            self.update()
        if not self.sample.is_finite():
            logger.debug(f"{self.kind.name} sensor at {tuple(self.position)} coincides with a charge")

    def reset(self) -> None:
        self.is_active = False
        self.move_to(self.initial_position)

    def __repr__(self) -> str:
        return f"Sensor({self.kind.name}, position={tuple(self.position)}, potential={self.sample.potential:.4g})"


def grid_positions(play_area: PlayArea, horizontal_count: int) -> List[Vector2]:
    """Return the centres of a square lattice of sensors covering ``play_area``.

    ``horizontal_count`` sets the spacing (``width / (count + 1)``); columns
    are listed left to right, each from top to bottom.
    """

    if horizontal_count < 1:
        raise ValueError(f"horizontal_count must be at least 1, got {horizontal_count}")
    spacing = play_area.width / (horizontal_count + 1)
    vertical_count = math.floor(play_area.height / spacing) - 1

    positions: List[Vector2] = []
    for i in range(horizontal_count + 1):
        for j in range(vertical_count + 1):
            x = -play_area.width / 2 + spacing * (i + 0.5)
            y = play_area.height / 2 - spacing * (j + 0.5)
            positions.append(Vector2(x, y))
    return positions
