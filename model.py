"""Model of the charges and fields play area, the entry point for views."""
from __future__ import annotations

import logging
from typing import List, Optional

import pygame
from pygame.math import Vector2

from colors import field_magnitude_to_color, potential_to_color
from field import FieldSample, electric_field, electric_potential, sample_field, sample_field_delta
from objects import ChargeEvent, ChargeRegistry, PointLike
from sensors import Sensor, SensorKind, grid_positions
from simulation_config import SimulationConfig
from tracer import TracedCurve, trace_equipotential, trace_field_line

logger = logging.getLogger(__name__)

POTENTIAL_SENSOR_POSITION = (-1.5, -0.5)
FIELD_GRID_HORIZONTAL_COUNT = 4
POTENTIAL_GRID_HORIZONTAL_COUNT = 8


class ChargesAndFieldsModel:
    """Own the charges, the sensors and the traced curves of one play area.

    Curves are snapshots: moving a charge only sets :attr:`curves_dirty`, and
    :meth:`retrace_curves` must be called to bring them up to date.
    """

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config or SimulationConfig()
        self.registry = ChargeRegistry()
        self.registry.subscribe(self._on_charges_changed)

        self.electric_potential_sensor = Sensor(
            SensorKind.ELECTRIC_POTENTIAL, POTENTIAL_SENSOR_POSITION, self.registry
        )
        self.electric_potential_sensor.attach()
        self.electric_field_sensors: List[Sensor] = []

        self.electric_field_sensor_grid = self._build_grid(FIELD_GRID_HORIZONTAL_COUNT)
        self.electric_potential_grid = self._build_grid(POTENTIAL_GRID_HORIZONTAL_COUNT)

        self.electric_field_lines: List[TracedCurve] = []
        self.equipotential_lines: List[TracedCurve] = []
        self.curves_dirty = False

    def _build_grid(self, horizontal_count: int) -> List[Sensor]:
        grid: List[Sensor] = []
        for position in grid_positions(self.config.play_area, horizontal_count):
            sensor = Sensor(SensorKind.GRID, position, self.registry)
            sensor.attach()
            grid.append(sensor)
        return grid

    def _on_charges_changed(self, event: ChargeEvent) -> None:
        if self.electric_field_lines or self.equipotential_lines:
            self.curves_dirty = True

    # Charges ------------------------------------------------------------------

    def add_charge(self, position: PointLike, sign: int) -> int:
        return self.registry.add_charge(position, sign)

    def remove_charge(self, charge_id: int) -> None:
        self.registry.remove_charge(charge_id)

    def move_charge(self, charge_id: int, position: PointLike) -> None:
        self.registry.move_charge(charge_id, position)

    def return_charge_to_origin(self, charge_id: int) -> None:
        """Apply the end state of a charge dragged back to the toolbox."""

        self.registry.return_to_origin(charge_id)

    # Field evaluation ---------------------------------------------------------

    def electric_field(self, point: PointLike) -> Vector2:
        return electric_field(point, self.registry)

    def electric_potential(self, point: PointLike) -> float:
        return electric_potential(point, self.registry)

    def sample_field(self, point: PointLike) -> FieldSample:
        return sample_field(point, self.registry)

    def sample_field_delta(
        self,
        sample: FieldSample,
        old_charge_position: PointLike,
        new_charge_position: PointLike,
        sign: int,
    ) -> FieldSample:
        return sample_field_delta(sample, old_charge_position, new_charge_position, sign)

    # Sensors ------------------------------------------------------------------

    def add_field_sensor(self, position: PointLike) -> Sensor:
        sensor = Sensor(SensorKind.ELECTRIC_FIELD, position, self.registry)
        sensor.is_active = True
        sensor.attach()
        self.electric_field_sensors.append(sensor)
        return sensor

    def remove_field_sensor(self, sensor: Sensor) -> None:
        sensor.detach()
        self.electric_field_sensors.remove(sensor)

    # Curves -------------------------------------------------------------------

    def trace_field_line(self, seed: PointLike) -> Optional[TracedCurve]:
        return trace_field_line(seed, self.registry, self.config.tracing)

    def trace_equipotential(self, seed: PointLike) -> Optional[TracedCurve]:
        return trace_equipotential(seed, self.registry, self.config.tracing)

    def add_field_line(self, seed: Optional[PointLike] = None) -> Optional[TracedCurve]:
        """Trace a field line (from the potential sensor by default) and keep it."""

        if seed is None:
            seed = self.electric_potential_sensor.position
        curve = self.trace_field_line(seed)
        if curve is not None:
            self.electric_field_lines.append(curve)
            logger.info(f"Added field line with {len(curve)} points")
        return curve

    def add_equipotential_line(self, seed: Optional[PointLike] = None) -> Optional[TracedCurve]:
        """Trace an equipotential (from the potential sensor by default) and keep it."""

        if seed is None:
            seed = self.electric_potential_sensor.position
        curve = self.trace_equipotential(seed)
        if curve is not None:
            self.equipotential_lines.append(curve)
            logger.info(f"Added equipotential at {curve.potential:.4g} V with {len(curve)} points")
        return curve

    def clear_field_lines(self) -> None:
        self.electric_field_lines.clear()
        self.curves_dirty = bool(self.equipotential_lines) and self.curves_dirty

    def clear_equipotential_lines(self) -> None:
        self.equipotential_lines.clear()
        self.curves_dirty = bool(self.electric_field_lines) and self.curves_dirty

    def retrace_curves(self) -> None:
        """Regenerate every stored curve from its seed with the current charges."""

        field_seeds = [curve.seed for curve in self.electric_field_lines]
        equipotential_seeds = [curve.seed for curve in self.equipotential_lines]
        self.electric_field_lines = [
            curve for curve in (self.trace_field_line(seed) for seed in field_seeds) if curve is not None
        ]
        self.equipotential_lines = [
            curve for curve in (self.trace_equipotential(seed) for seed in equipotential_seeds) if curve is not None
        ]
        self.curves_dirty = False
        logger.debug(
            f"Retraced {len(self.electric_field_lines)} field lines and "
            f"{len(self.equipotential_lines)} equipotentials"
        )

    # Colors -------------------------------------------------------------------

    def color_for_potential(self, potential: float) -> pygame.Color:
        return potential_to_color(potential, self.config.colors)

    def color_for_field_magnitude(self, magnitude: float) -> pygame.Color:
        return field_magnitude_to_color(magnitude, self.config.colors)

    def potential_grid_colors(self) -> List[pygame.Color]:
        return [self.color_for_potential(sensor.electric_potential) for sensor in self.electric_potential_grid]

    def field_grid_colors(self) -> List[pygame.Color]:
        return [self.color_for_field_magnitude(sensor.sample.magnitude) for sensor in self.electric_field_sensor_grid]

    def reset(self) -> None:
        """Return the play area to its initial, empty state."""

        self.registry.clear()
        for sensor in list(self.electric_field_sensors):
            self.remove_field_sensor(sensor)
        self.electric_potential_sensor.reset()
        self.electric_field_lines.clear()
        self.equipotential_lines.clear()
        self.curves_dirty = False
        logger.info("Model has been reset.")
