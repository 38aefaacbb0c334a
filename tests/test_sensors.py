"""
Unit tests for sensors and the sensor grid layout.
"""

import math

import pytest
from pygame.math import Vector2

from field import sample_field
from objects import Capability
from sensors import Sensor, SensorKind, grid_positions
from simulation_config import PlayArea


class TestGridPositions:
    """Sensor lattice covering the play area."""

    def test_field_grid_layout(self):
        positions = grid_positions(PlayArea(), 4)
        assert len(positions) == 15
        assert positions[0].x == pytest.approx(-2.6)
        assert positions[0].y == pytest.approx(1.35)
        assert positions[1].x == pytest.approx(-2.6)
        assert positions[1].y == pytest.approx(0.05)

    def test_potential_grid_layout(self):
        positions = grid_positions(PlayArea(), 8)
        assert len(positions) == 45
        spacing = 6.5 / 9
        assert positions[-1].x == pytest.approx(-3.25 + spacing * 8.5)

    def test_grid_stays_inside_area(self):
        area = PlayArea()
        for position in grid_positions(area, 8):
            assert abs(position.x) < area.width / 2
            assert abs(position.y) < area.height / 2

    def test_rejects_empty_grid(self):
        with pytest.raises(ValueError):
            grid_positions(PlayArea(), 0)


class TestSensor:
    """Sensors re-sample on registry notifications."""

    @pytest.fixture
    def sensor(self, registry):
        sensor = Sensor(SensorKind.ELECTRIC_FIELD, (1.0, 1.0), registry)
        sensor.attach()
        return sensor

    def test_initial_sample_without_charges(self, sensor):
        assert sensor.position == Vector2(1, 1)
        assert sensor.electric_field == Vector2(0, 0)
        assert sensor.electric_potential == 0.0

    def test_follows_added_charge(self, registry, sensor):
        registry.add_charge((1.0, 0.0), 1)
        assert sensor.electric_potential == pytest.approx(9.0)
        assert sensor.electric_field.y == pytest.approx(9.0)

    def test_follows_moved_charge(self, registry, sensor):
        registry.add_charge((-1.0, 0.0), -1)
        moving = registry.add_charge((0.0, 2.0), 1)
        registry.move_charge(moving, (2.0, -0.5))
        registry.move_charge(moving, (0.5, 0.25))
        expected = sample_field((1.0, 1.0), registry)
        assert sensor.electric_potential == pytest.approx(expected.potential)
        assert sensor.electric_field.x == pytest.approx(expected.field.x)
        assert sensor.electric_field.y == pytest.approx(expected.field.y)

    def test_follows_removed_charge(self, registry, sensor):
        charge_id = registry.add_charge((0.0, 0.0), 1)
        registry.remove_charge(charge_id)
        assert sensor.electric_potential == 0.0

    def test_recovers_after_charge_leaves_its_position(self, registry, sensor):
        charge_id = registry.add_charge((1.0, 1.0), 1)
        assert math.isinf(sensor.electric_potential)
        registry.move_charge(charge_id, (1.0, 2.0))
        assert sensor.electric_potential == pytest.approx(9.0)

    def test_move_to_resamples(self, single_charge):
        sensor = Sensor(SensorKind.ELECTRIC_POTENTIAL, (3.0, 0.0), single_charge)
        sensor.move_to((0.0, -1.5))
        assert sensor.electric_potential == pytest.approx(6.0)

    def test_detached_sensor_is_stale(self, registry, sensor):
        sensor.detach()
        registry.add_charge((0.0, 0.0), 1)
        assert sensor.electric_potential == 0.0
        sensor.update()
        assert sensor.electric_potential == pytest.approx(9.0 / math.sqrt(2))

    def test_reset(self, registry, sensor):
        sensor.is_active = True
        sensor.move_to((2.0, 2.0))
        sensor.reset()
        assert not sensor.is_active
        assert sensor.position == Vector2(1, 1)

    def test_capabilities_by_kind(self, registry):
        field_sensor = Sensor(SensorKind.ELECTRIC_FIELD, (0, 1), registry)
        potential_sensor = Sensor(SensorKind.ELECTRIC_POTENTIAL, (0, 1), registry)
        grid_sensor = Sensor(SensorKind.GRID, (0, 1), registry)
        assert field_sensor.has_capability(Capability.ANIMATABLE)
        assert potential_sensor.has_capability(Capability.USER_CONTROLLABLE)
        assert not potential_sensor.has_capability(Capability.ANIMATABLE)
        assert grid_sensor.has_capability(Capability.POSITIONABLE)
        assert not grid_sensor.has_capability(Capability.USER_CONTROLLABLE)
