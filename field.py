"""Computation helpers for the electric field and potential of point charges."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from pygame.math import Vector2

from objects import PointCharge, PointLike, as_vector

# Prefactor of E = k*Q/r^2 with Q in nanocoulombs, r in meters and E in volts per meter
K_E = 9.0


@dataclass(frozen=True)
class FieldSample:
    """Field and potential evaluated at one position.

    Coordinates are kept as plain float pairs; ``position`` and ``field`` hand
    out fresh vectors.
    """

    position_xy: Tuple[float, float]
    field_xy: Tuple[float, float]
    potential: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "position_xy", (float(self.position_xy[0]), float(self.position_xy[1])))
        object.__setattr__(self, "field_xy", (float(self.field_xy[0]), float(self.field_xy[1])))

    @property
    def position(self) -> Vector2:
        return Vector2(self.position_xy)

    @property
    def field(self) -> Vector2:
        return Vector2(self.field_xy)

    @property
    def magnitude(self) -> float:
        return field_magnitude(self.field_xy)

    def is_finite(self) -> bool:
        return all(math.isfinite(value) for value in (*self.field_xy, self.potential))


def _inverse(value: float) -> float:
    # Python raises on x / 0.0; a charge sitting on the point yields inf instead.
    if value == 0.0:
        return math.inf
    return 1.0 / value


def field_magnitude(vec: PointLike) -> float:
    return math.hypot(vec[0], vec[1])


def electric_field(point: PointLike, charges: Iterable[PointCharge]) -> Vector2:
    """Compute the electric field (Ex, Ey) generated at ``point``."""

    px, py = point[0], point[1]
    field_x = 0.0
    field_y = 0.0

    for charge in charges:
        dx = px - charge.x
        dy = py - charge.y
        r_mag = math.hypot(dx, dy)
        intensity = charge.sign * _inverse(r_mag * r_mag * r_mag)
        field_x += intensity * dx
        field_y += intensity * dy

    return Vector2(K_E * field_x, K_E * field_y)


def electric_potential(point: PointLike, charges: Iterable[PointCharge]) -> float:
    """Compute the electrostatic potential at a given point."""

    px, py = point[0], point[1]
    potential = 0.0

    for charge in charges:
        r = math.hypot(px - charge.x, py - charge.y)
        potential += charge.sign * _inverse(r)

    return K_E * potential


def electric_field_change(
    point: PointLike,
    new_charge_position: PointLike,
    old_charge_position: PointLike,
    sign: int,
) -> Vector2:
    """Return the change of the field at ``point`` when one charge moves.

    Only the moving charge's contribution is recomputed, so a cached value can
    be updated without summing over every charge again.
    """

    position = as_vector(point)
    new_displacement = position - as_vector(new_charge_position)
    old_displacement = position - as_vector(old_charge_position)
    new_field = new_displacement * _inverse(new_displacement.magnitude() ** 3)
    old_field = old_displacement * _inverse(old_displacement.magnitude() ** 3)
    return (new_field - old_field) * (sign * K_E)


def electric_potential_change(
    point: PointLike,
    new_charge_position: PointLike,
    old_charge_position: PointLike,
    sign: int,
) -> float:
    """Return the change of the potential at ``point`` when one charge moves."""

    position = as_vector(point)
    new_distance = position.distance_to(as_vector(new_charge_position))
    old_distance = position.distance_to(as_vector(old_charge_position))
    return sign * K_E * (_inverse(new_distance) - _inverse(old_distance))


def sample_field(point: PointLike, charges: Iterable[PointCharge]) -> FieldSample:
    """Evaluate both the field and the potential at ``point``."""

    charges = list(charges)
    position = as_vector(point)
    return FieldSample(position, electric_field(position, charges), electric_potential(position, charges))


def sample_field_delta(
    sample: FieldSample,
    old_charge_position: PointLike,
    new_charge_position: PointLike,
    sign: int,
) -> FieldSample:
    """Update ``sample`` for a single charge moving from one position to another."""

    field_change = electric_field_change(sample.position, new_charge_position, old_charge_position, sign)
    potential_change = electric_potential_change(sample.position, new_charge_position, old_charge_position, sign)
    return FieldSample(
        sample.position_xy,
        sample.field + field_change,
        sample.potential + potential_change,
    )
