"""Tracing of electric field lines and equipotential lines from a seed point."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from pygame.math import Vector2

from field import K_E, electric_field, electric_potential, field_magnitude
from objects import PointCharge, PointLike, as_vector
from simulation_config import CurveKind, TracingSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = TracingSettings()


@dataclass(frozen=True)
class TracedCurve:
    """Snapshot of a traced curve; it is not refreshed when charges move.

    The seed and points are stored as float pairs so the snapshot cannot be
    edited through the vectors it hands out.
    """

    kind: CurveKind
    seed_xy: Tuple[float, float]
    points_xy: Tuple[Tuple[float, float], ...]
    potential: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed_xy", _pair(self.seed_xy))
        object.__setattr__(self, "points_xy", tuple(_pair(point) for point in self.points_xy))

    def __len__(self) -> int:
        return len(self.points_xy)

    def __iter__(self) -> Iterator[Vector2]:
        return (Vector2(point) for point in self.points_xy)

    @property
    def seed(self) -> Vector2:
        return Vector2(self.seed_xy)

    @property
    def points(self) -> Tuple[Vector2, ...]:
        return tuple(self)

    @property
    def start(self) -> Vector2:
        return Vector2(self.points_xy[0])

    @property
    def end(self) -> Vector2:
        return Vector2(self.points_xy[-1])

    def as_tuples(self) -> List[Tuple[float, float]]:
        return list(self.points_xy)


def _pair(point: PointLike) -> Tuple[float, float]:
    return float(point[0]), float(point[1])


def _direction(vec: Vector2) -> Optional[Vector2]:
    magnitude = field_magnitude(vec)
    if magnitude == 0.0 or not math.isfinite(magnitude):
        return None
    return vec / magnitude


def next_position_along_field(
    position: Vector2,
    charges: Sequence[PointCharge],
    delta_distance: float,
) -> Optional[Vector2]:
    """Return the next point along the field line through ``position``.

    Uses the midpoint method: a half step along the local field gives a trial
    point, and the full step is taken from ``position`` along the field found
    there. A negative ``delta_distance`` walks against the field. Returns
    ``None`` where the field direction is undefined.
    """

    initial_direction = _direction(electric_field(position, charges))
    if initial_direction is None:
        return None
    midway_position = position + initial_direction * (delta_distance / 2)
    midway_direction = _direction(electric_field(midway_position, charges))
    if midway_direction is None:
        return None
    return position + midway_direction * delta_distance


def next_position_along_equipotential(
    position: Vector2,
    charges: Sequence[PointCharge],
    target_potential: float,
    delta_distance: float,
) -> Optional[Vector2]:
    """Return a point about ``delta_distance`` away with potential ``target_potential``.

    The predictor moves along the contour tangent (the field direction turned
    by +90 degrees for a positive delta, -90 for a negative one). The corrector
    then moves along the field at that trial point by the potential error over
    the squared field magnitude, which projects back onto the contour.
    """

    initial_direction = _direction(electric_field(position, charges))
    if initial_direction is None:
        return None
    midway_position = position + initial_direction.rotate(90) * delta_distance
    midway_field = electric_field(midway_position, charges)
    midway_magnitude_squared = midway_field.magnitude_squared()
    if midway_magnitude_squared == 0.0 or not math.isfinite(midway_magnitude_squared):
        return None
    delta_potential = electric_potential(midway_position, charges) - target_potential
    return midway_position + midway_field * (delta_potential / midway_magnitude_squared)


def _walk_field_line(
    seed: Vector2,
    charges: Sequence[PointCharge],
    delta_distance: float,
    settings: TracingSettings,
) -> List[Vector2]:
    max_field_magnitude = K_E / settings.closest_approach_distance ** 2
    positions: List[Vector2] = []
    current = seed
    reason = "step budget exhausted"
    for _ in range(settings.max_steps):
        if current.magnitude() >= settings.max_distance:
            reason = "left the area"
            break
        if not field_magnitude(electric_field(current, charges)) < max_field_magnitude:
            reason = "reached a charge"
            break
        next_position = next_position_along_field(current, charges, delta_distance)
        if next_position is None:
            reason = "undefined field direction"
            break
        positions.append(next_position)
        current = next_position
    logger.debug(f"Field line walk ({delta_distance:+g}) stopped after {len(positions)} steps: {reason}")
    return positions


def trace_field_line(
    seed: PointLike,
    charges: Iterable[PointCharge],
    settings: TracingSettings = DEFAULT_SETTINGS,
) -> Optional[TracedCurve]:
    """Trace the field line through ``seed``, ordered along the field direction.

    Returns ``None`` when there are no charges.
    """

    charges = list(charges)
    if not charges:
        return None
    start = as_vector(seed)

    forward = _walk_field_line(start, charges, settings.step_length, settings)
    backward = _walk_field_line(start, charges, -settings.step_length, settings)

    points = tuple(reversed(backward)) + (start,) + tuple(forward)
    return TracedCurve(CurveKind.FIELD_LINE, start, points)


def trace_equipotential(
    seed: PointLike,
    charges: Iterable[PointCharge],
    settings: TracingSettings = DEFAULT_SETTINGS,
) -> Optional[TracedCurve]:
    """Trace the line of constant potential through ``seed``.

    Two walks leave the seed in opposite directions. Once their heads come
    within half a step of each other the contour is considered closed and
    both walks take exactly one more step. Returns ``None`` when there are no
    charges.
    """

    charges = list(charges)
    if not charges:
        return None
    start = as_vector(seed)
    epsilon = settings.step_length
    target_potential = electric_potential(start, charges)

    clockwise: List[Vector2] = []
    counter_clockwise: List[Vector2] = []
    current_clockwise = start
    current_counter_clockwise = start
    ready_to_break = False
    step_counter = 0
    reason = "step budget exhausted"

    while (
        step_counter < settings.max_steps
        and current_clockwise.magnitude() < settings.max_distance
        and current_counter_clockwise.magnitude() < settings.max_distance
    ):
        next_clockwise = next_position_along_equipotential(current_clockwise, charges, target_potential, epsilon)
        next_counter_clockwise = next_position_along_equipotential(
            current_counter_clockwise, charges, target_potential, -epsilon
        )
        if next_clockwise is None or next_counter_clockwise is None:
            reason = "undefined field direction"
            break

        clockwise.append(next_clockwise)
        counter_clockwise.append(next_counter_clockwise)

        if ready_to_break:
            reason = "closed on itself"
            break

        # the two ends are closing in on one another: one more pass, then stop
        if next_clockwise.distance_to(next_counter_clockwise) < epsilon / 2:
            ready_to_break = True

        current_clockwise = next_clockwise
        current_counter_clockwise = next_counter_clockwise
        step_counter += 1
    else:
        if step_counter < settings.max_steps:
            reason = "left the area"

    logger.debug(f"Equipotential trace at {target_potential:.4g} V stopped after {step_counter} steps: {reason}")

    points = tuple(reversed(clockwise)) + (start,) + tuple(counter_clockwise)
    return TracedCurve(CurveKind.EQUIPOTENTIAL, start, points, target_potential)
