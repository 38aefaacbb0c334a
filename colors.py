"""Mapping of potential and field strength values to display colors."""
from __future__ import annotations

import math
from typing import Iterable

import pygame

from field import electric_field, electric_potential, field_magnitude
from objects import PointCharge, PointLike
from simulation_config import ColorCalibration

DEFAULT_CALIBRATION = ColorCalibration()


def _clamped_fraction(value: float, low: float, high: float) -> float:
    """Map ``value`` linearly from [low, high] onto [0, 1], clamping outside."""

    fraction = (value - low) / (high - low)
    return min(max(fraction, 0.0), 1.0)


def potential_to_color(
    potential: float,
    calibration: ColorCalibration = DEFAULT_CALIBRATION,
) -> pygame.Color:
    """Return the color representing an electric potential in volts.

    Positive values blend from the background to the positive saturation
    color, negative values from the negative saturation color to the
    background. Values beyond the calibrated range saturate.
    """

    if math.isnan(potential):
        return pygame.Color(calibration.background)
    if potential >= 0:
        distance = _clamped_fraction(potential, 0.0, calibration.potential_max)
        return pygame.Color(calibration.background).lerp(calibration.saturation_positive, distance)
    distance = _clamped_fraction(potential, calibration.potential_min, 0.0)
    return pygame.Color(calibration.saturation_negative).lerp(calibration.background, distance)


def field_magnitude_to_color(
    magnitude: float,
    calibration: ColorCalibration = DEFAULT_CALIBRATION,
) -> pygame.Color:
    """Return the color representing a field strength in volts per meter."""

    if math.isnan(magnitude):
        return pygame.Color(calibration.background)
    distance = _clamped_fraction(magnitude, 0.0, calibration.field_max)
    return pygame.Color(calibration.background).lerp(calibration.high_field, distance)


def potential_color_at(
    position: PointLike,
    charges: Iterable[PointCharge],
    calibration: ColorCalibration = DEFAULT_CALIBRATION,
) -> pygame.Color:
    return potential_to_color(electric_potential(position, charges), calibration)


def field_color_at(
    position: PointLike,
    charges: Iterable[PointCharge],
    calibration: ColorCalibration = DEFAULT_CALIBRATION,
) -> pygame.Color:
    return field_magnitude_to_color(field_magnitude(electric_field(position, charges)), calibration)
