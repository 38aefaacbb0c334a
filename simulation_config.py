"""Configuration objects and enumerations for the charges and fields engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

import pygame


class CurveKind(Enum):
    """Families of curves that can be traced through the field."""

    FIELD_LINE = auto()
    EQUIPOTENTIAL = auto()

    def label(self) -> str:
        if self is CurveKind.FIELD_LINE:
            return "Electric field line"
        return "Equipotential line"


@dataclass(frozen=True)
class PlayArea:
    """Dimensions of the simulated region, in meters, centred on the origin."""

    width: float = 6.5
    height: float = 4.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Play area must have positive dimensions, got {self.width} x {self.height}")

    @property
    def max_extent(self) -> float:
        return max(self.width, self.height)


@dataclass(frozen=True)
class TracingSettings:
    """Step budget and distance bounds shared by both curve tracers.

    The product of ``max_steps`` and ``step_length`` should exceed
    ``max_distance`` so that a free line can reach the edge of the area.
    """

    step_length: float = 0.01
    max_steps: int = 2000
    max_distance: float = 6.5
    closest_approach_distance: float = 0.01

    def __post_init__(self) -> None:
        if self.step_length <= 0:
            raise ValueError(f"step_length must be positive, got {self.step_length}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if self.max_distance <= 0:
            raise ValueError(f"max_distance must be positive, got {self.max_distance}")
        if self.closest_approach_distance <= 0:
            raise ValueError(
                f"closest_approach_distance must be positive, got {self.closest_approach_distance}"
            )

    @classmethod
    def for_play_area(cls, area: PlayArea, **overrides: float) -> "TracingSettings":
        """Build settings whose radial bound is the larger side of ``area``.

        An explicit ``max_distance`` in ``overrides`` takes precedence.
        """

        return cls(**{"max_distance": area.max_extent, **overrides})


@dataclass(frozen=True)
class ColorCalibration:
    """Saturation points and colors used to map field values to colors."""

    potential_max: float = 40.0  # volts at which the positive color saturates
    potential_min: float = -40.0  # volts at which the negative color saturates
    field_max: float = 5.0  # volts per meter at which the field color saturates
    saturation_positive: pygame.Color = field(default_factory=lambda: pygame.Color("red"))
    saturation_negative: pygame.Color = field(default_factory=lambda: pygame.Color("blue"))
    background: pygame.Color = field(default_factory=lambda: pygame.Color("black"))
    high_field: pygame.Color = field(default_factory=lambda: pygame.Color("white"))

    def __post_init__(self) -> None:
        if self.potential_max <= 0:
            raise ValueError(f"potential_max must be positive, got {self.potential_max}")
        if self.potential_min >= 0:
            raise ValueError(f"potential_min must be negative, got {self.potential_min}")
        if self.field_max <= 0:
            raise ValueError(f"field_max must be positive, got {self.field_max}")


@dataclass
class SimulationConfig:
    """Container for the process-wide settings, fixed once the model is built.

    When ``tracing`` is left out it is derived from ``play_area``, so the
    tracers stop at the larger side of the area.
    """

    play_area: PlayArea = field(default_factory=PlayArea)
    tracing: Optional[TracingSettings] = None
    colors: ColorCalibration = field(default_factory=ColorCalibration)

    def __post_init__(self) -> None:
        if self.tracing is None:
            self.tracing = TracingSettings.for_play_area(self.play_area)

    @classmethod
    def for_play_area(cls, play_area: PlayArea) -> "SimulationConfig":
        """Return a configuration whose tracing bounds follow ``play_area``."""

        return cls(play_area=play_area)

    def describe(self) -> str:
        """Return a short human-readable summary of the configuration."""

        return (
            f"Area {self.play_area.width:g} x {self.play_area.height:g} m • "
            f"step {self.tracing.step_length:g} m x {self.tracing.max_steps} • "
            f"V in [{self.colors.potential_min:g}, {self.colors.potential_max:g}] V"
        )
