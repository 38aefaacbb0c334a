"""
Unit tests for configuration objects.
"""

import pygame
import pytest

from simulation_config import ColorCalibration, CurveKind, PlayArea, SimulationConfig, TracingSettings


class TestDefaults:
    """Default calibration of the engine."""

    def test_tracing_defaults(self):
        settings = TracingSettings()
        assert settings.step_length == 0.01
        assert settings.max_steps == 2000
        assert settings.max_distance == 6.5
        assert settings.closest_approach_distance == 0.01
        assert settings.max_steps * settings.step_length > settings.max_distance

    def test_color_defaults(self):
        calibration = ColorCalibration()
        assert calibration.potential_max == 40.0
        assert calibration.potential_min == -40.0
        assert calibration.field_max == 5.0
        assert calibration.saturation_positive == pygame.Color("red")
        assert calibration.saturation_negative == pygame.Color("blue")
        assert calibration.background == pygame.Color("black")

    def test_play_area(self):
        area = PlayArea()
        assert (area.width, area.height) == (6.5, 4.0)
        assert area.max_extent == 6.5

    def test_describe(self):
        summary = SimulationConfig().describe()
        assert "6.5 x 4 m" in summary
        assert "2000" in summary

    def test_curve_kind_labels(self):
        assert CurveKind.FIELD_LINE.label() == "Electric field line"
        assert CurveKind.EQUIPOTENTIAL.label() == "Equipotential line"


class TestValidation:
    """Invalid settings fail at construction."""

    @pytest.mark.parametrize(
        "kwargs",
        [{"step_length": 0}, {"max_steps": 0}, {"max_distance": -1.0}, {"closest_approach_distance": 0.0}],
    )
    def test_tracing_settings(self, kwargs):
        with pytest.raises(ValueError):
            TracingSettings(**kwargs)

    @pytest.mark.parametrize("kwargs", [{"potential_max": 0.0}, {"potential_min": 1.0}, {"field_max": -5.0}])
    def test_color_calibration(self, kwargs):
        with pytest.raises(ValueError):
            ColorCalibration(**kwargs)

    def test_play_area(self):
        with pytest.raises(ValueError):
            PlayArea(width=0.0)

    def test_settings_are_read_only(self):
        settings = TracingSettings()
        with pytest.raises(AttributeError):
            settings.step_length = 0.5


class TestDerivedSettings:
    def test_tracing_bound_follows_play_area(self):
        config = SimulationConfig.for_play_area(PlayArea(width=3.0, height=8.0))
        assert config.tracing.max_distance == 8.0
        assert config.tracing.step_length == 0.01

    def test_overrides(self):
        settings = TracingSettings.for_play_area(PlayArea(), step_length=0.02)
        assert settings.step_length == 0.02
        assert settings.max_distance == 6.5

    def test_explicit_max_distance_wins(self):
        settings = TracingSettings.for_play_area(PlayArea(), max_distance=3.0)
        assert settings.max_distance == 3.0

    def test_constructor_derives_tracing_from_play_area(self):
        config = SimulationConfig(play_area=PlayArea(20.0, 10.0))
        assert config.tracing.max_distance == 20.0

    def test_explicit_tracing_is_kept(self):
        tracing = TracingSettings(max_distance=2.0)
        config = SimulationConfig(play_area=PlayArea(20.0, 10.0), tracing=tracing)
        assert config.tracing is tracing
