"""Headless demonstration of the charges and fields engine."""
from __future__ import annotations

import logging

from logging_config import setup_logging
from model import ChargesAndFieldsModel
from simulation_config import SimulationConfig

logger = logging.getLogger(__name__)


def run_demo(model: ChargesAndFieldsModel) -> None:
    """Place a dipole and trace one curve of each kind from the potential sensor."""

    model.add_charge((-1.0, 0.0), 1)
    model.add_charge((1.0, 0.0), -1)

    sensor = model.electric_potential_sensor
    field_line = model.add_field_line()
    equipotential = model.add_equipotential_line()

    color = model.color_for_potential(sensor.electric_potential)
    logger.info(f"Potential at {tuple(sensor.position)}: {sensor.electric_potential:.3f} V, color {tuple(color)}")
    if field_line is not None:
        logger.info(f"Field line runs from {tuple(field_line.start)} to {tuple(field_line.end)}")
    if equipotential is not None:
        logger.info(f"Equipotential has {len(equipotential)} points")


def main() -> None:
    setup_logging(logging.INFO)

    config = SimulationConfig()
    logger.info(config.describe())
    run_demo(ChargesAndFieldsModel(config))


if __name__ == "__main__":
    main()
