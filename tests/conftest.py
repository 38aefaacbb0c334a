"""Shared fixtures for the engine tests."""

import logging

import pytest

from objects import ChargeRegistry


@pytest.fixture
def registry():
    """Empty charge registry."""
    return ChargeRegistry()


@pytest.fixture
def single_charge(registry):
    """Registry holding one positive charge at the origin."""
    registry.add_charge((0.0, 0.0), 1)
    return registry


@pytest.fixture
def dipole(registry):
    """Positive charge at (-1, 0) and negative charge at (1, 0)."""
    registry.add_charge((-1.0, 0.0), 1)
    registry.add_charge((1.0, 0.0), -1)
    return registry


@pytest.fixture
def restore_root_logger():
    """Drop the handlers a test installs on the root logger and restore its level."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler in handlers:
            continue
        if isinstance(handler, logging.FileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
