"""Shared fixtures for the loading planner tests."""

import os
import sys

import pytest

# Make the src/ layout importable without an editable install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from truckload.core.models import Crate, Truck  # noqa: E402


@pytest.fixture
def cube_truck():
    """4×4×4 truck."""
    return Truck(width=4, height=4, length=4)


@pytest.fixture
def mixed_crates():
    """A handful of crates with distinct and tied volumes."""
    return [
        Crate(crate_id=1, width=1, height=1, length=1),
        Crate(crate_id=2, width=2, height=2, length=2),
        Crate(crate_id=3, width=1, height=2, length=3),
        Crate(crate_id=4, width=2, height=1, length=1),
        Crate(crate_id=5, width=3, height=2, length=1),
    ]


@pytest.fixture
def blocking_case():
    """
    3×3×1 truck where the first 2×2 crate leaves an L-shaped gap the
    second 2×2 crate cannot use under any orientation.
    """
    truck = Truck(width=3, height=3, length=1)
    crates = [
        Crate(crate_id=1, width=2, height=2, length=1),
        Crate(crate_id=2, width=2, height=2, length=1),
    ]
    return truck, crates
