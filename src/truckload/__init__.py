"""
truckload — greedy truck loading planner.

Public API:
    from truckload import Truck, Crate, LoadingPlan
    instructions = LoadingPlan(truck, crates).get_loading_instructions()
    result = LoadingPlan(truck, crates).plan()   # includes unplaced crates
"""

from truckload.algorithms.loading_plan import LoadingPlan, order_crates, validate_capacity
from truckload.core import (
    ORIENTATION_PRIORITY,
    UNPLACED,
    Crate,
    CrateTooLargeError,
    DuplicateCrateIdError,
    InvalidCargoVolumeError,
    InvalidCrateVolumeError,
    LoadingInstruction,
    LoadingPlanError,
    LoadingPlanResult,
    OccupancyGrid,
    Orientation,
    PlacedCrate,
    Truck,
    VolumeExceededError,
)

__version__ = "0.1.0"

__all__ = [
    "LoadingPlan",
    "order_crates",
    "validate_capacity",
    "Truck",
    "Crate",
    "LoadingInstruction",
    "LoadingPlanResult",
    "PlacedCrate",
    "UNPLACED",
    "Orientation",
    "ORIENTATION_PRIORITY",
    "OccupancyGrid",
    "LoadingPlanError",
    "CrateTooLargeError",
    "InvalidCargoVolumeError",
    "InvalidCrateVolumeError",
    "VolumeExceededError",
    "DuplicateCrateIdError",
]
