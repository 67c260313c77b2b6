"""Core types of the loading planner: models, orientations, grid, errors."""

from .errors import (
    CrateTooLargeError,
    DuplicateCrateIdError,
    InvalidCargoVolumeError,
    InvalidCrateVolumeError,
    LoadingPlanError,
    VolumeExceededError,
)
from .models import (
    UNPLACED,
    Crate,
    LoadingInstruction,
    LoadingPlanResult,
    PlacedCrate,
    StepRecord,
    Truck,
)
from .occupancy import OccupancyGrid
from .orientation import ORIENTATION_PRIORITY, Orientation

__all__ = [
    # Models
    "Truck",
    "Crate",
    "LoadingInstruction",
    "LoadingPlanResult",
    "PlacedCrate",
    "StepRecord",
    "UNPLACED",
    # Geometry
    "Orientation",
    "ORIENTATION_PRIORITY",
    "OccupancyGrid",
    # Errors
    "LoadingPlanError",
    "CrateTooLargeError",
    "InvalidCargoVolumeError",
    "InvalidCrateVolumeError",
    "VolumeExceededError",
    "DuplicateCrateIdError",
]
