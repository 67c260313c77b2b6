"""
Greedy largest-first loading plan.

Pipeline for one planning run:
  1. validate_capacity() rejects inputs that provably cannot fit.
  2. order_crates() sorts by descending volume (stable on ties).
  3. For each crate, origins are scanned X → Y → Z ascending and, at each
     origin, orientations are tried in ORIENTATION_PRIORITY order.  The
     first fit is claimed on the occupancy grid and becomes the crate's
     loading instruction.

A crate that fits nowhere gets no instruction and is listed as unplaced.
"""

from __future__ import annotations

import time
from typing import Iterator, List, Optional, Sequence, Tuple

from truckload.core.errors import (
    CrateTooLargeError,
    DuplicateCrateIdError,
    InvalidCargoVolumeError,
    InvalidCrateVolumeError,
    VolumeExceededError,
)
from truckload.core.models import (
    Crate,
    LoadingInstruction,
    LoadingPlanResult,
    PlacedCrate,
    StepRecord,
    Truck,
)
from truckload.core.occupancy import OccupancyGrid
from truckload.core.orientation import ORIENTATION_PRIORITY, Orientation

_DIMENSIONS = ("width", "height", "length")


def validate_capacity(truck: Truck, crates: Sequence[Crate]) -> None:
    """
    Cheap feasibility checks run once before any search work.

    Raises:
        DuplicateCrateIdError:   two crates share an id.
        CrateTooLargeError:      a crate dimension exceeds the truck's width,
                                 height and length at the same time.
        InvalidCargoVolumeError: the truck volume is not positive.
        InvalidCrateVolumeError: the total crate volume is not positive.
        VolumeExceededError:     total crate volume exceeds truck volume.
    """
    seen: set = set()
    for crate in crates:
        if crate.crate_id in seen:
            raise DuplicateCrateIdError(crate.crate_id)
        seen.add(crate.crate_id)

    truck_dims = truck.dimensions
    for dimension in _DIMENSIONS:
        for crate in crates:
            value = getattr(crate, dimension)
            if all(value > d for d in truck_dims):
                raise CrateTooLargeError(dimension, crate.crate_id)

    truck_volume = truck.volume
    crate_volume = sum(crate.volume for crate in crates)

    if truck_volume <= 0 or min(truck_dims) <= 0:
        raise InvalidCargoVolumeError("Volume of cargo truck must be greater than 0.")
    if crate_volume <= 0:
        raise InvalidCrateVolumeError("Volume of crates must be greater than 0.")
    if crate_volume > truck_volume:
        raise VolumeExceededError(crate_volume, truck_volume)


def order_crates(crates: Sequence[Crate]) -> List[Crate]:
    """Crates by descending volume; equal volumes keep their input order."""
    return sorted(crates, key=lambda c: c.volume, reverse=True)


class LoadingPlan:
    """
    Loading plan for one truck and one list of crates.

    Inputs are fixed at construction.  Every call to ``plan()`` builds a
    fresh occupancy grid, so repeated calls give identical results.
    """

    def __init__(self, truck: Truck, crates: Sequence[Crate]) -> None:
        self.truck = truck
        self.crates: Tuple[Crate, ...] = tuple(crates)

    def plan(self) -> LoadingPlanResult:
        """
        Validate, order and place every crate.

        Returns:
            LoadingPlanResult with instructions for placed crates and the
            ids of the crates that could not be placed.

        Raises:
            LoadingPlanError subclasses from validate_capacity().
        """
        validate_capacity(self.truck, self.crates)

        grid = OccupancyGrid.for_truck(self.truck)
        result = LoadingPlanResult()

        for step, crate in enumerate(order_crates(self.crates)):
            t_start = time.perf_counter()
            placed = self._place(grid, crate, step)
            elapsed_ms = (time.perf_counter() - t_start) * 1000

            if placed is None:
                result.unplaced.append(crate.crate_id)
                result.steps.append(StepRecord(step, crate, None, None, elapsed_ms))
                continue

            instruction = LoadingInstruction(
                crate_id=crate.crate_id,
                loading_step_number=step,
                top_left_x=placed.x,
                top_left_y=placed.y,
                turn_horizontal=placed.orientation.turn_horizontal,
                turn_vertical=placed.orientation.turn_vertical,
            )
            result.instructions[crate.crate_id] = instruction
            result.placements.append(placed)
            result.steps.append(StepRecord(step, crate, placed, instruction, elapsed_ms))

        return result

    def get_loading_instructions(self) -> dict[int, LoadingInstruction]:
        """Crate id → loading instruction, for placed crates only."""
        return self.plan().instructions

    # ── Search ───────────────────────────────────────────────────────────

    def _origins(self) -> Iterator[Tuple[int, int, int]]:
        for x in range(self.truck.width):
            for y in range(self.truck.height):
                for z in range(self.truck.length):
                    yield (x, y, z)

    def _place(self, grid: OccupancyGrid, crate: Crate, step: int) -> Optional[PlacedCrate]:
        """Claim the first fitting (origin, orientation) for ``crate``."""
        has_cells = min(crate.width, crate.height, crate.length) > 0

        for origin in self._origins():
            # an occupied origin cell rules out every orientation
            if has_cells and grid.is_occupied(*origin):
                continue
            orientation = self._first_fit(grid, crate, origin)
            if orientation is None:
                continue
            grid.claim(crate, origin, orientation)
            x, y, z = origin
            return PlacedCrate(crate=crate, x=x, y=y, z=z,
                               orientation=orientation, step=step)
        return None

    @staticmethod
    def _first_fit(
        grid: OccupancyGrid, crate: Crate, origin: Tuple[int, int, int],
    ) -> Optional[Orientation]:
        for orientation in ORIENTATION_PRIORITY:
            if grid.fits(crate, origin, orientation):
                return orientation
        return None
