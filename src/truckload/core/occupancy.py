"""
Occupancy grid — dense 3D record of which truck cells are taken.

The grid is a flat boolean buffer of ``width * height * length`` cells,
indexed by ``x + width * (y + height * z)``.  A reshaped (z, y, x) view of
the same buffer lets fit checks and claims work on whole crate regions.

Usage:
    grid = OccupancyGrid(truck.width, truck.height, truck.length)
    if grid.fits(crate, (x, y, z), Orientation.NO_ROTATION):
        grid.claim(crate, (x, y, z), Orientation.NO_ROTATION)
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from truckload.core.models import Crate, Truck
from truckload.core.orientation import Orientation

Origin = Tuple[int, int, int]


class OccupancyGrid:
    """
    Boolean occupancy volume of one truck.

    Owned by a single planning run.  ``fits`` never mutates; ``claim``
    trusts that ``fits`` was checked for the same arguments.
    """

    __slots__ = ("width", "height", "length", "cells", "_volume")

    def __init__(self, width: int, height: int, length: int) -> None:
        if width <= 0 or height <= 0 or length <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {width}×{height}×{length}"
            )
        self.width = width
        self.height = height
        self.length = length
        self.cells: np.ndarray = np.zeros(width * height * length, dtype=bool)
        self._volume: np.ndarray = self.cells.reshape(length, height, width)

    @classmethod
    def for_truck(cls, truck: Truck) -> "OccupancyGrid":
        return cls(truck.width, truck.height, truck.length)

    # ── Indexing ─────────────────────────────────────────────────────────

    def index(self, x: int, y: int, z: int) -> int:
        """Flat buffer index of cell (x, y, z)."""
        return x + self.width * (y + self.height * z)

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.length

    def is_occupied(self, x: int, y: int, z: int) -> bool:
        if not self.in_bounds(x, y, z):
            raise IndexError(f"Cell ({x}, {y}, {z}) is outside the grid")
        return bool(self.cells[self.index(x, y, z)])

    @property
    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    # ── Placement queries ────────────────────────────────────────────────

    def _region(self, crate: Crate, origin: Origin, orientation: Orientation) -> np.ndarray | None:
        """
        View of the cells the oriented crate covers, or None when any of
        them falls outside the grid.
        """
        x, y, z = origin
        dx, dy, dz = orientation.extents(crate)
        if x < 0 or y < 0 or z < 0:
            return None
        if x + dx > self.width or y + dy > self.height or z + dz > self.length:
            return None
        return self._volume[z:z + dz, y:y + dy, x:x + dx]

    def fits(self, crate: Crate, origin: Origin, orientation: Orientation) -> bool:
        """True when every covered cell is inside the grid and free."""
        if min(orientation.extents(crate)) <= 0:
            # a crate without extent covers no cells
            return True
        region = self._region(crate, origin, orientation)
        if region is None:
            return False
        return not bool(region.any())

    def claim(self, crate: Crate, origin: Origin, orientation: Orientation) -> None:
        """Mark every covered cell as occupied."""
        if min(orientation.extents(crate)) <= 0:
            return
        x, y, z = origin
        dx, dy, dz = orientation.extents(crate)
        self._volume[z:z + dz, y:y + dy, x:x + dx] = True

    def __repr__(self) -> str:
        return (
            f"OccupancyGrid({self.width}×{self.height}×{self.length}, "
            f"occupied={self.occupied_count}/{self.cells.size})"
        )
