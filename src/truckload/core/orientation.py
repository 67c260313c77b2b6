"""
Crate orientations.

Each orientation maps the crate's (width, height, length) onto the truck's
(X, Y, Z) axes. Only four of the six axis-aligned permutations are used;
``ORIENTATION_PRIORITY`` is the order in which the placement search tries
them at every origin.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from truckload.core.models import Crate

# Crate axis names, indexed by the entries of an axis mapping.
WIDTH, HEIGHT, LENGTH = "width", "height", "length"


class Orientation(Enum):
    """
    Value = (axis on truck X, axis on truck Y, axis on truck Z,
             turn_horizontal, turn_vertical).
    """

    NO_ROTATION = (WIDTH, HEIGHT, LENGTH, False, False)
    VERTICAL = (HEIGHT, WIDTH, LENGTH, False, True)      # 90° about Z
    HORIZONTAL = (LENGTH, HEIGHT, WIDTH, True, False)    # 90° about Y
    BOTH = (HEIGHT, LENGTH, WIDTH, True, True)

    @property
    def axes(self) -> Tuple[str, str, str]:
        return self.value[:3]

    @property
    def turn_horizontal(self) -> bool:
        return self.value[3]

    @property
    def turn_vertical(self) -> bool:
        return self.value[4]

    def extents(self, crate: Crate) -> Tuple[int, int, int]:
        """Oriented (X, Y, Z) extents of ``crate``."""
        return tuple(getattr(crate, axis) for axis in self.axes)  # type: ignore[return-value]


ORIENTATION_PRIORITY: Tuple[Orientation, ...] = (
    Orientation.NO_ROTATION,
    Orientation.VERTICAL,
    Orientation.HORIZONTAL,
    Orientation.BOTH,
)
