"""Core data models for truck loading plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from truckload.core.orientation import Orientation


@dataclass(frozen=True)
class Truck:
    """Cargo space of a truck, in discrete units shared with the crates."""

    width: int   # X extent
    height: int  # Y extent
    length: int  # Z extent

    @property
    def volume(self) -> int:
        """Number of unit cells in the cargo space."""
        return self.width * self.height * self.length

    @property
    def dimensions(self) -> tuple[int, int, int]:
        return (self.width, self.height, self.length)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height, "length": self.length}

    def __repr__(self) -> str:
        return f"Truck({self.width}×{self.height}×{self.length})"


@dataclass(frozen=True)
class Crate:
    """A rectangular crate to be loaded."""

    crate_id: int
    width: int
    height: int
    length: int

    @property
    def volume(self) -> int:
        return self.width * self.height * self.length

    def to_dict(self) -> dict:
        return {"crate_id": self.crate_id, "width": self.width,
                "height": self.height, "length": self.length}

    def __repr__(self) -> str:
        return f"Crate(id={self.crate_id}, {self.width}×{self.height}×{self.length})"


@dataclass(frozen=True)
class LoadingInstruction:
    """
    Loading instruction for one placed crate.

    Only the X/Y coordinates of the origin are part of the instruction;
    the full origin lives on the matching PlacedCrate.

    Attributes:
        crate_id:            ID of the placed crate.
        loading_step_number: 0-based rank in descending-volume order.
        top_left_x:          Origin X coordinate.
        top_left_y:          Origin Y coordinate.
        turn_horizontal:     Horizontal turn flag of the chosen orientation.
        turn_vertical:       Vertical turn flag of the chosen orientation.
    """

    crate_id: int
    loading_step_number: int
    top_left_x: int
    top_left_y: int
    turn_horizontal: bool
    turn_vertical: bool

    def to_dict(self) -> dict:
        """Serialise with the field names used by loading consumers."""
        return {
            "CrateId": self.crate_id,
            "LoadingStepNumber": self.loading_step_number,
            "TopLeftX": self.top_left_x,
            "TopLeftY": self.top_left_y,
            "TurnHorizontal": self.turn_horizontal,
            "TurnVertical": self.turn_vertical,
        }


@dataclass(frozen=True)
class PlacedCrate:
    """A crate committed to the grid, with its full 3D origin."""

    crate: Crate
    x: int
    y: int
    z: int
    orientation: "Orientation"
    step: int

    @property
    def extents(self) -> tuple[int, int, int]:
        """Oriented (X, Y, Z) extents of the crate."""
        return self.orientation.extents(self.crate)

    @property
    def origin(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def cells(self) -> set[tuple[int, int, int]]:
        """All unit cells claimed by this crate."""
        dx, dy, dz = self.extents
        return {
            (self.x + i, self.y + j, self.z + k)
            for i in range(dx)
            for j in range(dy)
            for k in range(dz)
        }

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "crate_id": self.crate.crate_id,
            "position": [self.x, self.y, self.z],
            "dims": list(self.extents),
            "orientation": self.orientation.name,
        }


@dataclass(frozen=True)
class StepRecord:
    """Outcome of processing one crate during the placement search."""

    step: int
    crate: Crate
    placement: PlacedCrate | None
    instruction: LoadingInstruction | None
    elapsed_ms: float

    @property
    def success(self) -> bool:
        return self.instruction is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "crate": self.crate.to_dict(),
            "success": self.success,
            "placement": self.placement.to_dict() if self.placement else None,
            "instruction": self.instruction.to_dict() if self.instruction else None,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }


class _Unplaced:
    """Marker returned for crates the search could not place."""

    _instance: "_Unplaced | None" = None

    def __new__(cls) -> "_Unplaced":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNPLACED"


UNPLACED = _Unplaced()


@dataclass
class LoadingPlanResult:
    """
    Everything one planning run produced.

    ``instructions`` only holds crates that were placed; ``unplaced`` lists
    the remaining crate ids in processing order so partial loads cannot be
    mistaken for complete ones.
    """

    instructions: dict[int, LoadingInstruction] = field(default_factory=dict)
    placements: list[PlacedCrate] = field(default_factory=list)
    unplaced: list[int] = field(default_factory=list)
    steps: list[StepRecord] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.unplaced

    @property
    def loaded_volume(self) -> int:
        return sum(p.crate.volume for p in self.placements)

    def outcome(self, crate_id: int) -> "LoadingInstruction | _Unplaced":
        """Instruction for ``crate_id`` or the ``UNPLACED`` marker."""
        if crate_id in self.instructions:
            return self.instructions[crate_id]
        if crate_id in self.unplaced:
            return UNPLACED
        raise KeyError(f"Crate {crate_id} was not part of this plan")

    def placement_for(self, crate_id: int) -> PlacedCrate | None:
        for placed in self.placements:
            if placed.crate.crate_id == crate_id:
                return placed
        return None
