"""
Loading plan errors.

Every error here is a precondition failure detected before the placement
search starts. A crate that simply finds no free space is not an error;
it is reported through ``LoadingPlanResult.unplaced``.
"""


class LoadingPlanError(Exception):
    """Base class for loading plan precondition errors."""


class CrateTooLargeError(LoadingPlanError):
    """A crate dimension exceeds every truck dimension at once."""

    def __init__(self, dimension: str, crate_id: int | None = None) -> None:
        self.dimension = dimension
        self.crate_id = crate_id
        super().__init__(
            f"We have a crate with {dimension} larger than truck dimensions"
            + (f" (crate {crate_id})." if crate_id is not None else ".")
        )


class InvalidCargoVolumeError(LoadingPlanError):
    """The truck has no usable cargo volume."""


class InvalidCrateVolumeError(LoadingPlanError):
    """The crates have no positive total volume."""


class VolumeExceededError(LoadingPlanError):
    """Total crate volume is larger than the truck volume."""

    def __init__(self, crate_volume: int, truck_volume: int) -> None:
        self.crate_volume = crate_volume
        self.truck_volume = truck_volume
        super().__init__(
            f"The volume of crates ({crate_volume}) exceeds "
            f"the volume of cargo ({truck_volume})."
        )


class DuplicateCrateIdError(LoadingPlanError):
    """Two crates share the same identifier."""

    def __init__(self, crate_id: int) -> None:
        self.crate_id = crate_id
        super().__init__(f"Crate id {crate_id} appears more than once.")
