"""Metrics tracking and export for loading plans.

Provides a dataclass summarising one planning run and utilities for
exporting plans to JSON and loading instructions to CSV.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from truckload.core.models import Crate, LoadingPlanResult, Truck

INSTRUCTION_FIELDS = [
    "CrateId", "LoadingStepNumber", "TopLeftX", "TopLeftY",
    "TurnHorizontal", "TurnVertical",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PlanMetrics:
    """Metrics for a single planning run.

    Attributes:
        plan_id: Unique identifier for the run.
        truck_width: Truck X extent.
        truck_height: Truck Y extent.
        truck_length: Truck Z extent.
        crates_total: Number of crates submitted.
        crates_placed: Number of crates that received an instruction.
        crates_unplaced: Number of crates left out of the plan.
        volume_loaded: Total volume of placed crates.
        volume_total: Truck volume.
        utilization_pct: Loaded share of the truck volume (0-100).
        runtime_seconds: Wall time from start to mark_complete().
        started_at: Run start timestamp.
        completed_at: Run completion timestamp (None if running).
    """

    plan_id: str
    truck_width: int = 0
    truck_height: int = 0
    truck_length: int = 0
    crates_total: int = 0
    crates_placed: int = 0
    crates_unplaced: int = 0
    volume_loaded: int = 0
    volume_total: int = 0
    utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None

    @classmethod
    def from_result(
        cls,
        plan_id: str,
        truck: Truck,
        crates: Sequence[Crate],
        result: LoadingPlanResult,
        started_at: datetime | None = None,
    ) -> "PlanMetrics":
        """Build metrics from a finished plan.

        Example:
            >>> truck = Truck(2, 1, 1)
            >>> crates = [Crate(1, 1, 1, 1)]
            >>> result = LoadingPlan(truck, crates).plan()
            >>> PlanMetrics.from_result("plan_001", truck, crates, result).utilization_pct
            50.0
        """
        volume_loaded = result.loaded_volume
        volume_total = truck.volume
        metrics = cls(
            plan_id=plan_id,
            truck_width=truck.width,
            truck_height=truck.height,
            truck_length=truck.length,
            crates_total=len(crates),
            crates_placed=len(result.instructions),
            crates_unplaced=len(result.unplaced),
            volume_loaded=volume_loaded,
            volume_total=volume_total,
            utilization_pct=(volume_loaded / volume_total) * 100 if volume_total > 0 else 0.0,
        )
        if started_at is not None:
            metrics.started_at = started_at
        return metrics

    def mark_complete(self) -> None:
        """Mark the run as complete and calculate runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamps."""
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        return d


def export_to_json(data: dict[str, Any], output_path: Path | str) -> None:
    """Export a plan result dictionary to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_instructions_csv(
    result: LoadingPlanResult,
    output_path: Path | str,
    include_origin: bool = False,
) -> None:
    """Export loading instructions to CSV, ordered by loading step.

    Args:
        result: Finished plan.
        output_path: Path to output CSV file.
        include_origin: Add an ``OriginZ`` column taken from the placement.

    Unplaced crates are not written; an empty plan still gets a header row.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = INSTRUCTION_FIELDS + (["OriginZ"] if include_origin else [])
    instructions = sorted(result.instructions.values(), key=lambda i: i.loading_step_number)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for instruction in instructions:
            row = instruction.to_dict()
            if include_origin:
                placed = result.placement_for(instruction.crate_id)
                row["OriginZ"] = placed.z if placed is not None else ""
            writer.writerow(row)


def print_summary(metrics: PlanMetrics, unplaced: Sequence[int] = ()) -> str:
    """Generate a human-readable summary of a planning run.

    Example:
        >>> pm = PlanMetrics("plan_001", 4, 4, 4, crates_total=1, crates_placed=1)
        >>> "Plan: plan_001" in print_summary(pm)
        True
    """
    lines = [
        "=" * 60,
        f"Plan: {metrics.plan_id}",
        f"Truck: {metrics.truck_width} x {metrics.truck_height} x {metrics.truck_length}",
        "=" * 60,
        f"Crates Total:    {metrics.crates_total}",
        f"Crates Placed:   {metrics.crates_placed}",
        f"Crates Unplaced: {metrics.crates_unplaced}",
        "",
        f"Volume Loaded: {metrics.volume_loaded} / {metrics.volume_total}",
        f"Utilization:   {metrics.utilization_pct:.2f}%",
        "",
        f"Runtime: {metrics.runtime_seconds:.3f} seconds",
    ]
    if unplaced:
        lines.append(f"Unplaced crate ids: {', '.join(str(c) for c in unplaced)}")
    lines.append("=" * 60)
    return "\n".join(lines)
