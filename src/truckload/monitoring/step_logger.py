"""
Step logger — console output and structured recording of each loading step.

Usage:
    logger = StepLogger(verbose=True)
    for record in result.steps:
        logger.log_step(record)
    logger.print_summary(summary_dict)
"""

from typing import List

from truckload.core.models import StepRecord


class StepLogger:
    """Logs loading steps to console and stores them for JSON output."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self._records: List[dict] = []

    def log_step(self, record: StepRecord) -> None:
        """Log a single step (placed or unplaced)."""
        self._records.append(record.to_dict())

        if not self.verbose:
            return

        crate = record.crate
        dims_str = f"{crate.width}x{crate.height}x{crate.length}"

        if record.success and record.placement is not None:
            p = record.placement
            print(
                f"  Step {record.step:3d}: "
                f"Crate #{crate.crate_id:3d} ({dims_str}) "
                f"-> ({p.x}, {p.y}, {p.z}) "
                f"orient={p.orientation.name}  "
                f"[{record.elapsed_ms:.1f}ms]  OK"
            )
        else:
            print(
                f"  Step {record.step:3d}: "
                f"Crate #{crate.crate_id:3d} ({dims_str}) "
                f"-> UNPLACED: no free origin/orientation  "
                f"[{record.elapsed_ms:.1f}ms]"
            )

    def print_summary(self, summary: dict) -> None:
        """Print a formatted plan summary block."""
        print("\n" + "=" * 65)
        print("  LOADING PLAN SUMMARY")
        print("=" * 65)
        print(f"  Utilization:      {summary['utilization_pct']:.1f}%")
        print(f"  Crates placed:    {summary['crates_placed']} / {summary['crates_total']}")
        print(f"  Crates unplaced:  {summary['crates_unplaced']}")
        print(f"  Runtime:          {summary['runtime_seconds'] * 1000:.1f} ms")
        print("=" * 65 + "\n")

    def get_records(self) -> List[dict]:
        """All logged step records as dicts (for JSON output)."""
        return list(self._records)
