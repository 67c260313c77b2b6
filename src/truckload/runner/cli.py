"""
Plan runner — command-line entry point for the loading planner.

Orchestrates one planning run:
  1. Load a manifest or generate random crates
  2. Build and run the LoadingPlan
  3. Log every loading step and collect plan metrics
  4. Export the plan to JSON / CSV under the output directory
  5. Optionally send Telegram start / summary / error messages

Usage (CLI):
    truckload-plan --manifest manifests/week12.yaml --verbose
    truckload-plan --generate 30 --truck 10 8 20 --seed 7 --notify

Usage (Python):
    from truckload.runner.cli import run_plan
    result = run_plan(truck, crates, RunConfig(verbose=True))

Exit status: 0 when every crate is placed, 1 when some crates are
unplaced, 2 on manifest or precondition errors.
"""

from __future__ import annotations

import argparse
import asyncio
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from truckload.algorithms.loading_plan import LoadingPlan
from truckload.config import RunConfig
from truckload.core.errors import LoadingPlanError
from truckload.core.models import Crate, LoadingPlanResult, Truck
from truckload.monitoring.metrics import (
    PlanMetrics,
    export_instructions_csv,
    export_to_json,
    print_summary,
)
from truckload.monitoring.step_logger import StepLogger
from truckload.monitoring.telegram_notifier import (
    format_error,
    format_plan_start,
    format_plan_summary,
    format_unplaced_crates,
    send_telegram,
)
from truckload.runner.manifest import ManifestError, generate_crates, load_manifest

EXIT_COMPLETE = 0
EXIT_PARTIAL = 1
EXIT_ERROR = 2

_LIVE_KEYS = ("result", "plan_metrics")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]", re.ASCII)


# ─────────────────────────────────────────────────────────────────────────────
# Core API
# ─────────────────────────────────────────────────────────────────────────────

def run_plan(
    truck: Truck,
    crates: Sequence[Crate],
    config: Optional[RunConfig] = None,
    plan_id: Optional[str] = None,
) -> dict:
    """
    Run one loading plan and collect everything needed for export.

    Args:
        truck:   Truck cargo space.
        crates:  Crates in input order.
        config:  Run configuration (defaults to RunConfig()).
        plan_id: Identifier used in metrics and file names.

    Returns:
        dict with keys: plan_id, config, metrics, instructions, unplaced,
        placements, steps, result, plan_metrics.  ``result`` and
        ``plan_metrics`` hold live objects and are dropped before JSON export.

    Raises:
        LoadingPlanError subclasses when the inputs fail validation.
    """
    config = config or RunConfig()
    plan_id = plan_id or f"plan_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
    started_at = datetime.now(timezone.utc)

    if config.verbose:
        print(f"\n  Plan:    {plan_id}")
        print(f"  Truck:   {truck.width}×{truck.height}×{truck.length}")
        print(f"  Crates:  {len(crates)}")
        print("-" * 65)

    result = LoadingPlan(truck, crates).plan()

    logger = StepLogger(verbose=config.verbose)
    for record in result.steps:
        logger.log_step(record)

    metrics = PlanMetrics.from_result(plan_id, truck, crates, result, started_at=started_at)
    metrics.mark_complete()

    if config.verbose:
        logger.print_summary(metrics.to_dict())

    return {
        "plan_id": plan_id,
        "config": config.to_dict(),
        "truck": truck.to_dict(),
        "metrics": metrics.to_dict(),
        "instructions": {
            str(crate_id): instruction.to_dict()
            for crate_id, instruction in result.instructions.items()
        },
        "unplaced": list(result.unplaced),
        "placements": [p.to_dict() for p in result.placements],
        "steps": logger.get_records(),
        "result": result,
        "plan_metrics": metrics,
    }


def export_file_stem(plan_id: str) -> str:
    """Plan id reduced to characters that are safe in a single file name."""
    return _UNSAFE_FILENAME_CHARS.sub("_", plan_id) or "plan"


def export_plan(run: dict, config: RunConfig) -> List[Path]:
    """
    Write the configured export files; returns the written paths.

    Files are named `<stem>_plan.json` and `<stem>_instructions.csv` inside
    `config.output_dir`, so an input manifest is never overwritten.
    """
    output_dir = Path(config.output_dir)
    stem = export_file_stem(run["plan_id"])
    written: List[Path] = []

    if config.export_json:
        json_path = output_dir / f"{stem}_plan.json"
        export_to_json({k: v for k, v in run.items() if k not in _LIVE_KEYS}, json_path)
        written.append(json_path)

    if config.export_csv:
        csv_path = output_dir / f"{stem}_instructions.csv"
        result: LoadingPlanResult = run["result"]
        export_instructions_csv(result, csv_path, include_origin=config.include_origin)
        written.append(csv_path)

    return written


def _notify(config: RunConfig, message: str) -> None:
    if config.notify:
        asyncio.run(send_telegram(message))


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="truckload-plan",
        description="Greedy truck loading planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  truckload-plan --manifest manifests/week12.yaml --verbose
  truckload-plan --generate 30 --truck 10 8 20 --seed 7
  truckload-plan --manifest plan.json --include-origin --no-json
        """,
    )

    # Input
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--manifest", type=str, help="Path to a YAML or JSON manifest")
    src.add_argument("--generate", type=int, metavar="N",
                     help="Generate N random crates")

    parser.add_argument("--truck", type=int, nargs=3, metavar=("W", "H", "L"),
                        default=[10, 8, 20],
                        help="Truck width, height, length for --generate")
    parser.add_argument("--gen-min", type=int, default=1)
    parser.add_argument("--gen-max", type=int, default=None,
                        help="Largest generated dimension (default: half the smallest truck dimension)")
    parser.add_argument("--seed", type=int, default=42)

    # Output
    parser.add_argument("--output-dir", default="output")
    parser.add_argument("--no-json", action="store_true", help="Skip the JSON export")
    parser.add_argument("--no-csv", action="store_true", help="Skip the CSV export")
    parser.add_argument("--include-origin", action="store_true",
                        help="Add the origin Z column to the CSV export")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--notify", action="store_true",
                        help="Send Telegram notifications (needs TELEGRAM_* env vars)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = RunConfig(
        manifest_path=args.manifest or "",
        output_dir=args.output_dir,
        export_json=not args.no_json,
        export_csv=not args.no_csv,
        include_origin=args.include_origin,
        verbose=args.verbose,
        notify=args.notify,
    )

    # ── Input ────────────────────────────────────────────────────────────
    plan_id = None
    try:
        if args.manifest:
            print(f"\n  Loading manifest: {args.manifest}")
            manifest = load_manifest(args.manifest)
            truck, crates = manifest.to_truck(), manifest.to_crates()
            plan_id = manifest.name
        else:
            truck = Truck(*args.truck)
            crates = generate_crates(args.generate, truck, args.gen_min, args.gen_max, seed=args.seed)
            print(f"\n  Generated {len(crates)} of {args.generate} crates (seed={args.seed})")
    except (ManifestError, ValueError) as exc:
        print(f"  Error: {exc}")
        _notify(config, format_error(type(exc).__name__, str(exc),
                                     {"manifest": config.manifest_path or "generated"}))
        return EXIT_ERROR

    _notify(config, format_plan_start(truck.dimensions, len(crates),
                                      config.manifest_path or "generated"))

    # ── Run ──────────────────────────────────────────────────────────────
    try:
        run = run_plan(truck, crates, config, plan_id=plan_id)
    except LoadingPlanError as exc:
        print(f"  {type(exc).__name__}: {exc}")
        _notify(config, format_error(type(exc).__name__, str(exc),
                                     {"crates": len(crates)}))
        return EXIT_ERROR

    # ── Save ─────────────────────────────────────────────────────────────
    for path in export_plan(run, config):
        print(f"  Saved: {path}")

    # ── Summary ──────────────────────────────────────────────────────────
    m = run["metrics"]
    print(print_summary(run["plan_metrics"], run["unplaced"]))

    _notify(config, format_plan_summary(run["plan_id"], m["crates_placed"], m["crates_total"],
                                        m["utilization_pct"], m["runtime_seconds"]))
    if run["unplaced"]:
        _notify(config, format_unplaced_crates(run["plan_id"], run["unplaced"]))
        return EXIT_PARTIAL
    return EXIT_COMPLETE


if __name__ == "__main__":
    raise SystemExit(main())
