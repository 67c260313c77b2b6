"""
Run configuration for the loading planner.

Classes:
    RunConfig — all tuneable parameters of a single planning run
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class RunConfig:
    """
    Parameters of one planning run driven by the CLI.

    Attributes:
        manifest_path:  Manifest the truck and crates were loaded from
                        (empty for generated crates).
        output_dir:     Directory for exported plans.
        export_json:    Write the full plan as JSON.
        export_csv:     Write the loading instructions as CSV.
        include_origin: Add the internal origin Z column to CSV exports.
        verbose:        Print one console line per loading step.
        notify:         Send Telegram start/summary/error messages.
    """

    manifest_path: str = ""
    output_dir: str = "output"
    export_json: bool = True
    export_csv: bool = True
    include_origin: bool = False
    verbose: bool = False
    notify: bool = False

    def to_dict(self) -> dict:
        return asdict(self)
