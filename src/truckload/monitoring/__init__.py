"""Monitoring module for the truck loading planner.

Provides console step logging, plan metrics with JSON/CSV export, and
Telegram notifications.
"""

from .metrics import (
    PlanMetrics,
    export_instructions_csv,
    export_to_json,
    print_summary,
)
from .step_logger import StepLogger
from .telegram_notifier import (
    format_error,
    format_plan_start,
    format_plan_summary,
    format_unplaced_crates,
    send_telegram,
)

__all__ = [
    # Metrics
    "PlanMetrics",
    "export_instructions_csv",
    "export_to_json",
    "print_summary",
    # Console
    "StepLogger",
    # Telegram
    "send_telegram",
    "format_plan_start",
    "format_plan_summary",
    "format_unplaced_crates",
    "format_error",
]
