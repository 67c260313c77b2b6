"""Lightweight Telegram notification for loading plan runs.

Sends plain-text messages to a Telegram channel via the Bot API for:
- Plan start notifications
- Final plan summaries
- Crates left out of a plan
- Precondition and manifest errors

No retry logic; notifications are non-critical.
"""

from __future__ import annotations

import os
from typing import Any, Sequence

import httpx


TELEGRAM_API = "https://api.telegram.org/bot{token}/sendMessage"


async def send_telegram(
    message: str,
    chat_id: str | None = None,
    token: str | None = None,
) -> bool:
    """Send a plain-text message to a Telegram channel.

    Args:
        message: Text to send.
        chat_id: Telegram chat ID. Defaults to TELEGRAM_CHAT_ID env var.
        token: Bot token. Defaults to TELEGRAM_BOT_TOKEN env var.

    Returns:
        True if message was sent successfully, False otherwise.
    """
    token = token or os.environ.get("TELEGRAM_BOT_TOKEN", "")
    if not token:
        return False

    chat_id = chat_id or os.environ.get("TELEGRAM_CHAT_ID", "")
    if not chat_id:
        return False

    url = TELEGRAM_API.format(token=token)
    payload = {"chat_id": chat_id, "text": message}

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.post(url, json=payload)
            data = resp.json()
            return bool(data.get("ok", False))
    except (httpx.HTTPError, ValueError):
        return False


def format_plan_start(
    truck_dims: tuple[int, int, int],
    crate_count: int,
    source: str,
) -> str:
    """Format plan start notification message.

    Example:
        >>> print(format_plan_start((10, 8, 20), 42, "manifests/week12.yaml"))
        🚚 Loading Plan Started
        Source: manifests/week12.yaml
        Crates: 42
        Truck: 10 x 8 x 20
    """
    return (
        f"🚚 Loading Plan Started\n"
        f"Source: {source}\n"
        f"Crates: {crate_count}\n"
        f"Truck: {truck_dims[0]} x {truck_dims[1]} x {truck_dims[2]}"
    )


def format_plan_summary(
    plan_id: str,
    crates_placed: int,
    crates_total: int,
    utilization_pct: float,
    runtime_seconds: float,
) -> str:
    """Format final plan summary.

    Example:
        >>> print(format_plan_summary("plan_001", 40, 42, 81.25, 1.5))
        ⚠️ Loading Plan Partial
        Plan: plan_001
        Placed: 40/42 crates
        Utilization: 81.2%
        Runtime: 1.50 s
    """
    status = "✅ Loading Plan Complete" if crates_placed == crates_total else "⚠️ Loading Plan Partial"
    return (
        f"{status}\n"
        f"Plan: {plan_id}\n"
        f"Placed: {crates_placed}/{crates_total} crates\n"
        f"Utilization: {utilization_pct:.1f}%\n"
        f"Runtime: {runtime_seconds:.2f} s"
    )


def format_unplaced_crates(plan_id: str, crate_ids: Sequence[int], limit: int = 20) -> str:
    """Format the list of crates the plan could not place.

    Example:
        >>> print(format_unplaced_crates("plan_001", [7, 9]))
        📦 Unplaced Crates (plan_001)
        Count: 2
        IDs: 7, 9
    """
    shown = ", ".join(str(c) for c in crate_ids[:limit])
    if len(crate_ids) > limit:
        shown += f", … (+{len(crate_ids) - limit} more)"
    return (
        f"📦 Unplaced Crates ({plan_id})\n"
        f"Count: {len(crate_ids)}\n"
        f"IDs: {shown}"
    )


def format_error(error_type: str, error_message: str, context: dict[str, Any] | None = None) -> str:
    """Format error notification message.

    Example:
        >>> print(format_error("VolumeExceededError", "too much cargo", {"crates": 3}))
        ⚠️ Error: VolumeExceededError
        too much cargo
        Context: crates=3
    """
    lines = [
        f"⚠️ Error: {error_type}",
        error_message,
    ]
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        lines.append(f"Context: {ctx_str}")
    return "\n".join(lines)
