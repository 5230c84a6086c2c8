# Area: Shared
"""Error formatting for structured engine error logs."""

from __future__ import annotations
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def format_error_block(
    error_type: str,
    component: str,
    player_id: Optional[int],
    context: Dict[str, Any],
    details: Optional[List[str]],
    fatal: bool,
) -> str:
    """Format a structured error block for terminal and log output."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    headline = " ENGINE ERROR — RUN ABORTED" if fatal else " ENGINE ERROR — PLAYER CONTAINED"

    lines = [
        "",
        "=" * 64,
        headline,
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Component:    {component}",
    ]

    if player_id is not None:
        lines.append(f" Player:       {player_id}")

    lines.append("")
    lines.append(" ── CONTEXT " + "─" * 52)
    lines.append(indent_json(context))

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        for detail in details:
            lines.append(f" • {detail}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
