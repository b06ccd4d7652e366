# =============================================================================
# src/cli/match.py - Offline Matching Command
# =============================================================================
#
# Runs the occurrence matching engine over event pools saved to a JSON
# file, without the API server or any network access.  Useful for
# reproducing a search from captured provider responses.
#
# Input file shape:
#
#   {
#     "picks":  {"p1": "team:NHL:Edmonton Oilers", "p2": "artist:K8vZ9171ob7"},
#     "pools":  {"p1": [<raw event>, ...], "p2": [<raw event>, ...]},
#     "days": 3,                 (optional, overridden by --days)
#     "radius": 100,             (optional, overridden by --radius)
#     "startDate": "2025-05-01", (optional)
#     "endDate": "2025-05-31"    (optional)
#   }
#
# A pool may also be a full provider response ({"_embedded": {"events":
# [...]}}); the events list is taken from it.
#
# Typical usage:
#   python -m src.cli.match pools.json
#   python -m src.cli.match pools.json --days 2 --radius 50 --json
#   python -m src.cli.match pools.json --membership pairwise -o result.json
# =============================================================================

"""Offline CLI for the occurrence matching engine.

Usage::

    python -m src.cli.match pools.json
    python -m src.cli.match pools.json --json
    python -m src.cli.match pools.json --days 2 --radius 50

Reads picks and raw event pools from a JSON file, runs the matcher, and
prints a text report or the result as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

from src.models.matching import (
    DateRange,
    MatchOptions,
    MatchRequest,
    MatchResult,
    MembershipPolicy,
)
from src.models.pick import Slot
from src.pipeline.orchestrator import OccurrenceMatcher
from src.services.picks import parse_picks
from src.utils.errors import RendezvousError
from src.utils.logging import configure_logging

_DEFAULT_DAYS = 3
_DEFAULT_RADIUS = 100.0


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------


def _pool_events(pool: Any) -> list[dict[str, Any]]:
    """Accept either a bare event list or a provider response body."""
    if isinstance(pool, list):
        return [e for e in pool if isinstance(e, dict)]
    if isinstance(pool, dict):
        events = (pool.get("_embedded") or {}).get("events") or []
        return [e for e in events if isinstance(e, dict)]
    return []


def _optional_date(value: Any) -> date | None:
    if not value:
        return None
    return date.fromisoformat(str(value))


def build_request(
    document: dict[str, Any],
    days: int | None = None,
    radius: float | None = None,
) -> MatchRequest:
    """Turn a loaded input document into a :class:`MatchRequest`.

    Command-line *days* / *radius* win over the document's values.
    """
    texts = document.get("picks") or {}
    picks = parse_picks(texts.get("p1"), texts.get("p2"), texts.get("p3"))
    present = {p.slot for p in picks}

    pools: dict[Slot, list[dict[str, Any]]] = {}
    for key, pool in (document.get("pools") or {}).items():
        slot = Slot(key)
        if slot in present:
            pools[slot] = _pool_events(pool)

    start = _optional_date(document.get("startDate"))
    end = _optional_date(document.get("endDate"))
    date_range = DateRange(start=start, end=end) if (start or end) else None

    return MatchRequest(
        picks=tuple(picks),
        raw_events_by_slot=pools,
        max_days=days if days is not None else int(document.get("days") or _DEFAULT_DAYS),
        radius_miles=(
            radius if radius is not None else float(document.get("radius") or _DEFAULT_RADIUS)
        ),
        date_range=date_range,
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(result: MatchResult) -> str:
    """Human-readable report of occurrences and any fallback."""
    lines: list[str] = []
    sep = "=" * 60

    lines.append(sep)
    lines.append(f"  Mode: {result.mode.value if result.mode else 'none'}")
    lines.append(f"  Occurrences: {len(result.occurrences)}")
    lines.append(sep)

    for index, occurrence in enumerate(result.occurrences, start=1):
        span = f"{occurrence.start_date} → {occurrence.end_date}" if occurrence.start_date else "no events"
        lines.append("")
        lines.append(f"#{index}  {span}  (coverage {occurrence.coverage})")
        for event in occurrence.members:
            when = event.local_date.isoformat()
            if event.local_time is not None:
                when += f" {event.local_time.strftime('%H:%M')}"
            slots = ",".join(sorted({p.slot.value for p in event.origin_picks}))
            lines.append(f"    {when}  {event.name}  @ {event.venue.city_region or '?'}  [{slots}]")

    fallback = result.fallback
    if fallback is not None:
        lines.append("")
        lines.append("NO OVERLAP - SCHEDULES")
        lines.append("-" * 40)
        for schedule in fallback.schedules:
            lines.append(f"  {schedule.slot.value}: {schedule.label} ({len(schedule.events)} events)")
        if fallback.closest is not None:
            pair = fallback.closest
            lines.append(
                f"  Closest: {pair.first.venue.city_region} {pair.first.local_date} / "
                f"{pair.second.venue.city_region} {pair.second.local_date} - "
                f"{pair.distance_miles:,.0f} mi, {pair.days_apart} day(s) apart"
            )
        else:
            lines.append("  Closest: none within the day window")

    return "\n".join(lines)


def _format_json_output(result: MatchResult) -> str:
    return json.dumps(result.model_dump(mode="json"), indent=2, default=str)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def run(
    input_path: Path,
    json_output: bool = False,
    output_file: str | None = None,
    days: int | None = None,
    radius: float | None = None,
    membership: str = MembershipPolicy.ANCHOR.value,
    min_run: int = 1,
) -> int:
    """Run the matcher over *input_path*.  Returns a process exit code."""
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        document = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print(f"Error: Invalid JSON in {input_path}: {exc}", file=sys.stderr)
        return 1
    if not isinstance(document, dict):
        print("Error: Input must be a JSON object with 'picks' and 'pools'.", file=sys.stderr)
        return 1

    try:
        request = build_request(document, days=days, radius=radius)
        matcher = OccurrenceMatcher(
            MatchOptions(membership=MembershipPolicy(membership), single_pick_min_run=min_run)
        )
        result = matcher.match(request)
    except (RendezvousError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    text = _format_json_output(result) if json_output else _format_text_output(result)
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        print(f"Results written to: {output_file}", file=sys.stderr)
    else:
        print(text)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.match",
        description="Run the occurrence matcher over saved event pools.",
    )
    parser.add_argument("input", type=str, help="Path to the picks + pools JSON file.")
    parser.add_argument("--days", type=int, default=None, help="Trip length in days.")
    parser.add_argument("--radius", type=float, default=None, help="Radius in miles.")
    parser.add_argument(
        "--membership",
        choices=[p.value for p in MembershipPolicy],
        default=MembershipPolicy.ANCHOR.value,
        help="Overlap membership policy.",
    )
    parser.add_argument(
        "--min-run",
        type=int,
        default=1,
        dest="min_run",
        help="Shortest same-location run kept in single-pick mode.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the result as JSON instead of formatted text.",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write results to a file instead of stdout.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output below WARNING.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the match tool."""
    args = _build_parser().parse_args(argv)

    # JSON mode implies quiet so stdout holds only the result.
    quiet = args.quiet or args.json_output
    configure_logging(log_level="WARNING" if quiet else "INFO")

    exit_code = run(
        Path(args.input).resolve(),
        json_output=args.json_output,
        output_file=args.output,
        days=args.days,
        radius=args.radius,
        membership=args.membership,
        min_run=args.min_run,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
