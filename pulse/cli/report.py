# ==============================================================================
# Report Command
# ==============================================================================
"""
Report command for the pulse CLI.

Displays the session report computed from the configured event store.
"""

import json
from typing import Annotated

import typer

from pulse.cli.shared import (
    BOX_WIDTH,
    C,
    I,
    _box_bottom,
    _box_header,
    _box_line,
    _empty_line,
    _section_header,
    _truncate,
)


# ==============================================================================
# Commands
# ==============================================================================


def show_report(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
    breakdowns: Annotated[
        bool, typer.Option("--breakdowns", "-b", help="Include daily, referrer and page breakdowns")
    ] = False,
    sessions: Annotated[
        bool, typer.Option("--sessions", "-s", help="Include reconstructed sessions in JSON output")
    ] = False,
) -> None:
    """Show the session report.

    Reads every stored event, rebuilds visitor sessions and prints the
    headline metrics: total views, sessions, pages per session and bounce rate.

    Examples:
        pulse report                 # Formatted table output
        pulse report --breakdowns    # Add daily, referrer and page tables
        pulse report --json -s       # Full JSON report for scripting
    """
    from pulse.base import StoreUnavailableError
    from pulse.infrastructure.stores import get_event_store
    from pulse.services import StatsService

    service = StatsService(get_event_store())
    try:
        report = service.report(include_breakdowns=breakdowns)
    except StoreUnavailableError as e:
        if json_output:
            print(json.dumps({"error": f"Event store unavailable: {e}"}))
        else:
            print(f"\n{C.BRIGHT_RED}{I.CROSS} Event store unavailable: {e}{C.RESET}\n")
        raise typer.Exit(1)

    # JSON output mode
    if json_output:
        if not sessions:
            report.pop("sessions", None)
        print(json.dumps(report, indent=2))
        return

    W = BOX_WIDTH

    print()
    print(_box_header("PULSE ANALYTICS", W))
    print(_empty_line(W))

    if report["totalViews"] == 0:
        print(_box_line(f"  {C.BRIGHT_YELLOW}{I.CIRCLE} No data yet{C.RESET}", W))
        print(_empty_line(W))
        print(_box_bottom(W))
        print()
        return

    print(_box_line(f"  {'Total Views':<26}{report['totalViews']:>12,}", W))
    print(_box_line(f"  {'Sessions':<26}{report['totalSessions']:>12,}", W))
    print(_box_line(f"  {'Pages / Session':<26}{report['pagesPerSession']:>12.2f}", W))
    print(_box_line(f"  {'Bounce Rate':<26}{report['bounceRate']:>11.2f}%", W))
    print(_empty_line(W))

    if breakdowns:
        _print_ranking("DAILY VIEWS", [(d["day"], d["count"]) for d in report["dailyCounts"]], W)
        _print_ranking("TOP REFERRERS", [(r["ref"], r["count"]) for r in report["topReferrers"]], W)
        _print_ranking("ENTRY PAGES", [(p["page"], p["count"]) for p in report["topEntryPages"]], W)
        _print_ranking("EXIT PAGES", [(p["page"], p["count"]) for p in report["topExitPages"]], W)
        _print_ranking("TOP PAGES", [(p["page"], p["count"]) for p in report["topPages"]], W)

    print(_box_bottom(W))
    print()


def _print_ranking(title: str, rows: list[tuple[str, int]], width: int) -> None:
    print(_section_header(title, width))
    if not rows:
        print(_box_line(f"  {C.DIM}(none){C.RESET}", width))
    for label, count in rows:
        print(_box_line(f"  {_truncate(label, 44):<44}{count:>12,}", width))
    print(_empty_line(width))
