# ==============================================================================
# Data Commands
# ==============================================================================
"""
Data management commands for the pulse CLI.

Commands for clearing the event store and loading previously exported events.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from pulse.cli.shared import C, I


# ==============================================================================
# Commands
# ==============================================================================


def data_clear(
    confirm: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """Delete every stored event from all configured backends.

    Examples:
        pulse data clear       # With confirmation prompt
        pulse data clear -y    # Skip confirmation
    """
    from pulse.infrastructure.stores import get_event_store
    from pulse.services import StatsService

    store = get_event_store()

    print()
    if not confirm:
        typer.confirm(
            f"This will DELETE all events from {store.name}. Are you sure?",
            abort=True,
        )
        print()

    results = StatsService(store).clear()
    for name, ok in results.items():
        if ok:
            print(f"{C.BRIGHT_GREEN}{I.CHECK} {name} cleared{C.RESET}")
        else:
            print(f"{C.BRIGHT_RED}{I.CROSS} Failed to clear {name}{C.RESET}")
    print()

    if not any(results.values()):
        raise typer.Exit(1)


def data_import(
    path: Annotated[
        Path,
        typer.Argument(help="JSON file holding an array of stored events", exists=True, dir_okay=False),
    ],
) -> None:
    """Append events from a JSON export (e.g. an old db.json) to the store.

    Records are appended as-is, in file order. They must already carry a
    session fingerprint; the tracking endpoint is not involved.

    Examples:
        pulse data import /tmp/data/db.json
    """
    from pulse.base import StoreUnavailableError
    from pulse.infrastructure.stores import get_event_store

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} {path} is not valid JSON: {e}{C.RESET}")
        raise typer.Exit(1)

    if not isinstance(records, list):
        print(f"{C.BRIGHT_RED}{I.CROSS} {path} must contain a JSON array{C.RESET}")
        raise typer.Exit(1)

    store = get_event_store()
    imported = 0
    skipped = 0
    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        try:
            store.append(record)
        except StoreUnavailableError as e:
            print(f"{C.BRIGHT_RED}{I.CROSS} Event store unavailable: {e}{C.RESET}")
            raise typer.Exit(1)
        imported += 1

    print(
        f"{C.BRIGHT_GREEN}{I.CHECK} Imported {C.WHITE}{imported}{C.RESET}"
        f"{C.BRIGHT_GREEN} events into {store.name}{C.RESET}"
    )
    if skipped:
        print(f"{C.BRIGHT_YELLOW}{I.CIRCLE} Skipped {skipped} non-object entries{C.RESET}")
