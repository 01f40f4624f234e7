# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the pulse CLI.
"""

import json
from typing import Annotated

import typer

from pulse.cli.shared import C
from pulse.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (includes the Valkey URL in JSON mode)."""
    settings = get_settings()

    # JSON output mode
    if json_output:
        config = {
            "store": {
                "backends": list(settings.store.backends),
            },
            "valkey": {
                "configured": settings.valkey.is_configured,
                "url": settings.valkey.url,
                "events_key": settings.valkey.events_key,
                "max_events": settings.valkey.max_events,
            },
            "file_store": {
                "path": str(settings.file_store.path),
            },
            "session": {
                "timeout_minutes": settings.session.timeout_minutes,
                "top_referrers": settings.session.top_referrers,
                "top_pages": settings.session.top_pages,
            },
            "api": {
                "host": settings.api.host,
                "port": settings.api.port,
                "allow_origins": settings.api.allow_origins,
            },
            "log_level": settings.log_level,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Store{C.RESET}")
    print(f"  Backends:   {C.WHITE}{', '.join(settings.store.backends)}{C.RESET}")
    print()

    print(f"{C.CYAN}Valkey{C.RESET}")
    valkey_status = "configured" if settings.valkey.is_configured else "not configured"
    print(f"  Status:     {C.WHITE}{valkey_status}{C.RESET}")
    print(f"  Key:        {C.WHITE}{settings.valkey.events_key}{C.RESET}")
    print(f"  Max events: {C.WHITE}{settings.valkey.max_events:,}{C.RESET}")
    print()

    print(f"{C.CYAN}File Store{C.RESET}")
    print(f"  Path:       {C.WHITE}{settings.file_store.path}{C.RESET}")
    print()

    print(f"{C.CYAN}Sessions{C.RESET}")
    print(f"  Timeout:    {C.WHITE}{settings.session.timeout_minutes:g} minutes{C.RESET}")
    print(f"  Referrers:  {C.WHITE}top {settings.session.top_referrers}{C.RESET}")
    print(f"  Pages:      {C.WHITE}top {settings.session.top_pages}{C.RESET}")
    print()

    print(f"{C.CYAN}API{C.RESET}")
    print(f"  Listen:     {C.WHITE}{settings.api.host}:{settings.api.port}{C.RESET}")
    print(f"  Origins:    {C.WHITE}{', '.join(settings.api.allow_origins)}{C.RESET}")
    print()
