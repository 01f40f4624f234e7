# ==============================================================================
# Serve Command
# ==============================================================================
"""
Runs the HTTP API with uvicorn.
"""

import logging
from typing import Annotated, Optional

import typer

from pulse.utils.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging once for the server process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("redis").setLevel(logging.WARNING)


def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Bind port")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Start the collection and stats API server.

    Examples:
        pulse serve
        pulse serve --host 0.0.0.0 --port 8080
    """
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "pulse.api.app:create_app",
        factory=True,
        host=host or settings.api.host,
        port=port or settings.api.port,
        reload=reload,
        log_config=None,
    )
