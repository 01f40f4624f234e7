# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for pulse.

Commands are organized into separate modules for maintainability:
- shared.py: Colors, icons and box drawing helpers
- report.py: Session report
- data.py: Clearing and importing events
- config.py: Configuration display
- server.py: HTTP API server
"""

from pulse.cli.config import config_show
from pulse.cli.data import data_clear, data_import
from pulse.cli.report import show_report
from pulse.cli.server import serve

__all__ = [
    "config_show",
    "data_clear",
    "data_import",
    "serve",
    "show_report",
]
