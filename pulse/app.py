# ==============================================================================
# Pulse CLI
# ==============================================================================
"""
Command-line interface for the pulse analytics server.

Usage:
    pulse --help
    pulse serve
    pulse report
    pulse report --breakdowns
    pulse data clear -y
    pulse data import events.json
    pulse config show
"""

import os

import typer

# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="pulse",
    help="Self-hosted web analytics server CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from pulse.cli.server import serve

app.command("serve")(serve)

from pulse.cli.report import show_report

app.command("report")(show_report)

data_app = typer.Typer(
    help="Event data management",
    no_args_is_help=True,
)
app.add_typer(data_app, name="data")

from pulse.cli.data import data_clear, data_import

data_app.command("clear")(data_clear)
data_app.command("import")(data_import)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

from pulse.cli.config import config_show

config_app.command("show")(config_show)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
