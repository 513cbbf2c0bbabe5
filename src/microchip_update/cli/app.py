"""Typer CLI root application."""

import typer

from microchip_update.core.config import get_settings
from microchip_update.core.logging import setup_logging

app = typer.Typer(name="microchip-update", help="Found.org microchip update generator")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_commands() -> None:
    """Register all CLI commands."""
    from microchip_update.cli.compare_cmd import compare, show

    app.command("compare")(compare)
    app.command("show")(show)


_register_commands()
