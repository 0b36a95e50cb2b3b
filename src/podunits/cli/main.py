"""Main CLI implementation using Typer."""

import os
import sys
from pathlib import Path
from typing import Optional, Callable, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from podunits.cli.commands import (
    generate_units,
    list_resources,
    show_units,
    validate_config,
)
from podunits.errors import PodunitsError
from podunits.generator.config import ConfigManager
from podunits.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="podunits",
    help="Podunits - systemd units for podman pods",
    add_completion=False,
)

# Console for rich output
console = Console()


def default_config_dir() -> Path:
    """Config directory from the environment, falling back to ./configs."""
    return Path(os.environ.get("PODUNITS_CONFIG_DIR", "./configs"))


def _run_cli_command(
    handler: Callable[..., Any],
    config_dir: Optional[Path],
    log_level: Optional[str] = None,
    **kwargs: Any,
):
    """Helper to load configuration, run a command and report errors."""
    try:
        # An explicit level also covers messages logged while loading
        if log_level:
            setup_logging(log_level, stream=sys.stderr)
        manager = ConfigManager(config_dir or default_config_dir())
        manager.load()
        if not log_level:
            setup_logging(manager.config.generator.log_level, stream=sys.stderr)
        handler(manager, **kwargs)
    except (ValidationError, PodunitsError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


config_dir_argument = typer.Argument(
    None, help="Configuration directory (default: $PODUNITS_CONFIG_DIR or ./configs)"
)
log_level_option = typer.Option(
    None, "--log-level", "-l", help="Override the configured log level"
)


@app.command("validate")
def validate_command(
    config_dir: Optional[Path] = config_dir_argument,
    log_level: Optional[str] = log_level_option,
):
    """Validate pod and container definitions."""
    _run_cli_command(validate_config, config_dir=config_dir, log_level=log_level)


@app.command("list")
def list_command(
    config_dir: Optional[Path] = config_dir_argument,
    log_level: Optional[str] = log_level_option,
):
    """List pods and containers."""
    _run_cli_command(list_resources, config_dir=config_dir, log_level=log_level)


@app.command("show")
def show_command(
    config_dir: Optional[Path] = config_dir_argument,
    unit: Optional[str] = typer.Option(
        None, "--unit", "-u", help="Only show this unit"
    ),
    log_level: Optional[str] = log_level_option,
):
    """Print rendered unit files."""
    _run_cli_command(show_units, config_dir=config_dir, log_level=log_level, unit=unit)


@app.command("generate")
def generate_command(
    config_dir: Optional[Path] = config_dir_argument,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (default: generator.output_dir)"
    ),
    log_level: Optional[str] = log_level_option,
):
    """Write unit files."""
    _run_cli_command(generate_units, config_dir=config_dir, log_level=log_level, output=output)


def main():
    """Main entry point for CLI."""
    app()
