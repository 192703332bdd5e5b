"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Optional, List, Callable, Any

import typer
from rich.console import Console

from pmavhost.cli.commands import (
    apply_vhosts,
    render_vhost,
    show_params,
    validate_vhosts,
)
from pmavhost.config import ConfigManager
from pmavhost.errors import PhpMyAdminError
from pmavhost.utils.logging import setup_logging


app = typer.Typer(
    name="pmavhostctl",
    help="Declare Apache virtual hosts serving phpMyAdmin",
    add_completion=False,
)

console = Console(stderr=True)

DEFAULT_CONFIG_DIR = Path("/etc/pmavhost")


def _config_dir_option():
    return typer.Option(
        DEFAULT_CONFIG_DIR, "--config-dir", "-c", help="Configuration directory"
    )


def _run_cli_command(handler: Callable[..., Any], config_dir: Path, verbose: bool = False, **kwargs: Any):
    """Helper to run a CLI command with a loaded configuration and error handling."""
    try:
        setup_logging("DEBUG" if verbose else "INFO")
        manager = ConfigManager(config_dir)
        manager.load()
        if not verbose:
            setup_logging(manager.config.logging.level)
        return handler(manager, **kwargs)
    except PhpMyAdminError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(e.exit_code) from e


@app.command("render")
def render_command(
    title: str = typer.Argument(..., help="Vhost title"),
    overrides: Optional[List[str]] = typer.Option(
        None, "--set", help="Override a parameter (key=value)"
    ),
    config_dir: Path = _config_dir_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Print the declarations for one vhost."""
    _run_cli_command(render_vhost, config_dir, verbose, title=title, overrides=overrides)


@app.command("validate")
def validate_command(
    config_dir: Path = _config_dir_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Validate every configured vhost."""
    if not _run_cli_command(validate_vhosts, config_dir, verbose):
        raise typer.Exit(1)


@app.command("apply")
def apply_command(
    dry_run: bool = typer.Option(False, "--dry-run", help="Only report what would change"),
    config_dir: Path = _config_dir_option(),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Write TLS files and vhost configurations."""
    _run_cli_command(apply_vhosts, config_dir, verbose, dry_run=dry_run)


@app.command("params")
def params_command(
    config_dir: Path = _config_dir_option(),
):
    """Show the defaults vhosts fall back to."""
    _run_cli_command(show_params, config_dir)


def main():
    """Main entry point for CLI."""
    app()
