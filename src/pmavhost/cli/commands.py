"""Command implementations for CLI."""

import io
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from ruamel.yaml import YAML

from pmavhost.config import ConfigManager
from pmavhost.engine import StateEngine
from pmavhost.errors import PhpMyAdminError, ValidationFailure
from pmavhost.providers import ProviderRegistry


console = Console()


def parse_overrides(assignments: Optional[List[str]]) -> Dict[str, Any]:
    """Parse ``key=value`` pairs, reading each value as a YAML scalar or list."""
    yaml = YAML(typ="safe")
    overrides: Dict[str, Any] = {}
    for item in assignments or []:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise PhpMyAdminError(f"Expected key=value, got {item!r}")
        overrides[key.strip()] = yaml.load(raw) if raw else ""
    return overrides


def render_vhost(manager: ConfigManager, title: str, overrides: Optional[List[str]] = None):
    """Print the catalog of one vhost as YAML."""
    catalog = manager.define(title, parse_overrides(overrides))

    yaml = YAML()
    yaml.default_flow_style = False
    stream = io.StringIO()
    yaml.dump(catalog.as_dict(), stream)
    console.print(stream.getvalue(), end="", markup=False, highlight=False, soft_wrap=True)


def validate_vhosts(manager: ConfigManager) -> bool:
    """Define every vhost and tabulate the outcome."""
    table = Table(title="Vhosts")
    table.add_column("Title", style="cyan")
    table.add_column("Port")
    table.add_column("Files")
    table.add_column("Result")

    ok = True
    for title in manager.vhosts:
        try:
            catalog = manager.define(title)
        except ValidationFailure as e:
            ok = False
            table.add_row(title, "-", "-", f"[red]✗ {escape(str(e))}[/red]")
            continue
        table.add_row(
            title,
            str(catalog.primary.port),
            str(len(catalog.files)),
            "[green]✓[/green]",
        )

    console.print(table)
    return ok


def apply_vhosts(manager: ConfigManager, dry_run: bool = False):
    """Apply every configured vhost."""
    registry = ProviderRegistry()
    registry.initialize(manager.config)
    engine = StateEngine(registry)

    catalogs = manager.catalogs()
    for catalog in catalogs:
        result = engine.apply(catalog, dry_run=dry_run)
        verb = "would change" if dry_run else "changed"
        if result.is_changed:
            console.print(f"[yellow]●[/yellow] {catalog.title}: {verb} {escape(', '.join(result.changed))}")
        else:
            console.print(f"[green]✓[/green] {catalog.title}: up to date")

    if not catalogs:
        console.print("[yellow]No vhosts configured[/yellow]")


def show_params(manager: ConfigManager):
    """Show the resolved defaults."""
    params = manager.config.params
    table = Table(title=f"Defaults ({params.osfamily})")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")

    table.add_row("package_name", params.package_name)
    table.add_row("docroot", params.docroot)
    table.add_row("conf_dir", params.conf_dir)
    table.add_row("conf_dir_enable", params.conf_dir_enable)
    table.add_row("fragment_template", "custom" if params.fragment_template else "packaged")

    console.print(table)
