"""
Cycle Finder whitelist commands.
Validate, inspect and query whitelist files.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cyclefinder.shared.domain.exceptions import ConfigurationError, WhitelistError
from cyclefinder.shared.infrastructure.logging import get_logger
from cyclefinder.whitelist.config_loader import load_project_config
from cyclefinder.whitelist.loader import load_whitelist
from cyclefinder.whitelist.registry import Whitelist

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = get_logger(__name__)

# Exit codes follow grep: 0 = match, 1 = no match, 2 = error
EXIT_WHITELISTED = 0
EXIT_NOT_WHITELISTED = 1
EXIT_ERROR = 2

_FILES_HELP = "Whitelist files, read in order"
_CONFIG_HELP = "Project config listing additional whitelist files"


def _load(files: Optional[List[Path]], config: Optional[Path]) -> Whitelist:
    """Load the whitelist files given on the command line and in the config."""
    paths: list[Path] = []
    encoding = None
    try:
        if config is not None:
            project_config = load_project_config(config_path=config)
            paths.extend(project_config.whitelist_files)
            encoding = project_config.encoding
        paths.extend(files or [])
        if not paths:
            console.print("[red]Error:[/red] No whitelist files given")
            raise typer.Exit(code=EXIT_ERROR)
        return load_whitelist(paths, encoding=encoding)
    except ConfigurationError as e:
        console.print(f"[red]Config Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)
    except WhitelistError as e:
        console.print(f"[red]Whitelist Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)


@app.command()
def validate(
    files: Optional[List[Path]] = typer.Argument(None, help=_FILES_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """
    Validate whitelist files.

    Parses every line and reports the number of entries per rule kind.

    Example:
        cyclefinder whitelist validate whitelists/jre.txt whitelists/app.txt
    """
    whitelist = _load(files, config)
    stats = whitelist.stats()

    table = Table(title="Whitelist Summary", box=box.ROUNDED, show_header=False)
    table.add_column("Table", style="cyan bold", width=20)
    table.add_column("Entries", style="white", justify="right")
    table.add_row("Fields", str(stats.fields))
    table.add_row("Typed Fields", str(stats.typed_fields))
    table.add_row("Types", str(stats.types))
    table.add_row("Namespaces", str(stats.namespaces))
    table.add_row("Outers", str(stats.outers))
    table.add_row("Total", f"[green]{stats.total}[/green]")

    console.print(table)
    console.print(Panel(
        "[green bold]✓ Whitelist is valid![/green bold]",
        border_style="green",
    ))


@app.command()
def show(
    files: Optional[List[Path]] = typer.Argument(None, help=_FILES_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print rules as JSON"),
):
    """
    List every rule of the loaded whitelist.

    Duplicate rules across files are shown once.

    Example:
        cyclefinder whitelist show whitelists/app.txt --json
    """
    whitelist = _load(files, config)
    rules = whitelist.rules()

    if as_json:
        payload = {
            "stats": whitelist.stats().to_json(),
            "rules": [rule.to_json() for rule in rules],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Whitelist Rules", box=box.ROUNDED)
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Type", style="dim")
    for rule in rules:
        table.add_row(rule.kind.value, rule.name, rule.type_name or "")
    console.print(table)


@app.command()
def check(
    files: Optional[List[Path]] = typer.Argument(None, help=_FILES_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
    type_name: Optional[str] = typer.Option(None, "--type", help="Qualified type name"),
    field_name: Optional[str] = typer.Option(None, "--field", help="Qualified field name"),
    field_type: Optional[str] = typer.Option(
        None, "--field-type", help="Type of the field (with --field)"
    ),
    outer: Optional[str] = typer.Option(None, "--outer", help="Qualified type name"),
):
    """
    Check whether a type, field or outer scope is whitelisted.

    Exit code 0 when whitelisted, 1 when not, 2 on errors.

    Example:
        cyclefinder whitelist check app.txt --type com.foo.sub.Inner
        cyclefinder whitelist check app.txt --field com.foo.Bar.qux --field-type com.foo.Other
    """
    selected = [option for option in (type_name, field_name, outer) if option is not None]
    if len(selected) != 1:
        console.print("[red]Error:[/red] Give exactly one of --type, --field or --outer")
        raise typer.Exit(code=EXIT_ERROR)
    if field_type is not None and field_name is None:
        console.print("[red]Error:[/red] --field-type requires --field")
        raise typer.Exit(code=EXIT_ERROR)

    whitelist = _load(files, config)

    if type_name is not None:
        subject = f"type {type_name}"
        whitelisted = whitelist.contains_type(type_name)
    elif outer is not None:
        subject = f"outer {outer}"
        whitelisted = whitelist.has_outer_for_type(outer)
    elif field_type is not None:
        subject = f"field {field_name} {field_type}"
        whitelisted = whitelist.is_whitelisted_type_for_field(field_name, field_type)
    else:
        subject = f"field {field_name}"
        whitelisted = whitelist.contains_field(field_name)

    logger.debug("whitelist_checked", subject=subject, whitelisted=whitelisted)
    if whitelisted:
        console.print(f"[green]whitelisted[/green]: {escape(subject)}")
        raise typer.Exit(code=EXIT_WHITELISTED)

    console.print(f"[yellow]not whitelisted[/yellow]: {escape(subject)}")
    raise typer.Exit(code=EXIT_NOT_WHITELISTED)
