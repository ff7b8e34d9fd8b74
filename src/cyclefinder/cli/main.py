"""
Cycle Finder CLI
Main entry point for the command-line interface

Usage:
    cyclefinder whitelist validate <file>...   # Parse whitelist files
    cyclefinder whitelist show <file>...       # List loaded rules
    cyclefinder whitelist check <file>... --type <name>
    cyclefinder version                        # Show version
"""

import sys

import typer
from rich.console import Console
from rich.panel import Panel

from cyclefinder import __version__
from cyclefinder.cli.commands import whitelist
from cyclefinder.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="cyclefinder",
    help="Cycle Finder - reference cycle analysis whitelists",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

app.add_typer(whitelist.app, name="whitelist", help="Validate and query whitelist files")


@app.callback()
def setup():
    """Configure logging before any command runs."""
    configure_logging()


@app.command()
def version():
    """Show Cycle Finder version information"""
    console.print(Panel.fit(
        "[bold cyan]Cycle Finder[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n"
        f"[dim]Python:[/dim] {sys.version.split()[0]}",
        title="About Cycle Finder",
        border_style="cyan"
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
