#!/usr/bin/env python3
"""
tokenledger CLI - Fungible token ledger actor

Main entrypoint for the tokenledger command-line tool.
"""

from typing import List

import typer
from rich.console import Console
from rich.table import Table

from ..core.ids import actor_id_for
from .commands import run

app = typer.Typer(
    name="tokenledger",
    help="Fungible token ledger actor CLI",
    add_completion=False,
)

console = Console()

app.command(name="run")(run.run_command)


@app.command(name="actor-id")
def actor_id(
    names: List[str] = typer.Argument(..., help="Names to derive ids for"),
):
    """Print the deterministic actor id used for @name in scripts."""
    for name in names:
        typer.echo(f"{name}\t{actor_id_for(name)}")


@app.command()
def version():
    """Show version information."""
    from tokenledger import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]tokenledger[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
