"""
Run command: feed a message script through a token actor
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ...actor import Lifecycle, TokenActor
from ...core.errors import FatalError
from ...logging_config import setup_logging
from ...metrics import metrics_settings_from_env, start_metrics_server
from ...snapshot import compute_state_hash
from ..script import run_script

console = Console()


def _short(actor_id: Optional[str]) -> str:
    return f"{actor_id[:10]}…" if actor_id else "-"


def _result_text(result: dict) -> str:
    if "ok" in result:
        return f"[green]ok[/green] {json.dumps(result['ok'])}"
    if "err" in result:
        return f"[red]{result['err']}[/red]"
    return json.dumps(result.get("value"))


def run_command(
    script_path: str = typer.Argument(..., help="Path to JSONL message script"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override TOKENLEDGER_LOG_LEVEL"),
):
    """
    Run a message script and report every reply.

    Examples:
        tokenledger run scenario.jsonl
        tokenledger run scenario.jsonl --show-state
        tokenledger run scenario.jsonl --json
    """
    setup_logging(level=log_level)
    start_metrics_server(*metrics_settings_from_env())

    actor = TokenActor()
    try:
        results = run_script(actor, script_path)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Script not found", "path": script_path}))
        else:
            console.print(f"[red]Error: Script not found:[/red] {script_path}")
        raise typer.Exit(2)
    except (FatalError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e), "fatal": type(e).__name__}))
        else:
            console.print(f"[red]Fatal {type(e).__name__}:[/red] {e}")
        raise typer.Exit(2)

    token = actor.token if actor.lifecycle == Lifecycle.READY else None
    state_hash = compute_state_hash(token) if token is not None else None

    if json_output:
        output = {
            "success": True,
            "lifecycle": actor.lifecycle.value,
            "results": [
                {
                    "line": r.line,
                    "kind": r.kind,
                    "name": r.name,
                    "caller": r.caller,
                    "ts": r.ts,
                    "result": r.result,
                }
                for r in results
            ],
            "state_hash": state_hash,
        }
        if show_state and token is not None:
            output["state"] = token.to_dict()
        print(json.dumps(output, indent=2))
        return

    table = Table(title=f"Script: {script_path}")
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("T", style="dim", justify="right")
    table.add_column("Caller", style="yellow")
    table.add_column("Message", style="green")
    table.add_column("Result")

    for r in results:
        table.add_row(str(r.line), str(r.ts), _short(r.caller), r.name, _result_text(r.result))

    console.print(table)
    console.print(f"  Lifecycle: [cyan]{actor.lifecycle.value}[/cyan]")
    if token is not None:
        console.print(f"  Current supply: [cyan]{token.ledger.current_supply}[/cyan]")
        console.print(f"  State hash: [yellow]{state_hash}[/yellow]")

    if show_state and token is not None:
        console.print("\n[bold]Final State:[/bold]")
        syntax = Syntax(json.dumps(token.to_dict(), indent=2, sort_keys=True), "json", theme="monokai")
        console.print(syntax)
