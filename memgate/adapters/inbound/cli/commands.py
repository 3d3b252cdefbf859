"""CLI interface for memgate."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import Settings, load_settings
from ....core.domain import GateDecision
from ....core.domain.exceptions import InvalidConfigurationError
from ....core.services.query_gate import QueryGate
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="memgate",
    help="memgate - decide whether a message needs a memory lookup",
    add_completion=False,
)

console = Console(legacy_windows=False)


def handle_cli_error(exc: Exception, debug: bool = False) -> None:
    """Display an error in structured form.

    In debug mode, shows full JSON error details.
    In normal mode, shows a short message with the error code.

    Args:
        exc: The exception to handle.
        debug: Whether to include the stack trace.
    """
    error_data = format_exception_json(exc, include_trace=debug)

    if debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, ensure_ascii=False),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"[red]Error [{error_code}]:[/] {error_data['error']['message']}")
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set MEMGATE_DEBUG=true for full details[/]")


def _load() -> tuple[Settings, QueryGate]:
    try:
        settings = load_settings()
    except InvalidConfigurationError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    setup_logging(settings)
    return settings, QueryGate.from_settings(settings)


def _decision_table(decisions: list[GateDecision]) -> Table:
    table = Table(title="Retrieval gate")
    table.add_column("Query", overflow="fold")
    table.add_column("Retrieve", justify="center")
    table.add_column("Reason")
    table.add_column("Rule")
    table.add_column("Risk", justify="center")

    for decision in decisions:
        table.add_row(
            decision.query or "[dim]<empty>[/]",
            "[red]skip[/]" if decision.skip else "[green]yes[/]",
            decision.reason.value,
            decision.matched_rule or "-",
            "⚠" if decision.risk else "",
        )
    return table


@app.command()
def check(
    query: str = typer.Argument(..., help="Message to classify"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
) -> None:
    """Show whether a message would trigger memory retrieval."""
    _, gate = _load()
    decision = gate.explain(query)

    if as_json:
        typer.echo(json.dumps(decision.to_dict(), ensure_ascii=False))
        return

    console.print(_decision_table([decision]))
    if decision.retrieval_query and decision.retrieval_query != decision.query:
        console.print(Panel(decision.retrieval_query, title="Retrieval query", border_style="yellow"))


@app.command()
def expand(
    query: str = typer.Argument(..., help="Message to expand"),
) -> None:
    """Print the query that retrieval should receive for a message."""
    _, gate = _load()
    typer.echo(gate.expand_query_for_risk(query))


@app.command()
def batch(
    path: Path = typer.Argument(..., help="Text file with one message per line"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON decision per line"),
) -> None:
    """Classify every line of a file."""
    settings, gate = _load()

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        handle_cli_error(exc, debug=settings.debug)
        raise typer.Exit(1)

    decisions = [gate.explain(line) for line in lines]

    if as_json:
        for decision in decisions:
            typer.echo(json.dumps(decision.to_dict(), ensure_ascii=False))
        return

    console.print(_decision_table(decisions))
    skipped = sum(1 for decision in decisions if decision.skip)
    console.print(f"[dim]{skipped}/{len(decisions)} messages skip retrieval[/]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    """Run the HTTP API."""
    from ..api.main import run

    run(host=host, port=port)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
