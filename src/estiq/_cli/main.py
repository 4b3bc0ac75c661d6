import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from estiq._errors import DocumentError, EstimationError
from estiq._eval_engine import compile_document, count_scenarios
from estiq._io import export_results, load_document
from estiq._models import Node
from estiq._render import render_report

from .config import ConfigError, EstiqConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

DEFAULT_MAX_SCENARIOS = 10_000
DEFAULT_PRECISION = 2


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Estiq CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> EstiqConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_document(document: Path | None, config: EstiqConfig) -> Node:
    """Load the document given on the command line, or the configured one."""
    if document is None:
        document = config.document
    if document is None:
        err_console.print(f"[red]Error: No document given and no {escape('[tool.estiq]')}.document configured[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading document from:[/cyan] {document}")
    try:
        node = load_document(document)
    except DocumentError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[cyan]Document:[/cyan] [bold]{escape(node.label)}[/bold]")
    return node


def _report_error(error: EstimationError) -> None:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")


@app.command()
def calc(
    document: Annotated[
        Path | None,
        typer.Argument(help="Path to the estimation document (YAML, JSON or TOML)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to export results to (TOML or JSON)"),
    ] = None,
    summary_only: Annotated[
        bool,
        typer.Option("--summary-only", help="Only print the compressed summary, skip simulations"),
    ] = False,
    max_scenarios: Annotated[
        int | None,
        typer.Option("--max-scenarios", min=1, help="Abort if more simulations would be produced"),
    ] = None,
    precision: Annotated[
        int | None,
        typer.Option("--precision", min=0, help="Number of decimals to print"),
    ] = None,
) -> None:
    """Compile an estimation document into a summary and simulations."""
    config = _load_config()
    node = _load_document(document, config)

    limit = max_scenarios or config.max_scenarios or DEFAULT_MAX_SCENARIOS
    decimals = precision if precision is not None else config.precision
    if decimals is None:
        decimals = DEFAULT_PRECISION
    logger.debug("Scenario limit: %d, precision: %d", limit, decimals)

    err_console.print("[cyan]Compiling document...[/cyan]")
    compilation = compile_document(node, expand=not summary_only, max_scenarios=limit)
    if not compilation.success:
        for error in compilation.errors:
            _report_error(error)
        raise typer.Exit(code=1)

    err_console.print()
    for line in render_report(compilation, decimals):
        out_console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)

    export_path = output or config.output
    if export_path is not None:
        err_console.print()
        err_console.print(f"[cyan]Exporting results to:[/cyan] {export_path}")
        export_results(compilation, export_path)

    err_console.print()
    err_console.print(f"[green]✓ Compiled {len(compilation.scenarios)} simulation(s)[/green]")


@app.command()
def check(
    document: Annotated[
        Path | None,
        typer.Argument(help="Path to the estimation document (YAML, JSON or TOML)"),
    ] = None,
) -> None:
    """Check the validity of a document without enumerating simulations."""
    config = _load_config()
    node = _load_document(document, config)
    err_console.print()

    err_console.print("[cyan]Resolving nodes...[/cyan]")
    compilation = compile_document(node, expand=False)
    if not compilation.success or compilation.summary is None:
        for error in compilation.errors:
            _report_error(error)
        raise typer.Exit(code=1)
    summary = compilation.summary
    n_scenarios = count_scenarios(node)

    nodes = [result for _, result in summary.walk()]
    n_leaves = sum(1 for result in nodes if result.is_leaf)

    # Create a table for document information
    table = Table(show_header=False, box=None)
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(len(nodes)))
    table.add_row("Leaves", str(n_leaves))
    table.add_row("Min", f"{summary.min:.2f}")
    table.add_row("Max", f"{summary.max:.2f}")
    table.add_row("Simulations", f"[yellow]{n_scenarios}[/yellow]")

    err_console.print(
        Panel(
            table,
            title=f"[bold]Document: {escape(summary.name)}[/bold]",
            border_style="cyan",
        ),
    )

    limit = config.max_scenarios or DEFAULT_MAX_SCENARIOS
    if n_scenarios > limit:
        err_console.print(
            f"[yellow]⚠ {n_scenarios} simulations exceed the limit of {limit}; "
            "use --summary-only or raise --max-scenarios[/yellow]",
        )

    err_console.print()
    err_console.print("[green]✓ Document is valid[/green]")
    err_console.print()


@app.command()
def schema(
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to write the JSON schema to (stdout if omitted)"),
    ] = None,
) -> None:
    """Generate the JSON schema of estimation documents."""
    schema_text = json.dumps(Node.model_json_schema(), indent=2)

    if output is None:
        out_console.print(schema_text, markup=False, highlight=False, soft_wrap=True)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(schema_text + "\n", encoding="utf-8")
    err_console.print(f"[green]✓ Schema written to {output}[/green]")


def main() -> None:
    app()
