#!/usr/bin/env python3
"""
Editcost CLI - Command-line interface for the distance calculator
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from editcost.config import EditcostConfig, load_config, read_config, save_config, user_config_path
from editcost.observability.metrics import measure
from editcost.validation import ValidationError, require_method

app = typer.Typer(
    name="editcost",
    help="Weighted edit distance between two strings",
    add_completion=False,
)
console = Console(stderr=False)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _apply_overrides(
    cfg: EditcostConfig,
    add_cost: Optional[float],
    remove_cost: Optional[float],
    change_cost: Optional[float],
) -> EditcostConfig:
    overrides = {
        "add_cost": add_cost,
        "remove_cost": remove_cost,
        "change_cost": change_cost,
    }
    costs = cfg.costs.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    return cfg.model_copy(update={"costs": costs})


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def distance(
    source: str = typer.Argument(..., help="String to transform"),
    target: str = typer.Argument(..., help="String to reach"),
    method: Optional[str] = typer.Option(
        None,
        "--method",
        "-m",
        help="Evaluator: naive, memoized or iterative (default from config)",
    ),
    add_cost: Optional[float] = typer.Option(None, "--add-cost", help="Cost of adding a character"),
    remove_cost: Optional[float] = typer.Option(None, "--remove-cost", help="Cost of removing a character"),
    change_cost: Optional[float] = typer.Option(None, "--change-cost", help="Cost of changing a character"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    timed: bool = typer.Option(
        False,
        "--timed",
        "-t",
        help="Also print the elapsed evaluation time",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
):
    """Print the distance between SOURCE and TARGET."""
    try:
        cfg = _apply_overrides(load_config(config), add_cost, remove_cost, change_cost)
        _setup_logging(verbose or cfg.verbose)
        calculator = cfg.create_calculator()
        result = measure(calculator, source, target, method or cfg.default_method)
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red", soft_wrap=True)
        raise typer.Exit(1)

    if timed:
        console.print(
            f"[bold green]{result.distance}[/bold green] "
            f"[dim]({result.method}, {result.elapsed_seconds:.6f} seconds)[/dim]"
        )
    else:
        console.print(result.distance)


@app.command()
def configure(
    add_cost: Optional[float] = typer.Option(None, "--add-cost", help="Cost of adding a character"),
    remove_cost: Optional[float] = typer.Option(None, "--remove-cost", help="Cost of removing a character"),
    change_cost: Optional[float] = typer.Option(None, "--change-cost", help="Cost of changing a character"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="Default evaluator"),
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        help="Where to write the config (default ~/.editcost/config.yaml)",
    ),
):
    """
    Write the given settings to a config file.

    Settings already in the file and not given here are kept.
    """
    target = path or user_config_path()
    try:
        cfg = read_config(target) if target.exists() else EditcostConfig()
        cfg = _apply_overrides(cfg, add_cost, remove_cost, change_cost)
        if method is not None:
            runtime = cfg.runtime.model_copy(update={"default_method": require_method(method)})
            cfg = cfg.model_copy(update={"runtime": runtime})
        cfg.cost_model()
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red", soft_wrap=True)
        raise typer.Exit(1)

    written = save_config(cfg, target)
    console.print(f"[green]✓[/green] Configuration saved to {written}", soft_wrap=True)


@app.command()
def show_config(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
):
    """Show the active configuration."""
    try:
        cfg = load_config(config)
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red", soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title="Editcost configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("add_cost", str(cfg.costs.add_cost))
    table.add_row("remove_cost", str(cfg.costs.remove_cost))
    table.add_row("change_cost", str(cfg.costs.change_cost))
    table.add_row("default_method", cfg.default_method)
    table.add_row("naive_max_length", str(cfg.runtime.naive_max_length))
    console.print(table)


@app.command()
def version():
    """Show version information."""
    from editcost import __version__
    console.print(f"[bold]Editcost[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
