"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from partfit import __version__
from partfit.logging import setup_logging

app = typer.Typer(
    name="partfit",
    help="Pick your vehicle and find parts that fit it.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
) -> None:
    """partfit - Vehicle fitment for replacement parts."""
    if version:
        console.print(f"partfit v{__version__}")
        raise typer.Exit()
    setup_logging()


@app.command()
def vehicle(
    brand: Optional[str] = typer.Option(None, "--brand", help="Select a brand by id"),
    model: Optional[str] = typer.Option(None, "--model", help="Select a model by id"),
    engine: Optional[str] = typer.Option(None, "--engine", help="Select an engine by id"),
    pick: bool = typer.Option(False, "--pick", help="Choose brand, model and engine interactively"),
    reset: bool = typer.Option(False, "--reset", help="Clear the saved vehicle"),
) -> None:
    """Show or change the saved vehicle."""
    from partfit.cli.commands.vehicle import run_vehicle

    run_vehicle(brand=brand, model=model, engine=engine, pick=pick, reset=reset)


@app.command()
def parts(
    category: Optional[str] = typer.Option(None, "--category", help="Only parts of this category id"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only parts whose title contains this text"),
    show_all: bool = typer.Option(False, "--all", help="Ignore the saved vehicle"),
) -> None:
    """List parts that fit the saved vehicle."""
    from partfit.cli.commands.parts import run_parts

    run_parts(category=category, search=search, show_all=show_all)


@app.command()
def manufacturers() -> None:
    """List part manufacturers."""
    from partfit.cli.commands.manufacturers import run_manufacturers

    run_manufacturers()


@app.command()
def config(
    catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog kind: http or file"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Catalog API root URL"),
    file: Optional[Path] = typer.Option(None, "--file", help="Local JSON catalog document"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    reset: bool = typer.Option(False, "--reset", help="Delete the configuration file"),
) -> None:
    """Show or change catalog settings."""
    from partfit.cli.commands.config import run_config

    run_config(catalog=catalog, base_url=base_url, file=file, timeout=timeout, reset=reset)


if __name__ == "__main__":
    app()
