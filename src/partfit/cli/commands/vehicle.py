"""Vehicle selection command implementation."""

import asyncio
import logging
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.prompt import Prompt

from partfit.catalog import BaseCatalogClient
from partfit.cli.session import open_session
from partfit.cli.ui import (
    create_options_table,
    create_selection_table,
    error_panel,
    success_panel,
    warning_panel,
)
from partfit.core.store import FileSelectionStore, SelectionStore
from partfit.models import CatalogRecord, VehicleSelection
from partfit.selection import Level, LoadState, SelectionController

logger = logging.getLogger(__name__)
console = Console()


def run_vehicle(
    brand: str | None = None,
    model: str | None = None,
    engine: str | None = None,
    pick: bool = False,
    reset: bool = False,
) -> None:
    """Run the vehicle command."""
    console.print()

    store = FileSelectionStore()

    if reset:
        store.clear()
        console.print(success_panel("Saved vehicle cleared."))
        return

    if not (pick or brand or model or engine):
        _show_selection(store.read())
        return

    _, catalog = open_session()
    if pick:
        selection = asyncio.run(_pick(catalog, store))
    else:
        selection = asyncio.run(_apply(catalog, store, brand, model, engine))

    _show_selection(selection)


def _show_selection(selection: VehicleSelection) -> None:
    if selection.is_empty:
        console.print("[dim]  No vehicle selected.[/dim]")
        console.print("[dim]  Run 'partfit vehicle --pick' to choose one.[/dim]")
        return
    console.print(f"[bold]{selection.display_name or 'Vehicle'}[/bold]")
    console.print(create_selection_table(selection))


async def _apply(
    catalog: BaseCatalogClient,
    store: SelectionStore,
    brand: str | None,
    model: str | None,
    engine: str | None,
) -> VehicleSelection:
    """Apply the given ids level by level, waiting for each option list.

    An id missing from a loaded option list stops the walk; levels whose
    list is empty (not listed, or the lookup failed) accept any id.
    """
    async with catalog:
        controller = SelectionController(catalog, store)
        await controller.hydrate()
        await controller.settle()

        steps = (
            (Level.BRAND, brand, controller.select_brand),
            (Level.MODEL, model, controller.select_model),
            (Level.ENGINE, engine, controller.select_engine),
        )
        for level, wanted, select in steps:
            wanted = (wanted or "").strip()
            if not wanted:
                continue
            options = controller.options(level)
            if options and all(record.id != wanted for record in options):
                console.print(
                    warning_panel(
                        f"{level.value.title()} '{wanted}' is not listed for this vehicle."
                    )
                )
                break
            await select(wanted)
            await controller.settle()

        return controller.get_state()


async def _pick(catalog: BaseCatalogClient, store: SelectionStore) -> VehicleSelection:
    """Walk through brand, model and engine with numbered prompts."""
    async with catalog:
        controller = SelectionController(catalog, store)
        await controller.hydrate()
        await controller.settle()

        brands = controller.options(Level.BRAND)
        if not brands:
            console.print(
                error_panel(
                    "No brands available.",
                    "The catalog could not be reached or returned no brands.",
                )
            )
            raise typer.Exit(1)

        choice = _prompt_choice("Brand", brands)
        await controller.select_brand(choice.id, choice.label)
        await controller.settle()

        models = controller.options(Level.MODEL)
        if not models:
            _report_empty("models", controller.level_state(Level.MODEL))
            return controller.get_state()

        choice = _prompt_choice("Model", models)
        await controller.select_model(choice.id, choice.label)
        await controller.settle()

        engines = controller.options(Level.ENGINE)
        if not engines:
            _report_empty("engines", controller.level_state(Level.ENGINE))
            return controller.get_state()

        engine_choice = _prompt_choice("Engine", engines, optional=True)
        if engine_choice is not None:
            await controller.select_engine(engine_choice.id, engine_choice.label)
            await controller.settle()

        console.print()
        console.print(success_panel("Vehicle saved."))
        return controller.get_state()


def _report_empty(what: str, state: LoadState) -> None:
    if state is LoadState.ERROR:
        console.print(warning_panel(f"Could not load {what}. Showing what was saved."))
    else:
        console.print(f"[dim]  No {what} listed for this vehicle.[/dim]")


def _prompt_choice(
    title: str, options: Sequence[CatalogRecord], optional: bool = False
) -> Optional[CatalogRecord]:
    """Ask for a row number of ``options``; blank skips when ``optional``."""
    console.print()
    console.print(create_options_table(title, options))

    prompt = f"  {title} number" + (" (blank to skip)" if optional else "")
    while True:
        if optional:
            answer = Prompt.ask(prompt, default="", show_default=False)
        else:
            answer = Prompt.ask(prompt)
        answer = (answer or "").strip()
        if not answer and optional:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        console.print(f"  [red]Enter a number between 1 and {len(options)}.[/red]")
