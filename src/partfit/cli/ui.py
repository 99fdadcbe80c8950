"""Rich console UI helpers."""

from typing import Any, Iterable, Mapping, Sequence

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table

from partfit.fitment.filtering import maker_id_of, price_of, product_id_of, title_of
from partfit.models import CatalogRecord, VehicleSelection

console = Console()


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]✓[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]✗[/red] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str) -> Panel:
    """Create a warning message panel."""
    return Panel(
        f"[yellow]⚠[/yellow] {message}",
        border_style="yellow",
        padding=(0, 1),
    )


def info_panel(message: RenderableType, title: str | None = None) -> Panel:
    """Create an info message panel."""
    return Panel(
        message,
        title=title,
        border_style="blue",
        padding=(1, 2),
    )


def _level_cell(record_id: str | None, name: str | None) -> str:
    if name and record_id:
        return f"{name} [dim]#{record_id}[/dim]"
    if name:
        # Name kept after its id was invalidated by the catalog
        return f"{name} [dim](unlisted)[/dim]"
    if record_id:
        return f"[dim]#{record_id}[/dim]"
    return "[dim]-[/dim]"


def create_selection_table(selection: VehicleSelection) -> Table:
    """Create a table displaying the vehicle selection."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Level", style="dim")
    table.add_column("Value")

    table.add_row("Brand", _level_cell(selection.brand_id, selection.brand_name))
    table.add_row("Model", _level_cell(selection.model_id, selection.model_name))
    table.add_row("Engine", _level_cell(selection.engine_id, selection.engine_name))

    return table


def create_options_table(title: str, options: Sequence[CatalogRecord]) -> Table:
    """Create a numbered table of selectable catalog records."""
    table = Table(title=title, show_lines=False)
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("ID", style="dim")

    for i, record in enumerate(options, 1):
        table.add_row(str(i), record.label, record.id)

    return table


def create_parts_table(
    products: Iterable[Any],
    manufacturers: Mapping[str, str] | None = None,
    title: str | None = None,
) -> Table:
    """Create a table displaying products."""
    manufacturers = manufacturers or {}
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Part", style="bold")
    table.add_column("Manufacturer")
    table.add_column("Price", justify="right")

    for product in products:
        maker_id = maker_id_of(product)
        price = price_of(product)
        table.add_row(
            product_id_of(product) or "-",
            title_of(product) or "[dim]Untitled[/dim]",
            manufacturers.get(maker_id, "[dim]-[/dim]"),
            f"{price:,.2f}" if price else "[dim]-[/dim]",
        )

    return table
