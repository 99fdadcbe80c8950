"""Tests for CLI UI helpers."""

from rich.console import Console

from partfit.cli.ui import (
    create_options_table,
    create_parts_table,
    create_selection_table,
    error_panel,
    info_panel,
    success_panel,
    warning_panel,
)
from partfit.models import Engine, VehicleSelection


def render(renderable) -> str:
    console = Console(width=120, record=True)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestPanels:
    def test_success_panel_renderable(self):
        assert "It worked!" in render(success_panel("It worked!"))

    def test_error_panel_with_details(self):
        output = render(error_panel("Failed", details="More info here"))
        assert "Failed" in output
        assert "More info here" in output

    def test_warning_panel_renderable(self):
        assert "Watch out!" in render(warning_panel("Watch out!"))

    def test_info_panel_with_title(self):
        output = render(info_panel("Content", title="Title"))
        assert "Content" in output
        assert "Title" in output


class TestSelectionTable:
    def test_levels(self):
        sel = VehicleSelection(
            brand_id="5", brand_name="Volkswagen", model_id="9", model_name="Golf"
        )
        output = render(create_selection_table(sel))
        assert "Volkswagen" in output
        assert "#9" in output
        assert "Engine" in output

    def test_name_without_id(self):
        sel = VehicleSelection(brand_id="5", brand_name="VW", engine_name="1.9 TDI")
        assert "unlisted" in render(create_selection_table(sel))


class TestOptionsTable:
    def test_numbered_rows(self):
        engines = [Engine(id="2", name="2.0 TDI", year="2009", year_2="2012")]
        output = render(create_options_table("Engine", engines))
        assert "2.0 TDI (2009 - 2012)" in output
        assert "1" in output


class TestPartsTable:
    def test_rows(self, products):
        output = render(create_parts_table(products[:2], {"2": "Brembo"}, title="Parts"))
        assert "Brake pad set" in output
        assert "Brembo" in output
        assert "45.50" in output
