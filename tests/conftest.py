"""Shared test fixtures for partfit."""

import asyncio
import json

import pytest

from partfit.catalog.base import BaseCatalogClient
from partfit.core.store import MemorySelectionStore
from partfit.models import Brand, Engine, Manufacturer, VehicleModel

BRANDS = [
    {"id": 5, "name": "Volkswagen"},
    {"id": 7, "name": "BMW"},
]
MODELS = {
    "5": [{"id": 9, "name": "Golf"}, {"id": 10, "name": "Passat"}],
    "7": [{"id": 20, "name": "3 Series"}],
}
ENGINES = {
    "9": [
        {"id": 2, "name": "2.0 TDI", "year": 2009, "year_2": 2012},
        {"id": 3, "name": "1.4 TSI"},
    ],
    "20": [{"id": 30, "name": "320d"}],
}
MANUFACTURERS = [
    {"id": 1, "name": "Bosch"},
    {"id": 2, "name": "Brembo"},
]
PRODUCTS = [
    {
        "id": 100,
        "part_name": "Brake pad set",
        "category_id": 3,
        "saler_id": 2,
        "price": 45.5,
        "suitability_models": [
            {
                "brand_id": 5,
                "model": "VOLKSWAGEN",
                "sub_suitability_models": [
                    {"main_model_id": 9, "suit_sub_models_id": 2, "sub_model": "Golf 2.0 TDI"},
                ],
            }
        ],
    },
    {
        "id": 101,
        "part_name": "Oil filter",
        "category_id": 4,
        "saler_id": 1,
        "price": 12,
        "compatibility": "BMW 3 Series 320d",
    },
    {
        "id": 102,
        "part_name": "Phone holder",
        "category_id": 9,
        "compatibility": "Universal - fits all cars",
    },
    {
        "part": {
            "id": 103,
            "part_name": "Air filter",
            "category_id": 4,
            "saler_id": 1,
            "compatibility": "VW Golf 1.4 TSI",
        }
    },
]


class FakeCatalog(BaseCatalogClient):
    """In-memory catalog whose lookups can be held open or made to fail."""

    kind = "fake"

    def __init__(self):
        self.brands = [Brand.model_validate(b) for b in BRANDS]
        self.models = {
            k: [VehicleModel.model_validate(m) for m in v] for k, v in MODELS.items()
        }
        self.engines = {k: [Engine.model_validate(e) for e in v] for k, v in ENGINES.items()}
        self.manufacturers = [Manufacturer.model_validate(m) for m in MANUFACTURERS]
        self.products = [dict(p) for p in PRODUCTS]
        self.calls: list[tuple[str, str]] = []
        self.failing: set[tuple[str, str]] = set()
        self._gates: dict[tuple[str, str], asyncio.Event] = {}
        self.closed = False

    def hold(self, level: str, parent_id: str) -> None:
        """Keep lookups of (level, parent_id) pending until released."""
        self._gates[(level, parent_id)] = asyncio.Event()

    def release(self, level: str, parent_id: str) -> None:
        self._gates.pop((level, parent_id)).set()

    async def _serve(self, level: str, parent_id: str, records):
        self.calls.append((level, parent_id))
        gate = self._gates.get((level, parent_id))
        if gate is not None:
            await gate.wait()
        if (level, parent_id) in self.failing:
            raise RuntimeError(f"{level} lookup failed")
        return list(records)

    async def list_brands(self):
        return await self._serve("brands", "*", self.brands)

    async def list_models(self, brand_id):
        return await self._serve("models", brand_id, self.models.get(brand_id, []))

    async def list_engines(self, model_id):
        return await self._serve("engines", model_id, self.engines.get(model_id, []))

    async def list_manufacturers(self):
        return await self._serve("manufacturers", "*", self.manufacturers)

    async def list_products(self):
        return await self._serve("products", "*", self.products)

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch):
    """Keep CLI runs from writing a debug log into the real config dir."""
    monkeypatch.setattr("partfit.cli.app.setup_logging", lambda: None)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "partfit"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def temp_data_dir(tmp_path):
    """Provide isolated data directory for the selection store."""
    data_dir = tmp_path / ".local" / "share" / "partfit"
    data_dir.mkdir(parents=True)
    return data_dir


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def store():
    return MemorySelectionStore()


@pytest.fixture
def catalog_file(tmp_path):
    """A JSON catalog document with the sample brands, models and products."""
    path = tmp_path / "catalog.json"
    document = {
        "brands": BRANDS,
        "models": MODELS,
        "engines": ENGINES,
        "manufacturers": MANUFACTURERS,
        "products": PRODUCTS,
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def products():
    return [dict(p) for p in PRODUCTS]
