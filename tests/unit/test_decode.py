"""Tests for catalog response decoding."""

import pytest

from partfit.catalog.decode import (
    MODEL_KEYS,
    decode_brands,
    decode_engines,
    decode_manufacturers,
    decode_models,
    decode_products,
    unwrap_items,
)
from partfit.exceptions import CatalogDecodeError


class TestUnwrapItems:
    def test_bare_list(self):
        assert unwrap_items([1, 2], "models", MODEL_KEYS) == [1, 2]

    def test_data_envelope(self):
        assert unwrap_items({"data": [1]}, "models", MODEL_KEYS) == [1]

    def test_named_key(self):
        assert unwrap_items({"models": [1]}, "models", MODEL_KEYS) == [1]

    def test_nested_under_data(self):
        payload = {"status": "ok", "data": {"models": [1, 2]}}
        assert unwrap_items(payload, "models", MODEL_KEYS) == [1, 2]

    def test_unknown_shape(self):
        with pytest.raises(CatalogDecodeError) as exc_info:
            unwrap_items({"message": "no models"}, "models", MODEL_KEYS)
        assert "models" in exc_info.value.message

    def test_scalar_payload(self):
        with pytest.raises(CatalogDecodeError):
            unwrap_items("oops", "models", MODEL_KEYS)


class TestDecodeRecords:
    def test_brands_sorted_by_label(self):
        brands = decode_brands({"data": [{"id": 2, "name": "volvo"}, {"id": 1, "name": "Audi"}]})
        assert [b.name for b in brands] == ["Audi", "volvo"]
        assert brands[0].id == "1"

    def test_alternate_field_names(self):
        models = decode_models({"data": [{"model_id": 9, "model_name": "Golf"}]})
        assert models[0].id == "9"
        assert models[0].name == "Golf"

        engines = decode_engines([{"sub_model_id": 2, "sub_model_name": "2.0 TDI"}])
        assert engines[0].id == "2"
        assert engines[0].name == "2.0 TDI"

        makers = decode_manufacturers({"data": [{"saler_id": 4, "title": "Bosch"}]})
        assert makers[0].id == "4"
        assert makers[0].name == "Bosch"

    def test_items_without_id_or_name_dropped(self):
        brands = decode_brands(
            [
                {"id": 1, "name": "Audi"},
                {"name": "No id"},
                {"id": 3, "name": "  "},
                "junk",
            ]
        )
        assert [b.id for b in brands] == ["1"]

    def test_duplicate_ids_dropped(self):
        brands = decode_brands([{"id": 1, "name": "Audi"}, {"id": 1, "name": "Audi again"}])
        assert len(brands) == 1
        assert brands[0].name == "Audi"

    def test_engine_label_with_years(self):
        engines = decode_engines([{"id": 2, "name": "2.0 TDI", "year": 2009, "year_2": 2012}])
        assert engines[0].label == "2.0 TDI (2009 - 2012)"

    def test_bad_envelope_raises(self):
        with pytest.raises(CatalogDecodeError):
            decode_brands({"error": "maintenance"})


class TestDecodeProducts:
    def test_raw_mappings_kept(self):
        products = decode_products({"data": [{"id": 1, "part_name": "Pad"}, "junk"]})
        assert products == [{"id": 1, "part_name": "Pad"}]

    def test_products_key(self):
        assert decode_products({"products": []}) == []
