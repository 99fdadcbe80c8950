"""Tests for the vehicle selection and quick filter models."""

import pytest
from pydantic import ValidationError

from partfit.models import QuickFilter, VehicleSelection


class TestVehicleSelection:
    def test_ids_coerced_to_text(self):
        sel = VehicleSelection(brand_id=5, model_id=9)
        assert sel.brand_id == "5"
        assert sel.model_id == "9"

    def test_blank_values_unset(self):
        sel = VehicleSelection(brand_id="", brand_name="   ")
        assert sel.brand_id is None
        assert sel.brand_name is None
        assert sel.is_empty

    def test_camel_case_input(self):
        sel = VehicleSelection.model_validate({"brandId": "5", "engineName": "2.0 TDI"})
        assert sel.brand_id == "5"
        assert sel.engine_name == "2.0 TDI"

    def test_record_omits_unset(self):
        sel = VehicleSelection(brand_id="5", brand_name="Volkswagen")
        assert sel.to_record() == {"brandId": "5", "brandName": "Volkswagen"}

    def test_serialized_is_stable(self):
        a = VehicleSelection(brand_id="5", model_id="9")
        b = VehicleSelection.model_validate({"modelId": 9, "brandId": 5})
        assert a.serialized() == b.serialized()

    def test_ids_count_toward_non_empty(self):
        assert not VehicleSelection(engine_id="2").is_empty

    def test_has_levels(self):
        sel = VehicleSelection(brand_id="5", engine_name="2.0 TDI")
        assert not sel.has_model
        assert sel.has_engine

    def test_display_name(self):
        sel = VehicleSelection(brand_name="Volkswagen", model_name="Golf")
        assert sel.display_name == "Volkswagen Golf"
        assert VehicleSelection().display_name == ""

    def test_frozen(self):
        sel = VehicleSelection(brand_id="5")
        with pytest.raises(ValidationError):
            sel.brand_id = "7"

    def test_unknown_keys_ignored(self):
        sel = VehicleSelection.model_validate({"brandId": "5", "color": "red"})
        assert sel.to_record() == {"brandId": "5"}


class TestQuickFilter:
    def test_empty(self):
        assert QuickFilter().is_empty
        assert QuickFilter(search_term=" ").is_empty

    def test_category_only(self):
        quick = QuickFilter(categoryId=4)
        assert quick.category_id == "4"
        assert not quick.is_empty
