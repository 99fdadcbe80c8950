"""Tests for catalog client registry."""

import pytest

from partfit.catalog import BaseCatalogClient, get_catalog_client, list_catalog_kinds
from partfit.catalog.file import FileCatalogClient
from partfit.catalog.http import HttpCatalogClient
from partfit.exceptions import CatalogFileError, ConfigValidationError
from partfit.models import CatalogSettings


class TestGetCatalogClient:
    @pytest.mark.asyncio
    async def test_http_client(self):
        client = get_catalog_client(CatalogSettings(kind="http"))
        assert isinstance(client, HttpCatalogClient)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_kind_case_insensitive(self):
        client = get_catalog_client(CatalogSettings(kind="HTTP"))
        assert client.kind == "http"
        await client.aclose()

    def test_file_client(self, catalog_file):
        client = get_catalog_client(CatalogSettings(kind="file", file=catalog_file))
        assert isinstance(client, FileCatalogClient)
        assert client.path == catalog_file

    def test_file_kind_needs_path(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            get_catalog_client(CatalogSettings(kind="file"))
        assert "catalog.file" in exc_info.value.message

    def test_file_must_exist(self, tmp_path):
        with pytest.raises(CatalogFileError):
            get_catalog_client(CatalogSettings(kind="file", file=tmp_path / "missing.json"))

    def test_unknown_kind(self):
        with pytest.raises(ValueError) as exc_info:
            get_catalog_client(CatalogSettings(kind="ftp"))
        assert "ftp" in str(exc_info.value)
        assert "file, http" in str(exc_info.value)


class TestListCatalogKinds:
    def test_sorted(self):
        assert list_catalog_kinds() == ["file", "http"]


class TestClientClasses:
    def test_inherit_base(self):
        assert issubclass(HttpCatalogClient, BaseCatalogClient)
        assert issubclass(FileCatalogClient, BaseCatalogClient)
