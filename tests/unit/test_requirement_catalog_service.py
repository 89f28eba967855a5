"""
Unit tests for requirement catalog loading.

Run: pytest tests/unit/test_requirement_catalog_service.py -v
"""

import pytest
import requests

from services.requirement_catalog_service import (
    RequirementCatalog,
    flatten_groups,
    normalize_requirements,
    parse_catalog_text,
)
from exceptions import RequirementsSourceError
from models.requirement import RequirementRecord
from tests.conftest import REQUIREMENTS_URL, FakeResponse, FakeSession


class TestNormalizeRequirements:
    """Tests for normalize_requirements()"""

    def test_flattens_one_level(self, catalog_json):
        records = normalize_requirements(catalog_json)

        assert [r.sku for r in records] == ["DOCU-GRAL-123", "SERV-45", "789"]
        assert records[0].props_deal == ("contrato_assinado", "data_entrega")

    def test_skips_non_array_groups(self):
        raw = [
            {"sku": "TOP-LEVEL", "propsDeal": ["x"]},
            "not a group",
            [{"sku": "1", "propsDeal": ["a"]}],
        ]

        records = normalize_requirements(raw)

        assert [r.sku for r in records] == ["1"]

    def test_only_flattens_one_level(self):
        raw = [[[{"sku": "NESTED", "propsDeal": []}]]]

        assert normalize_requirements(raw) == []

    def test_drops_record_missing_props_deal(self):
        raw = [[
            {"sku": "1", "propsDeal": ["a"]},
            {"sku": "2"},
            {"sku": "3", "propsDeal": ["c"]},
        ]]

        records = normalize_requirements(raw)

        assert [r.sku for r in records] == ["1", "3"]

    @pytest.mark.parametrize("candidate", [
        {"sku": 123, "propsDeal": ["a"]},
        {"sku": None, "propsDeal": ["a"]},
        {"propsDeal": ["a"]},
        {"sku": "1", "propsDeal": "a"},
        {"sku": "1", "propsDeal": {"a": 1}},
        None,
        "1",
        42,
    ])
    def test_drops_invalid_shapes(self, candidate):
        assert normalize_requirements([[candidate]]) == []

    def test_keeps_duplicate_skus_in_order(self):
        raw = [[
            {"sku": "1", "propsDeal": ["first"]},
            {"sku": "1", "propsDeal": ["second"]},
        ]]

        records = normalize_requirements(raw)

        assert [r.props_deal for r in records] == [("first",), ("second",)]

    def test_drops_non_string_property_names(self):
        raw = [[{"sku": "1", "propsDeal": ["a", 2, None, "b"]}]]

        records = normalize_requirements(raw)

        assert records[0].props_deal == ("a", "b")

    def test_ignores_extra_keys(self):
        raw = [[{"sku": "1", "propsDeal": ["a"], "comment": "x"}]]

        assert normalize_requirements(raw) == [RequirementRecord(sku="1", props_deal=("a",))]

    def test_flatten_groups_non_array(self):
        assert flatten_groups({"sku": "1"}) == []


class TestParseCatalogText:
    """Tests for parse_catalog_text()"""

    @pytest.mark.parametrize("text", ["", "   ", "not json", "{", "{}", '"text"', "42", "null"])
    def test_bad_text_raises_source_error(self, text):
        with pytest.raises(RequirementsSourceError):
            parse_catalog_text(text, REQUIREMENTS_URL)

    def test_deeply_nested_text_raises_source_error(self):
        text = "[" * 200000 + "]" * 200000

        with pytest.raises(RequirementsSourceError):
            parse_catalog_text(text)

    def test_valid_text(self):
        text = '[[{"sku": "SERV-45", "propsDeal": ["escopo"]}]]'

        assert [r.sku for r in parse_catalog_text(text)] == ["SERV-45"]


class TestRequirementCatalogLoad:
    """Tests for RequirementCatalog.load() / load_result()"""

    def test_load_returns_records(self, catalog_factory, catalog_json):
        catalog = catalog_factory(catalog_json)

        records = catalog.load()

        assert len(records) == 3

    def test_load_uses_configured_url_and_timeout(self, catalog_json):
        session = FakeSession([FakeResponse(catalog_json)])
        catalog = RequirementCatalog(url=REQUIREMENTS_URL, timeout=3, session=session)

        catalog.load()

        assert session.calls[0]["url"] == REQUIREMENTS_URL
        assert session.calls[0]["timeout"] == 3

    def test_top_level_object_gives_empty_catalog(self, catalog_factory):
        """'{}' parses as an object, not an array."""
        catalog = catalog_factory(text="{}")

        result = catalog.load_result()

        assert result.value == []
        assert result.used_default
        assert "array" in result.error

    def test_empty_body_gives_empty_catalog(self, catalog_factory):
        catalog = catalog_factory(text="")

        assert catalog.load() == []

    def test_invalid_json_marked_as_fallback(self, catalog_factory):
        catalog = catalog_factory(text="not json")

        result = catalog.load_result()

        assert result.value == []
        assert result.used_default
        assert "not valid JSON" in result.error

    def test_deeply_nested_body_gives_empty_catalog(self, catalog_factory):
        catalog = catalog_factory(text="[" * 200000 + "]" * 200000)

        result = catalog.load_result()

        assert result.value == []
        assert result.used_default

    def test_http_error_gives_empty_catalog(self, catalog_factory):
        catalog = catalog_factory(text="Not Found", status_code=404)

        result = catalog.load_result()

        assert result.value == []
        assert result.used_default
        assert "404" in result.error

    def test_connection_error_gives_empty_catalog(self, catalog_factory):
        catalog = catalog_factory(error=requests.exceptions.ConnectionError("refused"))

        result = catalog.load_result()

        assert result.value == []
        assert result.used_default
        assert "refused" in result.error

    def test_fetch_text_raises_source_error(self, catalog_factory):
        catalog = catalog_factory(error=requests.exceptions.Timeout("slow"))

        with pytest.raises(RequirementsSourceError) as exc_info:
            catalog.fetch_text()

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["url"] == REQUIREMENTS_URL
