"""Tests for the conformance validator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from structured_data_scraper.layers.validation import (
    ERROR_INVALID_DATA,
    ERROR_MISSING_CONTEXT,
    ERROR_MISSING_TYPE,
    ConformanceValidator,
)
from structured_data_scraper.models.structured_data import (
    DataFormat,
    DataSource,
    StructuredDataItem,
)


def _jsonld(data) -> dict:
    return {"type": "Thing", "data": data, "format": "json-ld", "source": "script"}


@pytest.fixture
def validator() -> ConformanceValidator:
    return ConformanceValidator()

# ── validate_item ───────────────────────────────────────────────────────


class TestValidateItem:
    def test_known_type_no_warnings(self, validator) -> None:
        outcome = validator.validate_item(
            _jsonld({"@context": "https://schema.org", "@type": "Organization"}), 0
        )
        assert outcome.valid
        assert outcome.errors == []
        assert outcome.warnings == []

    def test_unknown_type_is_warning(self, validator) -> None:
        outcome = validator.validate_item(
            _jsonld({"@context": "https://schema.org", "@type": "FooBarBaz"}), 0
        )
        assert outcome.valid
        assert len(outcome.warnings) >= 1

    def test_missing_context_is_error(self, validator) -> None:
        outcome = validator.validate_item(_jsonld({"@type": "Organization"}), 0)
        assert not outcome.valid
        assert ERROR_MISSING_CONTEXT in outcome.errors

    def test_missing_type_is_error(self, validator) -> None:
        outcome = validator.validate_item(_jsonld({"@context": "https://schema.org"}), 3)
        assert not outcome.valid
        assert outcome.errors == [ERROR_MISSING_TYPE]
        assert outcome.index == 3

    def test_foreign_context_is_warning(self, validator) -> None:
        outcome = validator.validate_item(
            _jsonld({"@context": "https://example.org/vocab", "@type": "Person"}), 0
        )
        assert outcome.valid
        assert outcome.warnings == ["@context should include schema.org"]

    def test_object_context_not_checked_for_substring(self, validator) -> None:
        outcome = validator.validate_item(
            _jsonld({"@context": {"@vocab": "https://example.org/"}, "@type": "Person"}), 0
        )
        assert outcome.valid
        assert outcome.warnings == []

    def test_type_list_warns_per_unknown_entry(self, validator) -> None:
        outcome = validator.validate_item(
            _jsonld({"@context": "https://schema.org", "@type": ["Store", "Bakery"]}), 0
        )
        assert outcome.valid
        assert outcome.warnings == ["unknown schema.org type: Bakery"]

    @pytest.mark.parametrize("data", [None, "text", 42, ["@type", "Person"]])
    def test_invalid_data(self, validator, data) -> None:
        outcome = validator.validate_item(_jsonld(data), 0)
        assert not outcome.valid
        assert outcome.errors == [ERROR_INVALID_DATA]

    @pytest.mark.parametrize("item", [None, 42, "item", [], {"format": "json-ld"}])
    def test_never_raises(self, validator, item) -> None:
        outcome = validator.validate_item(item, 1)
        assert not outcome.valid
        assert outcome.errors == [ERROR_INVALID_DATA]

    def test_non_jsonld_only_structural(self, validator) -> None:
        item = StructuredDataItem(
            type="OpenGraph",
            data={"og:title": "X"},
            format=DataFormat.RDFA,
            source=DataSource.META,
        )
        outcome = validator.validate_item(item, 0)
        assert outcome.valid
        assert outcome.warnings == []
        assert outcome.type == "OpenGraph"

    def test_model_instance(self, validator) -> None:
        item = StructuredDataItem(
            type="Person",
            data={"@type": "Person"},
            format=DataFormat.JSON_LD,
            source=DataSource.SCRIPT,
        )
        outcome = validator.validate_item(item, 0)
        assert outcome.errors == [ERROR_MISSING_CONTEXT]


# ── validate_collection ─────────────────────────────────────────────────


class TestValidateCollection:
    def test_one_valid_one_invalid(self, validator) -> None:
        report = validator.validate_collection([
            _jsonld({"@context": "https://schema.org", "@type": "Organization"}),
            _jsonld({"@type": "Organization"}),
        ])
        assert report.valid_count == 1
        assert report.total_count == 2
        assert not report.valid
        assert [o.index for o in report.per_item] == [0, 1]

    def test_empty_collection_is_valid(self, validator) -> None:
        report = validator.validate_collection([])
        assert report.valid
        assert report.total_count == 0

    @pytest.mark.parametrize("items", ["not a list", {"structuredData": []}, 42, None])
    def test_not_a_sequence(self, validator, items) -> None:
        with pytest.raises(TypeError):
            validator.validate_collection(items)

    def test_report_dict(self, validator) -> None:
        report = validator.validate_collection([
            _jsonld({"@context": "https://schema.org", "@type": "FooBarBaz"}),
        ])
        data = report.to_dict()
        assert data["valid"] is True
        assert data["validCount"] == 1
        assert data["totalCount"] == 1
        assert data["items"][0]["warnings"]


# ── Saved envelopes ─────────────────────────────────────────────────────


class TestValidateEnvelope:
    def test_missing_array(self, validator) -> None:
        with pytest.raises(ValueError):
            validator.validate_envelope({"metadata": {}})

    def test_not_a_mapping(self, validator) -> None:
        with pytest.raises(ValueError):
            validator.validate_envelope([1, 2])

    def test_validate_file(self, validator, tmp_path: Path) -> None:
        path = tmp_path / "saved.json"
        path.write_text(json.dumps({
            "metadata": {"url": "https://acme.example"},
            "structuredData": [
                _jsonld({"@context": "https://schema.org", "@type": "WebSite"}),
                {"type": "OpenGraph", "data": {"og:title": "X"}, "format": "rdfa", "source": "meta"},
            ],
        }))
        report = validator.validate_file(path)
        assert report.valid
        assert report.valid_count == 2
