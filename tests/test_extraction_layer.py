"""Tests for the extraction aggregator and its tagged outcome."""

from __future__ import annotations

from structured_data_scraper.extractors.structured_data import FormatExtractor
from structured_data_scraper.layers.extraction import (
    ExtractionAggregator,
    ExtractionStatus,
)
from structured_data_scraper.models.structured_data import DataFormat


class TestAggregationOrder:
    def test_format_grouped_order(self, document_from) -> None:
        doc = document_from(
            '<div itemscope itemtype="https://schema.org/Product"><span itemprop="name">Anvil</span></div>'
            '<meta name="twitter:card" content="summary">'
            '<meta property="og:title" content="Acme">'
            '<script type="application/ld+json">{"@type":"Organization"}</script>'
            '<script type="application/ld+json">{"@type":"WebSite"}</script>'
        )
        outcome = ExtractionAggregator().extract(doc)
        assert [i.type for i in outcome.items] == [
            "Organization",
            "WebSite",
            "OpenGraph",
            "TwitterCard",
            "https://schema.org/Product",
        ]
        assert outcome.counts == {"json-ld": 2, "opengraph": 1, "twitter": 1, "microdata": 1}
        assert outcome.total == 5

    def test_idempotent(self, jsonld_document) -> None:
        aggregator = ExtractionAggregator()
        first = aggregator.extract(jsonld_document)
        second = aggregator.extract(jsonld_document)
        assert [i.to_dict() for i in first.items] == [i.to_dict() for i in second.items]

    def test_formats_preserved(self, jsonld_document) -> None:
        outcome = ExtractionAggregator().extract(jsonld_document)
        assert [i.format for i in outcome.items] == [
            DataFormat.JSON_LD,
            DataFormat.RDFA,
            DataFormat.RDFA,
            DataFormat.MICRODATA,
        ]


class TestOutcomeStatus:
    def test_extracted(self, jsonld_document) -> None:
        outcome = ExtractionAggregator().extract(jsonld_document)
        assert outcome.status == ExtractionStatus.EXTRACTED
        assert not outcome.needs_generation

    def test_empty(self, plain_document) -> None:
        outcome = ExtractionAggregator().extract(plain_document)
        assert outcome.status == ExtractionStatus.EMPTY
        assert outcome.items == []
        assert outcome.needs_generation

    def test_force_regenerate_keeps_items(self, jsonld_document) -> None:
        outcome = ExtractionAggregator().extract(jsonld_document, force=True)
        assert outcome.status == ExtractionStatus.FORCE_REGENERATE
        assert outcome.total == 4
        assert outcome.needs_generation

    def test_custom_extractor_list(self, jsonld_document) -> None:
        class NothingExtractor(FormatExtractor):
            name = "nothing"

            def extract(self, document):
                return iter(())

        outcome = ExtractionAggregator(extractors=[NothingExtractor()]).extract(jsonld_document)
        assert outcome.status == ExtractionStatus.EMPTY
        assert outcome.counts == {"nothing": 0}
