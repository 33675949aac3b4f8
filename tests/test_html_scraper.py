"""Tests for the HTML scraper adapter (no network)."""

from __future__ import annotations

import pytest

from structured_data_scraper.adapters.html_scraper import HTMLScraper
from structured_data_scraper.models.content import HeadingData, PageContent


class TestValidateUrl:
    def test_accepts_http_and_https(self) -> None:
        assert HTMLScraper.validate_url("https://acme.example/path") == "https://acme.example/path"
        assert HTMLScraper.validate_url("http://acme.example") == "http://acme.example"

    @pytest.mark.parametrize("url", ["ftp://acme.example", "acme.example", "", "https://"])
    def test_rejects_other_urls(self, url) -> None:
        with pytest.raises(ValueError, match="Invalid URL"):
            HTMLScraper.validate_url(url)


class TestExtractPageContent:
    def test_signals(self, plain_document) -> None:
        page = HTMLScraper().extract_page_content(plain_document, "https://acme.example")
        assert page.title == "Acme Co"
        assert page.description == "We make anvils"
        assert page.keywords == "anvils, tools"
        assert page.emails == ("sales@acme.example",)
        assert page.social_links == (
            "https://www.facebook.com/acme",
            "https://www.linkedin.com/company/acme",
        )
        assert page.headings == (
            HeadingData(tag="H1", text="Welcome to Acme"),
            HeadingData(tag="H2", text="Contact"),
        )
        assert "nobody@script.example" not in page.content

    def test_phone_pattern(self, document_from) -> None:
        doc = document_from("<body><p>Call us at +1 555-123-4567 today</p></body>")
        page = HTMLScraper().extract_page_content(doc, "https://acme.example")
        assert "+1 555-123-4567" in page.phones

    def test_relative_social_links_resolved(self, document_from) -> None:
        doc = document_from('<body><a href="/go/youtube">Video</a></body>')
        page = HTMLScraper().extract_page_content(doc, "https://acme.example/about")
        assert page.social_links == ("https://acme.example/go/youtube",)

    def test_empty_document(self, document_from) -> None:
        page = HTMLScraper().extract_page_content(document_from(""), "https://acme.example")
        assert page.title == ""
        assert page.emails == ()
        assert not page.has_contact_signals()


class TestPageContent:
    def test_content_truncated(self) -> None:
        page = PageContent(url="https://acme.example", content="a" * 6000)
        assert len(page.content) == 5000

    def test_signals_deduplicated_in_order(self) -> None:
        page = PageContent(url="https://acme.example", emails=["b@x.io", "a@x.io", "b@x.io"])
        assert page.emails == ("b@x.io", "a@x.io")

    def test_immutable(self) -> None:
        page = PageContent(url="https://acme.example")
        with pytest.raises(Exception):
            page.title = "changed"

    def test_bare_string_signal_is_one_value(self) -> None:
        page = PageContent(url="https://acme.example", emails="a@b.example")
        assert page.emails == ("a@b.example",)

    def test_unordered_signals_rejected(self) -> None:
        with pytest.raises(ValueError):
            PageContent(url="https://acme.example", phones={"555 000 1111", "555 000 2222"})
