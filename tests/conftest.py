"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import pytest

from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.models.content import PageContent


class FakeTextGenerator:
    """Text generator returning a canned response (or raising)."""

    def __init__(
        self,
        response: str = "",
        error: Optional[Exception] = None,
        delay: float = 0.0,
        available: bool = True,
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.available = available
        self.prompts: List[str] = []

    def is_available(self) -> bool:
        return self.available

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


JSONLD_PAGE = """
<html><head>
<title>Acme</title>
<script type="application/ld+json">{"@context": "https://schema.org", "@type": "Organization", "name": "Acme"}</script>
<meta property="og:title" content="Acme">
<meta name="twitter:card" content="summary">
</head><body>
<div itemscope itemtype="https://schema.org/Product"><span itemprop="name">Anvil</span></div>
</body></html>
"""

PLAIN_PAGE = """
<html><head>
<title>Acme Co</title>
<meta name="description" content="We make anvils">
<meta name="keywords" content="anvils, tools">
</head><body>
<h1>Welcome to Acme</h1>
<h2>Contact</h2>
<p>Write to sales@acme.example or sales@acme.example.</p>
<a href="https://www.facebook.com/acme">Facebook</a>
<a href="https://www.linkedin.com/company/acme">LinkedIn</a>
<a href="https://www.facebook.com/acme">Facebook again</a>
<script>var hidden = "nobody@script.example";</script>
</body></html>
"""


@pytest.fixture
def document_from():
    """Build a document snapshot from an HTML string."""
    def _build(html: str, url: str = "https://acme.example") -> HTMLDocument:
        return HTMLDocument.from_html(html, url=url)
    return _build


@pytest.fixture
def jsonld_document(document_from) -> HTMLDocument:
    return document_from(JSONLD_PAGE)


@pytest.fixture
def plain_document(document_from) -> HTMLDocument:
    return document_from(PLAIN_PAGE)


@pytest.fixture
def acme_page() -> PageContent:
    return PageContent(
        title="Acme Co",
        url="https://acme.example",
        emails=["a@acme.example"],
        phones=[],
        social_links=[],
    )


@pytest.fixture
def fake_generator():
    """Factory for FakeTextGenerator instances."""
    return FakeTextGenerator


@pytest.fixture
def jsonld_html() -> str:
    return JSONLD_PAGE


@pytest.fixture
def plain_html() -> str:
    return PLAIN_PAGE
