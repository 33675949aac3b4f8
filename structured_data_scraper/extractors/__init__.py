"""Extractors package initialization."""
from structured_data_scraper.extractors.structured_data import (
    FormatExtractor,
    JsonLdExtractor,
    OpenGraphExtractor,
    TwitterCardExtractor,
    MicrodataExtractor,
    default_extractors,
)

__all__ = [
    "FormatExtractor",
    "JsonLdExtractor",
    "OpenGraphExtractor",
    "TwitterCardExtractor",
    "MicrodataExtractor",
    "default_extractors",
]
