"""Structured Data Scraper: extract, generate and validate schema.org structured data."""

__version__ = "1.0.0"
