"""Adapters package initialization."""
from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.adapters.html_scraper import HTMLScraper
from structured_data_scraper.adapters.claude_client import ClaudeClient
from structured_data_scraper.adapters.storage import ResultStore

__all__ = ["HTMLDocument", "HTMLScraper", "ClaudeClient", "ResultStore"]
