"""
HTML Scraper Adapter for the Structured Data Scraper.
Fetches pages and summarizes their content signals for fallback generation.
"""
import re
from typing import List, Optional
from urllib.parse import urljoin, urlparse

import httpx

from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.config import config
from structured_data_scraper.models.content import HeadingData, PageContent
from structured_data_scraper.utils.logger import LayerLogger


EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# Loose on purpose: over-matches digit runs such as dates and prices
PHONE_PATTERN = re.compile(r"(?:\+\d{1,3}[-.\s]?)?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}")

SOCIAL_NETWORKS = ["facebook", "twitter", "linkedin", "instagram", "youtube"]

SOCIAL_LINK_SELECTOR = ", ".join(f'a[href*="{name}"]' for name in SOCIAL_NETWORKS)


class HTMLScraper:
    """
    HTML scraping adapter.
    Turns a URL into a document snapshot and a PageContent summary.
    """
    
    def __init__(self, timeout: int = config.REQUEST_TIMEOUT, logger: Optional[LayerLogger] = None):
        self.timeout = timeout
        self.logger = logger or LayerLogger("html_scraper")
    
    @staticmethod
    def validate_url(url: str) -> str:
        """Accept only absolute http(s) URLs."""
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")
        return parsed.geturl()
    
    async def fetch_document(self, url: str) -> HTMLDocument:
        """
        Fetch HTML from URL and parse it into a document snapshot.
        
        Raises:
            httpx.HTTPError: on transport errors or non-2xx responses
        """
        self.logger.log_action("fetch_html", "started", url=url)
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url, headers=self._get_headers())
                response.raise_for_status()
                html = response.text
            
            self.logger.log_action(
                "fetch_html",
                "completed",
                url=url,
                status_code=response.status_code,
                content_length=len(html)
            )
            
            return HTMLDocument.from_html(html, url=str(response.url))
            
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type="http_error",
                url=url
            )
            raise
    
    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }
    
    def extract_page_content(self, document: HTMLDocument, url: str) -> PageContent:
        """Summarize the page signals used by the fallback generator."""
        content = self._extract_body_text(document)
        
        page = PageContent(
            url=url,
            title=self._extract_title(document),
            description=self._extract_meta(document, "description"),
            keywords=self._extract_meta(document, "keywords"),
            content=content,
            emails=EMAIL_PATTERN.findall(content),
            phones=[m.group(0).strip() for m in PHONE_PATTERN.finditer(content)],
            social_links=self._extract_social_links(document, url),
            headings=self._extract_headings(document),
        )
        
        self.logger.log_action(
            "page_content",
            "completed",
            url=url,
            title=page.title,
            content_length=len(page.content),
            emails_count=len(page.emails),
            phones_count=len(page.phones),
            social_links_count=len(page.social_links),
            headings_count=len(page.headings)
        )
        
        return page
    
    def _extract_title(self, document: HTMLDocument) -> str:
        title_tag = document.select_one("title")
        return document.text(title_tag) if title_tag else ""
    
    def _extract_meta(self, document: HTMLDocument, name: str) -> str:
        tag = document.select_one(f'meta[name="{name}"]')
        if tag is None:
            return ""
        return (document.attribute(tag, "content") or "").strip()
    
    def _extract_body_text(self, document: HTMLDocument) -> str:
        """Visible body text with whitespace collapsed."""
        body = document.select_one("body")
        if body is None:
            return ""
        parts = [
            s for s in body.find_all(string=True)
            if s.parent is not None and s.parent.name not in ("script", "style", "noscript", "template")
        ]
        text = " ".join(parts)
        return re.sub(r"\s+", " ", text).strip()
    
    def _extract_social_links(self, document: HTMLDocument, base_url: str) -> List[str]:
        links = []
        for anchor in document.select(SOCIAL_LINK_SELECTOR):
            href = document.attribute(anchor, "href")
            if href:
                links.append(urljoin(base_url, href))
        return links
    
    def _extract_headings(self, document: HTMLDocument) -> List[HeadingData]:
        """H1-H3 headings in document order."""
        return [
            HeadingData(tag=h.name.upper(), text=document.text(h))
            for h in document.select("h1, h2, h3")
        ]
