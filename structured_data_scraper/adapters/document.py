"""
Read-only document accessor over a parsed HTML tree.
Extractors only query through this interface and never mutate the tree.
"""
from typing import List, Optional

from bs4 import BeautifulSoup, Tag


class HTMLDocument:
    """
    Queryable snapshot of a page.
    
    Offers the three primitives the extractors need:
    - all elements matching a selector (tag + attribute predicate)
    - an element's attribute value by name
    - an element's trimmed text content
    """
    
    def __init__(self, soup: BeautifulSoup, url: str = ""):
        self.soup = soup
        self.url = url
    
    @classmethod
    def from_html(cls, html: str, url: str = "") -> "HTMLDocument":
        """Parse raw HTML into a document snapshot."""
        return cls(BeautifulSoup(html, "lxml"), url=url)
    
    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        """All elements matching a CSS selector, in document order."""
        root = scope if scope is not None else self.soup
        return root.select(selector)
    
    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)
    
    @staticmethod
    def attribute(element: Tag, name: str) -> Optional[str]:
        """Attribute value as a plain string (multi-valued attributes are joined)."""
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(str(v) for v in value)
        return str(value)
    
    @staticmethod
    def text(element: Tag) -> str:
        """Trimmed text content of an element and its descendants."""
        return element.get_text().strip()
    