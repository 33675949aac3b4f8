"""
Page content model consumed by the Fallback Generator.
A compact summary of the signals found on a single page.
"""
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from structured_data_scraper.config import config


def dedupe(values: Iterable[str]) -> Tuple[str, ...]:
    """Remove duplicates while keeping first-seen order."""
    return tuple(dict.fromkeys(v for v in values if v))


class HeadingData(BaseModel):
    """Heading with its tag name (H1, H2, ...) and text."""
    model_config = ConfigDict(frozen=True)
    
    tag: str
    text: str


class PageContent(BaseModel):
    """
    Immutable summary of one page.
    
    The signal collections behave as ordered sets so that the
    "first email" or "first phone" is well defined and repeated
    analyses of the same page produce identical output.
    """
    model_config = ConfigDict(frozen=True)
    
    url: str
    title: str = ""
    description: str = ""
    keywords: str = ""
    content: str = ""
    emails: Tuple[str, ...] = Field(default_factory=tuple)
    phones: Tuple[str, ...] = Field(default_factory=tuple)
    social_links: Tuple[str, ...] = Field(default_factory=tuple)
    headings: Tuple[HeadingData, ...] = Field(default_factory=tuple)
    
    @field_validator("content")
    @classmethod
    def _truncate_content(cls, value: str) -> str:
        return value[:config.CONTENT_LIMIT]
    
    @field_validator("emails", "phones", "social_links", mode="before")
    @classmethod
    def _dedupe_signals(cls, value):
        """Signals must arrive as an ordered sequence; a bare string is one value."""
        if value is None:
            return ()
        if isinstance(value, str):
            return dedupe((value,))
        if isinstance(value, (set, frozenset)):
            raise ValueError("signals must be an ordered sequence, not a set")
        return dedupe(value)
    
    def has_contact_signals(self) -> bool:
        """True if any business contact signal was found."""
        return bool(self.emails or self.phones or self.social_links)
