"""
Schema.org JSON-LD models for the heuristic fallback.
These models ensure deterministic output with stable key order.
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


SCHEMA_CONTEXT = "https://schema.org"


class SchemaBase(BaseModel):
    """Base class for all schema.org types."""
    
    def to_jsonld(self) -> Dict[str, Any]:
        """Convert to JSON-LD format, excluding None values."""
        data = {"@context": SCHEMA_CONTEXT}
        for key, value in self.model_dump(exclude_none=True, by_alias=True).items():
            if key.startswith("_"):
                continue
            if isinstance(value, list) and len(value) == 0:
                continue
            data[key] = value
        return data


class WebSiteSchema(SchemaBase):
    """WebSite schema, always emitted by the heuristic tier."""
    type: str = Field(default="WebSite", alias="@type")
    name: str
    url: str
    description: str
    keywords: str = ""


class OrganizationSchema(SchemaBase):
    """Organization schema built from contact signals."""
    type: str = Field(default="Organization", alias="@type")
    name: str
    url: str
    description: str
    email: Optional[str] = None
    telephone: Optional[str] = None
    sameAs: List[str] = Field(default_factory=list)
