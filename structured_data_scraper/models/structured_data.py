"""
Structured data models for extraction, generation and validation.
These models are the unit of exchange between every pipeline stage.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DataFormat(str, Enum):
    """Syntactic origin of a structured data item."""
    JSON_LD = "json-ld"
    MICRODATA = "microdata"
    RDFA = "rdfa"


class DataSource(str, Enum):
    """Where in the document the item was found."""
    SCRIPT = "script"
    META = "meta"
    INLINE = "inline"


class StructuredDataItem(BaseModel):
    """
    A single extracted or generated structured data record.
    
    The payload shape depends on the format:
    - json-ld: a schema.org object with @context/@type
    - rdfa: a flat OpenGraph or TwitterCard property mapping
    - microdata: a flat itemprop -> value mapping
    
    Items are immutable: format and source are fixed at creation.
    """
    model_config = ConfigDict(frozen=True)
    
    type: str
    data: Any
    format: DataFormat
    source: DataSource
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted item shape."""
        return self.model_dump(mode="json")


@dataclass
class ValidationOutcome:
    """Conformance result for one item."""
    index: int
    type: Optional[str]
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "type": self.type,
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class ValidationReport:
    """Aggregated conformance results for a collection."""
    total_count: int = 0
    valid_count: int = 0
    per_item: List[ValidationOutcome] = field(default_factory=list)
    
    @property
    def valid(self) -> bool:
        """A collection is valid only if every item is."""
        return self.valid_count == self.total_count
    
    def add(self, outcome: ValidationOutcome):
        self.per_item.append(outcome)
        self.total_count += 1
        if outcome.valid:
            self.valid_count += 1
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for API response."""
        return {
            "valid": self.valid,
            "totalCount": self.total_count,
            "validCount": self.valid_count,
            "items": [o.to_dict() for o in self.per_item],
        }


class AnalysisMetadata(BaseModel):
    """Metadata header of a persisted analysis."""
    model_config = ConfigDict(populate_by_name=True)
    
    url: str
    analyzed_at: str = Field(alias="analyzedAt")
    generated: bool
    structured_data_count: int = Field(alias="structuredDataCount")


class AnalysisEnvelope(BaseModel):
    """Persisted analysis document: metadata plus the item collection."""
    model_config = ConfigDict(populate_by_name=True)
    
    metadata: AnalysisMetadata
    structured_data: List[Dict[str, Any]] = Field(default_factory=list, alias="structuredData")
    
    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
