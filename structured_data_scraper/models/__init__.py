"""Models package initialization."""
from structured_data_scraper.models.structured_data import (
    DataFormat,
    DataSource,
    StructuredDataItem,
    ValidationOutcome,
    ValidationReport,
    AnalysisMetadata,
    AnalysisEnvelope,
)
from structured_data_scraper.models.content import PageContent, HeadingData

__all__ = [
    "DataFormat",
    "DataSource",
    "StructuredDataItem",
    "ValidationOutcome",
    "ValidationReport",
    "AnalysisMetadata",
    "AnalysisEnvelope",
    "PageContent",
    "HeadingData",
]
