"""Layers package initialization."""
from structured_data_scraper.layers.extraction import (
    ExtractionAggregator,
    ExtractionOutcome,
    ExtractionStatus,
)
from structured_data_scraper.layers.validation import ConformanceValidator, SCHEMA_TYPE_WHITELIST
from structured_data_scraper.layers.analysis import AnalysisLayer, AnalysisResult, build_analysis_layer

__all__ = [
    "ExtractionAggregator",
    "ExtractionOutcome",
    "ExtractionStatus",
    "ConformanceValidator",
    "SCHEMA_TYPE_WHITELIST",
    "AnalysisLayer",
    "AnalysisResult",
    "build_analysis_layer",
]
