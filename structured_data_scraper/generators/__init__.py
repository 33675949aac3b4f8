"""Generators package initialization."""
from structured_data_scraper.generators.fallback_generator import (
    FallbackGenerator,
    GenerationResult,
    GenerationStrategy,
    extract_json_array,
)

__all__ = ["FallbackGenerator", "GenerationResult", "GenerationStrategy", "extract_json_array"]
