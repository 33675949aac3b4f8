"""
Conformance Validator for structured data items.

Checks structure and schema.org conventions. Validation failures are
reported as data, never raised.
"""
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from structured_data_scraper.adapters.storage import ResultStore
from structured_data_scraper.models.structured_data import (
    DataFormat,
    StructuredDataItem,
    ValidationOutcome,
    ValidationReport,
)
from structured_data_scraper.utils.logger import LayerLogger


# Recognized schema.org types; anything else only produces a warning
SCHEMA_TYPE_WHITELIST = frozenset([
    "Organization", "Person", "WebSite", "WebPage", "Article", "BlogPosting",
    "Product", "Service", "LocalBusiness", "ContactPoint", "PostalAddress",
    "Place", "Event", "Review", "Rating", "Offer", "Brand", "ImageObject",
    "VideoObject", "Recipe", "FAQ", "Question", "Answer", "BreadcrumbList",
    "ListItem", "JobPosting", "Course", "Book", "Movie", "MusicGroup",
    "Restaurant", "Hotel", "Store", "NewsArticle", "SoftwareApplication",
])

ERROR_INVALID_DATA = "missing or invalid data object"
ERROR_MISSING_CONTEXT = "missing @context"
ERROR_MISSING_TYPE = "missing @type"


def is_known_schema_type(schema_type: Any) -> bool:
    return isinstance(schema_type, str) and schema_type in SCHEMA_TYPE_WHITELIST


class ConformanceValidator:
    """
    Conformance Validator.
    
    Rules per item:
    - data must be an object-shaped mapping, otherwise the item is invalid
      and no further checks run
    - json-ld items need @context and @type (errors); a string @context
      without "schema.org" and an unrecognized @type are warnings
    - other formats are only checked structurally
    
    An item is valid iff it has no errors; warnings never affect validity.
    """
    
    def __init__(self, logger: Optional[LayerLogger] = None, store: Optional[ResultStore] = None):
        self.logger = logger or LayerLogger("validation_layer")
        self.store = store or ResultStore()
    
    def validate_item(self, item: Any, index: int = 0) -> ValidationOutcome:
        """Validate one item. Never raises."""
        item_type, item_format, data = self._unpack(item)
        outcome = ValidationOutcome(index=index, type=item_type, valid=False)
        
        if not isinstance(data, Mapping):
            outcome.errors.append(ERROR_INVALID_DATA)
            self._log_outcome(outcome)
            return outcome
        
        if item_format == DataFormat.JSON_LD.value:
            self._check_jsonld(data, outcome)
        
        outcome.valid = not outcome.errors
        self._log_outcome(outcome)
        return outcome
    
    def validate_collection(self, items: Any) -> ValidationReport:
        """
        Validate every item of a collection.
        
        Raises:
            TypeError: if items is not a sequence of items
        """
        if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
            raise TypeError("Structured data must be a sequence of items")
        
        report = ValidationReport()
        for index, item in enumerate(items):
            report.add(self.validate_item(item, index))
        
        self.logger.log_action(
            "validate_collection",
            "completed",
            valid=report.valid,
            valid_count=report.valid_count,
            total_count=report.total_count,
            summary=f"{report.valid_count}/{report.total_count} items valid"
        )
        return report
    
    def validate_envelope(self, document: Any) -> ValidationReport:
        """
        Validate the structuredData array of a saved analysis.
        
        Raises:
            ValueError: if the document has no structuredData array
        """
        structured_data = document.get("structuredData") if isinstance(document, Mapping) else None
        if not isinstance(structured_data, list):
            self.logger.log_error(
                "Invalid file format: missing structuredData array",
                error_type="invalid_format"
            )
            raise ValueError("Invalid file format: missing structuredData array")
        return self.validate_collection(structured_data)
    
    def validate_file(self, path: Union[str, Path]) -> ValidationReport:
        """Load a saved analysis from disk and validate it."""
        self.logger.log_action("validate_file", "started", path=str(path))
        return self.validate_envelope(self.store.load(path))
    
    def _check_jsonld(self, data: Mapping, outcome: ValidationOutcome):
        context = data.get("@context")
        if not context:
            outcome.errors.append(ERROR_MISSING_CONTEXT)
        elif isinstance(context, str) and "schema.org" not in context:
            outcome.warnings.append("@context should include schema.org")
        
        schema_type = data.get("@type")
        if not schema_type:
            outcome.errors.append(ERROR_MISSING_TYPE)
            return
        
        types = schema_type if isinstance(schema_type, list) else [schema_type]
        for t in types:
            if not is_known_schema_type(t):
                outcome.warnings.append(f"unknown schema.org type: {t}")
    
    @staticmethod
    def _unpack(item: Any) -> Tuple[Optional[str], Optional[str], Any]:
        """(type, format, data) from a model or a raw mapping loaded from storage."""
        if isinstance(item, StructuredDataItem):
            return item.type, item.format.value, item.data
        if isinstance(item, Mapping):
            item_type = item.get("type")
            item_format = item.get("format")
            if isinstance(item_format, DataFormat):
                item_format = item_format.value
            return (
                item_type if isinstance(item_type, str) else None,
                item_format,
                item.get("data"),
            )
        return None, None, None
    
    def _log_outcome(self, outcome: ValidationOutcome):
        self.logger.log_validation(
            index=outcome.index,
            item_type=outcome.type,
            valid=outcome.valid,
            errors=outcome.errors,
            warnings=outcome.warnings
        )
