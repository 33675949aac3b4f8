"""
Extraction Layer for the Structured Data Scraper.
Runs every format extractor over one document and reports a tagged outcome.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.extractors.structured_data import FormatExtractor, default_extractors
from structured_data_scraper.models.structured_data import StructuredDataItem
from structured_data_scraper.utils.logger import LayerLogger


class ExtractionStatus(str, Enum):
    """What the pipeline should do with the extraction result."""
    EXTRACTED = "extracted"
    EMPTY = "empty"
    FORCE_REGENERATE = "force_regenerate"


@dataclass
class ExtractionOutcome:
    """Items found on a page plus the decision they imply."""
    status: ExtractionStatus
    items: List[StructuredDataItem] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    
    @property
    def total(self) -> int:
        return len(self.items)
    
    @property
    def needs_generation(self) -> bool:
        return self.status != ExtractionStatus.EXTRACTED


class ExtractionAggregator:
    """
    Extraction Aggregator.
    
    Output order is stable and grouped by format: all JSON-LD items,
    then the OpenGraph item, then the TwitterCard item, then Microdata
    items in document order.
    """
    
    def __init__(
        self,
        extractors: Optional[List[FormatExtractor]] = None,
        logger: Optional[LayerLogger] = None,
    ):
        self.logger = logger or LayerLogger("extraction_layer")
        self.extractors = extractors if extractors is not None else default_extractors(self.logger)
    
    def extract(self, document: HTMLDocument, force: bool = False) -> ExtractionOutcome:
        """
        Extract structured data from a document.
        
        Args:
            document: Parsed page snapshot
            force: Request regeneration even if data was found
        
        Returns:
            ExtractionOutcome tagged EXTRACTED, EMPTY or FORCE_REGENERATE
        """
        self.logger.log_action("extract_structured_data", "started", url=document.url or None)
        
        items: List[StructuredDataItem] = []
        counts: Dict[str, int] = {}
        
        for extractor in self.extractors:
            found = list(extractor.extract(document))
            counts[extractor.name] = len(found)
            items.extend(found)
        
        if force:
            status = ExtractionStatus.FORCE_REGENERATE
        elif items:
            status = ExtractionStatus.EXTRACTED
        else:
            status = ExtractionStatus.EMPTY
        
        self.logger.log_extraction(
            status=status.value,
            counts=counts,
            total=len(items),
            url=document.url or None
        )
        
        return ExtractionOutcome(status=status, items=items, counts=counts)
