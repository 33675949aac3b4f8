"""
Analysis Layer for the Structured Data Scraper.
Orchestrates: fetch -> extract -> (if needed) generate -> persist.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from structured_data_scraper.adapters.claude_client import ClaudeClient
from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.adapters.html_scraper import HTMLScraper
from structured_data_scraper.adapters.storage import ResultStore
from structured_data_scraper.config import config
from structured_data_scraper.generators.fallback_generator import FallbackGenerator, GenerationStrategy
from structured_data_scraper.layers.extraction import ExtractionAggregator, ExtractionStatus
from structured_data_scraper.models.structured_data import StructuredDataItem
from structured_data_scraper.utils.logger import LayerLogger


@dataclass
class AnalysisResult:
    """Result of analyzing one page."""
    success: bool
    url: str
    structured_data: List[StructuredDataItem] = field(default_factory=list)
    generated: bool = False
    strategy: Optional[GenerationStrategy] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None
    
    @property
    def structured_data_count(self) -> int:
        return len(self.structured_data)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for API response."""
        return {
            "success": self.success,
            "url": self.url,
            "generated": self.generated,
            "strategy": self.strategy.value if self.strategy else None,
            "structuredDataCount": self.structured_data_count,
            "structuredData": [item.to_dict() for item in self.structured_data],
            "outputPath": str(self.output_path) if self.output_path else None,
            "error": self.error,
        }


class AnalysisLayer:
    """
    Analysis pipeline for a single URL.
    
    Extraction and generation are mutually exclusive per run: either the
    page's own structured data is returned, or generated data replaces it.
    """
    
    def __init__(
        self,
        scraper: Optional[HTMLScraper] = None,
        aggregator: Optional[ExtractionAggregator] = None,
        generator: Optional[FallbackGenerator] = None,
        store: Optional[ResultStore] = None,
        logger: Optional[LayerLogger] = None,
    ):
        self.logger = logger or LayerLogger("analysis_layer")
        self.scraper = scraper or HTMLScraper()
        self.aggregator = aggregator or ExtractionAggregator()
        self.generator = generator or FallbackGenerator()
        self.store = store or ResultStore()
    
    async def analyze(self, url: str, force: bool = False, save: bool = True) -> AnalysisResult:
        """
        Analyze a URL end to end.
        
        Errors are reported in the result rather than raised.
        """
        try:
            valid_url = self.scraper.validate_url(url)
            self.logger.log_action("analyze", "started", url=valid_url, force=force)
            
            document = await self.scraper.fetch_document(valid_url)
            result = await self.analyze_document(valid_url, document, force=force)
            
            if save:
                result.output_path = self.store.save(
                    valid_url, result.structured_data, result.generated
                )
            
            self.logger.log_action(
                "analyze",
                "completed",
                url=valid_url,
                structured_data_count=result.structured_data_count,
                generated=result.generated,
                output_path=str(result.output_path) if result.output_path else None
            )
            return result
            
        except Exception as e:
            self.logger.log_error(
                f"Analysis failed: {str(e)}",
                error_type=type(e).__name__,
                url=url
            )
            return AnalysisResult(success=False, url=url, error=str(e))
    
    async def analyze_document(
        self,
        url: str,
        document: HTMLDocument,
        force: bool = False,
    ) -> AnalysisResult:
        """Extract from an already loaded document, generating if needed."""
        outcome = self.aggregator.extract(document, force=force)
        
        if not outcome.needs_generation:
            self.logger.log_decision(
                decision="use_extracted",
                reason=f"Found {outcome.total} existing structured data entries",
                url=url
            )
            return AnalysisResult(success=True, url=url, structured_data=outcome.items)
        
        if outcome.status == ExtractionStatus.FORCE_REGENERATE:
            reason = "Force mode enabled, regenerating structured data"
        else:
            reason = "No structured data found"
        self.logger.log_decision(
            decision="generate",
            reason=reason,
            url=url,
            existing_count=outcome.total
        )
        
        page_content = self.scraper.extract_page_content(document, url)
        generation = await self.generator.generate(page_content)
        
        return AnalysisResult(
            success=True,
            url=url,
            structured_data=generation.items,
            generated=True,
            strategy=generation.strategy,
        )


def build_analysis_layer(
    api_key: Optional[str] = None,
    output_dir: Optional[str] = None,
) -> AnalysisLayer:
    """Wire the pipeline, enabling the generative tier when a key is available."""
    text_generator = None
    if api_key or config.is_generation_configured():
        text_generator = ClaudeClient(api_key=api_key)
    
    return AnalysisLayer(
        generator=FallbackGenerator(text_generator=text_generator),
        store=ResultStore(output_dir or config.OUTPUT_DIR),
    )
