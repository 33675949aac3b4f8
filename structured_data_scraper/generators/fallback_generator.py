"""
Fallback Generator for the Structured Data Scraper.
Synthesizes structured data for pages that have none.

Two tiers:
1. Generative: delegate to a text-generation capability and parse the
   JSON array embedded in its response
2. Heuristic: deterministic WebSite (+ Organization) items built from
   page signals; always available
"""
import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol

from structured_data_scraper.config import config
from structured_data_scraper.extractors.structured_data import jsonld_type_label
from structured_data_scraper.models.content import PageContent
from structured_data_scraper.models.schema import OrganizationSchema, WebSiteSchema
from structured_data_scraper.models.structured_data import (
    DataFormat,
    DataSource,
    StructuredDataItem,
)
from structured_data_scraper.utils.logger import LayerLogger


PROMPT_TEMPLATE = """Analyze the following website information and create matching schema.org JSON-LD structured data.

Website URL: {url}
Title: {title}
Description: {description}
Keywords: {keywords}
Main content: {content}
Emails: {emails}
Phone numbers: {phones}
Social media links: {social_links}
Headings: {headings}

Create JSON-LD structured data based on the content. Consider these schema.org types:
- Organization (if it is a company)
- Person (if it is a personal page)
- WebSite
- Service (if services are offered)
- Product (if products are sold)
- LocalBusiness (if it is a local business)
- Article (if it is an article or blog post)

Return ONLY valid JSON in this format:
[
  {{
    "@context": "https://schema.org",
    "@type": "...",
    ...
  }}
]

Make sure all data is correct and complete. Use only the information provided above."""


class TextGenerator(Protocol):
    """Text-generation capability: prompt in, response text out."""
    
    async def generate(self, prompt: str) -> str:
        ...


class GenerationStrategy(str, Enum):
    """Tier that produced a generation result."""
    GENERATIVE = "generative"
    HEURISTIC = "heuristic"


@dataclass
class GenerationResult:
    """Generated items and the tier that produced them."""
    strategy: GenerationStrategy
    items: List[StructuredDataItem] = field(default_factory=list)


def extract_json_array(text: str) -> Optional[list]:
    """
    Find the first balanced [...] substring that parses as a JSON array.
    
    Brackets inside JSON strings are ignored. Model responses often wrap
    the array in prose or code fences, so the whole text is never parsed.
    """
    if not text:
        return None
    
    start = text.find("[")
    while start != -1:
        end = _matching_bracket(text, start)
        if end is None:
            start = text.find("[", start + 1)
            continue
        try:
            parsed = json.loads(text[start:end + 1])
        except (ValueError, RecursionError):
            parsed = None
        if isinstance(parsed, list):
            return parsed
        start = text.find("[", start + 1)
    return None


def _matching_bracket(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False
    for position in range(start, len(text)):
        char = text[position]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return position
    return None


class FallbackGenerator:
    """
    Fallback Generator.
    
    Never raises past this component for generation problems: an
    unavailable capability, a timeout, an error or a response without a
    usable JSON array all fall through to the heuristic tier.
    """
    
    def __init__(
        self,
        text_generator: Optional[TextGenerator] = None,
        timeout: float = config.GENERATION_TIMEOUT,
        logger: Optional[LayerLogger] = None,
    ):
        self.text_generator = text_generator
        self.timeout = timeout
        self.logger = logger or LayerLogger("fallback_generator")
    
    def is_generative_available(self) -> bool:
        if self.text_generator is None:
            return False
        is_available = getattr(self.text_generator, "is_available", None)
        return is_available() if callable(is_available) else True
    
    async def generate(self, page_content: PageContent) -> GenerationResult:
        """
        Generate structured data for a page.
        
        Raises:
            ValueError: if no page content is supplied
        """
        if page_content is None:
            raise ValueError("page content is required for fallback generation")
        
        self.logger.log_action(
            "fallback_generation",
            "started",
            url=page_content.url,
            generative_available=self.is_generative_available()
        )
        
        if not self.is_generative_available():
            self.logger.log_decision(
                decision="use_heuristic",
                reason="No text generation capability configured",
                url=page_content.url
            )
        else:
            try:
                items = await self._generate_with_model(page_content)
                self.logger.log_action(
                    "fallback_generation",
                    "completed",
                    strategy=GenerationStrategy.GENERATIVE.value,
                    items_count=len(items),
                    item_types=[i.type for i in items]
                )
                return GenerationResult(strategy=GenerationStrategy.GENERATIVE, items=items)
            except asyncio.TimeoutError:
                self.logger.log_fallback(
                    from_source=GenerationStrategy.GENERATIVE.value,
                    to_source=GenerationStrategy.HEURISTIC.value,
                    reason=f"Generation timed out after {self.timeout}s",
                    url=page_content.url
                )
            except Exception as e:
                self.logger.log_fallback(
                    from_source=GenerationStrategy.GENERATIVE.value,
                    to_source=GenerationStrategy.HEURISTIC.value,
                    reason=f"Generation failed: {str(e)}",
                    url=page_content.url,
                    error_type=type(e).__name__
                )
        
        items = self.heuristic(page_content)
        return GenerationResult(strategy=GenerationStrategy.HEURISTIC, items=items)
    
    def build_prompt(self, page_content: PageContent) -> str:
        """Bounded prompt embedding the page signals."""
        return PROMPT_TEMPLATE.format(
            url=page_content.url,
            title=page_content.title,
            description=page_content.description,
            keywords=page_content.keywords,
            content=page_content.content[:config.PROMPT_CONTENT_LIMIT],
            emails=", ".join(page_content.emails),
            phones=", ".join(page_content.phones),
            social_links=", ".join(page_content.social_links),
            headings=", ".join(f"{h.tag}: {h.text}" for h in page_content.headings),
        )
    
    async def _generate_with_model(self, page_content: PageContent) -> List[StructuredDataItem]:
        prompt = self.build_prompt(page_content)
        response = await asyncio.wait_for(
            self.text_generator.generate(prompt),
            timeout=self.timeout
        )
        
        parsed = extract_json_array(response or "")
        if parsed is None:
            raise ValueError("No valid JSON array found in model response")
        
        items = [self._to_item(element) for element in parsed if isinstance(element, dict)]
        if len(items) < len(parsed):
            self.logger.log_action(
                "parse_model_response",
                "filtered",
                dropped=len(parsed) - len(items),
                reason="non_object_elements"
            )
        if not items:
            raise ValueError("Model response contained no structured data objects")
        return items
    
    @staticmethod
    def _to_item(data: Any) -> StructuredDataItem:
        return StructuredDataItem(
            type=jsonld_type_label(data, "Generated"),
            data=data,
            format=DataFormat.JSON_LD,
            source=DataSource.SCRIPT,
        )
    
    def heuristic(self, page_content: PageContent) -> List[StructuredDataItem]:
        """
        Deterministic fallback: WebSite first, Organization second when
        the page exposes contact or social signals.
        """
        description = page_content.description or page_content.title
        
        schemas = [
            WebSiteSchema(
                name=page_content.title,
                url=page_content.url,
                description=description,
                keywords=page_content.keywords,
            )
        ]
        
        if page_content.has_contact_signals():
            schemas.append(
                OrganizationSchema(
                    name=page_content.title,
                    url=page_content.url,
                    description=description,
                    email=page_content.emails[0] if page_content.emails else None,
                    telephone=page_content.phones[0] if page_content.phones else None,
                    sameAs=list(page_content.social_links),
                )
            )
        
        items = [self._to_item(schema.to_jsonld()) for schema in schemas]
        
        self.logger.log_action(
            "fallback_generation",
            "completed",
            strategy=GenerationStrategy.HEURISTIC.value,
            url=page_content.url,
            items_count=len(items),
            item_types=[i.type for i in items]
        )
        return items
