"""
Format extractors for embedded structured data.

One extractor per format. Each yields StructuredDataItem candidates lazily
and never raises: a candidate that cannot be parsed is logged and skipped,
and extraction continues with the next element.
"""
import json
from typing import Any, Dict, Iterator, List, Optional

from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.models.structured_data import (
    DataFormat,
    DataSource,
    StructuredDataItem,
)
from structured_data_scraper.utils.logger import LayerLogger


def jsonld_type_label(data: Any, default: str) -> str:
    """Type label from a JSON-LD object's @type (first entry if a list)."""
    if not isinstance(data, dict):
        return default
    schema_type = data.get("@type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if isinstance(t, str) and t), None)
    if isinstance(schema_type, str) and schema_type:
        return schema_type
    return default


class FormatExtractor:
    """Base class for a single-format extractor."""
    
    name = "base"
    
    def __init__(self, logger: Optional[LayerLogger] = None):
        self.logger = logger or LayerLogger("structured_data_extractor")
    
    def extract(self, document: HTMLDocument) -> Iterator[StructuredDataItem]:
        raise NotImplementedError


class JsonLdExtractor(FormatExtractor):
    """<script type="application/ld+json"> blocks."""
    
    name = "json-ld"
    selector = 'script[type="application/ld+json"]'
    
    def extract(self, document: HTMLDocument) -> Iterator[StructuredDataItem]:
        for index, script in enumerate(document.select(self.selector)):
            content = document.text(script)
            if not content:
                continue
            
            try:
                data = json.loads(content)
            except (ValueError, RecursionError) as e:
                self.logger.log_skipped_candidate(self.name, index, reason=f"invalid JSON: {e}")
                continue
            
            yield StructuredDataItem(
                type=jsonld_type_label(data, "Unknown"),
                data=data,
                format=DataFormat.JSON_LD,
                source=DataSource.SCRIPT,
            )


class MetaTagExtractor(FormatExtractor):
    """
    Merges namespaced <meta> tags into a single item.
    
    Tags are keyed by their full property name; a later tag with the
    same name overwrites an earlier one. Tags without content are ignored.
    """
    
    key_attribute = ""
    prefix = ""
    type_label = ""
    
    def extract(self, document: HTMLDocument) -> Iterator[StructuredDataItem]:
        selector = f'meta[{self.key_attribute}^="{self.prefix}"]'
        merged: Dict[str, str] = {}
        
        for tag in document.select(selector):
            key = document.attribute(tag, self.key_attribute)
            content = document.attribute(tag, "content")
            if key and content:
                merged[key] = content
        
        if merged:
            yield StructuredDataItem(
                type=self.type_label,
                data=merged,
                format=DataFormat.RDFA,
                source=DataSource.META,
            )


class OpenGraphExtractor(MetaTagExtractor):
    """<meta property="og:*"> tags."""
    
    name = "opengraph"
    key_attribute = "property"
    prefix = "og:"
    type_label = "OpenGraph"


class TwitterCardExtractor(MetaTagExtractor):
    """<meta name="twitter:*"> tags."""
    
    name = "twitter"
    key_attribute = "name"
    prefix = "twitter:"
    type_label = "TwitterCard"


class MicrodataExtractor(FormatExtractor):
    """
    itemscope / itemtype / itemprop annotations.
    
    Every scope is visited independently, including nested ones, so a
    parent scope also reports the properties of its child scopes and the
    child produces its own item as well. This mirrors how the annotations
    read in the page and is expected.
    """
    
    name = "microdata"
    
    def extract(self, document: HTMLDocument) -> Iterator[StructuredDataItem]:
        for index, scope in enumerate(document.select("[itemscope]")):
            try:
                properties = self._collect_properties(document, scope)
            except (AttributeError, TypeError, ValueError) as e:
                self.logger.log_skipped_candidate(self.name, index, reason=str(e))
                continue
            
            if not properties:
                continue
            
            yield StructuredDataItem(
                type=document.attribute(scope, "itemtype") or "Microdata",
                data=properties,
                format=DataFormat.MICRODATA,
                source=DataSource.INLINE,
            )
    
    def _collect_properties(self, document: HTMLDocument, scope) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        for element in document.select("[itemprop]", scope=scope):
            name = document.attribute(element, "itemprop")
            value = self._property_value(document, element)
            if name and value:
                properties[name] = value
        return properties
    
    @staticmethod
    def _property_value(document: HTMLDocument, element) -> str:
        """First non-empty of: content attribute, datetime attribute, trimmed text."""
        return (
            document.attribute(element, "content")
            or document.attribute(element, "datetime")
            or document.text(element)
        )


def default_extractors(logger: Optional[LayerLogger] = None) -> List[FormatExtractor]:
    """Extractors in aggregation order."""
    return [
        JsonLdExtractor(logger),
        OpenGraphExtractor(logger),
        TwitterCardExtractor(logger),
        MicrodataExtractor(logger),
    ]
