"""
Result storage for analysis envelopes.
Writes one JSON document per analysis run.
"""
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union
from urllib.parse import urlparse

from structured_data_scraper.config import config
from structured_data_scraper.models.structured_data import (
    AnalysisEnvelope,
    AnalysisMetadata,
    StructuredDataItem,
)
from structured_data_scraper.utils.logger import LayerLogger


def isoformat_utc(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ResultStore:
    """Persists analysis results under a single output directory."""
    
    def __init__(self, output_dir: Union[str, Path] = config.OUTPUT_DIR):
        self.output_dir = Path(output_dir)
        self.logger = LayerLogger("result_store")
    
    def build_envelope(
        self,
        url: str,
        items: Iterable[StructuredDataItem],
        generated: bool,
        analyzed_at: Optional[datetime] = None,
    ) -> AnalysisEnvelope:
        structured_data = [item.to_dict() for item in items]
        analyzed_at = analyzed_at or datetime.now(timezone.utc)
        return AnalysisEnvelope(
            metadata=AnalysisMetadata(
                url=url,
                analyzed_at=isoformat_utc(analyzed_at),
                generated=generated,
                structured_data_count=len(structured_data),
            ),
            structured_data=structured_data,
        )
    
    def filename_for(self, url: str, analyzed_at: datetime) -> str:
        """<hostname>_<timestamp>.json with filesystem-safe characters."""
        hostname = re.sub(r"[^a-zA-Z0-9]", "_", urlparse(url).hostname or "unknown")
        timestamp = re.sub(r"[:.]", "-", isoformat_utc(analyzed_at))
        return f"{hostname}_{timestamp}.json"
    
    def save(
        self,
        url: str,
        items: Iterable[StructuredDataItem],
        generated: bool,
        analyzed_at: Optional[datetime] = None,
    ) -> Path:
        """Write the envelope to disk and return its path."""
        analyzed_at = analyzed_at or datetime.now(timezone.utc)
        envelope = self.build_envelope(url, items, generated, analyzed_at)
        
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / self.filename_for(url, analyzed_at)
        path.write_text(json.dumps(envelope.to_json_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        
        self.logger.log_action(
            "save_results",
            "completed",
            path=str(path),
            structured_data_count=envelope.metadata.structured_data_count,
            generated=generated
        )
        return path
    
    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Read a previously saved envelope as plain JSON."""
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
