"""
Structured Data Scraper - FastAPI Application
Main entry point with REST API endpoints.
"""
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from structured_data_scraper.adapters.document import HTMLDocument
from structured_data_scraper.config import config
from structured_data_scraper.layers.analysis import build_analysis_layer
from structured_data_scraper.layers.validation import ConformanceValidator
from structured_data_scraper.utils.logger import get_logger, set_trace_id


# Initialize FastAPI app
app = FastAPI(
    title="Structured Data Scraper",
    description="Extracts, generates and validates schema.org structured data for web pages",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
analysis_layer = build_analysis_layer()
validator = ConformanceValidator()

logger = get_logger("main")


# Request/Response models
class AnalyzeRequest(BaseModel):
    """Request model for URL analysis."""
    url: str
    force: bool = False  # Regenerate even if structured data exists
    save: bool = True


class AnalyzeHTMLRequest(BaseModel):
    """Request model for analysis of already fetched HTML."""
    url: str
    html: str
    force: bool = False


class ValidateRequest(BaseModel):
    """Request model for validating a saved item collection."""
    structured_data: List[Any] = Field(alias="structuredData")


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "generation_configured": config.is_generation_configured(),
    }


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest) -> Dict[str, Any]:
    """
    Analyze a URL for structured data.

    Returns the page's own structured data, or generated data when the
    page has none (or force is set).
    """
    trace_id = set_trace_id()

    logger.info("analyze_request", url=request.url, force=request.force, trace_id=trace_id)

    try:
        analysis_layer.scraper.validate_url(request.url)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = await analysis_layer.analyze(request.url, force=request.force, save=request.save)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return {**result.to_dict(), "trace_id": trace_id}


@app.post("/api/analyze-html")
async def analyze_html(request: AnalyzeHTMLRequest) -> Dict[str, Any]:
    """Analyze raw HTML without fetching or persisting anything."""
    trace_id = set_trace_id()

    logger.info("analyze_html_request", url=request.url, force=request.force, html_length=len(request.html))

    try:
        document = HTMLDocument.from_html(request.html, url=request.url)
        result = await analysis_layer.analyze_document(request.url, document, force=request.force)
    except Exception as e:
        logger.error("analyze_html_error", error=str(e), url=request.url)
        raise HTTPException(status_code=500, detail=str(e))

    return {**result.to_dict(), "trace_id": trace_id}


@app.post("/api/validate")
async def validate(request: ValidateRequest) -> Dict[str, Any]:
    """Validate a collection of structured data items."""
    trace_id = set_trace_id()

    logger.info("validate_request", items_count=len(request.structured_data), trace_id=trace_id)

    try:
        report = validator.validate_collection(request.structured_data)
    except TypeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {**report.to_dict(), "trace_id": trace_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
