"""
FastAPI backend for ComplexityLens.

Inline complexity labels, full analysis reports and code highlighting for
Python snippets. Works offline through the heuristic estimator.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from core.analyzer import CodeComplexityAnalyzer
from core.config import configure_logging, get_settings
from core.highlighter import highlight
from core.models import AnalysisReport, ComplexityEstimate
from core.report import render_page
from providers.anthropic_provider import AnthropicAPIError, MissingAPIKeyError

__version__ = "1.0.0"

# Load environment variables
load_dotenv()

configure_logging()
logger = logging.getLogger(__name__)


# Request/Response Models
class CodeRequest(BaseModel):
    """Request model - only accepts code."""
    code: str = Field(..., description="Python code", min_length=1)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Code cannot be empty or whitespace only")
        max_length = get_settings().MAX_CODE_LENGTH
        if len(v) > max_length:
            raise ValueError(f"Code exceeds maximum length of {max_length} characters")
        return v


class EstimateResponse(BaseModel):
    success: bool = True
    result: ComplexityEstimate


class AnalyzeResponse(BaseModel):
    """Full report plus the rendered results page."""
    success: bool = True
    result: AnalysisReport
    html: str
    model: str


class HighlightResponse(BaseModel):
    success: bool = True
    html: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create one analyzer per process so the label cache is shared."""
    settings = get_settings()
    analyzer = CodeComplexityAnalyzer(settings)
    app.state.analyzer = analyzer
    mode = "online" if analyzer.online else "offline (heuristic only)"
    logger.info(f"ComplexityLens starting - mode: {mode}")

    yield

    await analyzer.close()
    logger.info("Shutting down...")


def get_analyzer(request: Request) -> CodeComplexityAnalyzer:
    return request.app.state.analyzer


# Initialize FastAPI
app = FastAPI(
    title="ComplexityLens",
    description="Estimate time complexity of Python snippets",
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MissingAPIKeyError)
async def missing_key_handler(request: Request, exc: MissingAPIKeyError):
    return JSONResponse(status_code=503, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(AnthropicAPIError)
async def provider_error_handler(request: Request, exc: AnthropicAPIError):
    logger.error(f"Analysis failed: {exc.message}")
    return JSONResponse(
        status_code=502,
        content=ErrorResponse(error=f"Analysis failed: {exc.message}").model_dump(),
    )


def _request_id() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S-%f")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "ComplexityLens API",
        "version": __version__,
        "endpoints": {
            "/estimate": "POST - Offline heuristic estimate",
            "/complexity": "POST - Inline label (model with heuristic fallback)",
            "/analyze": "POST - Full analysis report",
            "/highlight": "POST - Highlight Python code as HTML",
            "/health": "GET - Health check",
        },
    }


@app.get("/health")
async def health(analyzer: CodeComplexityAnalyzer = Depends(get_analyzer)):
    """Health check."""
    return {"status": "healthy", "online": analyzer.online}


@app.post("/estimate", response_model=EstimateResponse)
async def estimate(
    request: CodeRequest,
    analyzer: CodeComplexityAnalyzer = Depends(get_analyzer),
):
    """Heuristic estimate only; never calls the model."""
    return EstimateResponse(result=analyzer.estimate(request.code))


@app.post("/complexity", response_model=EstimateResponse)
async def complexity(
    request: CodeRequest,
    analyzer: CodeComplexityAnalyzer = Depends(get_analyzer),
):
    """Inline complexity label."""
    request_id = _request_id()
    start_time = time.time()

    result = await analyzer.quick_check(request.code)

    elapsed_time = time.time() - start_time
    logger.info(
        f"[{request_id}] LABEL - Time taken: {elapsed_time:.3f}s - "
        f"Result: {result.notation} ({result.source}{', cached' if result.cached else ''})"
    )
    return EstimateResponse(result=result)


@app.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def analyze_code(
    request: CodeRequest,
    analyzer: CodeComplexityAnalyzer = Depends(get_analyzer),
):
    """
    Full analysis report.

    Returns the parsed report fields and a standalone HTML page with the
    report and the highlighted code.
    """
    request_id = _request_id()
    start_time = time.time()

    logger.info(f"[{request_id}] REQUEST RECEIVED - Code length: {len(request.code)} chars")

    report = await analyzer.analyze(request.code)

    elapsed_time = time.time() - start_time
    logger.info(f"[{request_id}] REQUEST COMPLETED - Time taken: {elapsed_time:.3f}s")

    return AnalyzeResponse(
        result=report,
        html=render_page(report, request.code),
        model=analyzer.settings.ANALYSIS_MODEL,
    )


@app.post("/highlight", response_model=HighlightResponse)
async def highlight_code(request: CodeRequest):
    """Highlight Python code as HTML."""
    return HighlightResponse(html=highlight(request.code))


def main():
    """Run the server."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting ComplexityLens on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "backend:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
