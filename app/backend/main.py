"""
FastAPI application for the PDF ask service.

Provides endpoints for:
- Asking a question about an uploaded PDF (answered by OpenAI)
- Health checks
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .models import HealthResponse
from .routers import pdf
from .routers.pdf import outcome_to_response
from .services.ai import AIServiceError, get_ai_service
from .services.ask_pipeline import fault_from_exception

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Ask Service...")
    get_ai_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down PDF Ask Service...")


settings = get_settings()

# Create FastAPI application
app = FastAPI(
    title="PDF Ask API",
    description="Ask questions about PDF documents and get structured JSON answers from OpenAI",
    version=__version__,
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(pdf.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    """Handle AI service errors that escape a route, with the same status and message as the pipeline."""
    logger.error("AI service error on %s: %s", request.url.path, exc)
    return outcome_to_response(fault_from_exception(exc))
