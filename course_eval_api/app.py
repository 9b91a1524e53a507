"""
Course Evaluation Summarizer API

Main application file that initializes and configures the FastAPI application.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .controllers import health_controller, key_controller, summary_controller
from .exceptions import SummarizerError
from .managers import FileManager
from .models import ErrorResponse
from .processors import PDFTextExtractor
from .services import EvaluationSummaryService, SummarizationClient

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_summary_service(app_settings: Settings, client_factory=None) -> EvaluationSummaryService:
    """Assemble the summary service and its collaborators"""
    file_manager = FileManager(app_settings.UPLOAD_DIR)
    file_manager.ensure_upload_dir()
    return EvaluationSummaryService(
        settings=app_settings,
        summarization_client=SummarizationClient(app_settings, client_factory=client_factory),
        file_manager=file_manager,
        extractor=PDFTextExtractor()
    )


def set_services(service: Optional[EvaluationSummaryService]):
    """Set service references in controllers"""
    app.state.settings = service.settings if service is not None else settings
    health_controller.set_summary_service(service)
    summary_controller.set_summary_service(service)
    key_controller.set_summary_service(service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    try:
        logger.info(f"Initializing summary service with {settings!r}")
        service = build_summary_service(settings)
        set_services(service)

        if settings.KEY_SOURCE == "environment" and not settings.is_service_key_configured:
            logger.warning("KEY_SOURCE=environment but ANTHROPIC_API_KEY is not set. Uploads will fail with 500.")

        logger.info(f"Course Evaluation Summarizer API started on {settings.API_HOST}:{settings.API_PORT}")
        logger.info(f"Model: {settings.ANTHROPIC_MODEL}, submission mode: {settings.SUBMISSION_MODE}")
        logger.info(f"Uploads: {settings.UPLOAD_DIR} (max {settings.MAX_UPLOAD_SIZE_MB} MB)")

        yield

    except Exception as e:
        logger.error(f"Failed to initialize API: {str(e)}")
        raise
    finally:
        set_services(None)
        logger.info("Shutting down Course Evaluation Summarizer API")


# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error_content(request: Request, error: str, exc: Optional[Exception] = None, detail: Optional[str] = None) -> dict:
    content = ErrorResponse(error=error)
    if request.app.state.settings.is_development:
        content.detail = detail
        if exc is not None:
            content.stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return content.model_dump(exclude_none=True)


@app.exception_handler(SummarizerError)
async def summarizer_exception_handler(request: Request, exc: SummarizerError):
    """Map pipeline errors to their HTTP status and message"""
    if exc.status_code >= 500:
        logger.error(f"Server error ({exc.kind}): {str(exc)}")
    else:
        logger.warning(f"Request rejected ({exc.kind}): {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.message, exc if exc.status_code >= 500 else None, exc.detail)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors (404, 405, 503) in the API's error shape"""
    error = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=error).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request", detail=str(exc.errors())).model_dump(exclude_none=True)
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_content(request, "Internal server error", exc, str(exc))
    )


# Include routers from controllers
app.include_router(health_controller.router)
app.include_router(summary_controller.router)
app.include_router(key_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT
    )
