"""
Health Check Controller

Handles health check and service information endpoints.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ..config import settings
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Global service reference (will be set by app.py)
_summary_service = None


def set_summary_service(service):
    """Set the summary service instance"""
    global _summary_service
    _summary_service = service


@router.get("/", response_model=dict)
async def root():
    """Basic health check endpoint"""
    return {
        "message": "Course Evaluation Summarizer API is running",
        "status": "healthy",
        "version": settings.API_VERSION
    }


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Detailed health check endpoint"""
    if not _summary_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized"
        )

    service_info = _summary_service.get_service_info()

    return HealthResponse(
        status="healthy",
        model=service_info["model"],
        submission_mode=service_info["submission_mode"],
        service_key_configured=service_info["service_key_configured"],
        version=settings.API_VERSION
    )
