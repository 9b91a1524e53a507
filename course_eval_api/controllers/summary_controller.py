"""
Summary Controller

Handles the evaluation upload-and-summarize endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from ..models import ErrorResponse, SummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Summary"])

# Global service reference (will be set by app.py)
_summary_service = None


def set_summary_service(service):
    """Set the summary service instance"""
    global _summary_service
    _summary_service = service


@router.post(
    "/upload",
    response_model=SummaryResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_evaluation(request: Request):
    """Summarize an uploaded course evaluation PDF

    Expects a multipart body with a `file` (PDF) and an `apiKey` field.

    Returns:
        SummaryResponse with the model's summary text
    """
    if not _summary_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized"
        )

    job = await _summary_service.summarize_upload(request)
    return SummaryResponse(result=job.result)


@router.options("/upload", include_in_schema=False)
async def upload_options(request: Request):
    """Answer plain OPTIONS requests with the configured CORS headers"""
    return Response(status_code=status.HTTP_200_OK, headers=request.app.state.settings.cors_headers)
