"""
Key Controller

Handles Anthropic API key validation.
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from ..exceptions import SummarizerError
from ..models import KeyValidationRequest, KeyValidationResponse
from ..services.key_validator import FORMAT_ERROR

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Keys"])

# Global service reference (will be set by app.py)
_summary_service = None

UNEXPECTED_ERROR = "Unable to validate API key. Please try again."


def set_summary_service(service):
    """Set the summary service instance"""
    global _summary_service
    _summary_service = service


def _invalid(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=KeyValidationResponse(valid=False, error=error).model_dump()
    )


@router.post(
    "/test-key",
    response_model=KeyValidationResponse,
    response_model_exclude_none=True,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": KeyValidationRequest.model_json_schema(by_alias=True)}},
            "required": True,
        }
    },
)
async def test_key(request: Request):
    """Validate an Anthropic API key

    The body is parsed here rather than by FastAPI so that a malformed body
    still answers with `valid: false`.

    Args:
        request: Request whose JSON body carries the `apiKey` to check

    Returns:
        KeyValidationResponse with `valid` set
    """
    if not _summary_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized"
        )

    try:
        body = KeyValidationRequest.model_validate(await request.json())
    except ValueError:
        return _invalid(status.HTTP_400_BAD_REQUEST, FORMAT_ERROR)

    try:
        await _summary_service.validate_credential(body.api_key)
        return KeyValidationResponse(valid=True)
    except SummarizerError as e:
        return _invalid(e.status_code, e.message)
    except Exception as e:
        logger.error(f"Test key error: {str(e)}", exc_info=True)
        return _invalid(status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR)


@router.options("/test-key", include_in_schema=False)
async def test_key_options(request: Request):
    """Answer plain OPTIONS requests with the configured CORS headers"""
    return Response(status_code=status.HTTP_200_OK, headers=request.app.state.settings.cors_headers)
