"""
API routes - Registration form endpoints.

This module defines the HTTP endpoints:
- GET / - Registration landing endpoint
- POST / - Submit the registration form
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from confreg.api.dependencies import get_form_params, get_submission_service
from confreg.api.models import GENERIC_ERROR, IndexResponse, SubmissionResponse
from confreg.domain.ports import RejectionReason
from confreg.domain.submission import SubmissionService

router = APIRouter(tags=["registration"])


@router.get("/", response_model=IndexResponse, summary="Registration landing")
def index() -> IndexResponse:
    return IndexResponse(message="registration open")


@router.post(
    "/",
    response_model=SubmissionResponse,
    responses={
        400: {"model": SubmissionResponse, "description": "Invalid form field"},
        500: {"model": SubmissionResponse, "description": "Submission could not be completed"},
    },
    summary="Submit a registration",
    description="Validate the registration form, store it and send a confirmation mail.",
)
def submit(
    params: dict[str, object] = Depends(get_form_params),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionResponse | JSONResponse:
    """
    Run one form submission through the pipeline.

    Declared sync so that the blocking store and SMTP calls run on the
    threadpool, one worker per request.
    """
    result = service.submit(params)

    if result.accepted:
        return SubmissionResponse(message=result.message)

    # All failures share one generic message; details are only logged
    if result.reason is RejectionReason.VALIDATION:
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    body = SubmissionResponse(message=result.message, detail=GENERIC_ERROR)
    return JSONResponse(status_code=status_code, content=body.model_dump())
