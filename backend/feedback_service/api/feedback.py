"""Feedback submission API endpoint.

Public endpoint: anyone can submit feedback. The entry is persisted first
(best-effort), then an alert email is sent if SMTP is configured.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from feedback_service.api.dependencies import get_feedback_service
from feedback_service.lib.feedback.service import FeedbackService
from feedback_service.schemas.feedback import ErrorResponse, FeedbackResponse, FeedbackSubmission

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/submit-feedback",
    response_model=FeedbackResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "name or feedback missing"},
        500: {"model": ErrorResponse, "description": "Alert email could not be sent"},
    },
    summary="Submit feedback",
    description="""
    Stores a feedback entry and emails an alert.

    - Storage failures are logged and do not fail the request.
    - When SMTP is not configured the entry is stored and no email is sent.
    - When the email send fails the entry stays stored and the response is 500.
    """,
)
def submit_feedback(
    service: Annotated[FeedbackService, Depends(get_feedback_service)],
    submission: Optional[FeedbackSubmission] = None,
) -> FeedbackResponse:
    """Submit user feedback.

    Raises:
        ValidationError: 400 when name or feedback is missing
        MailError: 500 when the alert email fails
    """
    submission = submission or FeedbackSubmission()

    result = service.submit(
        name=submission.name,
        feedback=submission.feedback,
        email=submission.email,
    )

    if not result.emailed:
        return FeedbackResponse(
            success=True,
            message="Feedback received (email not sent - SMTP not configured)",
        )

    return FeedbackResponse(
        success=True,
        message="Feedback received and emailed",
        info=result.info,
    )
