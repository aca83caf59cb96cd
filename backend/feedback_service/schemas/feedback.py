"""Pydantic schemas for the feedback API.

Request fields are all optional at the schema level; presence is checked by
the feedback service so a missing field yields the service's 400 message.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FeedbackSubmission(BaseModel):
    """Request schema for POST /submit-feedback."""

    name: Optional[str] = Field(
        default=None,
        description="Submitter name (required)",
        examples=["Ada"],
    )

    email: Optional[str] = Field(
        default=None,
        description="Submitter email, used as Reply-To on the alert (optional)",
        examples=["ada@example.com"],
    )

    feedback: Optional[str] = Field(
        default=None,
        description="Free-text feedback (required)",
        examples=["The export button does nothing on Safari."],
    )


class FeedbackResponse(BaseModel):
    """Response schema for a successful submission."""

    success: bool = Field(..., description="Always true for 200 responses")

    message: str = Field(
        ...,
        description="Human-readable outcome",
        examples=[
            "Feedback received and emailed",
            "Feedback received (email not sent - SMTP not configured)",
        ],
    )

    info: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Mail delivery info (messageId, accepted, rejected); present only when emailed",
    )


class FeedbackRecord(BaseModel):
    """A stored feedback entry as returned to admins."""

    model_config = {"extra": "allow"}

    id: str
    name: str
    email: str = ""
    feedback: str
    createdAt: str


class FeedbackListResponse(BaseModel):
    """Response schema for GET /admin/feedbacks."""

    success: bool
    feedbacks: List[FeedbackRecord] = Field(
        default_factory=list,
        description="Stored entries, most recently submitted first",
    )


class ErrorResponse(BaseModel):
    """Response schema for every error case (400, 401, 500)."""

    success: bool = Field(False, description="Always false for error responses")
    message: str = Field(..., examples=["name and feedback required", "unauthorized"])
    error: Optional[str] = Field(
        default=None,
        description="Underlying transport error (mail failures only)",
    )
