"""FastAPI dependencies exposing the process-scoped state created by the app lifespan."""

from fastapi import Request

from feedback_service.lib.feedback.service import FeedbackService
from feedback_service.lib.sessions import SessionRegistry


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry
