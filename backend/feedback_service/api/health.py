"""Liveness and health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from typing import Dict, Any
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

LIVENESS_MESSAGE = "Feedback email server running"


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Static liveness string."""
    return LIVENESS_MESSAGE


@router.get("/health")
def health_check_endpoint(request: Request) -> Dict[str, Any]:
    """
    Report store readability, mail configuration and active session count.

    Never fails: an unreadable store marks the service as degraded.
    """
    state = request.app.state
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "Feedback Alert Server",
        "checks": {
            "feedback_store": "unknown",
            "mail": "configured" if state.notifier.configured else "not_configured",
            "active_sessions": len(state.session_registry),
        },
    }

    if state.feedback_store.is_readable():
        health_status["checks"]["feedback_store"] = "healthy"
    else:
        logger.error('Health check: feedback store %s is not readable', state.feedback_store.file_path)
        health_status["checks"]["feedback_store"] = "unhealthy"
        health_status["status"] = "degraded"

    return health_status
