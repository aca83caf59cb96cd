"""Main FastAPI application for the feedback alert server."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from feedback_service.api import admin, feedback, health
from feedback_service.config import (
    get_admin_credentials,
    get_cors_origins,
    get_feedback_file_path,
    get_host,
    get_port,
    is_using_default_admin_credentials,
)
from feedback_service.lib.exceptions import FeedbackServiceError
from feedback_service.lib.feedback.email_notifier import EmailNotifier
from feedback_service.lib.feedback.service import FeedbackService
from feedback_service.lib.feedback.store import FeedbackStore
from feedback_service.lib.logging_config import configure_logging, create_request_context_middleware
from feedback_service.lib.sessions import SessionRegistry

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create process-scoped state on startup and clear it on shutdown."""
    logger.info("Starting up Feedback Alert Server...")

    store = FeedbackStore(get_feedback_file_path())
    store.ensure_file()
    logger.info('Feedback store: %s', store.file_path)

    notifier = EmailNotifier()

    admin_user, admin_password = get_admin_credentials()
    if is_using_default_admin_credentials():
        logger.warning("ADMIN_USER/ADMIN_PASS not set - using built-in default admin credentials")
    registry = SessionRegistry(admin_user, admin_password)

    app.state.feedback_store = store
    app.state.notifier = notifier
    app.state.session_registry = registry
    app.state.feedback_service = FeedbackService(store, notifier)

    yield

    logger.info("Shutting down Feedback Alert Server...")
    registry.clear()


app = FastAPI(
    title="Feedback Alert Server",
    description="Collects user feedback, emails alerts and lists stored feedback to admins",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(FeedbackServiceError)
async def feedback_service_exception_handler(request: Request, exc: FeedbackServiceError):
    """Render service errors as ``{"success": false, "message": ...}`` with the error's status."""
    if exc.STATUS_CODE >= 500:
        logger.error('%s %s failed: %s (%s)', request.method, request.url.path, exc.message, exc.error_code)
    else:
        logger.info('%s %s rejected: %s', request.method, request.url.path, exc.message)

    content = {"success": False, "message": exc.message}
    content.update(exc.details)
    return JSONResponse(status_code=exc.STATUS_CODE, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert body parsing errors (non-JSON body, non-string fields) to 400."""
    fields = []
    for error in exc.errors():
        # JSON decode errors carry an integer position in loc; only field names are reported
        field = ".".join(loc for loc in error["loc"] if isinstance(loc, str) and loc != "body")
        if field:
            fields.append(field)

    message = "invalid request body"
    if fields:
        message = f"invalid request body: {', '.join(fields)}"

    logger.info('%s %s rejected: %s', request.method, request.url.path, message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": message},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
create_request_context_middleware(app)

# Public feedback submission (POST /submit-feedback)
app.include_router(feedback.router, tags=["Feedback"])

# Admin login/logout and listing (under /admin)
app.include_router(admin.router, tags=["Admin"])

# Liveness (GET /) and health (GET /health)
app.include_router(health.router, tags=["Health"])


if __name__ == "__main__":
    import uvicorn

    port = get_port()
    logger.info('Server listening on %s', port)
    uvicorn.run(app, host=get_host(), port=port)
