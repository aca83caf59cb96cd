"""API routers for the feedback alert server."""
