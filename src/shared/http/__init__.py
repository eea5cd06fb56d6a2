"""
HTTP plumbing shared by every router: request context middleware and health.
"""
from shared.http.middleware import RequestContextMiddleware, REQUEST_ID_HEADER
from shared.http.health import router as health_router

__all__ = ["REQUEST_ID_HEADER", "RequestContextMiddleware", "health_router"]
