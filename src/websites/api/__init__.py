from websites.api.public_routes import router as public_router
from websites.api.routes import router as websites_router

__all__ = ["public_router", "websites_router"]
