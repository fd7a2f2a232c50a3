"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from jobmatch.api import api_router
    app.include_router(api_router)
"""

from jobmatch.api.routes import api_router

__all__ = ["api_router"]
