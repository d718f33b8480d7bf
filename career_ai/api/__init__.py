"""
API module - FastAPI routers for the server-rendered pages.

Usage:
    from career_ai.api import page_router
    app.include_router(page_router)
"""

from career_ai.api.routes import page_router

__all__ = ["page_router"]
