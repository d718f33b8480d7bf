"""
Page Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from career_ai.api.routes.auth_routes import router as auth_router
from career_ai.api.routes.dashboard_routes import router as dashboard_router
from career_ai.api.routes.assessment_routes import router as assessment_router

# Main page router
page_router = APIRouter()

# Include all sub-routers
page_router.include_router(auth_router)
page_router.include_router(dashboard_router)
page_router.include_router(assessment_router)
