"""
Dashboard Routes

GET /dashboard - Landing page after login (requires session)
"""

from fastapi import APIRouter, Depends, Request

from career_ai.core.auth import get_current_user
from career_ai.core.templates import render_template

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard")
async def dashboard(request: Request, user: dict = Depends(get_current_user)):
    """Show the logged-in user's claims."""
    return render_template(request, "dashboard.html", {"user": user})
