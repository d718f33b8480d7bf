"""
Career Assessment Platform - Main Application

FastAPI app with:
- MongoDB for users and assessments
- Gemini AI for career analysis
- JWT cookie sessions
- Jinja2 server-rendered pages

Run: uvicorn career_ai.main:app --reload
  or: career-ai  (uses PORT from the environment)
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from career_ai.api import page_router
from career_ai.core.auth import LoginRequired
from career_ai.core.config import get_settings
from career_ai.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Career Assessment Platform",
    description="""
    Career guidance from a short questionnaire.

    ## Features
    - **Authentication**: signup/login with a JWT session cookie
    - **Assessment**: questionnaire answers stored in MongoDB
    - **AI Analysis**: Gemini writes a personality/career/roadmap report
    """,
    version="1.0.0",
    debug=settings.debug,
    docs_url=None,
    redoc_url=None
)

app.include_router(page_router)


@app.exception_handler(LoginRequired)
async def redirect_to_login(request: Request, exc: LoginRequired):
    """Protected pages send anonymous visitors back to the login form."""
    return RedirectResponse(url="/", status_code=302)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Refuse to serve without a database, then make sure indexes exist."""
    if not test_mongo_connection():
        logger.critical("MongoDB unreachable at %s - shutting down", settings.mongo_uri)
        raise SystemExit(1)
    logger.info("MongoDB connected")
    init_mongo_indexes()


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }


def run():
    """Console entry point."""
    uvicorn.run("career_ai.main:app", host="0.0.0.0", port=settings.port)
