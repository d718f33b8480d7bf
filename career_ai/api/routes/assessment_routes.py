"""
Assessment Routes

GET  /assessment - Questionnaire form (requires session)
POST /assessment - Submit answers, run AI analysis, show the report

Submission order:
1. flatten + validate answers
2. store placeholder record (answers survive any later failure)
3. call Gemini
4. attach analysis to the same record
5. render the report
Failures in 2-5 show a generic message; details go to the log.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from career_ai.core.auth import get_current_user
from career_ai.core.templates import render_template
from career_ai.schemas.schemas import QUESTIONS
from career_ai.services.analysis_service import CareerAnalyzer, get_career_analyzer
from career_ai.services.mongo_service import AssessmentService, get_assessment_service

router = APIRouter(tags=["Assessment"])
logger = logging.getLogger(__name__)

NO_ANSWERS = "Please answer at least one question."
ANALYSIS_FAILED = "Server error during AI analysis. Try again later."


async def read_answers(request: Request) -> Dict[str, Any]:
    """
    Read the submitted {question_key: answer} mapping as-is.
    Accepts a urlencoded/multipart form or a JSON object.
    Only file uploads are dropped; an unreadable body yields {}.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        if not isinstance(body, dict):
            return {}
        items = body.items()
    else:
        try:
            form = await request.form()
        except HTTPException:
            # Starlette reports a malformed multipart body as a 400
            logger.warning("Unreadable assessment form body")
            return {}
        items = form.items()

    return {str(key): value for key, value in items if not isinstance(value, UploadFile)}


def has_answers(answers: Dict[str, Any]) -> bool:
    """True when at least one answer is non-blank."""
    return any(value is not None and str(value).strip() for value in answers.values())


@router.get("/assessment")
async def assessment_page(request: Request, user: dict = Depends(get_current_user)):
    return render_template(request, "assessment.html", {"questions": QUESTIONS, "error": None})


@router.post("/assessment")
async def submit_assessment(
    request: Request,
    user: dict = Depends(get_current_user),
    assessments: AssessmentService = Depends(get_assessment_service),
    analyzer: CareerAnalyzer = Depends(get_career_analyzer)
):
    answers = await read_answers(request)
    if not has_answers(answers):
        return render_template(request, "assessment.html", {"questions": QUESTIONS, "error": NO_ANSWERS})

    try:
        assessment_id = assessments.create_placeholder(answers, user_id=user["id"])
        analysis = await analyzer.analyze(answers)
        assessments.attach_analysis(assessment_id, analysis)
        logger.info("Analysis stored for assessment %s", assessment_id)
    except Exception:
        logger.exception("Assessment analysis failed for user %s", user["id"])
        analysis = ANALYSIS_FAILED

    return render_template(request, "assessment_result.html", {"analysis": analysis})
