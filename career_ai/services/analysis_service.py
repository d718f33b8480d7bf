"""
Career Analysis Service - questionnaire answers -> Gemini -> readable report.

PURPOSE:
1. Flatten answers into a compact prompt block (saves input tokens)
2. Call Gemini through GeminiClient
3. Pull the report text out of a loosely-shaped response envelope

RESPONSE SHAPES:
Gemini has been observed to return the text parts either as
    candidates[0].content.parts        (object form)
or  candidates[0].content[0].parts     (array form)
Both are probed in that order. Anything else still produces displayable text.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from career_ai.services.gemini_client import GeminiClient, get_gemini_client

logger = logging.getLogger(__name__)


TRUNCATION_FINISH_REASON = "MAX_TOKENS"
TRUNCATION_WARNING = (
    "\n\n⚠ AI response was truncated (MAX_TOKENS). Increase maxOutputTokens for longer output."
)

PROMPT_TEMPLATE = """
You are an expert AI career counselor.

Analyze the user's responses and produce:

1. Personality type (2 lines)
2. Skill strengths & weaknesses
3. Top 3 career matches with short reasons
4. 3-month + 6-month learning roadmap
5. Recommended tools & courses

User Answers:
{answers}

Return a clean, readable report.
"""


# ============================================================
# PROMPT CONSTRUCTION
# ============================================================

def compact_answers(answers: Dict[str, Any]) -> str:
    """One "key: value" line per answer, in submission order."""
    return "\n".join(f"{key}: {str(value).strip()}" for key, value in answers.items())


def build_prompt(answers: Dict[str, Any]) -> str:
    return PROMPT_TEMPLATE.format(answers=compact_answers(answers))


# ============================================================
# RESPONSE CLASSIFICATION
# ============================================================

@dataclass
class ObjectContent:
    """candidate.content is a mapping holding the parts list"""
    parts: List[Any]


@dataclass
class ArrayContent:
    """candidate.content is a list; the first entry holds the parts list"""
    parts: List[Any]


@dataclass
class UnrecognizedContent:
    finish_reason: Optional[str]


CandidateContent = Union[ObjectContent, ArrayContent, UnrecognizedContent]


def first_candidate(data: Any) -> Optional[dict]:
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    candidate = candidates[0]
    return candidate if isinstance(candidate, dict) else None


def finish_reason(data: Any) -> Optional[str]:
    """finishReason of the first candidate, if any."""
    candidate = first_candidate(data)
    if candidate is None:
        return None
    return candidate.get("finishReason")


def classify_candidate(candidate: Optional[dict]) -> CandidateContent:
    """Match the candidate against the two known content shapes."""
    if candidate is None:
        return UnrecognizedContent(finish_reason=None)

    content = candidate.get("content")

    if isinstance(content, dict) and isinstance(content.get("parts"), list):
        return ObjectContent(parts=content["parts"])

    if isinstance(content, list) and content and isinstance(content[0], dict) \
            and isinstance(content[0].get("parts"), list):
        return ArrayContent(parts=content[0]["parts"])

    return UnrecognizedContent(finish_reason=candidate.get("finishReason"))


# ============================================================
# TEXT EXTRACTION
# ============================================================

def _no_parts_message(reason: Optional[str]) -> str:
    return f"⚠ No parts array found. finishReason: {reason or 'unknown'}"


def _part_text(part: Any) -> str:
    if isinstance(part, dict) and part.get("text"):
        return str(part["text"])
    # Unexpected part shape: show it rather than drop it
    return json.dumps(part, default=str)


def extract_gemini_text(data: Any) -> str:
    """
    Extract the report text from a generateContent response.
    Never raises and never returns an empty string.
    """
    try:
        candidate = first_candidate(data)
        content = classify_candidate(candidate)

        if isinstance(content, UnrecognizedContent):
            return _no_parts_message(content.finish_reason)

        text = "\n\n".join(_part_text(part) for part in content.parts).strip()
        if not text:
            return _no_parts_message(candidate.get("finishReason"))
        return text
    except Exception as e:
        return f"❌ Error extracting AI text: {e}"


def with_truncation_warning(text: str, data: Any) -> str:
    """Append TRUNCATION_WARNING when generation stopped at the token ceiling."""
    if finish_reason(data) == TRUNCATION_FINISH_REASON:
        return text + TRUNCATION_WARNING
    return text


# ============================================================
# ANALYZER
# ============================================================

class CareerAnalyzer:
    """
    Turns questionnaire answers into a career report.

    Usage:
        analyzer = CareerAnalyzer()
        report = await analyzer.analyze({"favorite_subject": "math"})
    """

    def __init__(self, client: GeminiClient = None):
        self.client = client or get_gemini_client()

    async def analyze(self, answers: Dict[str, Any]) -> str:
        """
        Raises:
            GeminiError: the API call itself failed (caller decides what to show)
        """
        data = await self.client.generate(build_prompt(answers))
        analysis = extract_gemini_text(data)
        return with_truncation_warning(analysis, data)


def get_career_analyzer() -> CareerAnalyzer:
    return CareerAnalyzer()
