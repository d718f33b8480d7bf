"""
Pytest configuration and fixtures

Routes run against in-memory stores via app.dependency_overrides, and the
Gemini API is replaced with httpx.MockTransport. No MongoDB or network needed.
"""
import json
from datetime import datetime, timezone

import httpx
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from career_ai.core.auth import create_access_token
from career_ai.main import app
from career_ai.services.analysis_service import CareerAnalyzer, get_career_analyzer
from career_ai.services.gemini_client import GeminiClient
from career_ai.services.mongo_service import (
    DuplicateEmailError,
    get_assessment_service,
    get_user_service,
)


class FakeUserService:
    def __init__(self):
        self.users = {}
        self.create_calls = 0

    def find_by_email(self, email):
        user = self.users.get(email)
        return dict(user) if user else None

    def create(self, name, email, phone, college_name, course, password_hash):
        self.create_calls += 1
        if email in self.users:
            raise DuplicateEmailError(email)
        user = {
            "_id": str(ObjectId()),
            "name": name,
            "email": email,
            "phone": phone,
            "college_name": college_name,
            "course": course,
            "password": password_hash,
        }
        self.users[email] = user
        return dict(user)


class FakeAssessmentService:
    def __init__(self):
        self.records = {}

    def create_placeholder(self, answers, user_id=None):
        assessment_id = str(ObjectId())
        self.records[assessment_id] = {
            "_id": assessment_id,
            "userId": user_id,
            "answers": dict(answers),
            "aiAnalysis": "",
            "createdAt": datetime.now(timezone.utc),
        }
        return assessment_id

    def attach_analysis(self, assessment_id, analysis):
        if assessment_id not in self.records:
            return False
        self.records[assessment_id]["aiAnalysis"] = analysis
        return True

    def get_by_id(self, assessment_id):
        return self.records.get(assessment_id)


class FakeGemini:
    """Scriptable stand-in for the generateContent endpoint."""

    def __init__(self):
        self.requests = []
        self.payload = gemini_payload("## Personality\nAnalytical builder.")
        self.status_code = 200
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def gemini_payload(text, finish_reason="STOP"):
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": finish_reason,
            }
        ]
    }


@pytest.fixture
def users():
    return FakeUserService()


@pytest.fixture
def assessments():
    return FakeAssessmentService()


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def analyzer(gemini):
    client = GeminiClient(api_key="test-key", transport=httpx.MockTransport(gemini.handler))
    return CareerAnalyzer(client=client)


@pytest.fixture
def client(users, assessments, analyzer):
    app.dependency_overrides[get_user_service] = lambda: users
    app.dependency_overrides[get_assessment_service] = lambda: assessments
    app.dependency_overrides[get_career_analyzer] = lambda: analyzer
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


@pytest.fixture
def session_user():
    return {"_id": str(ObjectId()), "name": "Asha", "email": "asha@example.com"}


@pytest.fixture
def logged_in_client(client, session_user):
    client.cookies.set("token", create_access_token(session_user))
    return client
