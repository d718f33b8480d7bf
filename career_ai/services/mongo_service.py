"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. users       - Registered accounts (credential store)
2. assessments - Questionnaire answers and the AI analysis written for them

Assessments are written in two phases:
- create_placeholder() stores the answers with an empty analysis
- attach_analysis() fills in the analysis once the AI call resolves
The answers are durable even when the AI call fails in between.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from career_ai.db.mongodb import get_collection, COLLECTIONS

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when a user with the same email already exists."""


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def _to_object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles user account storage.
    Passwords arrive here already hashed.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["users"])

    def find_by_email(self, email: str) -> Optional[dict]:
        """Fetch a user by email (None if not registered)."""
        doc = self.collection.find_one({"email": email})
        return serialize_doc(doc)

    def create(
        self,
        name: str,
        email: str,
        phone: str,
        college_name: str,
        course: str,
        password_hash: str
    ) -> dict:
        """
        Insert a new user.

        Returns:
            The stored user document with "_id" as string

        Raises:
            DuplicateEmailError: the unique email index rejected the insert
        """
        doc = {
            "name": name,
            "email": email,
            "phone": phone,
            "college_name": college_name,
            "course": course,
            "password": password_hash,
            "createdAt": datetime.now(timezone.utc)
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(email) from exc

        doc["_id"] = result.inserted_id
        return serialize_doc(doc)


# ============================================================
# ASSESSMENTS COLLECTION
# ============================================================

class AssessmentService:
    """
    Handles questionnaire submissions.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["assessments"])
        )

    def create_placeholder(self, answers: Dict[str, str], user_id: str = None) -> str:
        """
        Store the submitted answers with an empty analysis.

        Args:
            answers: question key -> free-text answer
            user_id: id of the submitting user (from the session claims)

        Returns:
            MongoDB ObjectId as string (pass it to attach_analysis)
        """
        doc = {
            "userId": user_id,
            "answers": answers,
            "aiAnalysis": "",
            "createdAt": datetime.now(timezone.utc)
        }
        result = self.collection.insert_one(doc)
        logger.info("Assessment %s stored (analysis pending)", result.inserted_id)
        return str(result.inserted_id)

    def attach_analysis(self, assessment_id: str, analysis: str) -> bool:
        """Write the AI analysis onto a previously stored assessment."""
        object_id = _to_object_id(assessment_id)
        if object_id is None:
            return False
        result = self.collection.update_one(
            {"_id": object_id},
            {"$set": {"aiAnalysis": analysis}}
        )
        return result.matched_count > 0

    def get_by_id(self, assessment_id: str) -> Optional[dict]:
        """Fetch an assessment by MongoDB ObjectId."""
        object_id = _to_object_id(assessment_id)
        if object_id is None:
            return None
        doc = self.collection.find_one({"_id": object_id})
        return serialize_doc(doc)


# ============================================================
# FastAPI dependency providers
# ============================================================

def get_user_service() -> UserService:
    return UserService()


def get_assessment_service() -> AssessmentService:
    return AssessmentService()
