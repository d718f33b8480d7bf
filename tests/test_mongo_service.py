from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from career_ai.services.mongo_service import AssessmentService, DuplicateEmailError, UserService


class FakeCollection:
    """Just enough of pymongo's Collection for the services."""

    def __init__(self, unique_field=None):
        self.docs = []
        self.unique_field = unique_field

    def _matches(self, doc, query):
        return all(doc.get(key) == value for key, value in query.items())

    def find_one(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                return dict(doc)
        return None

    def insert_one(self, doc):
        if self.unique_field and self.find_one({self.unique_field: doc[self.unique_field]}):
            raise DuplicateKeyError("E11000 duplicate key error", code=11000)
        stored = dict(doc, _id=ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(update["$set"])
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)


def test_user_create_stores_hash_and_returns_string_id() -> None:
    service = UserService(collection=FakeCollection(unique_field="email"))

    user = service.create("Asha", "asha@example.com", "98765", "IIT", "CSE", "$2b$hash")

    assert isinstance(user["_id"], str)
    assert service.find_by_email("asha@example.com")["password"] == "$2b$hash"
    assert service.find_by_email("nobody@example.com") is None


def test_user_create_duplicate_email_leaves_store_unchanged() -> None:
    collection = FakeCollection(unique_field="email")
    service = UserService(collection=collection)
    service.create("Asha", "asha@example.com", "", "", "", "h1")

    with pytest.raises(DuplicateEmailError):
        service.create("Other", "asha@example.com", "", "", "", "h2")

    assert len(collection.docs) == 1
    assert collection.docs[0]["name"] == "Asha"


def test_assessment_placeholder_then_analysis() -> None:
    service = AssessmentService(collection=FakeCollection())
    answers = {"favorite_subject": "math", "goal": "engineer"}

    assessment_id = service.create_placeholder(answers, user_id="u1")
    placeholder = service.get_by_id(assessment_id)

    assert placeholder["answers"] == answers
    assert placeholder["aiAnalysis"] == ""
    assert placeholder["userId"] == "u1"
    assert placeholder["createdAt"] is not None

    assert service.attach_analysis(assessment_id, "report") is True
    assert service.get_by_id(assessment_id)["aiAnalysis"] == "report"


def test_assessment_unknown_or_malformed_id() -> None:
    service = AssessmentService(collection=FakeCollection())

    assert service.attach_analysis(str(ObjectId()), "report") is False
    assert service.attach_analysis("not-an-object-id", "report") is False
    assert service.get_by_id("not-an-object-id") is None
