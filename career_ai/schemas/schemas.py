"""
Pydantic Schemas - Form data and questionnaire definitions.

Forms are validated softly: every field defaults to "" so a missing field
re-renders the page with a message instead of producing a 422.
"""

from pydantic import BaseModel, field_validator
from typing import List, Optional


MIN_PASSWORD_LENGTH = 6


# ============================================================
# AUTH FORMS
# ============================================================

class SignupForm(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    college_name: str = ""
    course: str = ""
    password: str = ""

    @field_validator("name", "email", "phone", "college_name", "course")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    @property
    def password_ok(self) -> bool:
        return len(self.password) >= MIN_PASSWORD_LENGTH


class LoginForm(BaseModel):
    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


# ============================================================
# QUESTIONNAIRE
# ============================================================

class Question(BaseModel):
    key: str
    label: str
    placeholder: Optional[str] = None


QUESTIONS: List[Question] = [
    Question(key="favorite_subject", label="Which subject do you enjoy the most?", placeholder="e.g. Mathematics"),
    Question(key="hobbies", label="What do you do in your free time?"),
    Question(key="strengths", label="What are you naturally good at?"),
    Question(key="weaknesses", label="What do you find difficult?"),
    Question(key="work_style", label="Do you prefer working alone or in a team? Why?"),
    Question(key="problem_solving", label="Describe a problem you solved recently."),
    Question(key="tech_comfort", label="How comfortable are you with technology and coding?"),
    Question(key="dream_role", label="What job would you do if nothing held you back?"),
    Question(key="goal", label="Where do you see yourself in 5 years?", placeholder="e.g. Software engineer"),
]
