"""
Schemas module - form schemas and the questionnaire definition.
"""

from career_ai.schemas.schemas import SignupForm, LoginForm, Question, QUESTIONS

__all__ = ["SignupForm", "LoginForm", "Question", "QUESTIONS"]
