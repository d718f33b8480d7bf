"""
Authentication Routes

GET  /        - Login form
GET  /signup  - Signup form
POST /signup  - Register, set session cookie, redirect to dashboard
POST /login   - Verify credentials, set session cookie, redirect to dashboard
GET  /logout  - Clear session cookie, redirect to login

Form problems re-render the page with a message (HTTP 200), never an error page.
"""

import logging
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pymongo.errors import PyMongoError

from career_ai.core.auth import hash_password, verify_password, set_session_cookie, clear_session_cookie
from career_ai.core.templates import render_template
from career_ai.schemas.schemas import SignupForm, LoginForm
from career_ai.services.mongo_service import UserService, DuplicateEmailError, get_user_service

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)

EMAIL_EXISTS = "Email already exists!"
PASSWORD_TOO_SHORT = "Password too short!"
SIGNUP_ERROR = "Signup error"
USER_NOT_FOUND = "User not found"
WRONG_PASSWORD = "Wrong password"
LOGIN_ERROR = "Login error"


def _redirect_to_dashboard() -> RedirectResponse:
    return RedirectResponse(url="/dashboard", status_code=302)


@router.get("/")
async def login_page(request: Request):
    return render_template(request, "login.html", {"error": None})


@router.get("/signup")
async def signup_page(request: Request):
    return render_template(request, "signup.html", {"error": None})


@router.post("/signup")
async def signup(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    college_name: str = Form(""),
    course: str = Form(""),
    password: str = Form(""),
    users: UserService = Depends(get_user_service)
):
    """
    Register a new account and log it in.

    Duplicate email is checked before password length.
    """
    form = SignupForm(
        name=name, email=email, phone=phone,
        college_name=college_name, course=course, password=password
    )

    try:
        if users.find_by_email(form.email):
            return render_template(request, "signup.html", {"error": EMAIL_EXISTS})

        if not form.password_ok:
            return render_template(request, "signup.html", {"error": PASSWORD_TOO_SHORT})

        user = users.create(
            name=form.name,
            email=form.email,
            phone=form.phone,
            college_name=form.college_name,
            course=form.course,
            password_hash=hash_password(form.password)
        )
    except DuplicateEmailError:
        # Lost a race with a concurrent signup for the same email
        return render_template(request, "signup.html", {"error": EMAIL_EXISTS})
    except (PyMongoError, ValueError):
        # ValueError: passlib rejects the password (e.g. NUL bytes)
        logger.exception("Signup failed for %s", form.email)
        return render_template(request, "signup.html", {"error": SIGNUP_ERROR})

    logger.info("New user registered: %s", user["email"])
    response = _redirect_to_dashboard()
    set_session_cookie(response, user)
    return response


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    users: UserService = Depends(get_user_service)
):
    """Check credentials and issue the session cookie."""
    form = LoginForm(email=email, password=password)

    try:
        user = users.find_by_email(form.email)
        if not user:
            return render_template(request, "login.html", {"error": USER_NOT_FOUND})

        if not verify_password(form.password, user.get("password") or ""):
            return render_template(request, "login.html", {"error": WRONG_PASSWORD})
    except (PyMongoError, ValueError):
        # ValueError: stored password is not a recognizable hash
        logger.exception("Login failed for %s", form.email)
        return render_template(request, "login.html", {"error": LOGIN_ERROR})

    response = _redirect_to_dashboard()
    set_session_cookie(response, user)
    return response


@router.get("/logout")
async def logout():
    """Stateless logout: the cookie is dropped, nothing server-side changes."""
    response = RedirectResponse(url="/", status_code=302)
    clear_session_cookie(response)
    return response
