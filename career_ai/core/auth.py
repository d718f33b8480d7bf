"""
Authentication Utility - JWT session cookie and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependency for protected pages (redirects instead of 401)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Cookie
from fastapi.responses import Response

from career_ai.core.config import get_settings

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Session cookie name
TOKEN_COOKIE = "token"


class InvalidToken(Exception):
    """Raised when a session token is tampered, expired or malformed."""


class LoginRequired(Exception):
    """
    Raised by get_current_user when no valid session exists.
    The app turns this into a redirect to the login page.
    """


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT session token carrying the user's id, name and email.

    Args:
        user: User document (needs "_id", "name", "email")
        expires_delta: Override for the default 7-day lifetime
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.jwt_expire_days))
    to_encode = {
        "sub": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "exp": expire
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify JWT token. Returns the claims as {id, name, email}."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidToken("Token has no subject")

    return {"id": user_id, "name": payload.get("name"), "email": payload.get("email")}


def set_session_cookie(response: Response, user: dict) -> None:
    """Issue a fresh session token as an HTTP-only cookie."""
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=create_access_token(user),
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=TOKEN_COOKIE, httponly=True, samesite="lax", secure=settings.cookie_secure)


async def get_current_user(token: Optional[str] = Cookie(default=None)) -> dict:
    """
    FastAPI dependency - Get current authenticated user from the session cookie.

    Usage:
        @router.get("/dashboard")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    if not token:
        raise LoginRequired()

    try:
        return decode_token(token)
    except InvalidToken:
        raise LoginRequired()
