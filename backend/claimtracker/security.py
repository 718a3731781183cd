from __future__ import annotations

from typing import Optional, Tuple

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired


def _serializer() -> URLSafeTimedSerializer:
    secret = current_app.config.get("SECRET_KEY") or "change-me"
    # Salt provides namespace isolation for tokens
    return URLSafeTimedSerializer(secret_key=secret, salt="auth-token")


def issue_token(user_id: int, username: str) -> str:
    """Issue a signed bearer token for a user.

    Payload is minimal: {"userId": int, "username": str}
    """
    s = _serializer()
    return s.dumps({"userId": int(user_id), "username": str(username)})


def verify_token(token: str) -> Tuple[Optional[int], Optional[str]]:
    """Verify a token and return (user_id, username) if valid, else (None, None).

    Max age comes from AUTH_TOKEN_MAX_AGE seconds (default 24 hours).
    """
    max_age = current_app.config.get("AUTH_TOKEN_MAX_AGE")
    max_age = 60 * 60 * 24 if max_age is None else int(max_age)
    try:
        data = _serializer().loads(token, max_age=max_age)
    except (BadSignature, SignatureExpired):
        return (None, None)
    if not isinstance(data, dict):
        return (None, None)
    try:
        uid = int(data["userId"])
        username = str(data["username"])
    except (KeyError, TypeError, ValueError):
        return (None, None)
    return (uid, username)
