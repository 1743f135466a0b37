"""Access tokens issued by the campus identity provider.

Tokens are HS256 JWTs with ``user_id``, ``handle`` and optional ``email``
claims. The API only verifies them; ``create_token`` exists for tests and
``scripts/issue_token.py``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError

from carpool.config import AuthSettings

REQUIRED_CLAIMS = ["exp", "user_id", "handle"]


class TokenPayload(BaseModel):
    """Verified claims of an access token."""

    user_id: str
    handle: str
    email: Optional[str] = None
    exp: datetime


class JWTError(Exception):
    """Token could not be verified."""


def create_token(
    user_id: str, handle: str, email: Optional[str], settings: AuthSettings
) -> str:
    """Sign a token for a campus user, valid for ``jwt_expiry_days``."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "handle": handle,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then parse the claims.

    Raises:
        JWTError: If the token is expired, tampered with or lacks a claim
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.MissingRequiredClaimError:
        raise JWTError("Token is missing required claims")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError:
        raise JWTError("Token is missing required claims")
