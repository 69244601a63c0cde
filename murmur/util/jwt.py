"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from murmur.config import AuthSettings


class SessionTokenPayload(BaseModel):
    """Session JWT payload issued after identity resolution."""

    user_id: str
    application_id: str
    auth_type: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_session_token(
    user_id: str, application_id: str, auth_type: str, settings: AuthSettings
) -> str:
    """Create a session JWT for a resolved user.

    Args:
        user_id: User ID
        application_id: Owning application ID
        auth_type: The user's auth type at resolution time
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "application_id": application_id,
        "auth_type": auth_type,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str, settings: AuthSettings) -> SessionTokenPayload:
    """Verify and decode a session JWT.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return SessionTokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")


def decode_signed(
    token: str,
    key: Any,
    algorithms: list[str],
    audience: str | None = None,
    issuer: str | None = None,
    leeway: int = 0,
) -> dict[str, Any]:
    """Decode an identity token, verifying its signature.

    Audience and issuer are only checked when given.

    Raises:
        JWTError: If the signature, expiry, audience or issuer check fails
    """
    try:
        return jwt.decode(
            token,
            key,
            algorithms=algorithms,
            audience=audience,
            issuer=issuer,
            leeway=leeway,
            options={
                "verify_aud": audience is not None,
                "verify_iss": issuer is not None,
            },
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidAudienceError:
        raise JWTError("Token audience mismatch")
    except jwt.InvalidIssuerError:
        raise JWTError("Token issuer mismatch")
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}")


def decode_unverified(token: str, leeway: int = 0) -> dict[str, Any]:
    """Decode an identity token WITHOUT checking its signature.

    Expiry is still enforced. Callers must treat the result as untrusted.

    Raises:
        JWTError: If the token is malformed or expired
    """
    try:
        return jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": True,
                "verify_aud": False,
                "verify_iss": False,
            },
            leeway=leeway,
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}")


def unverified_header(token: str) -> dict[str, Any]:
    """Read the JOSE header of a token (used to pick a signing key by kid).

    Raises:
        JWTError: If the header cannot be decoded
    """
    try:
        return jwt.get_unverified_header(token)
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token header: {e}")
