"""Test configuration and fixtures."""

import time
from typing import Any
from uuid import uuid4

import jwt
import logfire

from murmur.adapter.firebase import MockFirebaseKeySource
from murmur.domain.model import (
    Application,
    AuthPayload,
    ExternalAuthConfig,
    FirebaseConfig,
    SocialAuthConfig,
    User,
)
from murmur.domain.value import AppKey, ApplicationId, DomainPattern, UserId

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)

FIREBASE_SECRET = MockFirebaseKeySource().secret
FIREBASE_PROJECT = "acme-comments"
FIREBASE_ISSUER = f"https://securetoken.google.com/{FIREBASE_PROJECT}"
EXTERNAL_SECRET = "acme-wordpress-shared-secret-0123456789"


def make_application(
    app_key: str = "acme",
    allowed_domains: list[str] | None = None,
    social_enabled: bool = True,
    providers: list[str] | None = None,
    external_auth: ExternalAuthConfig | None = None,
) -> Application:
    """Build an application with social and signed external auth enabled."""
    return Application(
        id=ApplicationId(uuid4()),
        app_key=AppKey(app_key),
        name=f"{app_key} blog",
        allowed_domains=[
            DomainPattern(d) for d in (allowed_domains or ["*.acme.com"])
        ],
        social_auth=SocialAuthConfig(
            enabled=social_enabled,
            providers=providers or [],
            firebase_config=FirebaseConfig(
                project_id=FIREBASE_PROJECT,
                api_key="AIza-public-web-key",
                auth_domain=f"{FIREBASE_PROJECT}.firebaseapp.com",
            ),
        ),
        external_auth=external_auth
        or ExternalAuthConfig(
            require_signed_token=True,
            shared_secret=EXTERNAL_SECRET,
        ),
    )


def make_user(
    application_id: ApplicationId,
    auth: AuthPayload,
    display_name: str = "Someone",
    comments_count: int = 0,
    reputation: int = 0,
    email: str | None = None,
) -> User:
    """Build a user row with the given auth payload and counters."""
    return User(
        id=UserId(uuid4()),
        application_id=application_id,
        display_name=display_name,
        email=email,
        auth=auth,
        comments_count=comments_count,
        reputation=reputation,
    )


def make_social_token(
    uid: str = "firebase-uid-1",
    email: str | None = "ada@example.com",
    name: str | None = "Ada Lovelace",
    provider: str = "google.com",
    expires_in: int = 3600,
    secret: str = FIREBASE_SECRET,
    **extra: Any,
) -> str:
    """Sign a social ID token the way the token provider shapes them."""
    now = int(time.time())
    claims: dict[str, Any] = {
        "iss": FIREBASE_ISSUER,
        "aud": FIREBASE_PROJECT,
        "sub": uid,
        "user_id": uid,
        "iat": now,
        "exp": now + expires_in,
        "firebase": {"sign_in_provider": provider},
    }
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm="HS256")


def make_external_token(
    system_id: str = "wp-123",
    email: str | None = "editor@acme.com",
    name: str | None = "Acme Editor",
    expires_in: int = 3600,
    secret: str = EXTERNAL_SECRET,
    **extra: Any,
) -> str:
    """Sign an embedding-site token with the app's shared secret."""
    now = int(time.time())
    claims: dict[str, Any] = {
        "sub": system_id,
        "system_type": "wordpress",
        "iat": now,
        "exp": now + expires_in,
    }
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm="HS256")
