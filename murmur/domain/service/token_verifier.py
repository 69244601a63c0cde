"""Identity token verification domain service.

Turns a raw social ID token or external-system token into a normalized
ClaimSet. Social tokens are signature-checked against the token provider's
published keys; external tokens against the application's shared secret
when the application requires signed tokens.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

import logfire

from murmur.domain.error import InvalidTokenError, ValidationError
from murmur.domain.model.application import Application
from murmur.domain.value import AuthType, ClaimSet
from murmur.domain.value.common import ValueObject
from murmur.util.jwt import JWTError, decode_signed, decode_unverified

from .base import Service

DEFAULT_SOCIAL_PROVIDER = "google.com"
DEFAULT_EXTERNAL_SYSTEM = "custom"
EXTERNAL_TOKEN_ALGORITHMS = ["HS256"]

# Widths of the users.natural_key, display_name and email columns
MAX_SUBJECT_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_EMAIL_LENGTH = 255


class SigningKeySource(ABC):
    """Source of public keys for social ID tokens."""

    algorithms: list[str] = ["RS256"]

    @abstractmethod
    async def get_signing_key(self, raw_token: str) -> Any:
        """Return the key that signed the token (selected by its ``kid``).

        Args:
            raw_token: Encoded token

        Returns:
            A key object accepted by PyJWT for ``algorithms``
        """
        pass


class TokenContext(ValueObject):
    """What the verifier expects of a token for one application."""

    app_key: str
    auth_type: AuthType
    require_signature: bool = False
    expected_audience: str | None = None
    audience_required: bool = False
    expected_issuer: str | None = None
    shared_secret: str | None = None

    @classmethod
    def for_application(
        cls, application: Application, auth_type: AuthType, issuer_prefix: str
    ) -> "TokenContext":
        """Build the verification context from an application's auth config.

        Args:
            application: Application the token is presented to
            auth_type: Social or external
            issuer_prefix: Token provider issuer prefix (project id is appended)

        Raises:
            ValidationError: If auth_type is guest
        """
        if auth_type is AuthType.SOCIAL:
            firebase = application.social_auth.firebase_config
            return cls(
                app_key=application.app_key.root,
                auth_type=auth_type,
                require_signature=True,
                expected_audience=firebase.project_id if firebase else None,
                audience_required=firebase is not None,
                expected_issuer=(
                    f"{issuer_prefix}{firebase.project_id}" if firebase else None
                ),
            )
        if auth_type is AuthType.EXTERNAL:
            config = application.external_auth
            return cls(
                app_key=application.app_key.root,
                auth_type=auth_type,
                require_signature=bool(config and config.require_signed_token),
                expected_audience=application.app_key.root,
                audience_required=False,
                expected_issuer=config.expected_issuer if config else None,
                shared_secret=config.shared_secret if config else None,
            )
        raise ValidationError("Guest sessions do not carry identity tokens")


class TokenVerifier(Service):
    """Domain service for identity token verification."""

    def __init__(
        self,
        key_source: SigningKeySource,
        verify_social_signature: bool = True,
        leeway_seconds: int = 0,
    ) -> None:
        """Initialize token verifier.

        Args:
            key_source: Signing keys for social ID tokens
            verify_social_signature: Check social token signatures (disable only in development)
            leeway_seconds: Tolerated clock skew for exp
        """
        self.key_source = key_source
        self.verify_social_signature = verify_social_signature
        self.leeway_seconds = leeway_seconds

    async def verify(self, raw_token: str, context: TokenContext) -> ClaimSet:
        """Verify a token and map its claims.

        Args:
            raw_token: Encoded JWT
            context: Expectations derived from the application

        Returns:
            Normalized claims

        Raises:
            InvalidTokenError: On decode, signature, expiry, issuer, audience
                or missing-claim failures
        """
        with logfire.span(
            "token_verifier.verify",
            app_key=context.app_key,
            auth_type=context.auth_type.value,
        ):
            if not raw_token or raw_token.count(".") != 2:
                logfire.warn("Malformed identity token", app_key=context.app_key)
                raise InvalidTokenError("Malformed token")

            try:
                payload, verified = await self._decode(raw_token, context)
            except JWTError as e:
                logfire.warn(
                    "Identity token rejected",
                    app_key=context.app_key,
                    auth_type=context.auth_type.value,
                    error=str(e),
                )
                raise InvalidTokenError(str(e)) from e

            self._check_audience(payload, context)
            claims = self._to_claims(payload, context, verified)
            logfire.info(
                "Identity token verified",
                app_key=context.app_key,
                auth_type=context.auth_type.value,
                provider=claims.provider_name,
                signature_verified=verified,
            )
            return claims

    async def _decode(
        self, raw_token: str, context: TokenContext
    ) -> tuple[dict[str, Any], bool]:
        if context.auth_type is AuthType.SOCIAL:
            if self.verify_social_signature:
                key = await self.key_source.get_signing_key(raw_token)
                payload = decode_signed(
                    raw_token,
                    key,
                    self.key_source.algorithms,
                    issuer=context.expected_issuer,
                    leeway=self.leeway_seconds,
                )
                return payload, True

            logfire.warn(
                "Social token signature verification disabled",
                app_key=context.app_key,
            )
            payload = decode_unverified(raw_token, leeway=self.leeway_seconds)
            self._check_issuer(payload, context)
            return payload, False

        if context.require_signature:
            if not context.shared_secret:
                raise InvalidTokenError(
                    "Application requires signed tokens but has no secret configured"
                )
            payload = decode_signed(
                raw_token,
                context.shared_secret,
                EXTERNAL_TOKEN_ALGORITHMS,
                issuer=context.expected_issuer,
                leeway=self.leeway_seconds,
            )
            return payload, True

        payload = decode_unverified(raw_token, leeway=self.leeway_seconds)
        self._check_issuer(payload, context)
        return payload, False

    @staticmethod
    def _check_issuer(payload: dict[str, Any], context: TokenContext) -> None:
        if context.expected_issuer and payload.get("iss") != context.expected_issuer:
            raise InvalidTokenError("Token issuer mismatch")

    @staticmethod
    def _check_audience(payload: dict[str, Any], context: TokenContext) -> None:
        if not context.expected_audience:
            return
        aud = payload.get("aud")
        if aud is None:
            if context.audience_required:
                raise InvalidTokenError("Token audience missing")
            return
        audiences = aud if isinstance(aud, list) else [aud]
        if context.expected_audience not in audiences:
            raise InvalidTokenError("Token audience mismatch")

    def _to_claims(
        self, payload: dict[str, Any], context: TokenContext, verified: bool
    ) -> ClaimSet:
        subject = _first_str(payload, "sub", "user_id", "uid", "id")
        if subject and len(subject) > MAX_SUBJECT_LENGTH:
            logfire.warn(
                "Identity token subject too long",
                app_key=context.app_key,
                length=len(subject),
            )
            raise InvalidTokenError("Token subject is too long")

        # Profile claims are fitted to the column widths
        email = _first_str(payload, "email")
        if email and len(email) > MAX_EMAIL_LENGTH:
            email = None
        name = _first_str(payload, "name", "display_name")
        if name and len(name) > MAX_NAME_LENGTH:
            name = name[:MAX_NAME_LENGTH].rstrip()

        if not subject or not (email or name):
            raise InvalidTokenError("Token is missing required claims")

        role = None
        if context.auth_type is AuthType.SOCIAL:
            firebase = payload.get("firebase")
            provider = None
            if isinstance(firebase, dict):
                provider = _first_str(firebase, "sign_in_provider")
            provider = provider or DEFAULT_SOCIAL_PROVIDER
        else:
            provider = _first_str(payload, "system_type") or DEFAULT_EXTERNAL_SYSTEM
            role = _first_str(payload, "role")

        exp = payload.get("exp")
        expires_at = (
            datetime.fromtimestamp(exp, timezone.utc)
            if isinstance(exp, (int, float)) and not isinstance(exp, bool)
            else None
        )

        return ClaimSet(
            provider_uid=subject,
            provider_name=provider,
            email=email,
            display_name=name,
            avatar_url=_first_str(payload, "picture", "avatar"),
            role=role,
            expires_at=expires_at,
            signature_verified=verified,
        )


def _first_str(payload: dict[str, Any], *names: str) -> str | None:
    """First non-empty string (or integer id) among the named claims."""
    for name in names:
        value = payload.get(name)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
