"""Signing keys for social ID tokens.

The token provider publishes its current public keys as a JWKS document and
rotates them regularly; the document's Cache-Control max-age says how long
a fetched set stays valid.
"""

import re
import time
from typing import Any

import httpx
import jwt
import logfire

from murmur.adapter.error import ProviderError
from murmur.domain.service.token_verifier import SigningKeySource
from murmur.util.jwt import JWTError, unverified_header

DEFAULT_CACHE_SECONDS = 3600
_MAX_AGE = re.compile(r"max-age=(\d+)")


class KeySourceError(ProviderError):
    """Failed to fetch or read the provider's signing keys."""

    pass


class FirebaseKeySource(SigningKeySource):
    """Base class for token-provider key sources.

    Provides type distinction for dependency injection.
    """

    pass


class RealFirebaseKeySource(FirebaseKeySource):
    """Key source backed by the provider's JWKS endpoint."""

    algorithms = ["RS256"]

    def __init__(
        self,
        jwks_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize key source.

        Args:
            jwks_url: URL of the JWKS document
            timeout: HTTP timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.jwks_url = jwks_url
        self.timeout = timeout
        self.transport = transport
        self._keys: dict[str, Any] = {}
        self._expires_at = 0.0

    async def get_signing_key(self, raw_token: str) -> Any:
        """Return the public key matching the token's ``kid``.

        Refetches once when the kid is unknown, to pick up a rotation.

        Raises:
            JWTError: If the token header has no usable kid
            KeySourceError: If the key set cannot be fetched
        """
        kid = unverified_header(raw_token).get("kid")
        if not kid:
            raise JWTError("Token header has no key id")

        if time.monotonic() >= self._expires_at or kid not in self._keys:
            await self._refresh()

        key = self._keys.get(kid)
        if key is None:
            raise JWTError(f"Unknown signing key: {kid}")
        return key

    async def _refresh(self) -> None:
        with logfire.span("firebase_keys.refresh", url=self.jwks_url):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    response = await client.get(self.jwks_url)
                    response.raise_for_status()
                    key_set = jwt.PyJWKSet.from_dict(response.json())
            except httpx.HTTPError as e:
                logfire.error("Signing key fetch failed", error=str(e))
                raise KeySourceError(f"Failed to fetch signing keys: {e}") from e
            except (ValueError, jwt.PyJWKSetError) as e:
                logfire.error("Signing key set unreadable", error=str(e))
                raise KeySourceError(f"Invalid signing key set: {e}") from e

            self._keys = {
                jwk.key_id: jwk.key for jwk in key_set.keys if jwk.key_id is not None
            }
            self._expires_at = time.monotonic() + _max_age(
                response.headers.get("cache-control", "")
            )
            logfire.info("Signing keys refreshed", count=len(self._keys))


class MockFirebaseKeySource(FirebaseKeySource):
    """Static HS256 key source for tests and local development.

    Tokens must be signed with the same secret.
    """

    algorithms = ["HS256"]

    def __init__(self, secret: str = "mock-firebase-signing-secret-for-local-tests") -> None:
        """Initialize mock key source.

        Args:
            secret: Shared HS256 secret
        """
        self.secret = secret

    async def get_signing_key(self, raw_token: str) -> Any:
        """Return the static secret."""
        return self.secret


def _max_age(cache_control: str) -> int:
    """Seconds a response may be cached, from a Cache-Control header."""
    match = _MAX_AGE.search(cache_control)
    if match:
        return int(match.group(1))
    return DEFAULT_CACHE_SECONDS
