"""Tests for the token provider's JWKS key source."""

import json

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from murmur.adapter.firebase import KeySourceError, RealFirebaseKeySource
from murmur.util.jwt import JWTError

JWKS_URL = "https://keys.example.test/jwks"


def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def jwk_for(private_key, kid: str) -> dict:
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({"kid": kid, "alg": "RS256", "use": "sig"})
    return jwk


def sign(private_key, kid: str, **claims) -> str:
    return jwt.encode(
        {"sub": "u1", **claims}, private_key, algorithm="RS256", headers={"kid": kid}
    )


class JWKSServer:
    """Serves a mutable JWKS document and counts fetches."""

    def __init__(self, keys: list[dict], cache_control: str = "public, max-age=600"):
        self.keys = keys
        self.cache_control = cache_control
        self.status_code = 200
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="boom")
        return httpx.Response(
            200,
            json={"keys": self.keys},
            headers={"Cache-Control": self.cache_control},
        )

    def source(self) -> RealFirebaseKeySource:
        return RealFirebaseKeySource(JWKS_URL, transport=httpx.MockTransport(self))


class TestRealFirebaseKeySource:
    """Tests for RealFirebaseKeySource."""

    @pytest.mark.asyncio
    async def test_returns_key_that_verifies_token(self):
        private_key = rsa_key()
        server = JWKSServer([jwk_for(private_key, "k1")])
        source = server.source()
        token = sign(private_key, "k1")

        key = await source.get_signing_key(token)

        assert jwt.decode(token, key, algorithms=["RS256"])["sub"] == "u1"

    @pytest.mark.asyncio
    async def test_caches_key_set(self):
        private_key = rsa_key()
        server = JWKSServer([jwk_for(private_key, "k1")])
        source = server.source()

        await source.get_signing_key(sign(private_key, "k1"))
        await source.get_signing_key(sign(private_key, "k1"))

        assert server.calls == 1

    @pytest.mark.asyncio
    async def test_refetches_on_unknown_kid(self):
        old_key, new_key = rsa_key(), rsa_key()
        server = JWKSServer([jwk_for(old_key, "old")])
        source = server.source()
        await source.get_signing_key(sign(old_key, "old"))

        server.keys = [jwk_for(new_key, "new")]
        token = sign(new_key, "new")
        key = await source.get_signing_key(token)

        assert server.calls == 2
        assert jwt.decode(token, key, algorithms=["RS256"])["sub"] == "u1"

    @pytest.mark.asyncio
    async def test_zero_max_age_always_refetches(self):
        private_key = rsa_key()
        server = JWKSServer([jwk_for(private_key, "k1")], cache_control="max-age=0")
        source = server.source()

        await source.get_signing_key(sign(private_key, "k1"))
        await source.get_signing_key(sign(private_key, "k1"))

        assert server.calls == 2

    @pytest.mark.asyncio
    async def test_unknown_kid_after_refresh(self):
        private_key = rsa_key()
        server = JWKSServer([jwk_for(private_key, "k1")])

        with pytest.raises(JWTError, match="Unknown signing key"):
            await server.source().get_signing_key(sign(private_key, "k2"))

    @pytest.mark.asyncio
    async def test_missing_kid(self):
        private_key = rsa_key()
        server = JWKSServer([jwk_for(private_key, "k1")])
        token = jwt.encode({"sub": "u1"}, private_key, algorithm="RS256")

        with pytest.raises(JWTError):
            await server.source().get_signing_key(token)
        assert server.calls == 0

    @pytest.mark.asyncio
    async def test_endpoint_failure_raises_key_source_error(self):
        private_key = rsa_key()
        server = JWKSServer([])
        server.status_code = 500

        with pytest.raises(KeySourceError):
            await server.source().get_signing_key(sign(private_key, "k1"))
