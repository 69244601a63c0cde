"""Unit tests for domain value objects."""

from pydantic import ValidationError
import pytest

from murmur.domain.model import SocialAuthConfig
from murmur.domain.value import AppKey, AuthType, ClaimSet, DomainPattern


class TestDomainPattern:
    """Tests for DomainPattern validation."""

    @pytest.mark.parametrize("value", ["*", "*.acme.com", "blog.acme.com", "localhost"])
    def test_accepts_valid_patterns(self, value):
        assert DomainPattern(value).root == value

    @pytest.mark.parametrize(
        "value", ["", "*.", "*.*.acme.com", "blog.*.com", "acme*.com", "a b.com", "*..com"]
    )
    def test_rejects_malformed_patterns(self, value):
        with pytest.raises(ValidationError):
            DomainPattern(value)

    def test_wildcard_suffix(self):
        assert DomainPattern("*.acme.com").wildcard_suffix == "acme.com"
        assert DomainPattern("acme.com").wildcard_suffix is None
        assert DomainPattern("*").is_any


class TestAppKey:
    """Tests for AppKey validation."""

    def test_rejects_whitespace(self):
        with pytest.raises(ValidationError):
            AppKey("acme blog")

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            AppKey("")


class TestAuthType:
    def test_only_guest_is_unauthenticated(self):
        assert AuthType.SOCIAL.is_authenticated
        assert AuthType.EXTERNAL.is_authenticated
        assert not AuthType.GUEST.is_authenticated


class TestClaimSetDisplayName:
    """Display name fallback chain."""

    def test_prefers_provider_name(self):
        claims = ClaimSet(
            provider_uid="u1",
            provider_name="google.com",
            email="ada@example.com",
            display_name="Ada",
        )
        assert claims.resolve_display_name() == "Ada"

    def test_falls_back_to_email_local_part(self):
        claims = ClaimSet(
            provider_uid="u1", provider_name="google.com", email="ada@example.com"
        )
        assert claims.resolve_display_name() == "ada"

    def test_falls_back_to_anonymous(self):
        claims = ClaimSet(provider_uid="u1", provider_name="google.com")
        assert claims.resolve_display_name() == "Anonymous"
        assert claims.resolve_display_name(fallback="Guest 42") == "Guest 42"


class TestSocialAuthConfig:
    def test_empty_provider_list_allows_all(self):
        assert SocialAuthConfig(enabled=True).allows_provider("github.com")

    def test_short_names_match_provider_ids(self):
        config = SocialAuthConfig(enabled=True, providers=["google"])

        assert config.allows_provider("google.com")
        assert not config.allows_provider("github.com")
