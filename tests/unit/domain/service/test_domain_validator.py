"""Unit tests for origin allowlist validation."""

import pytest

from murmur.domain.error import OriginNotAllowedError
from murmur.domain.service import DomainValidator, is_origin_allowed, matches_pattern
from murmur.domain.value import DomainPattern
from tests.conftest import make_application


def patterns(*values: str) -> list[DomainPattern]:
    return [DomainPattern(v) for v in values]


class TestMatchesPattern:
    """Tests for single-pattern matching."""

    @pytest.mark.parametrize(
        "origin",
        ["blog.acme.com", "acme.com", "a.b.acme.com"],
    )
    def test_wildcard_accepts_suffix_and_subdomains(self, origin):
        assert matches_pattern(DomainPattern("*.acme.com"), origin)

    @pytest.mark.parametrize(
        "origin",
        ["evilacme.com", "acme.com.evil.com", "acme.co", ""],
    )
    def test_wildcard_rejects_lookalikes(self, origin):
        assert not matches_pattern(DomainPattern("*.acme.com"), origin)

    def test_star_matches_anything(self):
        assert matches_pattern(DomainPattern("*"), "anything.example.org")

    def test_exact_pattern_requires_equality(self):
        pattern = DomainPattern("blog.acme.com")

        assert matches_pattern(pattern, "blog.acme.com")
        assert not matches_pattern(pattern, "www.blog.acme.com")
        assert not matches_pattern(pattern, "acme.com")

    def test_exact_pattern_is_case_sensitive(self):
        assert not matches_pattern(DomainPattern("blog.acme.com"), "Blog.Acme.com")


class TestIsOriginAllowed:
    """Tests for allowlist evaluation."""

    def test_any_matching_pattern_allows(self):
        allowed = patterns("docs.example.org", "*.acme.com")

        assert is_origin_allowed(allowed, "shop.acme.com")
        assert is_origin_allowed(allowed, "docs.example.org")

    def test_empty_allowlist_rejects(self):
        assert not is_origin_allowed([], "acme.com")

    def test_empty_origin_rejected_even_with_star(self):
        assert not is_origin_allowed(patterns("*"), "")


class TestEnsureAllowed:
    """Tests for DomainValidator.ensure_allowed."""

    def test_allowed_origin_passes(self):
        validator = DomainValidator()
        app = make_application(allowed_domains=["*.acme.com"])

        validator.ensure_allowed(app, "blog.acme.com")

    def test_rejected_origin_raises_with_message(self):
        validator = DomainValidator()
        app = make_application(allowed_domains=["*.acme.com"])

        with pytest.raises(OriginNotAllowedError) as exc_info:
            validator.ensure_allowed(app, "evilacme.com")

        assert str(exc_info.value) == "Domain 'evilacme.com' is not allowed for this app"
        assert exc_info.value.origin == "evilacme.com"
