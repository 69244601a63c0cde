"""Origin allowlist validation for embedded widgets."""

from collections.abc import Iterable

import logfire

from murmur.domain.error import OriginNotAllowedError
from murmur.domain.model.application import Application
from murmur.domain.value import DomainPattern

from .base import Service


def matches_pattern(pattern: DomainPattern, origin: str) -> bool:
    """Check one allowlist pattern against an origin hostname.

    ``*.suffix`` uses a dot boundary: it matches ``suffix`` itself and any
    host ending in ``.suffix``, never ``evilsuffix``.
    """
    if pattern.is_any:
        return True
    suffix = pattern.wildcard_suffix
    if suffix is not None:
        return origin == suffix or origin.endswith("." + suffix)
    return origin == pattern.root


def is_origin_allowed(allowed_domains: Iterable[DomainPattern], origin: str) -> bool:
    """Whether any pattern in the allowlist accepts the origin.

    Pure function; an empty allowlist or empty origin never matches.
    """
    if not origin:
        return False
    return any(matches_pattern(pattern, origin) for pattern in allowed_domains)


class DomainValidator(Service):
    """Gate every identity and comment mutation on the app's allowlist."""

    def ensure_allowed(self, application: Application, origin: str) -> None:
        """Raise unless the origin may interact with the application.

        Args:
            application: Application whose allowlist applies
            origin: Requesting page hostname

        Raises:
            OriginNotAllowedError: If no pattern matches
        """
        if is_origin_allowed(application.allowed_domains, origin):
            return
        logfire.warn(
            "Origin rejected",
            app_key=application.app_key.root,
            origin=origin,
        )
        raise OriginNotAllowedError(origin)
