"""Request origin and credential extraction."""

from urllib.parse import urlsplit


def resolve_origin(claimed: str | None, origin_header: str | None) -> str:
    """Hostname of the embedding page.

    The widget sends the page hostname in the body; browsers send the
    ``Origin`` header (scheme, host and port). Both are reduced to a bare
    lowercase hostname.

    Args:
        claimed: Origin given in the request body
        origin_header: Value of the ``Origin`` header

    Returns:
        Hostname, or an empty string when neither is usable
    """
    for value in (claimed, origin_header):
        if not value or value == "null":
            continue
        value = value.strip()
        if "://" in value:
            hostname = urlsplit(value).hostname
        else:
            hostname = urlsplit(f"//{value}").hostname
        if hostname:
            return hostname
    return ""


def bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
