"""Domain layer errors.

Every failure of an identity or comment operation surfaces as one of these.
None of them is retried by the domain; retry policy belongs to the caller.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidAppKeyError(DomainError):
    """No application matches the given app key."""

    def __init__(self, app_key: str):
        self.app_key = app_key
        super().__init__("Invalid app key")


class OriginNotAllowedError(DomainError):
    """The request origin is not on the application's allowlist."""

    def __init__(self, origin: str):
        self.origin = origin
        super().__init__(f"Domain '{origin}' is not allowed for this app")


class InvalidTokenError(DomainError):
    """An identity token failed decoding, expiry, issuer or claim checks."""

    pass


class SocialAuthDisabledError(DomainError):
    """The application has not opted in to social authentication."""

    def __init__(self, message: str = "Social authentication not enabled for this app"):
        super().__init__(message)


class GuestNotFoundError(DomainError):
    """An upgrade was attempted against an unknown guest session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("Guest user not found")


class UserBannedError(DomainError):
    """A banned or deactivated user attempted to post."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is not allowed to post")
