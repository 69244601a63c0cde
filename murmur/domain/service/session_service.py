"""Session token domain service."""

import logfire

from murmur.config import AuthSettings
from murmur.domain.model import User
from murmur.util.jwt import (
    JWTError,
    SessionTokenPayload,
    create_session_token,
    verify_session_token,
)

from .base import Service


class SessionService(Service):
    """Issues and checks the session JWT handed out after identity resolution."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user: User) -> str:
        """Create a session token for a resolved user.

        Args:
            user: Resolved user

        Returns:
            JWT token string
        """
        with logfire.span("session_service.create_token", user_id=str(user.id)):
            return create_session_token(
                user_id=str(user.id),
                application_id=str(user.application_id),
                auth_type=user.auth_type.value,
                settings=self.auth_settings,
            )

    def verify_token(self, token: str) -> SessionTokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("session_service.verify_token"):
            try:
                return verify_session_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token verification failed", error=str(e))
                raise
