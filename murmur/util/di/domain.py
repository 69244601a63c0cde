"""Domain layer DI providers."""

from dishka import Scope, provide

from murmur.adapter.firebase import FirebaseKeySource
from murmur.config import AuthSettings
from murmur.domain.repository import (
    ApplicationRepository,
    CommentRepository,
    UserRepository,
)
from murmur.domain.service import (
    ApplicationService,
    CommentService,
    DomainValidator,
    IdentityResolver,
    SessionService,
    TokenVerifier,
    UserService,
)
from murmur.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_domain_validator(self) -> DomainValidator:
        """Provide origin allowlist validator."""
        return DomainValidator()

    @provide
    def get_token_verifier(
        self, key_source: FirebaseKeySource, auth_settings: AuthSettings
    ) -> TokenVerifier:
        """Provide identity token verifier."""
        return TokenVerifier(
            key_source=key_source,
            verify_social_signature=auth_settings.verify_social_signature,
            leeway_seconds=auth_settings.token_leeway_seconds,
        )

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide
    def get_application_service(
        self,
        application_repository: ApplicationRepository,
        domain_validator: DomainValidator,
    ) -> ApplicationService:
        """Provide application domain service."""
        return ApplicationService(
            application_repository=application_repository,
            domain_validator=domain_validator,
        )

    @provide
    def get_identity_resolver(
        self,
        user_repository: UserRepository,
        comment_repository: CommentRepository,
    ) -> IdentityResolver:
        """Provide identity reconciliation service."""
        return IdentityResolver(
            user_repository=user_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)
