"""Application layer DI providers."""

from dishka import Scope, provide

from murmur.application.usecase.app import GetSocialConfigUseCase
from murmur.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
)
from murmur.application.usecase.identity import (
    ResolveAuthenticatedUserUseCase,
    ResolveGuestUserUseCase,
    UpgradeGuestUseCase,
)
from murmur.application.usecase.user import GetSocialUserUseCase
from murmur.config import Settings
from murmur.domain.service import (
    ApplicationService,
    CommentService,
    IdentityResolver,
    SessionService,
    TokenVerifier,
    UserService,
)
from murmur.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_resolve_authenticated_user_use_case(
        self,
        application_service: ApplicationService,
        token_verifier: TokenVerifier,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> ResolveAuthenticatedUserUseCase:
        """Provide resolve authenticated user use case."""
        return ResolveAuthenticatedUserUseCase(
            application_service=application_service,
            token_verifier=token_verifier,
            identity_resolver=identity_resolver,
            user_service=user_service,
            session_service=session_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_resolve_guest_user_use_case(
        self,
        application_service: ApplicationService,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
    ) -> ResolveGuestUserUseCase:
        """Provide resolve guest user use case."""
        return ResolveGuestUserUseCase(
            application_service=application_service,
            identity_resolver=identity_resolver,
            user_service=user_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_upgrade_guest_use_case(
        self,
        application_service: ApplicationService,
        token_verifier: TokenVerifier,
        identity_resolver: IdentityResolver,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> UpgradeGuestUseCase:
        """Provide upgrade guest use case."""
        return UpgradeGuestUseCase(
            application_service=application_service,
            token_verifier=token_verifier,
            identity_resolver=identity_resolver,
            user_service=user_service,
            session_service=session_service,
            settings=settings,
        )

    # App use cases
    @provide(scope=Scope.REQUEST)
    def get_social_config_use_case(
        self, application_service: ApplicationService
    ) -> GetSocialConfigUseCase:
        """Provide get social config use case."""
        return GetSocialConfigUseCase(application_service=application_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_social_user_use_case(
        self, application_service: ApplicationService, user_service: UserService
    ) -> GetSocialUserUseCase:
        """Provide get social user use case."""
        return GetSocialUserUseCase(
            application_service=application_service, user_service=user_service
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        application_service: ApplicationService,
        session_service: SessionService,
        user_service: UserService,
        comment_service: CommentService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            application_service=application_service,
            session_service=session_service,
            user_service=user_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        application_service: ApplicationService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            application_service=application_service,
            comment_service=comment_service,
            user_service=user_service,
        )
