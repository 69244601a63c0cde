"""Get social sign-in config use case."""

from pydantic import BaseModel

from murmur.domain.service import ApplicationService


class SocialProviderConfig(BaseModel):
    """Public token-provider web config (no secrets)."""

    project_id: str
    api_key: str
    auth_domain: str


class GetSocialConfigRequest(BaseModel):
    """Get social config request."""

    app_key: str


class GetSocialConfigResponse(BaseModel):
    """Social sign-in config for the widget."""

    enabled: bool
    providers: list[str]
    provider_config: SocialProviderConfig | None


class GetSocialConfigUseCase:
    """Use case for exposing an application's social sign-in config."""

    def __init__(self, application_service: ApplicationService) -> None:
        """Initialize get social config use case.

        Args:
            application_service: Application domain service
        """
        self.application_service = application_service

    async def execute(
        self, request: GetSocialConfigRequest
    ) -> GetSocialConfigResponse | None:
        """Return the config, or None when the app is unknown or has social off.

        Args:
            request: Request with the app key

        Returns:
            Social config, or None
        """
        application = await self.application_service.find_by_app_key(request.app_key)
        if not application or not application.social_auth_enabled:
            return None

        firebase = application.social_auth.firebase_config
        return GetSocialConfigResponse(
            enabled=True,
            providers=list(application.social_auth.providers),
            provider_config=(
                SocialProviderConfig(
                    project_id=firebase.project_id,
                    api_key=firebase.api_key,
                    auth_domain=firebase.auth_domain,
                )
                if firebase
                else None
            ),
        )
