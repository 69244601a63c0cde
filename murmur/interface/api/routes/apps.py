"""Application config and user lookup routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from murmur.application.usecase.app import (
    GetSocialConfigRequest,
    GetSocialConfigResponse,
    GetSocialConfigUseCase,
)
from murmur.application.usecase.user import (
    GetSocialUserRequest,
    GetSocialUserResponse,
    GetSocialUserUseCase,
)
from murmur.domain.error import DomainError
from murmur.interface.error import http_error

router = APIRouter(prefix="/apps", tags=["apps"], route_class=DishkaRoute)


@router.get(
    "/{app_key}/social-config", response_model=GetSocialConfigResponse | None
)
async def get_social_config(
    app_key: str,
    use_case: FromDishka[GetSocialConfigUseCase],
) -> GetSocialConfigResponse | None:
    """Social sign-in config for the widget.

    Returns ``null`` when the app is unknown or has social sign-in disabled,
    so the widget can hide the sign-in buttons without an error.
    """
    return await use_case.execute(GetSocialConfigRequest(app_key=app_key))


@router.get(
    "/{app_key}/users/social/{provider_uid}", response_model=GetSocialUserResponse
)
async def get_social_user(
    app_key: str,
    provider_uid: str,
    use_case: FromDishka[GetSocialUserUseCase],
) -> GetSocialUserResponse:
    """Public profile of a social user, looked up by token-provider uid."""
    try:
        return await use_case.execute(
            GetSocialUserRequest(app_key=app_key, provider_uid=provider_uid)
        )
    except DomainError as e:
        raise http_error(e) from e
