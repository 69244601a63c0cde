"""Token verification shared by the identity use cases."""

import logfire

from murmur.domain.error import SocialAuthDisabledError
from murmur.domain.model import Application
from murmur.domain.service import TokenContext, TokenVerifier
from murmur.domain.value import AuthType, ClaimSet


async def verify_identity_token(
    token_verifier: TokenVerifier,
    application: Application,
    auth_type: AuthType,
    token: str,
    issuer_prefix: str,
) -> ClaimSet:
    """Check the app accepts this auth type, then verify the token.

    Args:
        token_verifier: Token verifier domain service
        application: Application the token is presented to
        auth_type: Social or external
        token: Raw identity token
        issuer_prefix: Token provider issuer prefix

    Returns:
        Verified claims

    Raises:
        SocialAuthDisabledError: If social sign-in is off for the app, or
            the token's provider is not enabled
        InvalidTokenError: If the token fails verification
    """
    if auth_type is AuthType.SOCIAL and not application.social_auth_enabled:
        logfire.warn(
            "Social sign-in attempted on app without social auth",
            app_key=application.app_key.root,
        )
        raise SocialAuthDisabledError()

    context = TokenContext.for_application(application, auth_type, issuer_prefix)
    claims = await token_verifier.verify(token, context)

    if auth_type is AuthType.SOCIAL and not application.social_auth.allows_provider(
        claims.provider_name
    ):
        logfire.warn(
            "Sign-in provider not enabled",
            app_key=application.app_key.root,
            provider=claims.provider_name,
        )
        raise SocialAuthDisabledError(
            f"Provider '{claims.provider_name}' is not enabled for this app"
        )
    return claims
