"""Identity reconciliation domain service.

Keeps exactly one user row per (application, auth type, natural key) and
reconciles guest sessions with authenticated identities:

    Absent ──resolve──▶ GuestOnly ──upgrade (no collision)──▶ Authenticated
    Absent ──resolve──▶ Authenticated
    GuestOnly ──upgrade (collision)──▶ Merged into the existing Authenticated row

Every method is expected to run inside one store transaction (the
request-scoped session), so a merge is applied entirely or not at all.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from murmur.domain.error import GuestNotFoundError, ValidationError
from murmur.domain.model.user import (
    AuthPayload,
    ExternalAuth,
    GuestAuth,
    SocialAuth,
    User,
)
from murmur.domain.repository import CommentRepository, UserRepository
from murmur.domain.value import (
    ANONYMOUS_DISPLAY_NAME,
    ApplicationId,
    AuthType,
    ClaimSet,
    UserId,
)

from .base import Service


@dataclass(frozen=True)
class Resolution:
    """Outcome of a lookup-or-create."""

    user_id: UserId
    is_new: bool


@dataclass(frozen=True)
class UpgradeOutcome:
    """Outcome of a guest upgrade; merged=False means converted in place."""

    user_id: UserId
    merged: bool


class IdentityResolver(Service):
    """Domain service that finds, creates, upgrades and merges users."""

    def __init__(
        self,
        user_repository: UserRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize identity resolver.

        Args:
            user_repository: User store
            comment_repository: Comment store (for merge reassignment)
        """
        self.user_repository = user_repository
        self.comment_repository = comment_repository

    async def resolve_authenticated(
        self,
        application_id: ApplicationId,
        auth_type: AuthType,
        claims: ClaimSet,
        raw_token: str | None = None,
        sync_profile: bool = False,
    ) -> Resolution:
        """Find or create the user for a verified claim set.

        Args:
            application_id: Owning application
            auth_type: Social or external
            claims: Verified claims
            raw_token: The presented token (kept as latest token for social users)
            sync_profile: Refresh display name, email and avatar from claims

        Returns:
            Resolution with is_new=True only for the call that created the row

        Raises:
            ValidationError: If auth_type is guest
        """
        _require_authenticated(auth_type)
        with logfire.span(
            "identity_resolver.resolve_authenticated",
            application_id=str(application_id),
            auth_type=auth_type.value,
            provider_uid=claims.provider_uid,
        ):
            now = datetime.now(timezone.utc)
            existing = await self.user_repository.find_by_natural_key(
                application_id, auth_type, claims.provider_uid
            )
            if existing:
                await self._touch(existing, claims, raw_token, now, sync_profile)
                logfire.info(
                    "Existing user resolved",
                    user_id=str(existing.id),
                    auth_type=auth_type.value,
                )
                return Resolution(user_id=existing.id, is_new=False)

            user = User(
                id=UserId(uuid4()),
                application_id=application_id,
                display_name=claims.resolve_display_name(),
                email=claims.email,
                avatar_url=claims.avatar_url,
                auth=_authenticated_payload(auth_type, claims, raw_token, now),
                reputation=0,
                comments_count=0,
                is_banned=False,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            stored, created = await self.user_repository.insert_if_absent(user)
            if not created:
                # Lost an insert race; the winner's row is canonical
                await self._touch(stored, claims, raw_token, now, sync_profile)
                logfire.info(
                    "Concurrent resolution reused existing user",
                    user_id=str(stored.id),
                )
                return Resolution(user_id=stored.id, is_new=False)

            logfire.info(
                "New user created",
                user_id=str(stored.id),
                auth_type=auth_type.value,
                provider=claims.provider_name,
            )
            return Resolution(user_id=stored.id, is_new=True)

    async def resolve_guest(
        self,
        application_id: ApplicationId,
        session_id: str,
        ip_address: str | None = None,
    ) -> Resolution:
        """Find or create the guest user for a browser session.

        Args:
            application_id: Owning application
            session_id: Browser session identifier
            ip_address: Client address, recorded for moderation on creation

        Returns:
            Resolution with is_new=True only for the call that created the row
        """
        with logfire.span(
            "identity_resolver.resolve_guest",
            application_id=str(application_id),
            session_id=session_id,
        ):
            existing = await self.user_repository.find_by_natural_key(
                application_id, AuthType.GUEST, session_id
            )
            if existing:
                return Resolution(user_id=existing.id, is_new=False)

            now = datetime.now(timezone.utc)
            guest = User(
                id=UserId(uuid4()),
                application_id=application_id,
                display_name=ANONYMOUS_DISPLAY_NAME,
                auth=GuestAuth(session_id=session_id, ip_address=ip_address),
                created_at=now,
                updated_at=now,
            )
            stored, created = await self.user_repository.insert_if_absent(guest)
            if created:
                logfire.info("Guest user created", user_id=str(stored.id))
            return Resolution(user_id=stored.id, is_new=created)

    async def upgrade_guest(
        self,
        application_id: ApplicationId,
        session_id: str,
        auth_type: AuthType,
        claims: ClaimSet,
        raw_token: str | None = None,
    ) -> UpgradeOutcome:
        """Attach a verified identity to a guest session.

        Steps:
        1. Lock the guest row for the session
        2. Lock the authenticated row for the claims' natural key, if any
        3. No such row: convert the guest row in place
        4. Row exists: merge the guest into it and delete the guest row

        Args:
            application_id: Owning application
            session_id: The guest's browser session
            auth_type: Social or external
            claims: Verified claims
            raw_token: The presented token

        Returns:
            UpgradeOutcome naming the surviving user

        Raises:
            GuestNotFoundError: If no guest exists for the session
            ValidationError: If auth_type is guest
        """
        _require_authenticated(auth_type)
        with logfire.span(
            "identity_resolver.upgrade_guest",
            application_id=str(application_id),
            session_id=session_id,
            auth_type=auth_type.value,
            provider_uid=claims.provider_uid,
        ):
            guest = await self.user_repository.find_by_natural_key(
                application_id, AuthType.GUEST, session_id, for_update=True
            )
            if not guest:
                logfire.warn(
                    "Upgrade for unknown guest session",
                    application_id=str(application_id),
                    session_id=session_id,
                )
                raise GuestNotFoundError(session_id)

            existing = await self.user_repository.find_by_natural_key(
                application_id, auth_type, claims.provider_uid, for_update=True
            )
            now = datetime.now(timezone.utc)

            if existing is None:
                upgraded = guest.model_copy(
                    update={
                        "display_name": claims.resolve_display_name(
                            fallback=guest.display_name
                        ),
                        "email": claims.email or guest.email,
                        "avatar_url": claims.avatar_url or guest.avatar_url,
                        "auth": _authenticated_payload(
                            auth_type, claims, raw_token, now
                        ),
                        "updated_at": now,
                    }
                )
                await self.user_repository.save(upgraded)
                logfire.info(
                    "Guest upgraded in place",
                    user_id=str(guest.id),
                    auth_type=auth_type.value,
                )
                return UpgradeOutcome(user_id=guest.id, merged=False)

            await self._merge(guest, existing, claims, raw_token, now)
            return UpgradeOutcome(user_id=existing.id, merged=True)

    async def _merge(
        self,
        guest: User,
        target: User,
        claims: ClaimSet,
        raw_token: str | None,
        now: datetime,
    ) -> None:
        """Fold a guest into an existing authenticated user.

        Order matters when the store cannot commit all steps at once:
        reassignment is repeatable and the guest row is deleted last, so a
        crash leaves at most an empty orphaned guest, never lost comments.
        """
        with logfire.span(
            "identity_resolver.merge",
            guest_id=str(guest.id),
            target_id=str(target.id),
        ):
            moved = await self.comment_repository.reassign_author(guest.id, target.id)

            await self._touch(target, claims, raw_token, now, sync_profile=False)
            await self.user_repository.add_stats(
                target.id,
                comments_count=guest.comments_count,
                reputation=guest.reputation,
            )
            await self.user_repository.delete(guest.id)

            logfire.info(
                "Guest merged into existing user",
                guest_id=str(guest.id),
                target_id=str(target.id),
                comments_moved=moved,
                comments_count_added=guest.comments_count,
                reputation_added=guest.reputation,
            )

    async def _touch(
        self,
        user: User,
        claims: ClaimSet,
        raw_token: str | None,
        now: datetime,
        sync_profile: bool,
    ) -> User:
        """Record a fresh sign-in on an authenticated user."""
        auth = user.auth
        if isinstance(auth, SocialAuth):
            auth = auth.model_copy(
                update={
                    "last_sign_in_at": now,
                    "last_id_token": raw_token or auth.last_id_token,
                    "provider_email": claims.email or auth.provider_email,
                }
            )
        elif isinstance(auth, ExternalAuth):
            auth = auth.model_copy(
                update={
                    "last_seen_at": now,
                    "token_validated": claims.signature_verified,
                    "role": claims.role or auth.role,
                }
            )

        update: dict = {"auth": auth, "updated_at": now}
        if sync_profile:
            update["display_name"] = claims.resolve_display_name(
                fallback=user.display_name
            )
            update["email"] = claims.email or user.email
            update["avatar_url"] = claims.avatar_url or user.avatar_url

        return await self.user_repository.save(user.model_copy(update=update))


def _require_authenticated(auth_type: AuthType) -> None:
    if not auth_type.is_authenticated:
        raise ValidationError("Authenticated resolution requires social or external")


def _authenticated_payload(
    auth_type: AuthType, claims: ClaimSet, raw_token: str | None, now: datetime
) -> AuthPayload:
    if auth_type is AuthType.SOCIAL:
        return SocialAuth(
            provider_uid=claims.provider_uid,
            provider_name=claims.provider_name,
            provider_email=claims.email,
            last_sign_in_at=now,
            last_id_token=raw_token,
        )
    return ExternalAuth(
        system_id=claims.provider_uid,
        system_type=claims.provider_name,
        role=claims.role,
        last_seen_at=now,
        token_validated=claims.signature_verified,
    )
