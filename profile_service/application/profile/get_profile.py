"""Get profile query."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import structlog

from profile_service.application.profile.denormalizer import ProfileDenormalizer
from profile_service.domain.profile.context import DenormalizeOptions
from profile_service.domain.profile.enrichment import attempt
from profile_service.domain.profile.models import UserConfigurations, UserRecord
from profile_service.domain.profile.ports import (
    IPlatformAdminStore,
    IProfileLinkStore,
    IUserConfigStore,
    IUserRepository,
)
from profile_service.domain.profile.sanitized_user import SanitizedUser
from profile_service.domain.shared.errors import UserNotFoundError
from profile_service.domain.shared.value_objects import UserId

logger = structlog.get_logger(__name__)


@dataclass
class GetProfileQuery:
    """Query to get denormalized user profiles.

    Read-only on profiles. Private data is only kept when the logged-in
    user looks at their own profile; looking at someone else's profile
    records a profile link.

    Examples:
        >>> query = GetProfileQuery(repository, denormalizer, platform_admins)
        >>> profile = await query.by_id(UserId(value="5f1b..."), viewer=me)
        >>> profiles = await query.by_emails(["bar@lng.net"], viewer=me)
        >>> mine = await query.me(me)
    """

    repository: IUserRepository
    denormalizer: ProfileDenormalizer
    platform_admins: Optional[IPlatformAdminStore] = None
    config_store: Optional[IUserConfigStore] = None
    profile_links: Optional[IProfileLinkStore] = None

    async def by_id(
        self, user_id: Union[UserId, str], viewer: Optional[UserRecord] = None
    ) -> SanitizedUser:
        """Get the profile of a user.

        Args:
            user_id: Identifier of the user to look at
            viewer: Logged-in user

        Returns:
            Denormalized profile

        Raises:
            UserNotFoundError: If no user has this identifier
        """
        if not isinstance(user_id, UserId):
            user_id = UserId.from_string(user_id)

        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        own_profile = DenormalizeOptions(user=viewer).viewer_is(user)
        if viewer is not None and not own_profile:
            await self._record_profile_view(viewer, user)

        options = DenormalizeOptions(user=viewer, do_not_keep_private_data=not own_profile)
        return await self.denormalizer.denormalize(user, options)

    async def by_emails(
        self, emails: Sequence[str], viewer: Optional[UserRecord] = None
    ) -> List[SanitizedUser]:
        """Get the public profiles of the users owning the given emails.

        Returns:
            Denormalized profiles, empty list if nobody matches
        """
        users = await self.repository.find_by_emails(emails)
        options = DenormalizeOptions(user=viewer, do_not_keep_private_data=True)

        profiles = []
        for user in users:
            profiles.append(await self.denormalizer.denormalize(user, options))
        return profiles

    async def me(self, user: UserRecord) -> SanitizedUser:
        """Get the logged-in user's own profile.

        Includes private data, the merged configurations and the platform
        administrator flag.
        """
        profile = await self.denormalizer.denormalize(user, DenormalizeOptions(user=user))

        is_admin = False
        if self.platform_admins is not None:
            is_admin = await self.platform_admins.is_platform_admin(user.id)
        profile.is_platform_admin = is_admin

        if self.config_store is not None:
            config_store = self.config_store
            result = await attempt(
                lambda: config_store.get_configurations(user), UserConfigurations()
            )
            if result.degraded:
                logger.warning(
                    "Failed to load user's configurations",
                    user_id=user.id,
                    error=str(result.error),
                )
            profile.configurations = result.value

        logger.debug("Own profile loaded", user_id=user.id, is_platform_admin=is_admin)
        return profile

    async def _record_profile_view(self, viewer: UserRecord, subject: UserRecord) -> None:
        if self.profile_links is None:
            return

        profile_links = self.profile_links
        result = await attempt(lambda: profile_links.record_profile_view(viewer, subject), None)
        if result.degraded:
            logger.warning(
                "Failed to record profile link",
                viewer_id=viewer.id,
                user_id=subject.id,
                error=str(result.error),
            )
