"""
Profile denormalizer.

Turns a stored user record into the representation sent to API clients.
"""

import asyncio
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import structlog

from profile_service.domain.profile.context import DenormalizeOptions
from profile_service.domain.profile.enrichment import EnrichmentResult, attempt
from profile_service.domain.profile.models import FeatureSet, FollowStats, UserRecord
from profile_service.domain.profile.ports import (
    IFeatureStore,
    IFollowStore,
    IUserConfigStore,
)
from profile_service.domain.profile.sanitized_user import SanitizedUser
from profile_service.domain.profile.sanitizer import sanitize_user

logger = structlog.get_logger(__name__)

HOME_PAGE = "homePage"
KNOWN_PREFERENCES: Sequence[str] = (HOME_PAGE,)


class ProfileDenormalizer:
    """Sanitizes a user record and enriches it for presentation.

    Flow:
    1. Sanitize (private fields kept unless told otherwise)
    2. Is-following flag (only for another, logged-in viewer)
    3. Follow counters
    4. Disabled state
    5. Domain features
    6. Preferences

    Only a malformed record stops the pipeline. Every store failure falls
    back to a default and is logged.
    """

    def __init__(
        self,
        follow_store: IFollowStore,
        feature_store: IFeatureStore,
        config_store: IUserConfigStore,
        preferences: Sequence[str] = KNOWN_PREFERENCES,
    ) -> None:
        """Initialize denormalizer.

        Args:
            follow_store: Follow relationships
            feature_store: Domain features
            config_store: Per-user configuration
            preferences: Names of the preferences to load
        """
        self.follow_store = follow_store
        self.feature_store = feature_store
        self.config_store = config_store
        self.preferences = tuple(preferences)

    async def denormalize(
        self,
        user: Union[UserRecord, Mapping[str, Any]],
        options: Optional[DenormalizeOptions] = None,
    ) -> SanitizedUser:
        """Build the sanitized, enriched representation of a user.

        Args:
            user: Stored record or raw document (not modified)
            options: Viewing context (defaults to no viewer, private data kept)

        Returns:
            SanitizedUser

        Raises:
            InvalidUserRecordError: If user is missing or malformed

        Example:
            >>> denormalizer = ProfileDenormalizer(follows, features, configs)
            >>> profile = await denormalizer.denormalize(
            ...     user, DenormalizeOptions(do_not_keep_private_data=True)
            ... )
            >>> profile.to_dict()["followers"]
            2
        """
        options = options or DenormalizeOptions()
        record = UserRecord.coerce(user)

        sanitized = self.sanitize(record, options)
        await self.set_is_following(sanitized, record, options)
        await self.follow(sanitized, record)
        self.set_state(record, sanitized)
        await self.load_features(record, sanitized)
        await self.load_preferences(record, sanitized)

        logger.debug(
            "User denormalized",
            user_id=record.id,
            private_data=not options.do_not_keep_private_data,
        )
        return sanitized

    # ═══════════════════════════════════════════════════════════
    # STAGES
    # ═══════════════════════════════════════════════════════════

    def sanitize(self, user: UserRecord, options: DenormalizeOptions) -> SanitizedUser:
        return SanitizedUser(fields=sanitize_user(user, options.do_not_keep_private_data))

    async def set_is_following(
        self,
        sanitized: SanitizedUser,
        user: UserRecord,
        options: DenormalizeOptions,
    ) -> Optional[EnrichmentResult[Optional[bool]]]:
        """Attach whether the viewer follows the user.

        Returns:
            None when skipped (no viewer, or viewer is the user)
        """
        viewer = options.user
        if viewer is None or options.viewer_is(user):
            return None

        result: EnrichmentResult[Optional[bool]] = await attempt(
            lambda: self.follow_store.is_followed_by(user, viewer), None
        )
        if result.degraded:
            logger.warning(
                "Failed to check follow relationship",
                user_id=user.id,
                viewer_id=viewer.id,
                error=str(result.error),
            )
            return result

        sanitized.following = bool(result.value)
        return result

    async def follow(
        self, sanitized: SanitizedUser, user: UserRecord
    ) -> EnrichmentResult[FollowStats]:
        """Attach follower and following counters (0 when unknown)."""
        result = await attempt(lambda: self.follow_store.get_stats(user), FollowStats())
        if result.degraded:
            logger.warning(
                "Failed to load user's follow stats",
                user_id=user.id,
                error=str(result.error),
            )

        stats = result.value or FollowStats()
        sanitized.followers = stats.followers or 0
        sanitized.followings = stats.followings or 0
        return result

    def set_state(self, user: UserRecord, sanitized: SanitizedUser) -> None:
        sanitized.disabled = bool(user.login.disabled)

    async def load_features(
        self, user: UserRecord, sanitized: SanitizedUser
    ) -> EnrichmentResult[Optional[FeatureSet]]:
        """Attach the features of the user's preferred domain."""
        if not user.preferred_domain_id:
            logger.debug("User has no preferred domain", user_id=user.id)
            return EnrichmentResult.ok(None)

        domain_id = user.preferred_domain_id
        result: EnrichmentResult[Optional[FeatureSet]] = await attempt(
            lambda: self.feature_store.find_features_for_domain(domain_id), None
        )
        if result.degraded:
            logger.warning(
                "Failed to load user's features",
                user_id=user.id,
                domain_id=domain_id,
                error=str(result.error),
            )
        elif result.value is not None:
            sanitized.features = result.value

        return result

    async def load_preferences(
        self, user: UserRecord, sanitized: SanitizedUser
    ) -> Dict[str, EnrichmentResult[Any]]:
        """Load every known preference concurrently.

        Failed preferences are skipped; the others are still attached.
        """
        sanitized.preferences = {}

        results = await asyncio.gather(
            *(self._load_preference(name, user, sanitized) for name in self.preferences)
        )
        return dict(zip(self.preferences, results))

    async def _load_preference(
        self, name: str, user: UserRecord, sanitized: SanitizedUser
    ) -> EnrichmentResult[Any]:
        result: EnrichmentResult[Any] = await attempt(
            lambda: self.config_store.get(name, user), None
        )
        if result.degraded:
            logger.warning(
                f"Failed to load user's {name} preference",
                user_id=user.id,
                preference=name,
                error=str(result.error),
            )
        elif result.value is not None:
            sanitized.preferences[name] = result.value

        return result
