"""
Ports (Interfaces) for Profile Enrichment Dependencies.

Defines the stores the denormalizer reads from. All of them share one
asynchronous contract so the pipeline composes awaitables only.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Any, Optional, Protocol, runtime_checkable

from profile_service.domain.profile.models import (
    FeatureSet,
    FollowStats,
    UserConfigurations,
    UserRecord,
)


@runtime_checkable
class IFollowStore(Protocol):
    """
    Port for the follow-relationship store.

    Users follow other users; the store answers aggregate counters and
    single relationship checks.
    """

    async def get_stats(self, user: UserRecord) -> FollowStats:
        """
        Follow counters of a user.

        Args:
            user: Subject user

        Returns:
            FollowStats (counters may be None when unknown)
        """
        ...

    async def is_followed_by(self, subject: UserRecord, viewer: UserRecord) -> bool:
        """
        Check whether viewer follows subject.

        Args:
            subject: Followed user
            viewer: Potential follower

        Returns:
            True if the relationship exists
        """
        ...


@runtime_checkable
class IFeatureStore(Protocol):
    """Port for the domain-scoped feature store."""

    async def find_features_for_domain(self, domain_id: str) -> Optional[FeatureSet]:
        """
        Features enabled for a domain.

        Args:
            domain_id: Domain identifier

        Returns:
            FeatureSet, or None if the domain has no features document
        """
        ...


@runtime_checkable
class IUserConfigStore(Protocol):
    """
    Port for the per-user configuration store.

    Resolves a named configuration for a user; implementations decide
    how user-level values override domain-level ones.
    """

    async def get(self, name: str, user: UserRecord) -> Any:
        """
        Configuration value for a user.

        Args:
            name: Configuration name (e.g. "homePage")
            user: User the configuration is scoped to

        Returns:
            Configuration value, or None if not configured
        """
        ...

    async def get_configurations(self, user: UserRecord) -> UserConfigurations:
        """
        Every configuration module of a user.

        Domain-scoped entries of the user's preferred domain are merged
        with user-scoped entries, the latter winning.
        """
        ...


@runtime_checkable
class IPlatformAdminStore(Protocol):
    """Port for the platform administrators registry."""

    async def is_platform_admin(self, user_id: str) -> bool:
        ...


@runtime_checkable
class IProfileLinkStore(Protocol):
    """
    Port for profile-view links.

    A link of type ``profile`` is recorded each time a user looks at
    another user's profile.
    """

    async def record_profile_view(self, viewer: UserRecord, subject: UserRecord) -> None:
        ...
