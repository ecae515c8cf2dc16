"""Store factory for environment-based selection.

This factory creates the profile stores based on the PROFILE_STORE
environment variable:
- "inmemory": in-memory adapters (for testing)
- "mongodb": MongoDB adapters (for production)

Default: inmemory
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient

from profile_service.application.profile.denormalizer import ProfileDenormalizer
from profile_service.application.profile.get_profile import GetProfileQuery
from profile_service.application.profile.update_profile import UpdateProfileCommand
from profile_service.domain.profile.ports import (
    IFeatureStore,
    IFollowStore,
    IPlatformAdminStore,
    IProfileLinkStore,
    IUserConfigStore,
    IUserRepository,
)
from profile_service.infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    get_profile_store_backend,
    load_environment,
)
from profile_service.infrastructure.memory import (
    InMemoryFeatureStore,
    InMemoryFollowStore,
    InMemoryPlatformAdminStore,
    InMemoryProfileLinkStore,
    InMemoryUserConfigStore,
    InMemoryUserRepository,
)
from profile_service.infrastructure.mongodb import (
    MongoFeatureStore,
    MongoFollowStore,
    MongoPlatformAdminStore,
    MongoProfileLinkStore,
    MongoUserConfigStore,
    MongoUserRepository,
)

logger = structlog.get_logger(__name__)


@dataclass
class ProfileStores:
    """Every store the profile use cases depend on."""

    users: IUserRepository
    follows: IFollowStore
    features: IFeatureStore
    configs: IUserConfigStore
    platform_admins: IPlatformAdminStore
    profile_links: IProfileLinkStore

    def denormalizer(self) -> ProfileDenormalizer:
        return ProfileDenormalizer(self.follows, self.features, self.configs)

    def get_profile_query(self) -> GetProfileQuery:
        return GetProfileQuery(
            self.users,
            self.denormalizer(),
            platform_admins=self.platform_admins,
            config_store=self.configs,
            profile_links=self.profile_links,
        )

    def update_profile_command(self) -> UpdateProfileCommand:
        return UpdateProfileCommand(self.users, self.denormalizer())


def create_stores(backend: Optional[str] = None) -> ProfileStores:
    """Create stores based on environment configuration.

    Args:
        backend: Override of the PROFILE_STORE env var

    Returns:
        ProfileStores: The configured adapters

    Raises:
        ValueError: If the backend is unknown or MongoDB is not configured

    Environment Variables:
        PROFILE_STORE: "inmemory" | "mongodb" (default: inmemory)
        MONGODB_URI: MongoDB connection string (required for mongodb)
        MONGODB_DATABASE: Database name (default: profiles)
    """
    store_type = (backend or get_profile_store_backend()).lower()

    if store_type == "mongodb":
        uri = get_mongodb_uri()
        if not uri:
            raise ValueError(
                "MONGODB_URI environment variable is required " "when PROFILE_STORE=mongodb"
            )

        client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(uri)
        db = client[get_mongodb_database()]
        logger.info("Using MongoDB profile stores", database=get_mongodb_database())

        return ProfileStores(
            users=MongoUserRepository(db),
            follows=MongoFollowStore(db),
            features=MongoFeatureStore(db),
            configs=MongoUserConfigStore(db),
            platform_admins=MongoPlatformAdminStore(db),
            profile_links=MongoProfileLinkStore(db),
        )

    elif store_type == "inmemory":
        logger.info("Using in-memory profile stores")
        return ProfileStores(
            users=InMemoryUserRepository(),
            follows=InMemoryFollowStore(),
            features=InMemoryFeatureStore(),
            configs=InMemoryUserConfigStore(),
            platform_admins=InMemoryPlatformAdminStore(),
            profile_links=InMemoryProfileLinkStore(),
        )

    else:
        raise ValueError(
            f"Invalid PROFILE_STORE value: {store_type}. " "Expected 'inmemory' or 'mongodb'"
        )


# Singleton instance
_stores: Optional[ProfileStores] = None


def get_stores() -> ProfileStores:
    """Get singleton stores instance.

    The first call loads .env before reading the configuration.
    """
    global _stores

    if _stores is None:
        load_environment()
        _stores = create_stores()

    return _stores


def reset_stores() -> None:
    """Reset the singleton (for testing purposes)."""
    global _stores
    _stores = None
