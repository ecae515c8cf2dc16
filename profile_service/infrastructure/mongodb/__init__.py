"""MongoDB (motor) adapters."""

from profile_service.infrastructure.mongodb.stores import (
    MongoFeatureStore,
    MongoFollowStore,
    MongoPlatformAdminStore,
    MongoProfileLinkStore,
    MongoUserConfigStore,
)
from profile_service.infrastructure.mongodb.user_repository import MongoUserRepository

__all__ = [
    "MongoFeatureStore",
    "MongoFollowStore",
    "MongoPlatformAdminStore",
    "MongoProfileLinkStore",
    "MongoUserConfigStore",
    "MongoUserRepository",
]
