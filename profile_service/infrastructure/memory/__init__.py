"""In-memory store adapters (default backend, used by tests)."""

from profile_service.infrastructure.memory.stores import (
    InMemoryFeatureStore,
    InMemoryFollowStore,
    InMemoryPlatformAdminStore,
    InMemoryProfileLinkStore,
    InMemoryUserConfigStore,
)
from profile_service.infrastructure.memory.user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryFeatureStore",
    "InMemoryFollowStore",
    "InMemoryPlatformAdminStore",
    "InMemoryProfileLinkStore",
    "InMemoryUserConfigStore",
    "InMemoryUserRepository",
]
