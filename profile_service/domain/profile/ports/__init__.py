"""Ports of the profile domain (implemented in infrastructure)."""

from profile_service.domain.profile.ports.stores import (
    IFeatureStore,
    IFollowStore,
    IPlatformAdminStore,
    IProfileLinkStore,
    IUserConfigStore,
)
from profile_service.domain.profile.ports.user_repository import IUserRepository

__all__ = [
    "IFeatureStore",
    "IFollowStore",
    "IPlatformAdminStore",
    "IProfileLinkStore",
    "IUserConfigStore",
    "IUserRepository",
]
