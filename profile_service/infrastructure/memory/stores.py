"""In-memory enrichment stores."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

from profile_service.domain.profile.models import (
    ConfigurationEntry,
    FeatureSet,
    FollowStats,
    ModuleConfiguration,
    UserConfigurations,
    UserRecord,
)

CORE_MODULE = "core"


class InMemoryFollowStore:
    """Follow relationships kept as (follower_id, followed_id) pairs.

    Examples:
        >>> store = InMemoryFollowStore()
        >>> store.follow(foo, bar)
        >>> await store.is_followed_by(bar, foo)
        True
    """

    def __init__(self) -> None:
        self._links: Set[Tuple[str, str]] = set()

    def follow(self, follower: UserRecord, followed: UserRecord) -> None:
        self._links.add((follower.id, followed.id))

    def unfollow(self, follower: UserRecord, followed: UserRecord) -> None:
        self._links.discard((follower.id, followed.id))

    async def get_stats(self, user: UserRecord) -> FollowStats:
        followers = sum(1 for _, followed in self._links if followed == user.id)
        followings = sum(1 for follower, _ in self._links if follower == user.id)
        return FollowStats(followers=followers, followings=followings)

    async def is_followed_by(self, subject: UserRecord, viewer: UserRecord) -> bool:
        return (viewer.id, subject.id) in self._links

    def clear(self) -> None:
        self._links.clear()


class InMemoryFeatureStore:
    """Feature sets indexed by domain."""

    def __init__(self) -> None:
        self._features: Dict[str, FeatureSet] = {}

    def save(self, features: FeatureSet) -> None:
        self._features[features.domain_id] = features

    async def find_features_for_domain(self, domain_id: str) -> Optional[FeatureSet]:
        return self._features.get(domain_id)

    def clear(self) -> None:
        self._features.clear()


class InMemoryUserConfigStore:
    """Configuration values at user scope and domain scope.

    A user-scoped value overrides the value of the user's preferred
    domain. ``get`` reads the ``core`` module.
    """

    def __init__(self) -> None:
        self._user_values: Dict[str, Dict[Tuple[str, str], Any]] = {}
        self._domain_values: Dict[str, Dict[Tuple[str, str], Any]] = {}

    def set_for_user(
        self, name: str, user: UserRecord, value: Any, module: str = CORE_MODULE
    ) -> None:
        self._user_values.setdefault(user.id, {})[(module, name)] = value

    def set_for_domain(
        self, name: str, domain_id: str, value: Any, module: str = CORE_MODULE
    ) -> None:
        self._domain_values.setdefault(domain_id, {})[(module, name)] = value

    async def get(self, name: str, user: UserRecord) -> Any:
        key = (CORE_MODULE, name)
        user_values = self._user_values.get(user.id, {})
        if key in user_values:
            return user_values[key]
        if user.preferred_domain_id:
            return self._domain_values.get(user.preferred_domain_id, {}).get(key)
        return None

    async def get_configurations(self, user: UserRecord) -> UserConfigurations:
        layers = []
        if user.preferred_domain_id:
            layers.append(_modules(self._domain_values.get(user.preferred_domain_id, {})))
        layers.append(_modules(self._user_values.get(user.id, {})))
        return UserConfigurations.merge(*layers)

    def clear(self) -> None:
        self._user_values.clear()
        self._domain_values.clear()


def _modules(values: Dict[Tuple[str, str], Any]) -> List[ModuleConfiguration]:
    modules: Dict[str, List[ConfigurationEntry]] = {}
    for (module, name), value in values.items():
        modules.setdefault(module, []).append(ConfigurationEntry(name=name, value=value))
    return [
        ModuleConfiguration(name=name, configurations=entries)
        for name, entries in modules.items()
    ]


class InMemoryPlatformAdminStore:
    """Set of platform administrator user ids."""

    def __init__(self) -> None:
        self._admins: Set[str] = set()

    def add(self, user_id: str) -> None:
        self._admins.add(user_id)

    def remove(self, user_id: str) -> None:
        self._admins.discard(user_id)

    async def is_platform_admin(self, user_id: str) -> bool:
        return user_id in self._admins


class InMemoryProfileLinkStore:
    """Profile-view links kept as (viewer_id, subject_id, viewed_at) in order."""

    def __init__(self) -> None:
        self.links: List[Tuple[str, str, datetime]] = []

    async def record_profile_view(self, viewer: UserRecord, subject: UserRecord) -> None:
        self.links.append((viewer.id, subject.id, datetime.now(timezone.utc)))

    def clear(self) -> None:
        self.links.clear()
