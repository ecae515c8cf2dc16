"""
MongoDB implementations of the enrichment stores.

Storage design:
- resourcelinks: follow and profile-view links
  {type: "follow" | "profile", source: {id, objectType}, target: {id, objectType}}
- features: one document per domain {domain_id, modules: [...]}
- configurations: scoped documents
  {scope: "user", user_id, modules: [...]} or
  {scope: "domain", domain_id, modules: [...]}
- platformadmins: {target: {id, objectType}}
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from profile_service.domain.profile.models import (
    FeatureSet,
    FollowStats,
    ModuleConfiguration,
    UserConfigurations,
    UserRecord,
)
from profile_service.infrastructure.mongodb.base import MongoBaseAdapter

FOLLOW_LINK_TYPE = "follow"
PROFILE_LINK_TYPE = "profile"
USER_OBJECT_TYPE = "user"
CORE_MODULE = "core"


def _user_filter(field: str, user_id: str) -> Dict[str, str]:
    return {f"{field}.id": user_id, f"{field}.objectType": USER_OBJECT_TYPE}


class MongoFollowStore(MongoBaseAdapter):
    """Follow relationships stored as resource links."""

    COLLECTION_NAME = "resourcelinks"

    def __init__(self, db: Any) -> None:
        super().__init__(db)
        self._indexes_created = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_created:
            return

        await self.collection.create_index(
            [("type", 1), ("source.id", 1), ("target.id", 1)],
            name="idx_link_source_target",
        )
        await self.collection.create_index(
            [("type", 1), ("target.id", 1)],
            name="idx_link_target",
        )
        self._indexes_created = True

    async def get_stats(self, user: UserRecord) -> FollowStats:
        await self._ensure_indexes()

        followers = await self._count({"type": FOLLOW_LINK_TYPE, **_user_filter("target", user.id)})
        followings = await self._count({"type": FOLLOW_LINK_TYPE, **_user_filter("source", user.id)})
        return FollowStats(followers=followers, followings=followings)

    async def is_followed_by(self, subject: UserRecord, viewer: UserRecord) -> bool:
        await self._ensure_indexes()

        count = await self._count(
            {
                "type": FOLLOW_LINK_TYPE,
                **_user_filter("source", viewer.id),
                **_user_filter("target", subject.id),
            },
            limit=1,
        )
        return count > 0


class MongoFeatureStore(MongoBaseAdapter):
    """Domain features, one document per domain."""

    COLLECTION_NAME = "features"

    async def find_features_for_domain(self, domain_id: str) -> Optional[FeatureSet]:
        document = await self._find_one({"domain_id": domain_id})
        if not document:
            return None

        return FeatureSet.model_validate(document)


class MongoUserConfigStore(MongoBaseAdapter):
    """Scoped configuration documents.

    Lookup order: user scope, then the user's preferred domain. Values
    are read from the ``core`` module unless another module is given.
    """

    COLLECTION_NAME = "configurations"

    def __init__(self, db: Any, module: str = CORE_MODULE) -> None:
        super().__init__(db)
        self.module = module

    async def get(self, name: str, user: UserRecord) -> Any:
        for scope in self._scopes(user):
            document = await self._find_one(scope)
            found, value = self._lookup(document, name)
            if found:
                return value
        return None

    async def get_configurations(self, user: UserRecord) -> UserConfigurations:
        """Modules of the preferred domain overridden by the user's own."""
        layers = []
        for scope in reversed(self._scopes(user)):
            document = await self._find_one(scope)
            layers.append(self._modules(document))
        return UserConfigurations.merge(*layers)

    def _scopes(self, user: UserRecord) -> List[Dict[str, Any]]:
        scopes: List[Dict[str, Any]] = [{"scope": "user", "user_id": user.id}]
        if user.preferred_domain_id:
            scopes.append({"scope": "domain", "domain_id": user.preferred_domain_id})
        return scopes

    @staticmethod
    def _modules(document: Optional[Dict[str, Any]]) -> List[ModuleConfiguration]:
        if not document:
            return []
        return [ModuleConfiguration.model_validate(raw) for raw in document.get("modules", [])]

    def _lookup(self, document: Optional[Dict[str, Any]], name: str) -> Tuple[bool, Any]:
        for module in self._modules(document):
            if module.name != self.module:
                continue
            entry = module.find(name)
            if entry is not None:
                return True, entry.value
        return False, None


class MongoPlatformAdminStore(MongoBaseAdapter):
    """Platform administrators registry."""

    COLLECTION_NAME = "platformadmins"

    async def is_platform_admin(self, user_id: str) -> bool:
        count = await self._count(_user_filter("target", user_id), limit=1)
        return count > 0


class MongoProfileLinkStore(MongoBaseAdapter):
    """Profile-view links, stored next to follow links."""

    COLLECTION_NAME = "resourcelinks"

    async def record_profile_view(self, viewer: UserRecord, subject: UserRecord) -> None:
        await self._insert_one(
            {
                "type": PROFILE_LINK_TYPE,
                "source": {"id": viewer.id, "objectType": USER_OBJECT_TYPE},
                "target": {"id": subject.id, "objectType": USER_OBJECT_TYPE},
                "timestamps": {"creation": datetime.now(timezone.utc)},
            }
        )
