"""Integration tests for the in-memory adapters wired into the denormalizer."""

import pytest

from profile_service.domain.profile.context import DenormalizeOptions
from profile_service.domain.profile.models import FeatureSet, UserRecord
from profile_service.domain.shared.value_objects import UserId
from profile_service.infrastructure.memory import (
    InMemoryFollowStore,
    InMemoryProfileLinkStore,
    InMemoryUserConfigStore,
    InMemoryUserRepository,
)
from profile_service.infrastructure.store_factory import ProfileStores

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
class TestInMemoryUserRepository:
    """Test InMemoryUserRepository."""

    async def test_save_and_find(self, foo_user: UserRecord) -> None:
        repo = InMemoryUserRepository()

        await repo.save(foo_user)

        assert repo.count() == 1
        assert await repo.find_by_id(UserId(value=foo_user.id)) == foo_user
        assert await repo.find_by_id(UserId(value="unknown")) is None

    async def test_save_replaces_existing(self, foo_user: UserRecord) -> None:
        repo = InMemoryUserRepository()
        await repo.save(foo_user)

        await repo.save(foo_user.model_copy(update={"firstname": "Renamed"}))

        assert repo.count() == 1
        found = await repo.find_by_id(UserId(value=foo_user.id))
        assert found is not None
        assert found.firstname == "Renamed"

    async def test_find_by_emails(self, foo_user: UserRecord, bar_user: UserRecord) -> None:
        repo = InMemoryUserRepository()
        await repo.save(foo_user)
        await repo.save(bar_user)

        found = await repo.find_by_emails(["Foo@Lng.net", "nobody@lng.net"])

        assert found == [foo_user]

    async def test_clear(self, foo_user: UserRecord) -> None:
        repo = InMemoryUserRepository()
        await repo.save(foo_user)

        repo.clear()

        assert repo.count() == 0


@pytest.mark.asyncio
class TestInMemoryFollowStore:
    """Test InMemoryFollowStore."""

    async def test_follow_relationships(self, foo_user: UserRecord, bar_user: UserRecord) -> None:
        store = InMemoryFollowStore()
        store.follow(foo_user, bar_user)

        assert await store.is_followed_by(bar_user, foo_user) is True
        assert await store.is_followed_by(foo_user, bar_user) is False

        stats = await store.get_stats(bar_user)
        assert (stats.followers, stats.followings) == (1, 0)

    async def test_unfollow(self, foo_user: UserRecord, bar_user: UserRecord) -> None:
        store = InMemoryFollowStore()
        store.follow(foo_user, bar_user)

        store.unfollow(foo_user, bar_user)

        assert await store.is_followed_by(bar_user, foo_user) is False


@pytest.mark.asyncio
class TestInMemoryUserConfigStore:
    """Test InMemoryUserConfigStore."""

    async def test_user_value_overrides_domain_value(self, foo_user: UserRecord) -> None:
        store = InMemoryUserConfigStore()
        store.set_for_domain("homePage", foo_user.preferred_domain_id or "", "unifiedinbox")

        assert await store.get("homePage", foo_user) == "unifiedinbox"

        store.set_for_user("homePage", foo_user, "calendar")

        assert await store.get("homePage", foo_user) == "calendar"

    async def test_missing_value(self, foo_user: UserRecord) -> None:
        assert await InMemoryUserConfigStore().get("homePage", foo_user) is None

    async def test_configurations_merge_scopes_and_modules(self, foo_user: UserRecord) -> None:
        store = InMemoryUserConfigStore()
        domain_id = foo_user.preferred_domain_id or ""
        store.set_for_domain("homePage", domain_id, "unifiedinbox")
        store.set_for_user("homePage", foo_user, "calendar")
        store.set_for_user("workingDays", foo_user, [1, 2], module="linagora.esn.calendar")

        configurations = await store.get_configurations(foo_user)

        assert configurations.to_dict() == {
            "modules": [
                {"name": "core", "configurations": [{"name": "homePage", "value": "calendar"}]},
                {
                    "name": "linagora.esn.calendar",
                    "configurations": [{"name": "workingDays", "value": [1, 2]}],
                },
            ]
        }
        assert await store.get("workingDays", foo_user) is None


@pytest.mark.asyncio
async def test_profile_link_store_records_views(
    foo_user: UserRecord, bar_user: UserRecord
) -> None:
    store = InMemoryProfileLinkStore()

    await store.record_profile_view(foo_user, bar_user)
    await store.record_profile_view(foo_user, bar_user)

    assert [(viewer, subject) for viewer, subject, _ in store.links] == [
        (foo_user.id, bar_user.id),
        (foo_user.id, bar_user.id),
    ]


@pytest.mark.asyncio
async def test_denormalize_with_in_memory_stores(
    stores: ProfileStores,
    foo_user: UserRecord,
    bar_user: UserRecord,
    sample_features: FeatureSet,
) -> None:
    stores.follows.follow(foo_user, bar_user)  # type: ignore[attr-defined]
    stores.follows.follow(bar_user, foo_user)  # type: ignore[attr-defined]
    stores.features.save(sample_features)  # type: ignore[attr-defined]
    stores.configs.set_for_domain(  # type: ignore[attr-defined]
        "homePage", sample_features.domain_id, "calendar"
    )

    profile = await stores.denormalizer().denormalize(
        bar_user, DenormalizeOptions(user=foo_user)
    )

    data = profile.to_dict()
    assert data["followers"] == 1
    assert data["followings"] == 1
    assert data["following"] is True
    assert data["disabled"] is False
    assert data["features"] == sample_features.to_dict()
    assert data["preferences"] == {"homePage": "calendar"}
    assert data["accounts"] == bar_user.accounts
    assert "password" not in data
