"""
Shared fixtures.

Two users of the same domain (foo and bar), store mocks for unit tests
of the denormalizer, and in-memory stores for use case tests.
"""

from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

from profile_service.application.profile.denormalizer import ProfileDenormalizer
from profile_service.domain.profile.models import (
    ConfigurationEntry,
    FeatureSet,
    FollowStats,
    ModuleConfiguration,
    UserRecord,
)
from profile_service.infrastructure.store_factory import ProfileStores, create_stores

DOMAIN_ID = "5f1b2c3d4e5f6a7b8c9d0e00"
FOO_ID = "5f1b2c3d4e5f6a7b8c9d0e01"
BAR_ID = "5f1b2c3d4e5f6a7b8c9d0e02"


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def foo_document() -> Dict[str, Any]:
    """Stored document of foo (plain user)."""
    return {
        "_id": FOO_ID,
        "firstname": "Foo",
        "lastname": "Lng",
        "preferredEmail": "foo@lng.net",
        "emails": ["foo@lng.net"],
        "domains": [{"domain_id": DOMAIN_ID}],
        "password": "$2a$05$bJiHm9nnRCVVPDu6ZLbhoe",
        "accounts": [{"type": "email", "hosted": True, "emails": ["foo@lng.net"]}],
        "login": {"disabled": False, "failures": []},
        "preferredDomainId": DOMAIN_ID,
        "schemaVersion": 2,
    }


@pytest.fixture
def bar_document() -> Dict[str, Any]:
    """Stored document of bar (complete profile, provisioned metadata)."""
    return {
        "_id": BAR_ID,
        "firstname": "Bar",
        "lastname": "Lng",
        "preferredEmail": "bar@lng.net",
        "emails": ["bar@lng.net"],
        "domains": [{"domain_id": DOMAIN_ID}],
        "job_title": "Engineer",
        "service": "IT",
        "building_location": "Tunis",
        "office_location": "France",
        "main_phone": "123456789",
        "description": "This is my description",
        "password": "$2a$05$spm9WF0kAzZwc5jmuVNuYO",
        "accounts": [{"type": "email", "hosted": True, "emails": ["bar@lng.net"]}],
        "login": {"disabled": False, "failures": []},
        "preferredDomainId": DOMAIN_ID,
        "metadata": {"source": "ldap"},
        "schemaVersion": 2,
    }


@pytest.fixture
def foo_user(foo_document: Dict[str, Any]) -> UserRecord:
    return UserRecord.model_validate(foo_document)


@pytest.fixture
def bar_user(bar_document: Dict[str, Any]) -> UserRecord:
    return UserRecord.model_validate(bar_document)


@pytest.fixture
def sample_features() -> FeatureSet:
    """Features of the test domain."""
    return FeatureSet(
        domain_id=DOMAIN_ID,
        modules=[
            ModuleConfiguration(
                name="linagora.esn.calendar",
                configurations=[ConfigurationEntry(name="enabled", value=True)],
            )
        ],
    )


# ═══════════════════════════════════════════════════════════
# STORE MOCKS
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def mock_follow_store() -> AsyncMock:
    """Follow store without any relationship."""
    store = AsyncMock()
    store.get_stats.return_value = FollowStats(followers=0, followings=0)
    store.is_followed_by.return_value = False
    return store


@pytest.fixture
def mock_feature_store() -> AsyncMock:
    store = AsyncMock()
    store.find_features_for_domain.return_value = None
    return store


@pytest.fixture
def mock_config_store() -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = None
    return store


@pytest.fixture
def denormalizer(
    mock_follow_store: AsyncMock,
    mock_feature_store: AsyncMock,
    mock_config_store: AsyncMock,
) -> ProfileDenormalizer:
    """Denormalizer wired to mocked stores."""
    return ProfileDenormalizer(mock_follow_store, mock_feature_store, mock_config_store)


# ═══════════════════════════════════════════════════════════
# IN-MEMORY STORES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def stores() -> ProfileStores:
    """Fresh in-memory stores."""
    return create_stores("inmemory")
