"""Unit tests for profile domain models."""

from typing import Any, Dict

import pytest
from bson import ObjectId
from pydantic import ValidationError

from profile_service.domain.profile.models import (
    ConfigurationEntry,
    FeatureSet,
    FollowStats,
    ModuleConfiguration,
    UserConfigurations,
    UserRecord,
)
from profile_service.domain.shared.errors import (
    DomainError,
    InvalidUserRecordError,
    ProvisionedFieldsError,
    UserNotFoundError,
)
from profile_service.domain.shared.value_objects import UserId


class TestUserRecord:
    """Test UserRecord model."""

    def test_builds_from_stored_document(self, bar_document: Dict[str, Any]) -> None:
        user = UserRecord.model_validate(bar_document)

        assert user.id == bar_document["_id"]
        assert user.preferred_email == "bar@lng.net"
        assert user.preferred_domain_id == bar_document["preferredDomainId"]
        assert user.schema_version == 2
        assert user.login.disabled is False
        assert user.object_type == "user"

    def test_populates_by_field_name(self) -> None:
        user = UserRecord(id="u1", preferred_email="u1@lng.net")

        assert user.id == "u1"
        assert user.preferred_email == "u1@lng.net"

    def test_is_immutable(self, foo_user: UserRecord) -> None:
        with pytest.raises(ValidationError):
            foo_user.firstname = "Changed"  # type: ignore[misc]

    def test_user_id(self, foo_user: UserRecord) -> None:
        assert foo_user.user_id == UserId(value=foo_user.id)

    def test_to_document_keeps_aliases_and_extras(self, foo_document: Dict[str, Any]) -> None:
        foo_document["customField"] = "kept"
        user = UserRecord.model_validate(foo_document)

        document = user.to_document()

        assert document["_id"] == foo_document["_id"]
        assert document["preferredEmail"] == "foo@lng.net"
        assert document["customField"] == "kept"
        assert "job_title" not in document

    def test_provisioned_fields(self, bar_document: Dict[str, Any]) -> None:
        assert UserRecord.model_validate(bar_document).provisioned_fields() == []

        bar_document["metadata"] = {"profileProvisionedFields": ["firstname", "lastname"]}

        user = UserRecord.model_validate(bar_document)
        assert user.provisioned_fields() == ["firstname", "lastname"]


class TestCoerce:
    """Test UserRecord.coerce."""

    def test_returns_record_unchanged(self, foo_user: UserRecord) -> None:
        assert UserRecord.coerce(foo_user) is foo_user

    def test_builds_record_from_mapping(self, foo_document: Dict[str, Any]) -> None:
        assert UserRecord.coerce(foo_document).id == foo_document["_id"]

    def test_rejects_none(self) -> None:
        with pytest.raises(InvalidUserRecordError, match="required"):
            UserRecord.coerce(None)

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(InvalidUserRecordError, match="must be a mapping"):
            UserRecord.coerce(["not", "a", "user"])  # type: ignore[arg-type]

    def test_rejects_document_without_id(self) -> None:
        with pytest.raises(InvalidUserRecordError, match="malformed"):
            UserRecord.coerce({"firstname": "Nobody"})

    def test_rejects_badly_typed_field(self, foo_document: Dict[str, Any]) -> None:
        foo_document["emails"] = "foo@lng.net"

        with pytest.raises(InvalidUserRecordError):
            UserRecord.coerce(foo_document)


class TestFollowStats:
    """Test FollowStats model."""

    def test_counters_are_optional(self) -> None:
        stats = FollowStats(followers=3)

        assert stats.followers == 3
        assert stats.followings is None

    def test_rejects_negative_counter(self) -> None:
        with pytest.raises(ValidationError):
            FollowStats(followers=-1)


class TestFeatureSet:
    """Test FeatureSet model."""

    def test_module_lookup(self, sample_features: FeatureSet) -> None:
        module = sample_features.module("linagora.esn.calendar")

        assert module is not None
        assert module.find("enabled") is not None
        assert module.find("missing") is None
        assert sample_features.module("core") is None

    def test_ignores_storage_keys(self) -> None:
        features = FeatureSet.model_validate(
            {"_id": "abc", "domain_id": "d1", "modules": [], "__v": 0}
        )

        assert features.to_dict() == {"domain_id": "d1", "modules": []}

    def test_to_dict(self, sample_features: FeatureSet) -> None:
        data = sample_features.to_dict()

        assert data["modules"][0]["name"] == "linagora.esn.calendar"
        assert data["modules"][0]["configurations"] == [{"name": "enabled", "value": True}]

    def test_empty_module(self) -> None:
        assert ModuleConfiguration(name="core").configurations == []


class TestErrors:
    """Test domain exceptions."""

    def test_user_not_found(self) -> None:
        error = UserNotFoundError("u1")

        assert isinstance(error, DomainError)
        assert error.identifier == "u1"
        assert str(error) == "User not found: u1"

    def test_provisioned_fields(self) -> None:
        error = ProvisionedFieldsError(["firstname", "lastname"])

        assert error.fields == ["firstname", "lastname"]
        assert str(error) == (
            "These following fields are provisioned and not editable: firstname, lastname"
        )


class TestUserId:
    """Test UserId value object."""

    def test_strips_whitespace(self) -> None:
        assert str(UserId(value="  u1 ")) == "u1"

    def test_rejects_blank(self) -> None:
        with pytest.raises(ValidationError):
            UserId(value="   ")

    def test_hashable(self) -> None:
        assert {UserId.from_string("u1"): 1}[UserId(value="u1")] == 1


class TestDomainMembership:
    """Test typed domain memberships of UserRecord."""

    def test_domains_are_typed(self, foo_user: UserRecord) -> None:
        assert [domain.domain_id for domain in foo_user.domains] == [
            foo_user.preferred_domain_id
        ]

    def test_rejects_non_string_domain_id(self, foo_document: Dict[str, Any]) -> None:
        foo_document["domains"] = [{"domain_id": ObjectId()}]

        with pytest.raises(InvalidUserRecordError):
            UserRecord.coerce(foo_document)


class TestUserConfigurations:
    """Test UserConfigurations.merge."""

    def test_later_layers_override_entries(self) -> None:
        domain = [
            ModuleConfiguration(
                name="core",
                configurations=[
                    ConfigurationEntry(name="homePage", value="unifiedinbox"),
                    ConfigurationEntry(name="language", value="en"),
                ],
            )
        ]
        user = [
            ModuleConfiguration(
                name="core", configurations=[ConfigurationEntry(name="language", value="fr")]
            ),
            ModuleConfiguration(
                name="linagora.esn.calendar",
                configurations=[ConfigurationEntry(name="workingDays", value=[1, 2])],
            ),
        ]

        merged = UserConfigurations.merge(domain, user)

        core = next(module for module in merged.modules if module.name == "core")
        assert {entry.name: entry.value for entry in core.configurations} == {
            "homePage": "unifiedinbox",
            "language": "fr",
        }
        assert [module.name for module in merged.modules] == ["core", "linagora.esn.calendar"]

    def test_merge_of_nothing(self) -> None:
        assert UserConfigurations.merge().to_dict() == {"modules": []}
