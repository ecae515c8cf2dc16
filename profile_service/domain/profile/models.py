"""
Profile domain models.

Stored user record plus the data the enrichment stores hand back
(follow statistics, domain features).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from profile_service.domain.shared.errors import InvalidUserRecordError
from profile_service.domain.shared.value_objects import UserId


class LoginState(BaseModel):
    """
    Login bookkeeping of an account.

    Attributes:
        disabled: Account is disabled (cannot log in)
        failures: Timestamps of failed login attempts
        success: Timestamp of last successful login
    """

    model_config = ConfigDict(frozen=True)

    disabled: Optional[bool] = None
    failures: List[datetime] = Field(default_factory=list)
    success: Optional[datetime] = None


class DomainMembership(BaseModel):
    """Domain a user belongs to (entry of ``UserRecord.domains``)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    domain_id: str = Field(..., min_length=1)


class UserRecord(BaseModel):
    """
    Stored user document.

    Field names follow the stored document (aliases), so records can be
    built straight from MongoDB documents or API payloads. Unknown keys
    are kept (``extra="allow"``) for round-tripping but are never part
    of a sanitized representation.

    Example:
        >>> user = UserRecord.model_validate(
        ...     {"_id": "5f1b2c3d4e5f6a7b8c9d0e1f", "firstname": "Bar"}
        ... )
        >>> user.id
        '5f1b2c3d4e5f6a7b8c9d0e1f'
        >>> user.login.disabled is None
        True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id", min_length=1, description="Document identifier")

    # Public profile
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    preferred_email: Optional[str] = Field(None, alias="preferredEmail")
    emails: List[str] = Field(default_factory=list)
    domains: List[DomainMembership] = Field(default_factory=list)
    avatars: List[str] = Field(default_factory=list)
    current_avatar: Optional[str] = Field(None, alias="currentAvatar")
    job_title: Optional[str] = None
    service: Optional[str] = None
    building_location: Optional[str] = None
    office_location: Optional[str] = None
    main_phone: Optional[str] = None
    description: Optional[str] = None
    timestamps: Dict[str, Any] = Field(default_factory=dict)
    object_type: str = Field("user", alias="objectType")

    # Private data
    accounts: List[Dict[str, Any]] = Field(default_factory=list)
    login: LoginState = Field(default_factory=LoginState)
    preferred_domain_id: Optional[str] = Field(None, alias="preferredDomainId")
    metadata: Dict[str, Any] = Field(default_factory=dict)
    schema_version: Optional[int] = Field(None, alias="schemaVersion")

    # Credentials
    password: Optional[str] = None

    @property
    def user_id(self) -> UserId:
        return UserId(value=self.id)

    @classmethod
    def coerce(cls, value: Union["UserRecord", Mapping[str, Any], None]) -> "UserRecord":
        """Accept a record or a raw document.

        Raises:
            InvalidUserRecordError: If value is missing or malformed
        """
        if isinstance(value, UserRecord):
            return value
        if value is None:
            raise InvalidUserRecordError("user record is required")
        if not isinstance(value, Mapping):
            raise InvalidUserRecordError(
                f"user record must be a mapping, got {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise InvalidUserRecordError(f"malformed user record: {e}") from e

    def to_document(self) -> Dict[str, Any]:
        """Full document for storage, extras included."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def provisioned_fields(self) -> List[str]:
        """Profile fields owned by a provisioning source (LDAP, SSO...)."""
        return list(self.metadata.get("profileProvisionedFields") or [])


class FollowStats(BaseModel):
    """
    Aggregate follow counters of a user.

    Either counter may be missing when the store has no value for it.
    """

    model_config = ConfigDict(frozen=True)

    followers: Optional[int] = Field(None, ge=0)
    followings: Optional[int] = Field(None, ge=0)


class ConfigurationEntry(BaseModel):
    """Single named configuration value."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Any = None


class ModuleConfiguration(BaseModel):
    """Configuration entries of one module (``core``, ``linagora.esn.calendar``...)."""

    model_config = ConfigDict(frozen=True)

    name: str
    configurations: List[ConfigurationEntry] = Field(default_factory=list)

    def find(self, name: str) -> Optional[ConfigurationEntry]:
        for entry in self.configurations:
            if entry.name == name:
                return entry
        return None


class FeatureSet(BaseModel):
    """
    Features enabled for a domain.

    Example:
        >>> features = FeatureSet(
        ...     domain_id="d1",
        ...     modules=[ModuleConfiguration(name="core", configurations=[])],
        ... )
        >>> features.module("core").name
        'core'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    domain_id: str
    modules: List[ModuleConfiguration] = Field(default_factory=list)

    def module(self, name: str) -> Optional[ModuleConfiguration]:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class UserConfigurations(BaseModel):
    """
    Configuration of a user, merged across scopes.

    Domain-scoped values apply unless the user overrides them.

    Example:
        >>> configurations = UserConfigurations(
        ...     modules=[
        ...         ModuleConfiguration(
        ...             name="core",
        ...             configurations=[ConfigurationEntry(name="homePage", value=True)],
        ...         )
        ...     ]
        ... )
        >>> configurations.to_dict()["modules"][0]["name"]
        'core'
    """

    model_config = ConfigDict(frozen=True)

    modules: List[ModuleConfiguration] = Field(default_factory=list)

    @classmethod
    def merge(cls, *layers: List[ModuleConfiguration]) -> UserConfigurations:
        """Merge module layers, later layers overriding earlier ones entry by entry."""
        merged: Dict[str, Dict[str, ConfigurationEntry]] = {}
        for layer in layers:
            for module in layer:
                entries = merged.setdefault(module.name, {})
                for entry in module.configurations:
                    entries[entry.name] = entry

        return cls(
            modules=[
                ModuleConfiguration(name=name, configurations=list(entries.values()))
                for name, entries in merged.items()
            ]
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
