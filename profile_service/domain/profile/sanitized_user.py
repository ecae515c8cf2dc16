"""Sanitized user representation sent to API clients."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from profile_service.domain.profile.models import FeatureSet, UserConfigurations


@dataclass
class SanitizedUser:
    """Denormalized user.

    Built by the denormalizer from a stored record and owned by a single
    request. Optional enrichments that were not obtained are left as None
    and omitted from ``to_dict()``.

    Attributes:
        fields: Sanitized copy of the stored record (document keys)
        followers: Number of users following this user
        followings: Number of users this user follows
        following: Whether the viewer follows this user
        disabled: Account is disabled
        features: Features of the user's preferred domain
        preferences: Loaded user preferences (``homePage``...)
        is_platform_admin: Set for the logged-in user's own profile
        configurations: Merged configuration, set for the logged-in user's own profile
    """

    fields: Dict[str, Any]
    followers: int = 0
    followings: int = 0
    following: Optional[bool] = None
    disabled: bool = False
    features: Optional[FeatureSet] = None
    preferences: Dict[str, Any] = field(default_factory=dict)
    is_platform_admin: Optional[bool] = None
    configurations: Optional[UserConfigurations] = None

    @property
    def id(self) -> Optional[str]:
        return self.fields.get("_id")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        result = dict(self.fields)
        result["followers"] = self.followers
        result["followings"] = self.followings
        if self.following is not None:
            result["following"] = self.following
        result["disabled"] = self.disabled
        if self.features is not None:
            result["features"] = self.features.to_dict()
        result["preferences"] = dict(self.preferences)
        if self.is_platform_admin is not None:
            result["isPlatformAdmin"] = self.is_platform_admin
        if self.configurations is not None:
            result["configurations"] = self.configurations.to_dict()
        return result
