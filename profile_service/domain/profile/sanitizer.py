"""User record sanitization.

Public keys are always part of a sanitized user. Private keys are only
kept when the caller allows it (typically the user looking at their own
profile). The password hash is never sent to a client.
"""

from typing import Any, Dict, Tuple

from pydantic_core import PydanticSerializationError

from profile_service.domain.profile.models import UserRecord
from profile_service.domain.shared.errors import InvalidUserRecordError

PUBLIC_KEYS: Tuple[str, ...] = (
    "_id",
    "firstname",
    "lastname",
    "preferredEmail",
    "emails",
    "domains",
    "avatars",
    "currentAvatar",
    "job_title",
    "service",
    "building_location",
    "office_location",
    "main_phone",
    "description",
    "timestamps",
    "objectType",
)

PRIVATE_KEYS: Tuple[str, ...] = (
    "accounts",
    "login",
    "preferredDomainId",
    "metadata",
    "schemaVersion",
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, (list, dict, str)) and len(value) == 0)


def sanitize_user(user: UserRecord, strip_private: bool) -> Dict[str, Any]:
    """Plain, JSON-ready copy of the safe fields of a user record.

    Args:
        user: Stored user record (not modified)
        strip_private: Drop private keys as well

    Returns:
        New dict holding only the allowed, non-blank fields

    Raises:
        InvalidUserRecordError: If a field holds a value that is not JSON-ready
    """
    keys = PUBLIC_KEYS if strip_private else PUBLIC_KEYS + PRIVATE_KEYS
    try:
        document = user.model_dump(
            mode="json", by_alias=True, include=set(UserRecord.model_fields)
        )
    except PydanticSerializationError as e:
        raise InvalidUserRecordError(f"user record {user.id} cannot be serialized: {e}") from e
    return {key: document[key] for key in keys if not _is_blank(document.get(key))}
