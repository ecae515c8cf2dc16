"""
Domain exceptions.

Typed exceptions for explicit error handling.
"""

from __future__ import annotations

from typing import Sequence


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# PROFILE DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ProfileDomainError(DomainError):
    """Base exception for profile domain."""

    pass


class InvalidUserRecordError(ProfileDomainError):
    """
    User record cannot be sanitized.

    Raised when:
    - No user record is given
    - The stored document is missing its identifier
    - A field has an unexpected type

    This is a caller contract violation, never a transient failure,
    so the denormalizer lets it propagate.

    Example:
        >>> raise InvalidUserRecordError("user record is required")
    """

    pass


class UserNotFoundError(ProfileDomainError):
    """User was not found in the repository."""

    def __init__(self, identifier: str):
        """Initialize with user identifier.

        Args:
            identifier: User ID or email that was not found
        """
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")


class ProvisionedFieldsError(ProfileDomainError):
    """
    Profile update touches fields owned by a provisioning source.

    Example:
        >>> raise ProvisionedFieldsError(["firstname"])
    """

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(
            "These following fields are provisioned and not editable: "
            + ", ".join(self.fields)
        )
