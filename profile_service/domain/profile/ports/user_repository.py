"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from profile_service.domain.profile.models import UserRecord
from profile_service.domain.shared.value_objects import UserId


class IUserRepository(ABC):
    """Repository interface for stored user records.

    Examples:
        >>> # Implementation example (not actual usage)
        >>> class MongoUserRepository(IUserRepository):
        ...     async def save(self, user: UserRecord) -> None:
        ...         # Save to MongoDB
        ...         pass
    """

    @abstractmethod
    async def save(self, user: UserRecord) -> None:
        """Save user (create or update).

        Args:
            user: User record to persist

        Note:
            Implementation should be idempotent (upsert by _id).
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[UserRecord]:
        """Find user by identifier.

        Args:
            user_id: User identifier

        Returns:
            User record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_emails(self, emails: Sequence[str]) -> List[UserRecord]:
        """Find users owning any of the given emails.

        Args:
            emails: Email addresses (matched case-insensitively)

        Returns:
            Matching user records, empty list if none
        """
        pass
