"""In-memory User Repository for testing."""

from typing import Dict, List, Optional, Sequence

from profile_service.domain.profile.models import UserRecord
from profile_service.domain.profile.ports import IUserRepository
from profile_service.domain.shared.value_objects import UserId


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository for testing.

    Stores records in memory using their identifier as key.

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> await repo.save(UserRecord.model_validate({"_id": "u1"}))
        >>> found = await repo.find_by_id(UserId(value="u1"))
    """

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}

    async def save(self, user: UserRecord) -> None:
        self._users[user.id] = user

    async def find_by_id(self, user_id: UserId) -> Optional[UserRecord]:
        return self._users.get(str(user_id))

    async def find_by_emails(self, emails: Sequence[str]) -> List[UserRecord]:
        wanted = {email.lower() for email in emails}
        return [
            user
            for user in self._users.values()
            if any(email.lower() in wanted for email in user.emails)
        ]

    def clear(self) -> None:
        """Clear all users from memory.

        Useful for test cleanup.
        """
        self._users.clear()

    def count(self) -> int:
        return len(self._users)
