"""MongoDB User Repository implementation."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId

from profile_service.domain.profile.models import UserRecord
from profile_service.domain.profile.ports import IUserRepository
from profile_service.domain.shared.value_objects import UserId
from profile_service.infrastructure.mongodb.base import MongoBaseAdapter

logger = logging.getLogger(__name__)


class MongoUserRepository(MongoBaseAdapter, IUserRepository):
    """MongoDB implementation of User repository.

    Documents are stored as-is (document keys, ``_id`` as string), so
    fields this service does not know about survive a save.

    Examples:
        >>> repo = MongoUserRepository(db)
        >>> await repo.save(user)
        >>> found = await repo.find_by_id(UserId(value=user.id))
    """

    COLLECTION_NAME = "users"

    def __init__(self, db: Any) -> None:
        super().__init__(db)
        self._indexes_created = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_created:
            return

        await self.collection.create_index("emails", name="idx_emails")
        self._indexes_created = True

    async def save(self, user: UserRecord) -> None:
        """Save or update user (upsert by _id)."""
        await self._ensure_indexes()

        document = user.to_document()
        try:
            await self.collection.replace_one({"_id": user.id}, document, upsert=True)
        except Exception as e:
            logger.error(f"Error saving user: user_id={user.id}, error={e}")
            raise

    async def find_by_id(self, user_id: UserId) -> Optional[UserRecord]:
        document = await self._find_one({"_id": str(user_id)})

        if not document:
            return None

        return self._document_to_record(document)

    async def find_by_emails(self, emails: Sequence[str]) -> List[UserRecord]:
        """Find users by email.

        Emails are stored lower-cased, lookups are lower-cased as well.
        """
        if not emails:
            return []

        documents = await self._find_many({"emails": {"$in": [e.lower() for e in emails]}})
        return [self._document_to_record(doc) for doc in documents]

    def _document_to_record(self, document: Dict[str, Any]) -> UserRecord:
        return UserRecord.coerce(_stringify_object_ids(document))


def _stringify_object_ids(value: Any) -> Any:
    """Copy of a stored value with every ObjectId, nested ones included, as hex string."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _stringify_object_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_object_ids(item) for item in value]
    return value
