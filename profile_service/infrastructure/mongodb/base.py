"""Base MongoDB adapter with reusable patterns.

Provides common functionality for all MongoDB adapters:
- Collection handle from an injected database
- Error handling (logged and re-raised)

Callers decide whether a failure is fatal: the denormalizer degrades,
repositories propagate.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoBaseAdapter(ABC):
    """
    Abstract base class for MongoDB adapters.

    Subclasses set COLLECTION_NAME.

    Example:
        class MongoFeatureStore(MongoBaseAdapter):
            COLLECTION_NAME = "features"
    """

    COLLECTION_NAME: str = ""

    def __init__(self, db: AsyncIOMotorDatabase[Any]):
        """
        Initialize adapter with MongoDB database.

        Args:
            db: Motor AsyncIOMotorDatabase instance
        """
        self.db = db
        self._collection = db[self.COLLECTION_NAME]

    @property
    def collection(self) -> AsyncIOMotorCollection[Dict[str, Any]]:
        return self._collection

    async def _find_one(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find single document with error handling.

        Raises:
            Exception: If MongoDB operation fails (logged and re-raised)
        """
        try:
            document: Optional[Dict[str, Any]] = await self._collection.find_one(filter_dict)
            return document
        except Exception as e:
            logger.error(
                f"Error in find_one: collection={self.COLLECTION_NAME}, "
                f"filter={filter_dict}, error={e}"
            )
            raise

    async def _find_many(self, filter_dict: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Find multiple documents with error handling.

        Raises:
            Exception: If MongoDB operation fails (logged and re-raised)
        """
        try:
            cursor = self._collection.find(filter_dict)
            documents: List[Dict[str, Any]] = await cursor.to_list(length=None)
            return documents
        except Exception as e:
            logger.error(
                f"Error in find_many: collection={self.COLLECTION_NAME}, "
                f"filter={filter_dict}, error={e}"
            )
            raise

    async def _count(self, filter_dict: Dict[str, Any], limit: Optional[int] = None) -> int:
        """
        Count documents with error handling.

        Raises:
            Exception: If MongoDB operation fails (logged and re-raised)
        """
        try:
            if limit is not None:
                count = await self._collection.count_documents(filter_dict, limit=limit)
            else:
                count = await self._collection.count_documents(filter_dict)
            return int(count)
        except Exception as e:
            logger.error(
                f"Error in count: collection={self.COLLECTION_NAME}, "
                f"filter={filter_dict}, error={e}"
            )
            raise

    async def _insert_one(self, document: Dict[str, Any]) -> None:
        """
        Insert single document with error handling.

        Raises:
            Exception: If MongoDB operation fails (logged and re-raised)
        """
        try:
            await self._collection.insert_one(document)
        except Exception as e:
            logger.error(f"Error in insert_one: collection={self.COLLECTION_NAME}, error={e}")
            raise
