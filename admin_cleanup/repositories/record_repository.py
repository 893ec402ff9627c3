"""
Repository over one MongoDB collection.

Exposes the three calls a cleanup run needs (delete_many, find, count),
each taking a typed Filter. Driver errors surface as StoreOperationFailure.
"""

from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from admin_cleanup.core.errors import StoreOperationFailure
from admin_cleanup.core.logger import logger
from admin_cleanup.models.filters import Filter


class RecordRepository:
    """
    Usage:
        users = RecordRepository(connection.collection("users"))
        deleted = await users.delete_many(Equals(field="role", value="vendor"))
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection
        self.collection_name = collection.name

    async def delete_many(self, filter: Filter, correlation_id: Optional[str] = None) -> int:
        """
        Delete every document matching filter.

        Returns:
            int: Number of deleted documents
        """
        query = filter.to_query()
        try:
            result = await self.collection.delete_many(query)
        except PyMongoError as e:
            self._log_failure("delete_many", query, e, correlation_id)
            raise StoreOperationFailure("delete_many", self.collection_name, e) from e

        logger.debug(
            f"Deleted {result.deleted_count} documents from {self.collection_name}",
            correlation_id=correlation_id,
            metadata={
                "collection": self.collection_name,
                "query": query,
                "count": result.deleted_count
            }
        )
        return result.deleted_count

    async def find(
        self,
        filter: Filter,
        projection: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Find all documents matching filter.

        Returns:
            List[Dict]: Matching documents
        """
        query = filter.to_query()
        try:
            cursor = self.collection.find(query, projection)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            self._log_failure("find", query, e, correlation_id)
            raise StoreOperationFailure("find", self.collection_name, e) from e

        logger.debug(
            f"Found {len(documents)} documents in {self.collection_name}",
            correlation_id=correlation_id,
            metadata={
                "collection": self.collection_name,
                "query": query,
                "count": len(documents)
            }
        )
        return documents

    async def count(self, filter: Filter, correlation_id: Optional[str] = None) -> int:
        """Count documents matching filter"""
        query = filter.to_query()
        try:
            count = await self.collection.count_documents(query)
        except PyMongoError as e:
            self._log_failure("count", query, e, correlation_id)
            raise StoreOperationFailure("count", self.collection_name, e) from e

        logger.debug(
            f"Counted {count} documents in {self.collection_name}",
            correlation_id=correlation_id,
            metadata={"collection": self.collection_name, "count": count}
        )
        return count

    def _log_failure(self, operation: str, query: Dict[str, Any], error: Exception,
                     correlation_id: Optional[str]):
        logger.error(
            f"Error during {operation} on {self.collection_name}",
            correlation_id=correlation_id,
            error=error,
            metadata={
                "event": "store_operation_failed",
                "operation": operation,
                "collection": self.collection_name,
                "query": query
            }
        )
