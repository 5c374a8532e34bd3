from typing import Any

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from storefront_admin.core.core import Service
from storefront_admin.core.modules.records.models import SortSpec, Table
from storefront_admin.errors import DuplicateRecordError, FetchError, RemoteOperationError

logger = structlog.get_logger(__name__)


class RecordService(Service):
    """Generic table access: the only place that talks to MongoDB.

    Every driver exception is logged and re-raised as a RemoteOperationError
    subclass, so callers never see pymongo types.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)

    def _collection(self, table: Table) -> AsyncCollection[dict[str, Any]]:
        return self.database.get_collection(table.value)

    async def select(
        self,
        table: Table,
        filter: dict[str, Any] | None = None,
        fields: list[str] | None = None,
        sort: SortSpec | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch records, optionally projected to `fields` and sorted."""
        projection = dict.fromkeys(fields, 1) if fields is not None else None
        try:
            cursor = self._collection(table).find(filter or {}, projection)
            if sort:
                cursor = cursor.sort(sort)
            docs = await cursor.to_list()
        except PyMongoError as e:
            logger.warning("select_failed", table=table, filter=filter, error=str(e))
            raise FetchError(f"Failed to load {table}") from e
        logger.debug("select", table=table, filter=filter, fields=fields, returned=len(docs))
        return docs

    async def select_one(self, table: Table, filter: dict[str, Any]) -> dict[str, Any] | None:
        """Fetch a single record or None."""
        try:
            return await self._collection(table).find_one(filter)
        except PyMongoError as e:
            logger.warning("select_one_failed", table=table, filter=filter, error=str(e))
            raise FetchError(f"Failed to load {table}") from e

    async def insert(self, table: Table, document: dict[str, Any]) -> dict[str, Any]:
        """Insert a record and return it as stored."""
        try:
            res = await self._collection(table).insert_one(document)
        except DuplicateKeyError as e:
            logger.warning("insert_duplicate", table=table, key=e.details.get("keyValue") if e.details else None)
            raise DuplicateRecordError(f"Duplicate record in {table}") from e
        except PyMongoError as e:
            logger.warning("insert_failed", table=table, error=str(e))
            raise RemoteOperationError(f"Failed to save record in {table}") from e
        logger.debug("insert", table=table, id=res.inserted_id)
        return document

    async def update(self, table: Table, filter: dict[str, Any], patch: dict[str, Any]) -> int:
        """Apply `patch` to matching records and return the matched count."""
        try:
            res = await self._collection(table).update_many(filter, {"$set": patch})
        except DuplicateKeyError as e:
            logger.warning("update_duplicate", table=table, filter=filter)
            raise DuplicateRecordError(f"Duplicate record in {table}") from e
        except PyMongoError as e:
            logger.warning("update_failed", table=table, filter=filter, error=str(e))
            raise RemoteOperationError(f"Failed to update record in {table}") from e
        logger.debug("update", table=table, filter=filter, matched=res.matched_count)
        return res.matched_count

    async def delete(self, table: Table, filter: dict[str, Any]) -> int:
        """Delete matching records and return the deleted count."""
        try:
            res = await self._collection(table).delete_many(filter)
        except PyMongoError as e:
            logger.warning("delete_failed", table=table, filter=filter, error=str(e))
            raise RemoteOperationError(f"Failed to delete record in {table}") from e
        logger.debug("delete", table=table, filter=filter, deleted=res.deleted_count)
        return res.deleted_count

    async def ensure_index(
        self, table: Table, keys: SortSpec, unique: bool = False, partial_filter: dict[str, Any] | None = None
    ) -> None:
        """Create an index if it does not exist yet, optionally limited to documents matching `partial_filter`."""
        options: dict[str, Any] = {"unique": unique}
        if partial_filter is not None:
            options["partialFilterExpression"] = partial_filter
        try:
            name = await self._collection(table).create_index(keys, **options)
        except PyMongoError as e:
            logger.warning("ensure_index_failed", table=table, keys=keys, error=str(e))
            raise RemoteOperationError(f"Failed to create index on {table}") from e
        logger.debug("ensure_index", table=table, index=name, unique=unique)
