"""Shared pytest fixtures."""

import copy
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from storefront_admin.core.modules.product.service import ProductService
from storefront_admin.core.modules.records.models import SortSpec, Table
from storefront_admin.core.modules.story_ring.service import StoryRingService
from storefront_admin.errors import DuplicateRecordError, FetchError, RemoteOperationError


class InMemoryRecords:
    """Stand-in for RecordService keeping tables in dicts.

    Unique fields emulate unique indexes; the fail_* flags emulate a database
    that rejects the next call of that kind.
    """

    def __init__(self, unique: dict[Table, str] | None = None) -> None:
        self.tables: dict[Table, list[dict[str, Any]]] = {}
        self.unique = unique or {}
        self.fail_select = False
        self.fail_insert = False
        self.select_calls: list[tuple[Table, list[str] | None]] = []

    def seed(self, table: Table, docs: list[dict[str, Any]]) -> None:
        self.tables.setdefault(table, []).extend(copy.deepcopy(docs))

    def _matches(self, doc: dict[str, Any], filter: dict[str, Any] | None) -> bool:
        return all(doc.get(key) == value for key, value in (filter or {}).items())

    async def select(
        self,
        table: Table,
        filter: dict[str, Any] | None = None,
        fields: list[str] | None = None,
        sort: SortSpec | None = None,
    ) -> list[dict[str, Any]]:
        self.select_calls.append((table, fields))
        if self.fail_select:
            self.fail_select = False
            raise FetchError(f"Failed to load {table}")
        docs = [copy.deepcopy(doc) for doc in self.tables.get(table, []) if self._matches(doc, filter)]
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d, f=field: d.get(f) or 0, reverse=direction < 0)
        if fields is not None:
            docs = [{k: v for k, v in doc.items() if k == "_id" or k in fields} for doc in docs]
        return docs

    async def select_one(self, table: Table, filter: dict[str, Any]) -> dict[str, Any] | None:
        docs = await self.select(table, filter)
        return docs[0] if docs else None

    async def insert(self, table: Table, document: dict[str, Any]) -> dict[str, Any]:
        if self.fail_insert:
            self.fail_insert = False
            raise RemoteOperationError(f"Failed to save record in {table}")
        unique_field = self.unique.get(table)
        rows = self.tables.setdefault(table, [])
        if unique_field and any(row.get(unique_field) == document.get(unique_field) for row in rows):
            raise DuplicateRecordError(f"Duplicate record in {table}")
        rows.append(copy.deepcopy(document))
        return document

    async def update(self, table: Table, filter: dict[str, Any], patch: dict[str, Any]) -> int:
        matched = [doc for doc in self.tables.get(table, []) if self._matches(doc, filter)]
        for doc in matched:
            doc.update(copy.deepcopy(patch))
        return len(matched)

    async def delete(self, table: Table, filter: dict[str, Any]) -> int:
        rows = self.tables.get(table, [])
        kept = [doc for doc in rows if not self._matches(doc, filter)]
        self.tables[table] = kept
        return len(rows) - len(kept)

    async def ensure_index(
        self, table: Table, keys: SortSpec, unique: bool = False, partial_filter: dict[str, Any] | None = None
    ) -> None:
        if unique:
            self.unique[table] = keys[0][0]


def fake_core(records: InMemoryRecords) -> Any:
    return SimpleNamespace(services=SimpleNamespace(records=records))


@pytest.fixture
def records():
    """Empty in-memory tables with a unique display_id on products."""
    return InMemoryRecords(unique={Table.PRODUCTS: "display_id"})


@pytest.fixture
def product_service(records):
    service = ProductService(MagicMock())
    service.set_core(fake_core(records))
    return service


@pytest.fixture
def story_ring_service(records):
    service = StoryRingService(MagicMock())
    service.set_core(fake_core(records))
    return service
