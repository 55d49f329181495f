"""Shared pytest fixtures for the Cloud Snippets test suite.

``FakeFirestore`` is an in-memory stand-in for ``google.cloud.firestore.Client``
covering the calls the samples make.  It applies the real field-value
sentinels from ``google.cloud.firestore`` so tests observe the same
document shapes the service would produce.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from unittest.mock import patch

import pytest
from google.api_core.exceptions import NotFound
from google.cloud import firestore

# ---------------------------------------------------------------------------
# In-memory Firestore double
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FakeWriteResult:
    update_time: datetime


def _now() -> datetime:
    return datetime.now(UTC)


def _apply_value(current: Any, value: Any) -> tuple[bool, Any]:
    """Resolve *value* against *current*; returns ``(keep, new_value)``."""
    if value is firestore.DELETE_FIELD:
        return False, None
    if value is firestore.SERVER_TIMESTAMP:
        return True, _now()
    if isinstance(value, firestore.ArrayUnion):
        existing = list(current or [])
        return True, existing + [v for v in value.values if v not in existing]
    if isinstance(value, firestore.ArrayRemove):
        return True, [v for v in (current or []) if v not in value.values]
    if isinstance(value, firestore.Increment):
        return True, (current or 0) + value.value
    return True, value


def _apply_updates(data: dict[str, Any], updates: dict[str, Any]) -> None:
    for path, value in updates.items():
        *parents, leaf = path.split(".")
        target = data
        for part in parents:
            target = target.setdefault(part, {})
        keep, resolved = _apply_value(target.get(leaf), value)
        if keep:
            target[leaf] = resolved
        else:
            target.pop(leaf, None)


class FakeDocumentSnapshot:
    def __init__(self, reference: FakeDocumentReference, data: dict[str, Any] | None) -> None:
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return None if self._data is None else dict(self._data)

    def get(self, field_path: str) -> Any:
        value: Any = self._data or {}
        for part in field_path.split("."):
            value = value[part]
        return value


class FakeDocumentReference:
    def __init__(self, store: FakeFirestore, collection: str, doc_id: str) -> None:
        self._store = store
        self._collection = collection
        self.id = doc_id

    @property
    def path(self) -> str:
        return f"{self._collection}/{self.id}"

    def _docs(self) -> dict[str, dict[str, Any]]:
        return self._store.data.setdefault(self._collection, {})

    def set(self, data: dict[str, Any], merge: bool = False) -> FakeWriteResult:
        docs = self._docs()
        if merge and self.id in docs:
            _apply_updates(docs[self.id], data)
        else:
            fresh: dict[str, Any] = {}
            _apply_updates(fresh, data)
            docs[self.id] = fresh
        return FakeWriteResult(update_time=_now())

    def update(self, field_updates: dict[str, Any]) -> FakeWriteResult:
        docs = self._docs()
        if self.id not in docs:
            msg = f"No document to update: {self.path}"
            raise NotFound(msg)
        _apply_updates(docs[self.id], field_updates)
        return FakeWriteResult(update_time=_now())

    def delete(self) -> datetime:
        self._store.delete_calls += 1
        self._docs().pop(self.id, None)
        return _now()

    def get(self, transaction: FakeTransaction | None = None) -> FakeDocumentSnapshot:
        data = self._docs().get(self.id)
        return FakeDocumentSnapshot(self, None if data is None else dict(data))


class FakeQuery:
    def __init__(self, collection: FakeCollectionReference, limit: int | None = None) -> None:
        self._collection = collection
        self._limit = limit

    def limit(self, count: int) -> FakeQuery:
        return FakeQuery(self._collection, count)

    def stream(self):
        store = self._collection._store
        store.fetch_calls += 1
        docs = store.data.get(self._collection.id, {})
        ids = sorted(docs)
        if self._limit is not None:
            ids = ids[: self._limit]
        snapshots = [
            FakeDocumentSnapshot(self._collection.document(doc_id), dict(docs[doc_id]))
            for doc_id in ids
        ]
        yield from snapshots


class FakeCollectionReference(FakeQuery):
    def __init__(self, store: FakeFirestore, name: str) -> None:
        self._store = store
        self.id = name
        super().__init__(self)

    def document(self, document_id: str | None = None) -> FakeDocumentReference:
        return FakeDocumentReference(self._store, self.id, document_id or uuid.uuid4().hex[:20])

    def add(self, data: dict[str, Any]) -> tuple[datetime, FakeDocumentReference]:
        ref = self.document()
        ref.set(data)
        return _now(), ref


class FakeWriteBatch:
    """Stages writes and applies them all or none on ``commit()``."""

    def __init__(self, store: FakeFirestore) -> None:
        self._store = store
        self._writes: list[Any] = []

    def set(self, ref: FakeDocumentReference, data: dict[str, Any], merge: bool = False) -> None:
        self._writes.append(lambda: ref.set(data, merge=merge))

    def update(self, ref: FakeDocumentReference, field_updates: dict[str, Any]) -> None:
        self._writes.append(lambda: ref.update(field_updates))

    def delete(self, ref: FakeDocumentReference) -> None:
        self._writes.append(lambda: FakeWriteResult(update_time=ref.delete()))

    def commit(self) -> list[FakeWriteResult]:
        saved = copy.deepcopy(self._store.data)
        try:
            return [write() for write in self._writes]
        except Exception:
            self._store.data = saved
            raise


class FakeTransaction(FakeWriteBatch):
    pass


class FakeFirestore:
    """In-memory ``firestore.Client`` replacement.

    Attributes:
        data: ``{collection: {doc_id: fields}}``.
        fetch_calls: Number of query ``stream()`` calls.
        delete_calls: Number of document ``delete()`` calls.
    """

    def __init__(self) -> None:
        self.data: dict[str, dict[str, dict[str, Any]]] = {}
        self.fetch_calls = 0
        self.delete_calls = 0

    def collection(self, name: str) -> FakeCollectionReference:
        return FakeCollectionReference(self, name)

    def batch(self) -> FakeWriteBatch:
        return FakeWriteBatch(self)

    def transaction(self) -> FakeTransaction:
        return FakeTransaction(self)

    def doc(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return a copy of a stored document, or ``None``."""
        fields = self.data.get(collection, {}).get(doc_id)
        return None if fields is None else dict(fields)


def fake_transactional(body):
    """Stand-in for ``firestore.transactional``: commit on success, discard on error."""

    def run(transaction: FakeTransaction, *args: Any, **kwargs: Any) -> Any:
        result = body(transaction, *args, **kwargs)
        transaction.commit()
        return result

    return run


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_db() -> FakeFirestore:
    """An empty in-memory Firestore."""
    return FakeFirestore()


@pytest.fixture()
def transactional():
    """Route ``firestore.transactional`` through ``fake_transactional``."""
    with patch("google.cloud.firestore.transactional", new=fake_transactional):
        yield fake_transactional
