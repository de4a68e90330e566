"""Root conftest: environment defaults, an in-memory Motor fake and API fixtures.

The fake implements just the collection surface the query engine uses
(find/sort/skip/limit, find_one, count_documents, insert_one, update_one,
find_one_and_update, delete_one, aggregate, create_index), so tests run
without a MongoDB server.
"""

import asyncio
import copy
import os
import re
from types import SimpleNamespace
from typing import Any, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

# ---------------------------------------------------------------------------
# Environment variables — must be set before any brainshare module import
# ---------------------------------------------------------------------------
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret-key-for-brainshare-suite")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("LOG_LEVEL", "WARNING")


# ---------------------------------------------------------------------------
# Fake Motor database
# ---------------------------------------------------------------------------

_MISSING = object()


def _get(doc: dict, field: str) -> Any:
    return doc.get(field, _MISSING)


def _matches(doc: dict, query: dict) -> bool:
    for field, condition in query.items():
        value = _get(doc, field)
        if isinstance(condition, dict) and any(key.startswith("$") for key in condition):
            for op, arg in condition.items():
                if op == "$regex":
                    flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                    if not isinstance(value, str) or not re.search(arg, value, flags):
                        return False
                elif op == "$options":
                    continue
                elif op == "$in":
                    if value not in arg:
                        return False
                elif op == "$eq":
                    if value != arg:
                        return False
                else:
                    raise NotImplementedError(op)
        elif value is _MISSING or value != condition:
            return False
    return True


def _sort_docs(docs: list, keys: list) -> list:
    result = list(docs)
    for field, direction in reversed(keys):
        present = [d for d in result if d.get(field) is not None]
        absent = [d for d in result if d.get(field) is None]
        present.sort(key=lambda d: d[field], reverse=direction < 0)
        result = present + absent if direction < 0 else absent + present
    return result


def _evaluate(expr: Any, doc: dict) -> Any:
    if isinstance(expr, str) and expr.startswith("$"):
        return doc.get(expr[1:])
    if isinstance(expr, dict) and "$subtract" in expr:
        left, right = (_evaluate(part, doc) for part in expr["$subtract"])
        if left is None or right is None:
            return None
        return left - right
    return expr


class FakeCursor:
    def __init__(self, docs: list) -> None:
        self._docs = docs
        self._sort: list = []
        self._skip = 0
        self._limit = 0

    def sort(self, key_or_list, direction=None):
        if isinstance(key_or_list, str):
            self._sort = [(key_or_list, direction if direction is not None else 1)]
        else:
            self._sort = list(key_or_list)
        return self

    def skip(self, count: int):
        self._skip = count
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def _materialize(self) -> list:
        docs = _sort_docs(self._docs, self._sort) if self._sort else list(self._docs)
        docs = docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        return [copy.deepcopy(doc) for doc in docs]

    async def to_list(self, length: Optional[int] = None) -> list:
        await asyncio.sleep(0)
        docs = self._materialize()
        return docs if length is None else docs[:length]

    def __aiter__(self):
        self._iter = iter(self._materialize())
        return self

    async def __anext__(self):
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    def __init__(self, db: "FakeDatabase", name: str) -> None:
        self._db = db
        self.name = name
        self.docs: list[dict] = []
        self.unique_indexes: list[list[str]] = []

    async def _io(self) -> None:
        await asyncio.sleep(0)
        if self._db.fail_with is not None:
            raise self._db.fail_with

    async def create_index(self, keys, unique: bool = False, **kwargs) -> str:
        await self._io()
        fields = [field for field, _ in keys]
        if unique and fields not in self.unique_indexes:
            self.unique_indexes.append(fields)
        return kwargs.get("name") or "_".join(fields)

    def find(self, filter: Optional[dict] = None, projection=None) -> FakeCursor:
        if self._db.fail_with is not None:
            raise self._db.fail_with
        return FakeCursor([doc for doc in self.docs if _matches(doc, filter or {})])

    def _first(self, filter: dict) -> Optional[dict]:
        return next((doc for doc in self.docs if _matches(doc, filter)), None)

    async def find_one(self, filter: Optional[dict] = None) -> Optional[dict]:
        await self._io()
        doc = self._first(filter or {})
        return copy.deepcopy(doc) if doc is not None else None

    async def count_documents(self, filter: dict) -> int:
        await self._io()
        return sum(1 for doc in self.docs if _matches(doc, filter))

    async def insert_one(self, document: dict):
        await self._io()
        if "_id" not in document:
            document["_id"] = ObjectId()
        for fields in self.unique_indexes + [["_id"]]:
            key = {field: document.get(field) for field in fields}
            if self._first(key) is not None:
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} dup key: {key}")
        self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    @staticmethod
    def _apply(doc: dict, update: dict) -> bool:
        before = copy.deepcopy(doc)
        for op, changes in update.items():
            for field, value in changes.items():
                if op == "$set":
                    doc[field] = value
                elif op == "$inc":
                    doc[field] = doc.get(field, 0) + value
                else:
                    raise NotImplementedError(op)
        return doc != before

    async def update_one(self, filter: dict, update: dict):
        await self._io()
        doc = self._first(filter)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        changed = self._apply(doc, update)
        return SimpleNamespace(matched_count=1, modified_count=int(changed))

    async def find_one_and_update(
        self,
        filter: dict,
        update: dict,
        projection=None,
        return_document=ReturnDocument.BEFORE,
        **kwargs,
    ) -> Optional[dict]:
        await self._io()
        doc = self._first(filter)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        self._apply(doc, update)
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def delete_one(self, filter: dict):
        await self._io()
        doc = self._first(filter)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    def aggregate(self, pipeline: list) -> FakeCursor:
        if self._db.fail_with is not None:
            raise self._db.fail_with
        docs = [copy.deepcopy(doc) for doc in self.docs]
        for stage in pipeline:
            (op, arg), = stage.items()
            if op == "$match":
                docs = [doc for doc in docs if _matches(doc, arg)]
            elif op == "$addFields":
                for doc in docs:
                    for field, expr in arg.items():
                        doc[field] = _evaluate(expr, doc)
            elif op == "$sort":
                docs = _sort_docs(docs, list(arg.items()))
            elif op == "$skip":
                docs = docs[arg:]
            elif op == "$limit":
                docs = docs[:arg]
            else:
                raise NotImplementedError(op)
        return FakeCursor(docs)


class FakeDatabase:
    """Dict-like stand-in for ``AsyncIOMotorDatabase``."""

    def __init__(self) -> None:
        self._collections: dict[str, FakeCollection] = {}
        # set to an exception instance to simulate an unreachable server
        self.fail_with: Optional[Exception] = None

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(self, name)
        return self._collections[name]

    async def command(self, name: str) -> dict:
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        return {"ok": 1.0}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest_asyncio.fixture
async def indexed_db(fake_db):
    from brainshare_db import ensure_indexes

    await ensure_indexes(fake_db)
    return fake_db


@pytest.fixture
def engine(indexed_db):
    from resource_query import ResourceQueryEngine

    return ResourceQueryEngine(indexed_db)


@pytest.fixture
def app(indexed_db):
    from brainshare_server.main import create_app

    return create_app(indexed_db)


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client wired to the app over the in-memory database."""
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(app):
    """Return a factory building bearer headers for an email."""

    def build(email: str, name: Optional[str] = None) -> dict[str, str]:
        token = app.state.credential_verifier.issue(email, name)
        return {"Authorization": f"Bearer {token}"}

    return build
