"""Generic paginated, filterable and sortable access to the BrainShare collections.

Every resource goes through the same ``ResourceQueryEngine`` so that paging,
counting and ordering are implemented once instead of per route.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError, ExecutionTimeout

from .errors import ClientInputError, StoreUnavailableError
from .filters import parse_object_id
from .models import Page, UpdateOutcome
from .pagination import parse_limit, parse_page, skip_for, total_pages
from .resources import Resource, SortKey, spec_for

UP_VOTE_FIELD = "upVote"
DOWN_VOTE_FIELD = "downVote"
VOTE_DIFFERENCE_FIELD = "voteDifference"

_RESOURCE_DEFAULT = object()


def popularity_pipeline(
    filter: Mapping[str, Any],
    *,
    skip: int = 0,
    limit: Optional[int] = None,
    timestamp_field: str = "timestamp",
) -> list[dict[str, Any]]:
    """Aggregation ordering documents by ``upVote - downVote``, highest first.

    The score is computed at query time so it always reflects current counts.
    """

    pipeline: list[dict[str, Any]] = [
        {"$match": dict(filter)},
        {
            "$addFields": {
                VOTE_DIFFERENCE_FIELD: {
                    "$subtract": [f"${UP_VOTE_FIELD}", f"${DOWN_VOTE_FIELD}"]
                }
            }
        },
        {"$sort": {VOTE_DIFFERENCE_FIELD: DESCENDING, timestamp_field: DESCENDING}},
    ]
    if skip:
        pipeline.append({"$skip": skip})
    if limit:
        pipeline.append({"$limit": limit})
    return pipeline


class ResourceQueryEngine:
    """Query engine bound to one Motor database."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db

    def collection(self, resource: Resource) -> AsyncIOMotorCollection:
        return self._db[spec_for(resource).collection]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _store_call(self, operation: str, resource: Resource) -> Iterator[None]:
        name = spec_for(resource).collection
        start = time.perf_counter()
        try:
            yield
        except (ConnectionFailure, ExecutionTimeout) as exc:
            duration = (time.perf_counter() - start) * 1000
            logger.warning(
                "{operation} on {collection} failed after {duration:.2f} ms: {error}",
                operation=operation,
                collection=name,
                duration=duration,
                error=exc,
            )
            raise StoreUnavailableError(f"{operation} on {name} failed: {exc}") from exc
        duration = (time.perf_counter() - start) * 1000
        logger.debug(
            "{operation} on {collection} completed in {duration:.2f} ms",
            operation=operation,
            collection=name,
            duration=duration,
        )

    @staticmethod
    def _selector(selector: Any) -> dict[str, Any]:
        if isinstance(selector, Mapping):
            return dict(selector)
        return {"_id": parse_object_id(selector)}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_page(
        self,
        resource: Resource,
        filter: Optional[Mapping[str, Any]] = None,
        page: Any = None,
        limit: Any = None,
        sort: SortKey = SortKey.RECENT,
        *,
        default_limit: Any = _RESOURCE_DEFAULT,
    ) -> Page[dict]:
        """Return one page of ``resource`` matching ``filter``.

        ``page`` and ``limit`` are accepted raw (e.g. straight from a query
        string). ``default_limit`` overrides the resource's default page size
        for listings such as "posts by one user". With no effective limit the
        full result is returned and the pagination fields are left unset.
        """

        fallback = spec_for(resource).default_limit
        if default_limit is not _RESOURCE_DEFAULT:
            fallback = default_limit
        page_number = parse_page(page)
        page_size = parse_limit(limit, fallback)
        query = dict(filter or {})

        if page_size is None:
            items = await self.sorted_list(resource, query, sort)
            return Page(items=items)

        items, total = await asyncio.gather(
            self.sorted_list(
                resource,
                query,
                sort,
                skip=skip_for(page_number, page_size),
                limit=page_size,
            ),
            self.count(resource, query),
        )
        return Page(
            items=items,
            total_count=total,
            total_pages=total_pages(total, page_size),
            current_page=page_number,
        )

    async def sorted_list(
        self,
        resource: Resource,
        filter: Optional[Mapping[str, Any]] = None,
        sort_key: SortKey = SortKey.RECENT,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """List documents by timestamp (newest first unless ``OLDEST``) or by vote difference."""

        try:
            sort_key = SortKey(sort_key)
        except ValueError as exc:
            raise ClientInputError(f"unknown sort key: {sort_key!r}") from exc

        spec = spec_for(resource)
        collection = self.collection(resource)
        query = dict(filter or {})
        with self._store_call(f"sorted_list[{sort_key.value}]", resource):
            if sort_key is SortKey.POPULARITY:
                cursor = collection.aggregate(
                    popularity_pipeline(
                        query,
                        skip=skip,
                        limit=limit,
                        timestamp_field=spec.timestamp_field,
                    )
                )
            else:
                direction = ASCENDING if sort_key is SortKey.OLDEST else DESCENDING
                # _id breaks ties between documents written in the same instant
                cursor = collection.find(query).sort(
                    [(spec.timestamp_field, direction), ("_id", direction)]
                )
                if skip:
                    cursor = cursor.skip(skip)
                if limit:
                    cursor = cursor.limit(limit)
            return await cursor.to_list(length=None)

    async def get_by_id(self, resource: Resource, id: Any) -> Optional[dict]:
        object_id = parse_object_id(id)
        return await self.find_one(resource, {"_id": object_id})

    async def find_one(
        self, resource: Resource, filter: Mapping[str, Any]
    ) -> Optional[dict]:
        with self._store_call("find_one", resource):
            return await self.collection(resource).find_one(dict(filter))

    async def count(
        self, resource: Resource, filter: Optional[Mapping[str, Any]] = None
    ) -> int:
        with self._store_call("count", resource):
            return await self.collection(resource).count_documents(dict(filter or {}))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def insert(self, resource: Resource, document: Mapping[str, Any]) -> str:
        doc = dict(document)
        with self._store_call("insert", resource):
            result = await self.collection(resource).insert_one(doc)
        return str(result.inserted_id)

    async def increment(
        self,
        resource: Resource,
        selector: Any,
        field: str,
        delta: int = 1,
    ) -> Optional[int]:
        """Atomically add ``delta`` to ``field``; return the new value.

        Returns ``None`` when nothing matched. Counters only grow, so a
        ``delta`` below 1 is rejected.
        """

        if isinstance(delta, bool) or not isinstance(delta, int) or delta < 1:
            raise ClientInputError(f"increment delta must be a positive integer, got {delta!r}")
        query = self._selector(selector)
        with self._store_call("increment", resource):
            doc = await self.collection(resource).find_one_and_update(
                query,
                {"$inc": {field: delta}},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            return None
        return doc.get(field)

    async def upsert_by_key(
        self,
        resource: Resource,
        key: Mapping[str, Any],
        fields: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> tuple[dict, bool]:
        """Register-or-no-op: return ``(record, created)``.

        An existing record is returned untouched. A new one is built from
        ``fields`` overlaid with ``defaults`` and ``key``, so callers cannot
        override the fixed defaults. A duplicate-key error from a unique index
        (a concurrent registration won the race) resolves to the stored record.
        """

        if not key:
            raise ClientInputError("upsert key must not be empty")
        collection = self.collection(resource)
        existing = await self.find_one(resource, key)
        if existing is not None:
            return existing, False

        document = {**dict(fields or {}), **dict(defaults or {}), **dict(key)}
        document.pop("_id", None)
        try:
            with self._store_call("upsert_by_key", resource):
                result = await collection.insert_one(document)
        except DuplicateKeyError:
            logger.info(
                "Concurrent insert for {key} on {resource}; returning stored record",
                key=dict(key),
                resource=spec_for(resource).collection,
            )
            existing = await self.find_one(resource, key)
            if existing is not None:
                return existing, False
            raise
        document["_id"] = result.inserted_id
        return document, True

    async def set_fields(
        self,
        resource: Resource,
        selector: Any,
        fields: Mapping[str, Any],
    ) -> UpdateOutcome:
        """Partial update of the named fields only."""

        if not fields:
            raise ClientInputError("no fields to update")
        query = self._selector(selector)
        with self._store_call("set_fields", resource):
            result = await self.collection(resource).update_one(
                query, {"$set": dict(fields)}
            )
        return UpdateOutcome(matched=result.matched_count, modified=result.modified_count)

    async def delete(self, resource: Resource, selector: Any) -> int:
        query = self._selector(selector)
        with self._store_call("delete", resource):
            result = await self.collection(resource).delete_one(query)
        return result.deleted_count
