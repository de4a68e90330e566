"""Async MongoDB helpers built on top of Motor.

Only connection and index management lives here; query logic is in
``resource_query``."""

from functools import lru_cache
from typing import Any

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.server_api import ServerApi

from .settings import settings

# collection -> list of (keys, options)
INDEXES: dict[str, list[tuple[list[tuple[str, int]], dict[str, Any]]]] = {
    "users": [
        ([("email", ASCENDING)], {"unique": True, "name": "email_unique"}),
        ([("name", ASCENDING)], {"name": "name"}),
    ],
    "posts": [
        ([("email", ASCENDING), ("timestamp", DESCENDING)], {"name": "author_recent"}),
        ([("tag", ASCENDING)], {"name": "tag"}),
    ],
    "comments": [
        ([("postId", ASCENDING)], {"name": "post"}),
        ([("reported", ASCENDING)], {"name": "reported"}),
    ],
    "tags": [([("name", ASCENDING)], {"unique": True, "name": "name_unique"})],
}


@lru_cache
def get_mongo_client() -> AsyncIOMotorClient:
    """Return a cached Motor client pinned to the Stable API v1."""

    config = settings
    return AsyncIOMotorClient(
        config.uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
    )


def get_db() -> AsyncIOMotorDatabase:
    """Return the application database defined by ``settings.db_name``."""

    client = get_mongo_client()
    return client[settings.db_name]


async def ping(db: AsyncIOMotorDatabase | None = None) -> dict[str, Any]:
    """Run a simple ``ping`` command against the configured MongoDB server."""

    db = db if db is not None else get_db()
    await db.command("ping")
    return {"ok": True}


async def ensure_indexes(db: AsyncIOMotorDatabase | None = None) -> None:
    """Create the indexes the repositories rely on.

    The unique index on ``users.email`` is what turns concurrent registrations
    for the same address into a single record.
    """

    db = db if db is not None else get_db()
    for collection, indexes in INDEXES.items():
        for keys, options in indexes:
            await db[collection].create_index(keys, **options)
            logger.debug(
                "Ensured index {name} on {collection}",
                name=options.get("name"),
                collection=collection,
            )
