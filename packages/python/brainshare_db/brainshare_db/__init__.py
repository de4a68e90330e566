"""MongoDB helpers shared by the BrainShare packages.

Example usage:

    from brainshare_db import get_db

    async def newest_posts():
        db = get_db()
        cursor = db["posts"].find({}).sort("timestamp", -1)
        return await cursor.to_list(length=10)
"""

from .settings import MongoSettings, settings
from .mongo import ensure_indexes, get_db, get_mongo_client, ping
from .typing import MongoDocument, serialize_doc

__all__ = [
    "MongoSettings",
    "settings",
    "get_mongo_client",
    "get_db",
    "ping",
    "ensure_indexes",
    "MongoDocument",
    "serialize_doc",
]
