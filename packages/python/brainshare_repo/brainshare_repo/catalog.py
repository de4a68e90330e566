"""Tags and announcements: append-only records curated by admins."""

from __future__ import annotations

from typing import Optional

from resource_query import Resource, ResourceQueryEngine, SortKey

from ._documents import doc_to_model, utcnow
from .models import Announcement, AnnouncementCreate, Tag, TagCreate


async def create_tag(engine: ResourceQueryEngine, payload: TagCreate) -> tuple[Tag, bool]:
    doc, created = await engine.upsert_by_key(
        Resource.TAGS,
        {"name": payload.name},
        defaults={"timestamp": utcnow()},
    )
    return doc_to_model(Tag, doc), created


async def list_tags(engine: ResourceQueryEngine) -> list[Tag]:
    docs = await engine.sorted_list(Resource.TAGS, {}, SortKey.OLDEST)
    return [doc_to_model(Tag, doc) for doc in docs]


async def create_announcement(
    engine: ResourceQueryEngine,
    email: str,
    payload: AnnouncementCreate,
    author_name: Optional[str] = None,
) -> Announcement:
    doc = payload.model_dump(by_alias=True, exclude_none=True)
    doc.update({"email": email, "timestamp": utcnow()})
    if author_name and "authorName" not in doc:
        doc["authorName"] = author_name
    doc["_id"] = await engine.insert(Resource.ANNOUNCEMENTS, doc)
    return doc_to_model(Announcement, doc)


async def list_announcements(engine: ResourceQueryEngine) -> list[Announcement]:
    docs = await engine.sorted_list(Resource.ANNOUNCEMENTS, {}, SortKey.RECENT)
    return [doc_to_model(Announcement, doc) for doc in docs]


async def count_announcements(engine: ResourceQueryEngine) -> int:
    return await engine.count(Resource.ANNOUNCEMENTS)
