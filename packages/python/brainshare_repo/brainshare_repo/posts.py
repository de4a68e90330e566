"""Posts: creation, listing, voting and removal."""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from resource_query import (
    DEFAULT_PAGE_LIMIT,
    Page,
    Resource,
    ResourceQueryEngine,
    SortKey,
    contains,
)
from resource_query.engine import DOWN_VOTE_FIELD, UP_VOTE_FIELD

from ._documents import doc_to_model, utcnow
from .models import Post, PostCreate, VoteDirection

_VOTE_FIELDS = {
    VoteDirection.UP: UP_VOTE_FIELD,
    VoteDirection.DOWN: DOWN_VOTE_FIELD,
}


async def create_post(
    engine: ResourceQueryEngine,
    email: str,
    payload: PostCreate,
    author_name: Optional[str] = None,
) -> Post:
    doc = payload.model_dump(by_alias=True, exclude_none=True)
    doc.update(
        {
            "email": email,
            UP_VOTE_FIELD: 0,
            DOWN_VOTE_FIELD: 0,
            "timestamp": utcnow(),
        }
    )
    if author_name and "authorName" not in doc:
        doc["authorName"] = author_name
    doc["_id"] = await engine.insert(Resource.POSTS, doc)

    post_count = await engine.increment(Resource.USERS, {"email": email}, "postCount")
    if post_count is None:
        logger.warning("Post {post_id} authored by unregistered {email}", post_id=doc["_id"], email=email)
    return doc_to_model(Post, doc)


async def get_post(engine: ResourceQueryEngine, post_id: str) -> Optional[Post]:
    doc = await engine.get_by_id(Resource.POSTS, post_id)
    return doc_to_model(Post, doc) if doc else None


async def list_posts(
    engine: ResourceQueryEngine,
    tag: Optional[str] = None,
    sort: SortKey = SortKey.RECENT,
    page: Any = None,
    limit: Any = None,
) -> Page[Post]:
    """All posts, optionally narrowed by tag; paginated only when a limit is given."""

    result = await engine.list_page(Resource.POSTS, contains("tag", tag), page, limit, sort)
    return result.map(lambda doc: doc_to_model(Post, doc))


async def list_user_posts(
    engine: ResourceQueryEngine,
    email: str,
    page: Any = None,
    limit: Any = None,
) -> Page[Post]:
    result = await engine.list_page(
        Resource.POSTS,
        {"email": email},
        page,
        limit,
        SortKey.RECENT,
        default_limit=DEFAULT_PAGE_LIMIT,
    )
    return result.map(lambda doc: doc_to_model(Post, doc))


async def vote(
    engine: ResourceQueryEngine,
    post_id: str,
    direction: VoteDirection,
) -> Optional[int]:
    """Add one vote; returns the new count or ``None`` if the post is gone."""

    return await engine.increment(Resource.POSTS, post_id, _VOTE_FIELDS[VoteDirection(direction)])


async def delete_post(engine: ResourceQueryEngine, post_id: str) -> int:
    deleted = await engine.delete(Resource.POSTS, post_id)
    if deleted:
        logger.info("Deleted post {post_id}", post_id=post_id)
    return deleted
