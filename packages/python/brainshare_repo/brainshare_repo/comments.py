"""Comments and their moderation lifecycle (unreported -> reported)."""

from __future__ import annotations

from typing import Any

from loguru import logger

from resource_query import (
    Page,
    Resource,
    ResourceQueryEngine,
    SortKey,
    UpdateOutcome,
    parse_object_id,
)

from ._documents import doc_to_model, utcnow
from .models import Comment, CommentCreate


async def create_comment(engine: ResourceQueryEngine, payload: CommentCreate) -> Comment:
    parse_object_id(payload.post_id)
    doc = payload.model_dump(by_alias=True, exclude_none=True)
    doc.update({"reported": False, "timestamp": utcnow()})
    doc["_id"] = await engine.insert(Resource.COMMENTS, doc)
    return doc_to_model(Comment, doc)


async def list_comments(
    engine: ResourceQueryEngine,
    post_id: str,
    page: Any = None,
    limit: Any = None,
) -> Page[Comment]:
    """Comments on one post in the order they were written."""

    parse_object_id(post_id)
    result = await engine.list_page(
        Resource.COMMENTS, {"postId": post_id}, page, limit, SortKey.OLDEST
    )
    return result.map(lambda doc: doc_to_model(Comment, doc))


async def report_comment(
    engine: ResourceQueryEngine,
    comment_id: str,
    feedback: str,
) -> UpdateOutcome:
    outcome = await engine.set_fields(
        Resource.COMMENTS, comment_id, {"feedback": feedback, "reported": True}
    )
    if outcome.found:
        logger.info("Comment {comment_id} reported", comment_id=comment_id)
    return outcome


async def list_reported_comments(
    engine: ResourceQueryEngine,
    page: Any = None,
    limit: Any = None,
) -> Page[Comment]:
    result = await engine.list_page(
        Resource.COMMENTS, {"reported": True}, page, limit, SortKey.RECENT
    )
    return result.map(lambda doc: doc_to_model(Comment, doc))


async def delete_comment(engine: ResourceQueryEngine, comment_id: str) -> int:
    return await engine.delete(Resource.COMMENTS, comment_id)
