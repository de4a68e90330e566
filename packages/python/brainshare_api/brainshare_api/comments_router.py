from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from access_guard import Identity, require_identity
from brainshare_repo import (
    Comment,
    CommentCreate,
    CommentReport,
    create_comment,
    list_comments,
    report_comment,
)
from resource_query import NotFoundError, Page, ResourceQueryEngine, UpdateOutcome

from .deps import get_engine

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=Comment, status_code=201, response_model_exclude_none=True)
async def add_comment(
    payload: CommentCreate,
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return await create_comment(engine, payload)


@router.get("/{post_id}", response_model=Page[Comment], response_model_exclude_none=True)
async def read_comments(
    post_id: str,
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Comments on a post, oldest first, five per page by default."""

    return await list_comments(engine, post_id, page=page, limit=limit)


@router.patch("/{comment_id}/report", response_model=UpdateOutcome)
async def report(
    comment_id: str,
    payload: CommentReport,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Flag a comment for admin review with the reporter's feedback."""

    outcome = await report_comment(engine, comment_id, payload.feedback)
    if not outcome.found:
        raise NotFoundError("Comment not found")
    return outcome
