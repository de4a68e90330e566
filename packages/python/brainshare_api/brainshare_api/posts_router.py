"""FastAPI router exposing post operations."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from access_guard import AccessGuard, Identity, Role, get_guard, require_identity
from brainshare_repo import (
    Post,
    PostCreate,
    VoteDirection,
    create_post,
    delete_post,
    get_post,
    list_posts,
    list_user_posts,
    vote,
)
from resource_query import NotFoundError, Page, ResourceQueryEngine

from .deps import get_engine

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=Post, status_code=201, response_model_exclude_none=True)
async def add_post(
    payload: PostCreate,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Create a post authored by the authenticated user."""

    return await create_post(engine, identity.email, payload, identity.name)


@router.get("", response_model=Page[Post], response_model_exclude_none=True)
async def read_posts(
    tag: Optional[str] = Query(default=None),
    sort: str = Query(default="recent"),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """List posts; ``sort=popularity`` orders by up votes minus down votes."""

    return await list_posts(engine, tag=tag, sort=sort, page=page, limit=limit)


@router.get("/user/{email}", response_model=Page[Post], response_model_exclude_none=True)
async def read_user_posts(
    email: str,
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return await list_user_posts(engine, email, page=page, limit=limit)


@router.get("/{post_id}", response_model=Post, response_model_exclude_none=True)
async def read_post(post_id: str, engine: ResourceQueryEngine = Depends(get_engine)):
    post = await get_post(engine, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


@router.delete("/{post_id}")
async def remove_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    guard: AccessGuard = Depends(get_guard),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Delete a post; allowed for its author and for admins."""

    post = await get_post(engine, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.email != identity.email and not await guard.authorize(identity, Role.ADMIN):
        raise HTTPException(status_code=403, detail="Forbidden access")
    deleted = await delete_post(engine, post_id)
    if not deleted:
        raise NotFoundError("Post not found")
    return {"deletedCount": deleted}


async def _vote(engine: ResourceQueryEngine, post_id: str, direction: VoteDirection) -> int:
    count = await vote(engine, post_id, direction)
    if count is None:
        raise NotFoundError("Post not found")
    return count


@router.patch("/{post_id}/upvote")
async def upvote_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return {"upVote": await _vote(engine, post_id, VoteDirection.UP)}


@router.patch("/{post_id}/downvote")
async def downvote_post(
    post_id: str,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return {"downVote": await _vote(engine, post_id, VoteDirection.DOWN)}
