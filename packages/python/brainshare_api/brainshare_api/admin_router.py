"""Admin-only endpoints. Every route requires the stored role ``admin``."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from access_guard import Identity, Role, require_role
from brainshare_repo import (
    Announcement,
    AnnouncementCreate,
    Comment,
    DashboardCounts,
    Tag,
    TagCreate,
    User,
    create_announcement,
    create_tag,
    dashboard_counts,
    delete_comment,
    list_reported_comments,
    promote_to_admin,
    search_users,
)
from resource_query import NotFoundError, Page, ResourceQueryEngine, UpdateOutcome

from .deps import get_engine

require_admin = require_role(Role.ADMIN)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=Page[User], response_model_exclude_none=True)
async def read_users(
    search: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Users whose name contains ``search`` (case-insensitive), five per page."""

    return await search_users(engine, search, page=page, limit=limit)


@router.patch("/users/{email}/promote", response_model=UpdateOutcome)
async def promote_user(email: str, engine: ResourceQueryEngine = Depends(get_engine)):
    outcome = await promote_to_admin(engine, email)
    if not outcome.found:
        raise NotFoundError("User not found")
    return outcome


@router.get("/reported-comments", response_model=Page[Comment], response_model_exclude_none=True)
async def read_reported_comments(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return await list_reported_comments(engine, page=page, limit=limit)


@router.delete("/comments/{comment_id}")
async def remove_comment(comment_id: str, engine: ResourceQueryEngine = Depends(get_engine)):
    deleted = await delete_comment(engine, comment_id)
    if not deleted:
        raise NotFoundError("Comment not found")
    return {"deletedCount": deleted}


@router.post("/announcements", response_model=Announcement, status_code=201, response_model_exclude_none=True)
async def add_announcement(
    payload: AnnouncementCreate,
    identity: Identity = Depends(require_admin),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    return await create_announcement(engine, identity.email, payload, identity.name)


@router.post("/tags", response_model=Tag)
async def add_tag(
    payload: TagCreate,
    response: Response,
    engine: ResourceQueryEngine = Depends(get_engine),
):
    tag, created = await create_tag(engine, payload)
    response.status_code = 201 if created else 200
    return tag


@router.get("/stats", response_model=DashboardCounts)
async def read_stats(engine: ResourceQueryEngine = Depends(get_engine)):
    return await dashboard_counts(engine)
