from __future__ import annotations

from fastapi import APIRouter, Depends

from brainshare_repo import (
    Announcement,
    Tag,
    count_announcements,
    list_announcements,
    list_tags,
)
from resource_query import ResourceQueryEngine

from .deps import get_engine

router = APIRouter(tags=["catalog"])


@router.get("/tags", response_model=list[Tag])
async def read_tags(engine: ResourceQueryEngine = Depends(get_engine)):
    return await list_tags(engine)


@router.get("/announcements", response_model=list[Announcement], response_model_exclude_none=True)
async def read_announcements(engine: ResourceQueryEngine = Depends(get_engine)):
    return await list_announcements(engine)


@router.get("/announcements/count")
async def read_announcement_count(engine: ResourceQueryEngine = Depends(get_engine)):
    return {"count": await count_announcements(engine)}
