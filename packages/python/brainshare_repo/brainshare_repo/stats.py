from __future__ import annotations

import asyncio

from resource_query import Resource, ResourceQueryEngine

from .models import DashboardCounts


async def dashboard_counts(engine: ResourceQueryEngine) -> DashboardCounts:
    users, posts, comments, tags = await asyncio.gather(
        engine.count(Resource.USERS),
        engine.count(Resource.POSTS),
        engine.count(Resource.COMMENTS),
        engine.count(Resource.TAGS),
    )
    return DashboardCounts(users=users, posts=posts, comments=comments, tags=tags)
