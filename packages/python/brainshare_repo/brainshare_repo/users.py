"""User registration, lookup and membership changes."""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from access_guard import Role
from resource_query import (
    Page,
    Resource,
    ResourceQueryEngine,
    SortKey,
    UpdateOutcome,
    contains,
)

from ._documents import doc_to_model, utcnow
from .models import Badge, Post, Profile, User, UserRegistration

DEFAULT_RECENT_POSTS = 3

# Applied on first registration; overrides anything the client sent.
USER_DEFAULTS: dict[str, Any] = {
    "role": Role.USER.value,
    "postCount": 0,
    "badge": Badge.BRONZE.value,
}


def _by_email(email: str) -> dict[str, str]:
    return {"email": email}


async def register_user(
    engine: ResourceQueryEngine,
    email: str,
    payload: Optional[UserRegistration] = None,
) -> tuple[User, bool]:
    """Create the user on first contact; return the stored record otherwise."""

    fields = payload.model_dump(by_alias=True, exclude_none=True) if payload else {}
    defaults = {**USER_DEFAULTS, "timestamp": utcnow()}
    doc, created = await engine.upsert_by_key(
        Resource.USERS, _by_email(email), fields, defaults
    )
    if created:
        logger.info("Registered new user {email}", email=email)
    return doc_to_model(User, doc), created


async def get_user(engine: ResourceQueryEngine, email: str) -> Optional[User]:
    doc = await engine.find_one(Resource.USERS, _by_email(email))
    return doc_to_model(User, doc) if doc else None


async def get_role(engine: ResourceQueryEngine, email: str) -> Optional[str]:
    doc = await engine.find_one(Resource.USERS, _by_email(email))
    if doc is None:
        return None
    return doc.get("role", Role.USER.value)


async def get_profile(
    engine: ResourceQueryEngine,
    email: str,
    recent_posts: int = DEFAULT_RECENT_POSTS,
) -> Optional[Profile]:
    """User record plus their newest posts."""

    user = await get_user(engine, email)
    if user is None:
        return None
    docs = await engine.sorted_list(
        Resource.POSTS, _by_email(email), SortKey.RECENT, limit=recent_posts
    )
    return Profile(user=user, recent_posts=[doc_to_model(Post, doc) for doc in docs])


async def search_users(
    engine: ResourceQueryEngine,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> Page[User]:
    result = await engine.list_page(
        Resource.USERS, contains("name", search), page, limit, SortKey.RECENT
    )
    return result.map(lambda doc: doc_to_model(User, doc))


async def promote_to_admin(engine: ResourceQueryEngine, email: str) -> UpdateOutcome:
    outcome = await engine.set_fields(
        Resource.USERS, _by_email(email), {"role": Role.ADMIN.value}
    )
    if outcome.changed:
        logger.info("Promoted {email} to admin", email=email)
    return outcome


async def upgrade_badge(engine: ResourceQueryEngine, email: str) -> UpdateOutcome:
    return await engine.set_fields(
        Resource.USERS, _by_email(email), {"badge": Badge.GOLD.value}
    )
