"""Registry of the collections served by the query engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Resource(str, Enum):
    USERS = "users"
    POSTS = "posts"
    COMMENTS = "comments"
    TAGS = "tags"
    ANNOUNCEMENTS = "announcements"
    PAYMENTS = "payments"


class SortKey(str, Enum):
    """Orderings understood by ``sorted_list``."""

    RECENT = "recent"
    OLDEST = "oldest"
    POPULARITY = "popularity"


@dataclass(frozen=True)
class ResourceSpec:
    collection: str
    # None means unbounded listing when the caller gives no limit.
    default_limit: Optional[int]
    timestamp_field: str = "timestamp"


DEFAULT_PAGE_LIMIT = 5

RESOURCE_SPECS: dict[Resource, ResourceSpec] = {
    Resource.USERS: ResourceSpec("users", DEFAULT_PAGE_LIMIT),
    Resource.POSTS: ResourceSpec("posts", None),
    Resource.COMMENTS: ResourceSpec("comments", DEFAULT_PAGE_LIMIT),
    Resource.TAGS: ResourceSpec("tags", None),
    Resource.ANNOUNCEMENTS: ResourceSpec("announcements", None),
    Resource.PAYMENTS: ResourceSpec("payments", None),
}


def spec_for(resource: Resource) -> ResourceSpec:
    return RESOURCE_SPECS[Resource(resource)]
