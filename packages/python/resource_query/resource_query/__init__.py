"""Generic query engine shared by every BrainShare resource."""

from .engine import ResourceQueryEngine, popularity_pipeline
from .errors import (
    ClientInputError,
    NotFoundError,
    ResourceQueryError,
    StoreUnavailableError,
)
from .filters import contains, parse_object_id
from .models import Page, UpdateOutcome
from .pagination import parse_limit, parse_page, skip_for, total_pages
from .resources import DEFAULT_PAGE_LIMIT, Resource, ResourceSpec, SortKey, spec_for

__all__ = [
    "ResourceQueryEngine",
    "popularity_pipeline",
    "ResourceQueryError",
    "ClientInputError",
    "NotFoundError",
    "StoreUnavailableError",
    "contains",
    "parse_object_id",
    "Page",
    "UpdateOutcome",
    "parse_page",
    "parse_limit",
    "skip_for",
    "total_pages",
    "DEFAULT_PAGE_LIMIT",
    "Resource",
    "ResourceSpec",
    "SortKey",
    "spec_for",
]
