from __future__ import annotations

from fastapi import Request

from resource_query import ResourceQueryEngine


def get_engine(request: Request) -> ResourceQueryEngine:
    """Return the query engine created once at application startup."""

    engine = getattr(request.app.state, "query_engine", None)
    if engine is None:
        raise RuntimeError("query engine is not configured on the application")
    return engine
