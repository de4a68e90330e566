"""Filter builders and identifier validation."""

from __future__ import annotations

import re
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from .errors import ClientInputError


def parse_object_id(value: Any) -> ObjectId:
    """Validate ``value`` as a Mongo ObjectId before it reaches a query."""

    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ClientInputError(f"malformed identifier: {value!r}")
    try:
        return ObjectId(value)
    except InvalidId as exc:  # pragma: no cover - is_valid already guards this
        raise ClientInputError(f"malformed identifier: {value!r}") from exc


def contains(field: str, term: str | None, *, literal: bool = True) -> dict[str, Any]:
    """Case-insensitive substring filter on ``field``.

    Terms taken from a request are matched literally (``literal=True``), so
    ``.`` or ``(`` in a search box never act as regex syntax. Server-side
    patterns may pass ``literal=False``. An empty term yields no constraint.
    """

    if term is None:
        return {}
    term = term.strip()
    if not term:
        return {}
    pattern = re.escape(term) if literal else term
    return {field: {"$regex": pattern, "$options": "i"}}

