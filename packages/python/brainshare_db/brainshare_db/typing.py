"""Lightweight typing and serialization helpers for Mongo documents."""

from typing import Any, Mapping

from bson import ObjectId

MongoDocument = Mapping[str, Any]


def serialize_doc(doc: MongoDocument) -> dict[str, Any]:
    """Return a plain dict copy with ObjectId values rendered as strings."""

    result = dict(doc)
    for key, value in result.items():
        if isinstance(value, ObjectId):
            result[key] = str(value)
    return result
