from datetime import datetime, timezone
from typing import Type, TypeVar

from pydantic import BaseModel

from brainshare_db import MongoDocument, serialize_doc

M = TypeVar("M", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def doc_to_model(model: Type[M], doc: MongoDocument) -> M:
    return model.model_validate(serialize_doc(doc))
