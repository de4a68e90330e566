"""Value objects returned by the query engine."""

from __future__ import annotations

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """A page of items; pagination fields stay ``None`` in unbounded mode."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[T]
    total_count: Optional[int] = None
    total_pages: Optional[int] = None
    current_page: Optional[int] = None

    @property
    def paginated(self) -> bool:
        return self.total_pages is not None

    def map(self, fn) -> "Page[Any]":
        return Page(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            total_pages=self.total_pages,
            current_page=self.current_page,
        )


class UpdateOutcome(BaseModel):
    """Result of a targeted update.

    ``matched == 0`` means the target does not exist; ``modified == 0`` with a
    match means the stored values were already equal.
    """

    matched: int
    modified: int

    @property
    def found(self) -> bool:
        return self.matched > 0

    @property
    def changed(self) -> bool:
        return self.modified > 0
