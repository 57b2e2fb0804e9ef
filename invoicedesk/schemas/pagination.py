"""
Generic paginated response schema.
List endpoints slice an in-memory result list into pages with this wrapper.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, computed_field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Items for one page plus total count, page number, page size and page count."""

    items: list[T]
    total: int
    page: int
    size: int

    @computed_field  # type: ignore[misc]
    @property
    def pages(self) -> int:
        if self.size == 0:
            return 0
        return math.ceil(self.total / self.size)

    @classmethod
    def paginate(
        cls,
        records: Sequence[Any],
        *,
        page: int,
        size: int,
        transform: Callable[[Any], T],
        **extra: Any,
    ) -> "PaginatedResponse[T]":
        """
        Build one page from a full result list.
        Pages past the end come back empty with the real total.
        """
        start = (page - 1) * size
        return cls(
            items=[transform(r) for r in records[start : start + size]],
            total=len(records),
            page=page,
            size=size,
            **extra,
        )
