"""
Generic in-memory store base class.
All entity stores extend InMemoryStore and inherit these methods.

Records live in an insertion-ordered dict keyed by id. Every read scans the
live collection; nothing is cached.
"""
from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=BaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic CRUD operations over a process-local collection.

    Type parameters:
        ModelType: The domain model class held by the store.
        CreateSchemaType: The Pydantic schema used for creation.
        UpdateSchemaType: The Pydantic schema used for partial updates.
    """

    def __init__(
        self,
        model: type[ModelType],
        records: Iterable[ModelType] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.model = model
        self.clock = clock
        self._records: dict[str, ModelType] = {}
        for record in records:
            self._records[record.id] = record  # type: ignore[attr-defined]

    # ── Reads ─────────────────────────────────────────────────────────────────

    def get(self, id: str) -> ModelType | None:
        """Fetch a single record by id. Unknown or malformed ids return None."""
        if not isinstance(id, str):
            return None
        return self._records.get(id)

    def list_all(self) -> list[ModelType]:
        """All records in insertion order."""
        return list(self._records.values())

    def filter(self, **filters: Any) -> list[ModelType]:
        """Return records whose attributes equal every keyword filter, store order."""
        return [
            record
            for record in self._records.values()
            if all(getattr(record, attr) == value for attr, value in filters.items())
        ]

    def find_one(self, **filters: Any) -> ModelType | None:
        for record in self._records.values():
            if all(getattr(record, attr) == value for attr, value in filters.items()):
                return record
        return None

    def exists(self, **filters: Any) -> bool:
        """Return True if any record matches the given keyword filters."""
        return self.find_one(**filters) is not None

    # ── Writes ────────────────────────────────────────────────────────────────

    def new_id(self) -> str:
        """
        Ids come from the creation time in milliseconds. Two records created
        within the same millisecond get consecutive ids.
        """
        candidate = int(time.time() * 1000)
        while str(candidate) in self._records:
            candidate += 1
        return str(candidate)

    def _creation_stamp(self) -> dict[str, Any]:
        """Fields the store assigns on creation. Subclasses add timestamps."""
        return {"id": self.new_id()}

    def _update_stamp(self) -> dict[str, Any]:
        """Fields the store refreshes on every update."""
        return {}

    def create(
        self, *, obj_in: CreateSchemaType | dict[str, Any], **extra: Any
    ) -> ModelType:
        """
        Create a record from a Pydantic schema or a plain dict.
        Keyword extras override schema fields; store-assigned fields win over both.
        """
        if isinstance(obj_in, dict):
            data = dict(obj_in)
        else:
            data = obj_in.model_dump()
        data.update(extra)
        data.update(self._creation_stamp())
        db_obj = self.model(**data)
        return self.add(db_obj)

    def add(self, db_obj: ModelType) -> ModelType:
        """Insert a fully built record as-is."""
        self._records[db_obj.id] = db_obj  # type: ignore[attr-defined]
        return db_obj

    def update(
        self,
        id: str,
        *,
        obj_in: UpdateSchemaType | dict[str, Any],
    ) -> ModelType | None:
        """
        Merge fields into an existing record.
        Accepts either a Pydantic schema or a plain dict.
        Only fields explicitly set in the schema are updated.
        Returns None if the id is unknown.
        """
        db_obj = self.get(id)
        if db_obj is None:
            return None

        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        update_data.pop("id", None)
        update_data.update(self._update_stamp())

        merged = self.model.model_validate({**db_obj.model_dump(), **update_data})
        self._records[id] = merged
        return merged

    def delete(self, id: str) -> bool:
        """Delete a record by id. Returns whether a record was removed."""
        if self.get(id) is None:
            return False
        del self._records[id]
        return True

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, id: object) -> bool:
        return isinstance(id, str) and id in self._records
