"""SQLModel table backing the local key-value storage."""
from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from helpers.datetime_utils import utc_now


class KeyValueEntry(SQLModel, table=True):
    """One persisted value; the payload is a JSON string."""

    __tablename__ = "kv_store"

    key: str = Field(primary_key=True, description="Storage key, e.g. 'tasks'")
    value: str = Field(description="Serialized payload")
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last write timestamp in UTC",
    )


__all__ = ["KeyValueEntry"]
