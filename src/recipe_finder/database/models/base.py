"""Base database model and shared column helpers.

Defines the declarative base inherited by every ORM model of the application.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

import orjson
from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware current time used as a Python-side column default."""
    return datetime.now(UTC)


class BaseDatabaseModel(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    Provides a JSON ``repr`` built from the loaded column attributes only, so
    printing a model never triggers a lazy load.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._to_json()})"

    def _to_json(self) -> str:
        state = inspect(self)
        data: dict[str, object] = {}
        for attr in state.mapper.column_attrs:
            if attr.key in state.unloaded:
                continue
            value = getattr(self, attr.key)
            if isinstance(value, enum.Enum):
                value = value.value
            data[attr.key] = value
        return orjson.dumps(data, default=str).decode()
