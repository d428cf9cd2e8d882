"""Base models and mixins for SQLModel schemas.

Usage:
    - Table models (table=True) inherit from TimestampedTable
    - Response schemas use TimestampResponseMixin for timestamp fields
    - List responses use PaginatedResponse[T]

Example:
    class GlossaryTerm(GlossaryTermBase, TimestampedTable, table=True):
        ...
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps.

    updated_at has no database-side default or trigger; every mutating
    operation sets it explicitly.
    """

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ActiveFlagMixin(SQLModel):
    """Logical deletion flag. Records are archived, never removed."""

    is_active: bool = Field(default=True, index=True)


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin, ActiveFlagMixin):
    """Base for tables with id, timestamps, and the active flag.

    Use for: TranslationEntry, GlossaryTerm
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard list response wrapper.

    Example:
        @router.get("/{tenant_id}", response_model=PaginatedResponse[GlossaryItem])
        def read_glossary(...):
            return PaginatedResponse(data=items, count=len(items))
    """

    data: list[T]
    count: int
