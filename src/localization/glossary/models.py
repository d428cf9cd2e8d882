"""Glossary term models.

Glossary terms are tenant-scoped overrides: each tenant keeps its own
vocabulary with one translation per locale and at most one preferred
translation used as the fallback for locales it does not cover.
"""

from datetime import datetime
from enum import Enum
from typing import Any
import uuid

from sqlalchemy import JSON, Column, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from localization.core.base_models import TimestampedTable, TimestampResponseMixin


class GlossaryCategory(str, Enum):
    BUSINESS = "business"
    INDUSTRY = "industry"
    TECHNICAL = "technical"
    MARKETING = "marketing"
    LEGAL = "legal"
    CUSTOM = "custom"


TENANT_MAX_LENGTH = 100
TERM_MAX_LENGTH = 100
LOCALE_MAX_LENGTH = 10
VALUE_MAX_LENGTH = 500
CONTEXT_MAX_LENGTH = 200
ACTOR_MAX_LENGTH = 255


class GlossaryTranslation(SQLModel):
    locale: str = Field(min_length=1, max_length=LOCALE_MAX_LENGTH)
    value: str = Field(min_length=1, max_length=VALUE_MAX_LENGTH)
    context: str = Field(default="", max_length=CONTEXT_MAX_LENGTH)
    is_preferred: bool = False


class GlossaryTerm(TimestampedTable, table=True):
    __tablename__ = "glossary_term"
    __table_args__ = (
        UniqueConstraint("tenant_id", "term", name="uq_glossary_term_tenant_term"),
        Index("idx_glossary_term_business_term", "business_id", "term"),
        Index("idx_glossary_term_category_active", "category", "is_active"),
    )

    tenant_id: str = Field(max_length=TENANT_MAX_LENGTH, index=True)
    # Opaque grouping reference; not checked against any business record
    business_id: str | None = Field(default=None, max_length=100, index=True)
    term: str = Field(max_length=TERM_MAX_LENGTH)
    translations: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    category: GlossaryCategory = Field(default=GlossaryCategory.BUSINESS)

    created_by: str = Field(max_length=ACTOR_MAX_LENGTH, index=True)
    last_used: datetime | None = None
    usage_count: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    notes: str | None = None


class GlossaryTermCreate(SQLModel):
    term: str = Field(min_length=1, max_length=TERM_MAX_LENGTH)
    translations: list[GlossaryTranslation] = Field(default_factory=list)
    category: GlossaryCategory = Field(default=GlossaryCategory.BUSINESS)
    business_id: str | None = Field(default=None, max_length=100)
    created_by: str = Field(default="system", max_length=ACTOR_MAX_LENGTH)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None


class GlossaryTermUpdate(SQLModel):
    translations: list[GlossaryTranslation] | None = None
    category: GlossaryCategory | None = None
    tags: list[str] | None = None
    notes: str | None = None
    is_active: bool | None = None
    updated_by: str = Field(default="system", max_length=ACTOR_MAX_LENGTH)


class GlossaryTranslationUpsert(SQLModel):
    """Body of an add-or-replace call; the locale comes from the path."""

    value: str = Field(min_length=1, max_length=VALUE_MAX_LENGTH)
    context: str = Field(default="", max_length=CONTEXT_MAX_LENGTH)
    is_preferred: bool = False


class GlossaryTermPublic(TimestampResponseMixin):
    id: uuid.UUID
    tenant_id: str
    business_id: str | None
    term: str
    translations: list[GlossaryTranslation]
    category: GlossaryCategory
    created_by: str
    last_used: datetime | None
    usage_count: int
    tags: list[str]
    notes: str | None
    is_active: bool


class GlossaryItem(SQLModel):
    """A term resolved for one locale."""

    term: str
    translation: str
    category: GlossaryCategory
    context: str
    usage_count: int


class ResolvedTranslation(SQLModel):
    term: str
    locale: str
    translation: str
