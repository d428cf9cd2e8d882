"""Translation entry models.

A TranslationEntry is one (namespace, key, locale) value. Entries are
process-global: UI and system strings are shared across tenants, unlike
glossary terms.
"""

from datetime import datetime
from enum import Enum
from typing import Any
import uuid

from sqlalchemy import JSON, Column, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from localization.core.base_models import TimestampedTable, TimestampResponseMixin


class Namespace(str, Enum):
    """Fixed partitions of translation keys."""

    UI = "ui"
    EMAILS = "emails"
    NOTIFICATIONS = "notifications"
    REPORTS = "reports"
    FORMS = "forms"
    ERRORS = "errors"
    VALIDATION = "validation"


class TranslationStatus(str, Enum):
    DRAFT = "draft"
    REVIEWED = "reviewed"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class VariableType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    CURRENCY = "currency"
    PLURAL = "plural"


class TranslationSource(str, Enum):
    MANUAL = "manual"
    MACHINE = "machine"
    IMPORT = "import"
    API = "api"


KEY_MAX_LENGTH = 200
LOCALE_MAX_LENGTH = 10
VALUE_MAX_LENGTH = 2000
CONTEXT_MAX_LENGTH = 500
ACTOR_MAX_LENGTH = 255


class TranslationVariable(SQLModel):
    """Placeholder a translated value expects at render time."""

    name: str = Field(min_length=1, max_length=100)
    type: VariableType = Field(default=VariableType.STRING)
    required: bool = False
    description: str | None = Field(default=None, max_length=500)


class TranslationEntry(TimestampedTable, table=True):
    __tablename__ = "translation_entry"
    __table_args__ = (
        UniqueConstraint(
            "namespace", "key", "locale", name="uq_translation_entry_namespace_key_locale"
        ),
        Index("idx_translation_entry_namespace_locale", "namespace", "locale"),
        Index("idx_translation_entry_status_active", "status", "is_active"),
    )

    namespace: Namespace = Field(index=True)
    key: str = Field(max_length=KEY_MAX_LENGTH)
    locale: str = Field(max_length=LOCALE_MAX_LENGTH, index=True)
    value: str = Field(max_length=VALUE_MAX_LENGTH)
    context: str | None = Field(default=None, max_length=CONTEXT_MAX_LENGTH)
    status: TranslationStatus = Field(default=TranslationStatus.DRAFT, index=True)
    variables: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    # Metadata. created_by doubles as the last-modifier stamp.
    created_by: str = Field(max_length=ACTOR_MAX_LENGTH, index=True)
    reviewed_by: str | None = Field(default=None, max_length=ACTOR_MAX_LENGTH)
    reviewed_at: datetime | None = None
    published_at: datetime | None = None
    source: TranslationSource = Field(default=TranslationSource.MANUAL)
    confidence: float = Field(default=1.0, ge=0, le=1)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    notes: str | None = None


class TranslationKeyCreate(SQLModel):
    """A key with one value per locale, upserted as independent entries."""

    namespace: str
    key: str = Field(min_length=1, max_length=KEY_MAX_LENGTH)
    translations: dict[str, str] = Field(min_length=1)
    context: str | None = Field(default=None, max_length=CONTEXT_MAX_LENGTH)
    variables: list[TranslationVariable] = Field(default_factory=list)
    created_by: str = Field(default="system", max_length=ACTOR_MAX_LENGTH)


class TranslationEntryUpdate(SQLModel):
    """Partial update. Status only changes when included."""

    value: str | None = Field(default=None, min_length=1, max_length=VALUE_MAX_LENGTH)
    context: str | None = Field(default=None, max_length=CONTEXT_MAX_LENGTH)
    variables: list[TranslationVariable] | None = None
    status: TranslationStatus | None = None
    updated_by: str = Field(default="system", max_length=ACTOR_MAX_LENGTH)


class TranslationReview(SQLModel):
    reviewed_by: str = Field(default="system", max_length=ACTOR_MAX_LENGTH)


class TranslationEntryPublic(TimestampResponseMixin):
    id: uuid.UUID
    namespace: Namespace
    key: str
    locale: str
    value: str
    context: str | None
    status: TranslationStatus
    variables: list[TranslationVariable]
    is_active: bool
    created_by: str
    reviewed_by: str | None
    reviewed_at: datetime | None
    published_at: datetime | None
    source: TranslationSource
    confidence: float
    tags: list[str]
    notes: str | None


class EntryLocaleView(SQLModel):
    """One locale of a key as returned by get_entry."""

    value: str
    context: str | None
    status: TranslationStatus
    variables: list[TranslationVariable]


class BundleRow(SQLModel):
    """Projection of an entry used to assemble bundles."""

    namespace: Namespace
    key: str
    locale: str
    value: str
    variables: list[TranslationVariable]


class LocaleUpsertResult(SQLModel):
    """Outcome of one locale within a multi-locale upsert."""

    locale: str
    ok: bool
    entry: TranslationEntryPublic | None = None
    error: dict[str, Any] | None = None


class MissingKeyReport(SQLModel):
    key: str
    locales: list[str]
    missing: list[str]


class StatusCount(SQLModel):
    status: TranslationStatus
    count: int
