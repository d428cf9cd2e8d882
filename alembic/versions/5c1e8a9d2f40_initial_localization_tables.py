from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
import sqlmodel

revision: str = "5c1e8a9d2f40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

namespace_enum = sa.Enum(
    "UI",
    "EMAILS",
    "NOTIFICATIONS",
    "REPORTS",
    "FORMS",
    "ERRORS",
    "VALIDATION",
    name="namespace",
)
status_enum = sa.Enum(
    "DRAFT", "REVIEWED", "PUBLISHED", "ARCHIVED", name="translationstatus"
)
source_enum = sa.Enum("MANUAL", "MACHINE", "IMPORT", "API", name="translationsource")
category_enum = sa.Enum(
    "BUSINESS",
    "INDUSTRY",
    "TECHNICAL",
    "MARKETING",
    "LEGAL",
    "CUSTOM",
    name="glossarycategory",
)


def upgrade() -> None:
    op.create_table(
        "translation_entry",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("namespace", namespace_enum, nullable=False),
        sa.Column("key", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column(
            "locale", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False
        ),
        sa.Column(
            "value", sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=False
        ),
        sa.Column(
            "context", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True
        ),
        sa.Column("status", status_enum, nullable=False),
        sa.Column("variables", sa.JSON(), nullable=False),
        sa.Column(
            "created_by", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False
        ),
        sa.Column(
            "reviewed_by", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True
        ),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("source", source_enum, nullable=False),
        sa.Column("confidence", sa.Float(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("notes", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "namespace",
            "key",
            "locale",
            name="uq_translation_entry_namespace_key_locale",
        ),
    )
    op.create_index(
        op.f("ix_translation_entry_namespace"), "translation_entry", ["namespace"]
    )
    op.create_index(op.f("ix_translation_entry_locale"), "translation_entry", ["locale"])
    op.create_index(op.f("ix_translation_entry_status"), "translation_entry", ["status"])
    op.create_index(
        op.f("ix_translation_entry_is_active"), "translation_entry", ["is_active"]
    )
    op.create_index(
        op.f("ix_translation_entry_created_by"), "translation_entry", ["created_by"]
    )
    op.create_index(
        "idx_translation_entry_namespace_locale",
        "translation_entry",
        ["namespace", "locale"],
    )
    op.create_index(
        "idx_translation_entry_status_active",
        "translation_entry",
        ["status", "is_active"],
    )

    op.create_table(
        "glossary_term",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "tenant_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False
        ),
        sa.Column(
            "business_id", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True
        ),
        sa.Column("term", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("translations", sa.JSON(), nullable=False),
        sa.Column("category", category_enum, nullable=False),
        sa.Column(
            "created_by", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False
        ),
        sa.Column("last_used", sa.DateTime(), nullable=True),
        sa.Column("usage_count", sa.Integer(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("notes", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "term", name="uq_glossary_term_tenant_term"),
    )
    op.create_index(op.f("ix_glossary_term_tenant_id"), "glossary_term", ["tenant_id"])
    op.create_index(
        op.f("ix_glossary_term_business_id"), "glossary_term", ["business_id"]
    )
    op.create_index(op.f("ix_glossary_term_is_active"), "glossary_term", ["is_active"])
    op.create_index(op.f("ix_glossary_term_created_by"), "glossary_term", ["created_by"])
    op.create_index(
        "idx_glossary_term_business_term", "glossary_term", ["business_id", "term"]
    )
    op.create_index(
        "idx_glossary_term_category_active", "glossary_term", ["category", "is_active"]
    )


def downgrade() -> None:
    op.drop_index("idx_glossary_term_category_active", table_name="glossary_term")
    op.drop_index("idx_glossary_term_business_term", table_name="glossary_term")
    op.drop_index(op.f("ix_glossary_term_created_by"), table_name="glossary_term")
    op.drop_index(op.f("ix_glossary_term_is_active"), table_name="glossary_term")
    op.drop_index(op.f("ix_glossary_term_business_id"), table_name="glossary_term")
    op.drop_index(op.f("ix_glossary_term_tenant_id"), table_name="glossary_term")
    op.drop_table("glossary_term")
    category_enum.drop(op.get_bind(), checkfirst=True)

    op.drop_index("idx_translation_entry_status_active", table_name="translation_entry")
    op.drop_index(
        "idx_translation_entry_namespace_locale", table_name="translation_entry"
    )
    op.drop_index(
        op.f("ix_translation_entry_created_by"), table_name="translation_entry"
    )
    op.drop_index(op.f("ix_translation_entry_is_active"), table_name="translation_entry")
    op.drop_index(op.f("ix_translation_entry_status"), table_name="translation_entry")
    op.drop_index(op.f("ix_translation_entry_locale"), table_name="translation_entry")
    op.drop_index(op.f("ix_translation_entry_namespace"), table_name="translation_entry")
    op.drop_table("translation_entry")
    source_enum.drop(op.get_bind(), checkfirst=True)
    status_enum.drop(op.get_bind(), checkfirst=True)
    namespace_enum.drop(op.get_bind(), checkfirst=True)
