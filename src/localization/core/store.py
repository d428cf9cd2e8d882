"""Entity store query interface.

Thin, model-agnostic operations over SQLModel tables that the translation
and glossary layers build on. Writes are single statements so the database
provides the atomicity: upserts use INSERT ... ON CONFLICT DO UPDATE, bulk
transitions use one UPDATE with a filter, and counters are incremented in
place rather than read, modified, and saved.
"""

from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Row
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import InstrumentedAttribute
from sqlmodel import Session, SQLModel, col, func, select, text, update

from localization.core.exceptions import NotFoundError
from localization.core.uow import atomic, read_only

M = TypeVar("M", bound=SQLModel)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_by_key(
    session: Session,
    model: type[M],
    *,
    key_fields: Sequence[str],
    values: dict[str, Any],
    update_fields: Sequence[str],
    resource: str = "Record",
) -> M:
    """Atomically insert a row or replace `update_fields` on the existing one.

    Concurrent upserts on the same key are serialized by the database;
    the last write wins.

    Args:
        session: Database session
        model: Table model class
        key_fields: Columns of the unique constraint identifying the row
        values: Full column values for the insert path
        update_fields: Columns overwritten when the row already exists
        resource: Name used in error messages

    Returns:
        The stored row, reloaded from the database
    """
    dialect = session.get_bind().dialect.name
    try:
        insert = _UPSERT_DIALECTS[dialect]
    except KeyError:
        raise NotImplementedError(f"upsert is not supported on {dialect}") from None

    statement = insert(model).values(**values)
    statement = statement.on_conflict_do_update(
        index_elements=list(key_fields),
        set_={field: statement.excluded[field] for field in update_fields},
    )
    statement = statement.returning(model).execution_options(populate_existing=True)

    with atomic(session, resource=resource):
        row = session.exec(statement).scalar_one()
    session.refresh(row)
    return row


def find_many(
    session: Session,
    model: type[M],
    *conditions: ColumnElement[bool] | bool,
    order_by: Sequence[Any] = (),
    limit: int | None = None,
    offset: int = 0,
) -> list[M]:
    """Read rows with server-side filtering, ordering, and paging."""
    statement = select(model).where(*conditions)
    if order_by:
        statement = statement.order_by(*order_by)
    if offset:
        statement = statement.offset(offset)
    if limit is not None:
        statement = statement.limit(limit)

    with read_only(session):
        return list(session.exec(statement).all())


def find_rows(
    session: Session,
    columns: Sequence[InstrumentedAttribute[Any]],
    *conditions: ColumnElement[bool] | bool,
    order_by: Sequence[Any] = (),
    limit: int | None = None,
    offset: int = 0,
) -> list[Row[Any]]:
    """Like find_many, but returns only the projected `columns`."""
    statement = select(*columns).where(*conditions)
    if order_by:
        statement = statement.order_by(*order_by)
    if offset:
        statement = statement.offset(offset)
    if limit is not None:
        statement = statement.limit(limit)

    with read_only(session):
        return list(session.exec(statement).all())


def find_one(
    session: Session,
    model: type[M],
    *conditions: ColumnElement[bool] | bool,
) -> M | None:
    with read_only(session):
        return session.exec(select(model).where(*conditions)).first()


def save(session: Session, row: M, *, resource: str = "Record") -> M:
    """Persist an already-mutated row and reload it."""
    with atomic(session, resource=resource) as uow:
        uow.session.add(row)
    session.refresh(row)
    return row


def update_one(
    session: Session,
    model: type[M],
    *conditions: ColumnElement[bool] | bool,
    values: dict[str, Any],
    resource: str = "Record",
) -> M:
    """Apply `values` to the single row matching `conditions`.

    Raises:
        NotFoundError: No row matches
    """
    row = find_one(session, model, *conditions)
    if row is None:
        raise NotFoundError(resource)

    row.sqlmodel_update(values)
    return save(session, row, resource=resource)


def update_many(
    session: Session,
    model: type[M],
    *conditions: ColumnElement[bool] | bool,
    values: dict[str, Any],
    resource: str = "Record",
) -> int:
    """Apply `values` to every row matching `conditions` in one statement.

    Returns:
        Number of rows modified
    """
    statement = (
        update(model)
        .where(*conditions)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    with atomic(session, resource=resource) as uow:
        modified = uow.session.exec(statement).rowcount
    return modified


def increment_field(
    session: Session,
    model: type[M],
    *conditions: ColumnElement[bool] | bool,
    field: InstrumentedAttribute[Any],
    delta: int = 1,
    values: dict[str, Any] | None = None,
    resource: str = "Record",
) -> int:
    """Atomically add `delta` to a numeric column in place.

    Returns:
        Number of rows modified
    """
    changes = {field.key: col(field) + delta, **(values or {})}
    return update_many(session, model, *conditions, values=changes, resource=resource)


def group_count(
    session: Session,
    group_field: InstrumentedAttribute[Any],
    *conditions: ColumnElement[bool] | bool,
) -> list[tuple[Any, int]]:
    """Count rows matching `conditions` grouped by `group_field`."""
    statement = (
        select(group_field, func.count())
        .where(*conditions)
        .group_by(group_field)
        .order_by(group_field)
    )
    with read_only(session):
        return [(value, count) for value, count in session.exec(statement).all()]


def grouped_difference(
    session: Session,
    group_field: InstrumentedAttribute[Any],
    member_field: InstrumentedAttribute[Any],
    required: Sequence[Any],
    *conditions: ColumnElement[bool] | bool,
) -> list[tuple[Any, list[Any], list[Any]]]:
    """Group matching rows by `group_field` and diff each group's members
    against `required`.

    Grouping happens in memory over a two-column projection so it works on
    any backend.

    Returns:
        (group, present members, missing members) for every group with at
        least one missing member, ordered by group. Missing members keep the
        order of `required`.
    """
    rows = find_rows(
        session,
        [group_field, member_field],
        *conditions,
        order_by=[group_field, member_field],
    )

    groups: dict[Any, list[Any]] = {}
    for group, member in rows:
        present = groups.setdefault(group, [])
        if member not in present:
            present.append(member)

    wanted = list(dict.fromkeys(required))
    report = []
    for group, present in groups.items():
        missing = [member for member in wanted if member not in present]
        if missing:
            report.append((group, present, missing))
    return report


def check_connection(session: Session) -> None:
    """Round-trip a trivial query; raises StoreUnavailableError when down."""
    with read_only(session):
        session.exec(text("SELECT 1"))
