"""
Generic store operations shared by the reconciler and the read routes.

Every entity is keyed by a unique `slug` column. All calls translate
connection failures into `StoreUnavailable` (see `fixgeni.db.store_errors`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fixgeni.db import store_errors

KEY_COLUMN = "slug"


@dataclass
class UpsertOutcome:
    row: Any
    created: bool
    changed: tuple[str, ...] = field(default_factory=tuple)

    @property
    def updated(self) -> bool:
        return not self.created and bool(self.changed)


def _where(model, filters: Mapping[str, Any] | None) -> list:
    return [getattr(model, name) == value for name, value in (filters or {}).items()]


def count(db: Session, model, **filters: Any) -> int:
    stmt = select(func.count()).select_from(model).where(*_where(model, filters))
    with store_errors(db):
        return int(db.execute(stmt).scalar_one())


def find_by_key(db: Session, model, key: str):
    stmt = select(model).where(getattr(model, KEY_COLUMN) == key)
    with store_errors(db):
        return db.execute(stmt).unique().scalar_one_or_none()


def existing_keys(db: Session, model, keys: Sequence[str]) -> set[str]:
    if not keys:
        return set()
    column = getattr(model, KEY_COLUMN)
    with store_errors(db):
        return set(db.execute(select(column).where(column.in_(list(keys)))).scalars())


def query(
    db: Session,
    model,
    *,
    filters: Mapping[str, Any] | None = None,
    order_by: Sequence = (),
    limit: int | None = None,
    offset: int = 0,
) -> list:
    stmt = select(model).where(*_where(model, filters)).order_by(*order_by)
    if offset:
        stmt = stmt.offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    with store_errors(db):
        return list(db.execute(stmt).unique().scalars())


def _apply(row, fields: Mapping[str, Any]) -> tuple[str, ...]:
    changed = []
    for name, value in fields.items():
        if getattr(row, name) != value:
            setattr(row, name, value)
            changed.append(name)
    return tuple(changed)


def upsert(db: Session, model, key: str, fields: Mapping[str, Any]) -> UpsertOutcome:
    """
    Insert the row keyed by `key` or bring its `fields` to the given values.

    Commits on its own so each call is atomic on the unique key. An insert
    that loses a race against another writer is retried as an update.
    Untouched rows are not written.
    """
    with store_errors(db):
        row = find_by_key(db, model, key)
        if row is None:
            row = model(**{KEY_COLUMN: key}, **fields)
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                row = find_by_key(db, model, key)
                if row is None:
                    raise
            else:
                db.refresh(row)
                return UpsertOutcome(row=row, created=True, changed=tuple(fields))

        changed = _apply(row, fields)
        if changed:
            db.commit()
            db.refresh(row)
        return UpsertOutcome(row=row, created=False, changed=changed)
