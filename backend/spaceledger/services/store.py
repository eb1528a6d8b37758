"""
Entity store helpers - keyed lookups and per-key atomic status writes.

All services go through these helpers so every status change is a
compare-and-set on (id, expected status) and every multi-entity effect
commits or rolls back as one unit.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterable, Iterator, Optional, Type, TypeVar, Union

from sqlalchemy.orm import Session

from spaceledger.services.errors import NotFound

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

MAX_CAS_ATTEMPTS = 5


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_by_id(db: Session, model: Type[ModelT], entity_id: Any, label: Optional[str] = None) -> ModelT:
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFound(f"{label or model.__name__} {entity_id} not found")
    return entity


def find_one(db: Session, model: Type[ModelT], **criteria: Any) -> Optional[ModelT]:
    """Lookup by secondary key, e.g. find_one(db, User, email=...)."""
    return db.query(model).filter_by(**criteria).first()


def compare_and_set_status(
    db: Session,
    model: Type[ModelT],
    entity_id: Any,
    new_status: Any,
    expected: Union[Any, Iterable[Any], None] = None,
) -> bool:
    """
    Write ``new_status`` only if the row still holds one of ``expected``.

    Returns True when the row was updated. The write joins the session's
    current transaction; callers commit through unit_of_work.
    """
    query = db.query(model).filter(model.id == entity_id)
    if expected is not None:
        if isinstance(expected, (list, tuple, set, frozenset)):
            query = query.filter(model.status.in_(list(expected)))
        else:
            query = query.filter(model.status == expected)
    updated = query.update(
        {model.status: new_status, model.updated_at: datetime.utcnow()},
        synchronize_session=False,
    )
    return updated == 1


def lock_row(db: Session, model: Type[ModelT], entity_id: Any) -> bool:
    """
    Take the write lock on a row for the rest of the transaction.

    Uses SELECT ... FOR UPDATE where the backend supports it. SQLite has no
    row locks, so there a self-assignment of ``updated_at`` takes the
    database write lock while leaving the row's values unchanged.
    """
    if db.get_bind().dialect.name == "sqlite":
        # Setting the column explicitly keeps its onupdate default from firing
        touched = (
            db.query(model)
            .filter(model.id == entity_id)
            .update({model.updated_at: model.updated_at}, synchronize_session=False)
        )
        return touched == 1
    locked = db.query(model.id).filter(model.id == entity_id).with_for_update().first()
    return locked is not None
