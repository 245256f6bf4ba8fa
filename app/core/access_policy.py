"""
Row-level ownership policy.

Every model that mixes in ``OwnedMixin`` belongs to exactly one user. Once a
session is bound to an identity with ``bind_identity``:

- ORM SELECTs against owned models only ever return rows whose ``user_id``
  equals the identity (other users' rows are invisible, not forbidden).
- Flushing a new, modified or deleted owned row whose ``user_id`` differs from
  the identity raises ``AccessDeniedError`` before any SQL is emitted. New rows
  without a ``user_id`` are stamped with the identity.

Writes to owned models from a session with no bound identity are rejected.
Reads from such a session are unrestricted; those are system sessions
(startup, maintenance scripts), never request sessions.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Column, ForeignKey, String, event
from sqlalchemy.orm import Session, declared_attr, with_loader_criteria

from app.core.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)

IDENTITY_KEY = "identity"


class OwnedMixin:
    @declared_attr
    def user_id(cls):
        return Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


def bind_identity(db: Session, user_id: str) -> None:
    db.info[IDENTITY_KEY] = str(user_id)


def current_identity(db: Session) -> Optional[str]:
    return db.info.get(IDENTITY_KEY)


@contextmanager
def acting_as(db: Session, user_id: str) -> Iterator[Session]:
    """Temporarily bind ``db`` to ``user_id``, restoring the previous identity afterwards."""
    previous = db.info.get(IDENTITY_KEY)
    bind_identity(db, user_id)
    try:
        yield db
    finally:
        if previous is None:
            db.info.pop(IDENTITY_KEY, None)
        else:
            db.info[IDENTITY_KEY] = previous


@event.listens_for(Session, "do_orm_execute")
def _scope_owned_rows(execute_state):
    identity = execute_state.session.info.get(IDENTITY_KEY)
    if identity is None:
        return
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                OwnedMixin,
                lambda cls: cls.user_id == identity,
                include_aliases=True,
            )
        )


@event.listens_for(Session, "before_flush")
def _enforce_row_ownership(session, flush_context, instances):
    identity = session.info.get(IDENTITY_KEY)

    for obj in session.new:
        if not isinstance(obj, OwnedMixin):
            continue
        if identity is None:
            raise AccessDeniedError("No identity bound to this session")
        if obj.user_id is None:
            obj.user_id = identity
        elif str(obj.user_id) != identity:
            logger.warning(
                f"Blocked insert of {type(obj).__name__} owned by {obj.user_id} for identity {identity}"
            )
            raise AccessDeniedError("Cannot create rows owned by another user")

    for obj in list(session.dirty) + list(session.deleted):
        if not isinstance(obj, OwnedMixin):
            continue
        if identity is None or str(obj.user_id) != identity:
            logger.warning(f"Blocked write to {type(obj).__name__} {getattr(obj, 'id', None)} for identity {identity}")
            raise AccessDeniedError("Cannot modify rows owned by another user")
