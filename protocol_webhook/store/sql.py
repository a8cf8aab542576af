"""Relational ProtocolStore backed by SQLAlchemy.

Tables are created with ``Base.metadata.create_all`` and seeded when empty;
there is no migration chain.  Each public call runs in its own transaction,
and closing a protocol is a conditional ``UPDATE ... WHERE status IN (open)``
so two writers can never both win the open → closed transition, even across
processes sharing the database.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from protocol_webhook.core.errors import ProtocolNotFoundError, StoreError
from protocol_webhook.db.base import Base
from protocol_webhook.db.models import ProtocolRow, UserRow
from protocol_webhook.db.session import create_db_engine, create_session_factory
from protocol_webhook.store.base import OPEN_STATUSES, STATUS_CLOSED, ProtocolStore
from protocol_webhook.store.records import ChecklistItem, Protocol, Section, User
from protocol_webhook.store.seed import seed_protocols, seed_users

logger = logging.getLogger(__name__)


def _row_to_user(row: UserRow) -> User:
    return User(id=row.id, name=row.name)


def _row_to_protocol(row: ProtocolRow) -> Protocol:
    return Protocol(
        id=row.id,
        assignee_id=row.assignee_id,
        status=row.status,
        title=row.title,
        site_name=row.site_name,
        turbine_id=row.turbine_id,
        date=row.date,
        template_name=row.template_name,
        sections=tuple(Section.from_dict(s) for s in row.sections or []),
        items=tuple(ChecklistItem.from_dict(i) for i in row.items or []),
        completed_at=row.completed_at,
    )


def _protocol_to_row(protocol: Protocol, position: int) -> ProtocolRow:
    return ProtocolRow(
        id=protocol.id,
        assignee_id=protocol.assignee_id,
        status=protocol.status,
        title=protocol.title,
        site_name=protocol.site_name,
        turbine_id=protocol.turbine_id,
        date=protocol.date,
        template_name=protocol.template_name,
        sections=[s.to_dict() for s in protocol.sections],
        items=[i.to_dict() for i in protocol.items],
        completed_at=protocol.completed_at,
        position=position,
    )


class SqlProtocolStore(ProtocolStore):
    """ProtocolStore over a relational database (PostgreSQL in production)."""

    backend = "postgres"

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> SqlProtocolStore:
        return cls(create_db_engine(database_url))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Yield a session; commit on success, rollback on error."""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StoreError(str(exc)) from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # -- lifecycle ----------------------------------------------------------

    def init(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

        with self._session() as db:
            existing = db.execute(select(func.count()).select_from(ProtocolRow)).scalar_one()
        if existing == 0:
            self.reset()
        else:
            logger.info("Using existing protocol table with %d rows", existing)

    def reset(self) -> int:
        protocols = seed_protocols()
        with self._session() as db:
            db.execute(delete(ProtocolRow))
            db.execute(delete(UserRow))
            db.add_all(
                UserRow(id=u.id, name=u.name, position=i) for i, u in enumerate(seed_users())
            )
            db.add_all(_protocol_to_row(p, i) for i, p in enumerate(protocols))
        logger.info("Database seeded with %d protocols", len(protocols))
        return len(protocols)

    # -- reads --------------------------------------------------------------

    def get_users(self) -> list[User]:
        with self._session() as db:
            rows = db.execute(select(UserRow).order_by(UserRow.position)).scalars().all()
            return [_row_to_user(r) for r in rows]

    def get_user(self, user_id: str) -> User | None:
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return _row_to_user(row) if row is not None else None

    def get_protocols(
        self,
        user_id: str | None = None,
        status: str | None = None,
    ) -> list[Protocol]:
        stmt = select(ProtocolRow).order_by(ProtocolRow.position)
        if user_id is not None:
            stmt = stmt.where(ProtocolRow.assignee_id == user_id)
        if status is not None:
            stmt = stmt.where(ProtocolRow.status == status)
        with self._session() as db:
            return [_row_to_protocol(r) for r in db.execute(stmt).scalars().all()]

    def get_protocol_by_id(self, protocol_id: str) -> Protocol | None:
        with self._session() as db:
            row = db.get(ProtocolRow, protocol_id)
            return _row_to_protocol(row) if row is not None else None

    def count_open_for_user(self, user_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(ProtocolRow)
            .where(
                ProtocolRow.assignee_id == user_id,
                ProtocolRow.status.in_(sorted(OPEN_STATUSES)),
            )
        )
        with self._session() as db:
            return db.execute(stmt).scalar_one()

    # -- writes -------------------------------------------------------------

    def update_protocol_status(
        self,
        protocol_id: str,
        new_status: str,
        completed_at: str | None,
    ) -> None:
        with self._session() as db:
            row = db.get(ProtocolRow, protocol_id)
            if row is None:
                raise ProtocolNotFoundError(protocol_id)
            row.status = new_status
            row.completed_at = completed_at

    def close_if_open(self, protocol_id: str, completed_at: str) -> bool:
        stmt = (
            update(ProtocolRow)
            .where(
                ProtocolRow.id == protocol_id,
                ProtocolRow.status.in_(sorted(OPEN_STATUSES)),
            )
            .values(status=STATUS_CLOSED, completed_at=completed_at)
            .execution_options(synchronize_session=False)
        )
        with self._session() as db:
            result = db.execute(stmt)
            if result.rowcount == 1:
                return True
            if db.get(ProtocolRow, protocol_id) is None:
                raise ProtocolNotFoundError(protocol_id)
            return False
