# taskapi/database.py
"""SQL task store built on SQLModel, selected when DATABASE_URL is set."""

import logging
import threading
from typing import Any, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select
from sqlmodel.pool import StaticPool

from taskapi.models import Task, TaskPriority, TaskRecord, utc_now
from taskapi.store import UPDATABLE_FIELDS

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist in the table.
MAX_TASK_ID = 2**63 - 1


def create_task_engine(database_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    kwargs: dict[str, Any] = {"echo": False}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def _to_task(record: TaskRecord) -> Task:
    return Task.model_validate(record)


class SqlTaskStore:
    """Task store backed by the ``tasks`` table.

    The table is created on construction and seeded only when it is empty.
    Ids are assigned explicitly from a high-water mark so that deleting the
    newest task does not make its id available again during this run.
    """

    def __init__(self, engine: Engine, seed: Iterable[Task] = ()) -> None:
        self._engine = engine
        self._lock = threading.Lock()
        SQLModel.metadata.create_all(engine)
        with Session(engine) as session:
            if session.exec(select(TaskRecord)).first() is None:
                for task in seed:
                    session.add(TaskRecord.model_validate(task.model_dump()))
                session.commit()
            max_id = session.exec(select(func.max(TaskRecord.id))).one()
        self._next_id = (max_id or 0) + 1
        logger.info("SQL task store ready (next id %s)", self._next_id)

    def list_for_owner(self, owner_id: int) -> list[Task]:
        statement = (
            select(TaskRecord)
            .where(TaskRecord.owner_id == owner_id)
            .order_by(TaskRecord.id)
        )
        with Session(self._engine) as session:
            return [_to_task(r) for r in session.exec(statement).all()]

    def get(self, task_id: int) -> Optional[Task]:
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        with Session(self._engine) as session:
            record = session.get(TaskRecord, task_id)
            return None if record is None else _to_task(record)

    def add(
        self, owner_id: int, title: str, description: str, priority: TaskPriority
    ) -> Task:
        now = utc_now()
        with self._lock, Session(self._engine) as session:
            record = TaskRecord(
                id=self._next_id,
                title=title,
                description=description,
                priority=priority,
                completed=False,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            session.add(record)
            session.commit()
            session.refresh(record)
            self._next_id += 1
            return _to_task(record)

    def update(self, task_id: int, changes: dict[str, Any]) -> Optional[Task]:
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        with Session(self._engine) as session:
            record = session.get(TaskRecord, task_id)
            if record is None:
                return None
            for key, value in changes.items():
                if key in UPDATABLE_FIELDS:
                    setattr(record, key, value)
            record.updated_at = utc_now()
            session.add(record)
            session.commit()
            session.refresh(record)
            return _to_task(record)

    def delete(self, task_id: int) -> Optional[Task]:
        if not 0 < task_id <= MAX_TASK_ID:
            return None
        with Session(self._engine) as session:
            record = session.get(TaskRecord, task_id)
            if record is None:
                return None
            task = _to_task(record)
            session.delete(record)
            session.commit()
            return task
