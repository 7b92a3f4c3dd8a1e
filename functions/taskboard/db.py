"""
Task persistence for a SQL database and an in-memory test implementation.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Dict, Protocol

from sqlalchemy import BigInteger, Column, Integer, String, create_engine, delete, select, update
from sqlalchemy.orm import Session, declarative_base, sessionmaker


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class TaskRecord:
    id: str
    title: str
    completed: bool
    created_at: int

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "created_at": self.created_at,
        }


class DbClient(Protocol):
    """Interface for task persistence."""

    def create_task(self, title: str) -> TaskRecord:
        ...

    def list_tasks(self) -> list[TaskRecord]:
        ...

    def update_task(self, task_id: str, title: str, completed: bool) -> dict:
        ...

    def delete_task(self, task_id: str) -> None:
        ...


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.tasks: Dict[str, TaskRecord] = {}

    def create_task(self, title: str) -> TaskRecord:
        record = TaskRecord(
            id=uuid.uuid4().hex,
            title=title,
            completed=False,
            created_at=_now_ms(),
        )
        self.tasks[record.id] = record
        return record

    def list_tasks(self) -> list[TaskRecord]:
        # Insertion order breaks created_at ties, newest first.
        items = list(self.tasks.values())
        items.reverse()
        return sorted(items, key=lambda task: task.created_at, reverse=True)

    def update_task(self, task_id: str, title: str, completed: bool) -> dict:
        task = self.tasks.get(task_id)
        if task:
            task.title = title
            task.completed = bool(completed)
        return {"id": task_id, "title": title, "completed": completed}

    def delete_task(self, task_id: str) -> None:
        self.tasks.pop(task_id, None)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.tasks.clear()


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    The tasks table is expected to exist already; pass create_tables=True only
    for throwaway databases such as test fixtures.
    """

    def __init__(self, database_url: str, *, create_tables: bool = False):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        if create_tables:
            Base.metadata.create_all(self.engine)

    def _to_task_record(self, row: "TaskRow") -> TaskRecord:
        return TaskRecord(
            id=row.id,
            title=row.title,
            completed=bool(row.completed),
            created_at=row.created_at,
        )

    def create_task(self, title: str) -> TaskRecord:
        task_id = uuid.uuid4().hex
        now = _now_ms()
        with self.Session() as session:
            session.add(
                TaskRow(id=task_id, title=title, completed=0, created_at=now)
            )
            session.commit()
        return TaskRecord(id=task_id, title=title, completed=False, created_at=now)

    def list_tasks(self) -> list[TaskRecord]:
        with self.Session() as session:
            stmt = select(TaskRow).order_by(TaskRow.created_at.desc())
            rows = session.execute(stmt).scalars().all()
            return [self._to_task_record(row) for row in rows]

    def update_task(self, task_id: str, title: str, completed: bool) -> dict:
        with self.Session() as session:
            session.execute(
                update(TaskRow)
                .where(TaskRow.id == task_id)
                .values(title=title, completed=1 if completed else 0)
            )
            session.commit()
        return {"id": task_id, "title": title, "completed": completed}

    def delete_task(self, task_id: str) -> None:
        with self.Session() as session:
            session.execute(delete(TaskRow).where(TaskRow.id == task_id))
            session.commit()


Base = declarative_base()


class TaskRow(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    title = Column(String)
    completed = Column(Integer, nullable=False, default=0)
    created_at = Column(BigInteger, nullable=False, index=True)
