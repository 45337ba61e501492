# taskapi/store.py
"""Task store protocol and the default in-memory implementation."""

import threading
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from taskapi.models import Task, TaskPriority, utc_now

UPDATABLE_FIELDS = ("title", "description", "priority", "completed")


class TaskStore(Protocol):
    """Persistence seam used by the task handlers."""

    def list_for_owner(self, owner_id: int) -> list[Task]: ...

    def get(self, task_id: int) -> Optional[Task]: ...

    def add(
        self, owner_id: int, title: str, description: str, priority: TaskPriority
    ) -> Task: ...

    def update(self, task_id: int, changes: dict[str, Any]) -> Optional[Task]: ...

    def delete(self, task_id: int) -> Optional[Task]: ...


def seed_tasks(now: Optional[datetime] = None) -> list[Task]:
    """The three demo tasks: two owned by user 1, one by user 2."""
    now = now or utc_now()
    rows = [
        (1, "Complete QA Challenge", "Implement Playwright and Postman tests",
         TaskPriority.high, False, 1),
        (2, "Review Test Cases", "Go through all test scenarios",
         TaskPriority.medium, True, 1),
        (3, "Update Documentation", "Write comprehensive test plan",
         TaskPriority.low, False, 2),
    ]
    return [
        Task(
            id=task_id,
            title=title,
            description=description,
            priority=priority,
            completed=completed,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        for task_id, title, description, priority, completed, owner_id in rows
    ]


class InMemoryTaskStore:
    """Ordered in-process task list.

    Ids come from a high-water mark that starts at max(seeded id) + 1 and
    never moves backwards, so a deleted id is not handed out again. Every
    read returns copies; stored records change only through this class.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = [t.model_copy() for t in tasks]
        self._next_id = max((t.id for t in self._tasks), default=0) + 1
        self._lock = threading.Lock()

    def list_for_owner(self, owner_id: int) -> list[Task]:
        with self._lock:
            return [t.model_copy() for t in self._tasks if t.owner_id == owner_id]

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            index = self._index_of(task_id)
            return None if index is None else self._tasks[index].model_copy()

    def add(
        self, owner_id: int, title: str, description: str, priority: TaskPriority
    ) -> Task:
        now = utc_now()
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description,
                priority=priority,
                completed=False,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._tasks.append(task)
            return task.model_copy()

    def update(self, task_id: int, changes: dict[str, Any]) -> Optional[Task]:
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            update = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
            update["updated_at"] = utc_now()
            updated = self._tasks[index].model_copy(update=update)
            self._tasks[index] = updated
            return updated.model_copy()

    def delete(self, task_id: int) -> Optional[Task]:
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            return self._tasks.pop(index)

    def _index_of(self, task_id: int) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None
