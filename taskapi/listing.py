# taskapi/listing.py
"""Filtering and pagination for the task list endpoint."""

import math
from typing import Optional

from taskapi.models import Task


def filter_tasks(
    tasks: list[Task],
    priority: Optional[str] = None,
    completed: Optional[str] = None,
    search: Optional[str] = None,
) -> list[Task]:
    """Apply the optional list filters, preserving order.

    ``completed`` is the raw query string: ``"true"`` keeps completed tasks,
    any other value keeps open ones. ``search`` matches title or description
    case-insensitively.
    """
    if priority:
        tasks = [t for t in tasks if t.priority == priority]
    if completed is not None:
        want = completed == "true"
        tasks = [t for t in tasks if t.completed is want]
    if search:
        needle = search.lower()
        tasks = [
            t for t in tasks
            if needle in t.title.lower() or needle in t.description.lower()
        ]
    return tasks


def paginate(tasks: list[Task], page: int, limit: int) -> tuple[list[Task], dict]:
    """Slice one page out of *tasks* and describe the full result set."""
    start = (page - 1) * limit
    total = len(tasks)
    pagination = {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
    }
    return tasks[start:start + limit], pagination
