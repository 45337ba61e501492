# taskapi/routes/tasks.py
"""CRUD endpoints for the caller's own tasks."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from taskapi.dependencies import get_current_user, get_task_store
from taskapi.errors import FORBIDDEN, TASK_NOT_FOUND, ApiError, internal_errors
from taskapi.listing import filter_tasks, paginate
from taskapi.models import CurrentUser, Task, TaskInput, TaskPriority
from taskapi.store import TaskStore
from taskapi.validation import parse_task_id, validate_task_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items", tags=["tasks"])


def _owned_task(store: TaskStore, raw_id: str, user: CurrentUser, action: str) -> Task:
    """Look up a task for mutation: existence first, then ownership."""
    task_id = parse_task_id(raw_id)
    task = store.get(task_id)
    if task is None:
        raise ApiError(404, TASK_NOT_FOUND, "Task not found")
    if task.owner_id != user.id:
        logger.info("User %s denied %s on task %s", user.id, action, task_id)
        raise ApiError(403, FORBIDDEN, f"You can only {action} your own tasks")
    return task


@router.get("")
def list_tasks(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    priority: Optional[str] = None,
    completed: Optional[str] = None,
    search: Optional[str] = None,
    user: CurrentUser = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """List the caller's tasks, filtered first and then paginated."""
    with internal_errors("An error occurred while retrieving tasks"):
        tasks = filter_tasks(
            store.list_for_owner(user.id),
            priority=priority,
            completed=completed,
            search=search,
        )
        page_tasks, pagination = paginate(tasks, page, limit)
        return {
            "success": True,
            "message": "Tasks retrieved successfully",
            "data": {
                "tasks": [t.to_json() for t in page_tasks],
                "pagination": pagination,
            },
        }


@router.post("", status_code=201)
def create_task(
    body: Optional[TaskInput] = None,
    user: CurrentUser = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """Create a task owned by the caller."""
    body = body or TaskInput()
    validate_task_input(body)

    with internal_errors("An error occurred while creating the task"):
        task = store.add(
            owner_id=user.id,
            title=body.title.strip(),
            description=(body.description or "").strip(),
            priority=TaskPriority(body.priority or TaskPriority.medium),
        )
        logger.info("User %s created task %s", user.id, task.id)
        return {
            "success": True,
            "message": "Task created successfully",
            "data": {"task": task.to_json()},
        }


@router.put("/{task_id}")
def update_task(
    task_id: str,
    body: Optional[TaskInput] = None,
    user: CurrentUser = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """Apply a partial update. Only supplied, non-null fields change."""
    body = body or TaskInput()
    validate_task_input(body, partial=True)

    with internal_errors("An error occurred while updating the task"):
        task = _owned_task(store, task_id, user, "update")

        changes = body.model_dump(exclude_none=True)
        if "title" in changes:
            changes["title"] = changes["title"].strip()
        if "description" in changes:
            changes["description"] = changes["description"].strip()
        if "priority" in changes:
            changes["priority"] = TaskPriority(changes["priority"])

        updated = store.update(task.id, changes)
        if updated is None:
            raise ApiError(404, TASK_NOT_FOUND, "Task not found")
        return {
            "success": True,
            "message": "Task updated successfully",
            "data": {"task": updated.to_json()},
        }


@router.delete("/{task_id}")
def delete_task(
    task_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> dict:
    """Delete one of the caller's tasks and return it."""
    with internal_errors("An error occurred while deleting the task"):
        task = _owned_task(store, task_id, user, "delete")
        deleted = store.delete(task.id)
        if deleted is None:
            raise ApiError(404, TASK_NOT_FOUND, "Task not found")
        logger.info("User %s deleted task %s", user.id, task.id)
        return {
            "success": True,
            "message": "Task deleted successfully",
            "data": {"task": deleted.to_json()},
        }
