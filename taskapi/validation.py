# taskapi/validation.py
"""Input validation for login and task bodies.

Each validator raises a 400 ``VALIDATION_ERROR`` on the first rule that
fails; later rules are not evaluated.
"""

from taskapi.errors import validation_error
from taskapi.models import LoginRequest, TaskInput, TaskPriority

MIN_USERNAME_LENGTH = 3
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
VALID_PRIORITIES = [p.value for p in TaskPriority]


def validate_login(body: LoginRequest) -> None:
    """Require both credentials and a username of at least three characters."""
    if not body.username or not body.password:
        raise validation_error(
            "Username and password are required",
            {
                "username": None if body.username else "Username is required",
                "password": None if body.password else "Password is required",
            },
        )
    if len(body.username) < MIN_USERNAME_LENGTH:
        raise validation_error(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters long",
            {"username": f"Username must be at least {MIN_USERNAME_LENGTH} characters long"},
        )


def validate_task_input(body: TaskInput, partial: bool = False) -> None:
    """Check a task body.

    With ``partial=True`` (updates) only the fields that were supplied are
    checked and ``title`` may be omitted; an explicitly supplied title is
    still held to the create rules.
    """
    if not partial or body.title is not None:
        _check_title(body.title)
    if body.description is not None and len(body.description) > MAX_DESCRIPTION_LENGTH:
        raise validation_error(
            "Task description is too long",
            {"description": f"Description must be {MAX_DESCRIPTION_LENGTH} characters or fewer"},
        )
    if body.priority is not None and body.priority not in VALID_PRIORITIES:
        raise validation_error(
            "Invalid priority value",
            {"priority": f"Priority must be one of: {', '.join(VALID_PRIORITIES)}"},
        )


def _check_title(title) -> None:
    if not title or not title.strip():
        raise validation_error("Task title is required", {"title": "Title cannot be empty"})
    if len(title) > MAX_TITLE_LENGTH:
        raise validation_error(
            "Task title is too long",
            {"title": f"Title must be {MAX_TITLE_LENGTH} characters or fewer"},
        )


def parse_task_id(raw: str) -> int:
    """Parse a path id made only of ASCII digits."""
    if not (raw.isascii() and raw.isdigit()):
        raise validation_error("Invalid task ID format", {"id": "Task ID must be an integer"})
    return int(raw)
