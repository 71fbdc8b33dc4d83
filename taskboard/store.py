import logging
import time
from datetime import date, datetime, timezone
from typing import Callable, Iterable, Optional

from taskboard.errors import TaskNotFound, TaskValidationError
from taskboard.schema import STATUS_VALUES, Task, TaskPatch

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def current_millis() -> int:
    return int(time.time() * 1000)


def apply_patch(task: Task, patch: TaskPatch, today: date) -> Task:
    """Return a copy of ``task`` with the fields set on ``patch`` applied.

    Fields left as None keep their stored value. The timestamp is always
    moved to ``today``, even for an empty patch.
    """
    changes = patch.model_dump(exclude_none=True)
    changes["time_stamp"] = today.isoformat()
    return task.model_copy(update=changes)


class TaskStore:
    """In-memory, insertion-ordered collection of tasks.

    None of the methods await, so under a single event loop each one runs
    to completion before another request touches the list. Concurrent
    writers are not reconciled: the last update wins.
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        today: Callable[[], date] = utc_today,
        now_ms: Callable[[], int] = current_millis,
    ):
        self._tasks: list[Task] = list(tasks or [])
        self._today = today
        self._now_ms = now_ms

    def __len__(self) -> int:
        return len(self._tasks)

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def get_by_id(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def create(self, name: str, description: str, status: str = "") -> Task:
        if not name:
            raise TaskValidationError("Name is required")
        if not description:
            raise TaskValidationError("Description is required")
        if status not in STATUS_VALUES:
            raise TaskValidationError(f"Unknown status: {status}")

        task = Task(
            id=self._next_id(),
            name=name,
            description=description,
            status=status,
            time_stamp=self._today().isoformat(),
        )
        self._tasks.append(task)
        logger.info("Created task id=%s name=%r", task.id, task.name)
        return task

    def update(self, task_id: str, patch: TaskPatch) -> Task:
        index = self._index_of(task_id)
        updated = apply_patch(self._tasks[index], patch, self._today())
        self._tasks[index] = updated
        logger.info("Updated task id=%s fields=%s", task_id, sorted(patch.model_dump(exclude_none=True)))
        return updated

    def delete(self, task_id: str) -> Task:
        index = self._index_of(task_id)
        deleted = self._tasks.pop(index)
        logger.info("Deleted task id=%s", task_id)
        return deleted

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFound(task_id)

    def _next_id(self) -> str:
        # Time-derived ids can repeat within one millisecond; step past live ones.
        taken = {task.id for task in self._tasks}
        candidate = self._now_ms()
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)


def seed_tasks() -> list[Task]:
    """The demonstration tasks the server starts with."""
    rows = [
        ("1", "Complete project documentation",
         "Write comprehensive API documentation for the new GraphQL endpoints", "Done", "2025-08-23"),
        ("2", "Fix authentication bug",
         "Resolve JWT token expiration issue in the login module", "In Progress", "2025-08-24"),
        ("3", "Design database schema",
         "Create normalized database structure for user management system", "Todo", "2025-08-24"),
        ("4", "Implement payment gateway",
         "Integrate Stripe API for subscription billing functionality", "In Progress", "2025-08-22"),
        ("5", "Code review team PRs",
         "Review and approve pending pull requests from development team", "Todo", "2025-08-24"),
    ]
    return [
        Task(id=task_id, name=name, description=description, status=status, time_stamp=stamp)
        for task_id, name, description, status, stamp in rows
    ]
