"""Client-side view state for the task list.

The controller owns two independent pieces of state: the draft behind the
"add task" form, and at most one task being edited. It never patches its
task list locally; every successful create, update or delete is followed by
a full reload from the server.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from taskboard.client import TaskApiError, TaskClient
from taskboard.schema import Task

logger = logging.getLogger(__name__)

DRAFT_FIELDS = ("name", "description", "status")


def status_slug(status: str) -> str:
    """``In Progress`` -> ``in-progress``; used for status badges."""
    return status.lower().replace(" ", "-")


@dataclass
class FormDraft:
    name: str = ""
    description: str = ""
    status: str = ""

    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.description)


@dataclass
class EditDraft:
    task_id: str
    name: str
    description: str
    status: str

    @classmethod
    def from_task(cls, task: Task) -> "EditDraft":
        return cls(task_id=task.id, name=task.name, description=task.description, status=task.status)


def _set_draft_field(draft, name: str, value: str) -> None:
    if name not in DRAFT_FIELDS:
        raise ValueError(f"Unknown field: {name}")
    setattr(draft, name, value)


@dataclass
class TaskController:
    client: TaskClient
    alert: Callable[[str], None] = print
    confirm: Callable[[str], bool] = lambda message: True
    tasks: list[Task] = field(default_factory=list)
    form: FormDraft = field(default_factory=FormDraft)
    editing: Optional[EditDraft] = None
    error: Optional[str] = None
    pending: set[str] = field(default_factory=set)

    # -------------------- loading --------------------
    def refresh(self) -> list[Task]:
        try:
            self.tasks = self.client.get_all_tasks()
            self.error = None
        except TaskApiError as e:
            logger.warning("Loading tasks failed: %s", e.message)
            self.error = e.message
        return self.tasks

    def is_pending(self, action: str) -> bool:
        return action in self.pending

    # -------------------- add form --------------------
    def set_form_field(self, name: str, value: str) -> None:
        _set_draft_field(self.form, name, value)

    def add_task(self) -> Optional[Task]:
        if "add" in self.pending:
            return None
        if not self.form.is_complete():
            self.alert("Please fill in all fields")
            return None

        self.pending.add("add")
        try:
            created = self.client.add_task(self.form.name, self.form.description, self.form.status)
        except TaskApiError as e:
            self.alert(f"Failed to add task: {e.message}")
            return None
        finally:
            self.pending.discard("add")

        self.form = FormDraft()
        self.refresh()
        return created

    # -------------------- editing --------------------
    def start_edit(self, task: Task) -> EditDraft:
        self.editing = EditDraft.from_task(task)
        return self.editing

    def is_editing(self, task_id: str) -> bool:
        return self.editing is not None and self.editing.task_id == task_id

    def update_edit_field(self, name: str, value: str) -> None:
        if self.editing is None:
            return
        _set_draft_field(self.editing, name, value)

    def cancel_edit(self) -> None:
        self.editing = None

    def save_edit(self) -> Optional[Task]:
        if self.editing is None or "update" in self.pending:
            return None

        draft = self.editing
        self.pending.add("update")
        try:
            updated = self.client.update_task(
                draft.task_id,
                status=draft.status,
                name=draft.name,
                description=draft.description,
            )
        except TaskApiError as e:
            self.alert(f"Failed to update task: {e.message}")
            return None
        finally:
            self.pending.discard("update")

        self.editing = None
        self.refresh()
        return updated

    # -------------------- delete --------------------
    def delete_task(self, task_id: str) -> Optional[Task]:
        if "delete" in self.pending:
            return None
        if not self.confirm("Are you sure you want to delete this task?"):
            return None

        self.pending.add("delete")
        try:
            result = self.client.delete_task(task_id)
        except TaskApiError as e:
            self.alert(f"Failed to delete task: {e.message}")
            return None
        finally:
            self.pending.discard("delete")

        self.refresh()
        return result.deleted_task
