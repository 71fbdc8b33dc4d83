"""Interactive console front-end for the task list.

Commands mirror the browser view: fill the add form with ``new``, submit it
with ``add``, open a task for editing with ``edit``, change the draft with
``set`` and finish with ``save`` or ``cancel``.
"""

import logging
import shlex
from typing import Callable, Optional

from taskboard.client import TaskClient
from taskboard.config import get_settings
from taskboard.controller import TaskController, status_slug
from taskboard.logging_setup import setup_logging

logger = logging.getLogger(__name__)

STATUS_ALIASES = {
    "": "",
    "t": "Todo",
    "todo": "Todo",
    "ip": "In Progress",
    "in-progress": "In Progress",
    "in progress": "In Progress",
    "d": "Done",
    "done": "Done",
}

HELP = """Commands:
  list                       reload and show all tasks
  new <field> <value>        fill the add form (name, description, status)
  add                        submit the add form
  edit <id>                  start editing a task
  set <field> <value>        change the task being edited
  save | cancel              finish editing
  delete <id>                delete a task
  help | exit"""


def normalize_status(value: str) -> str:
    key = value.strip().lower()
    if key not in STATUS_ALIASES:
        raise ValueError(f"Unknown status: {value}")
    return STATUS_ALIASES[key]


def render_tasks(controller: TaskController) -> str:
    lines: list[str] = []
    if controller.error:
        lines.append(f"! {controller.error}")
    if not controller.tasks:
        lines.append("(no tasks)")
    for task in controller.tasks:
        badge = f"[{status_slug(task.status) or 'no-status'}]"
        lines.append(f"{task.id}  {badge} {task.name}")
        lines.append(f"    {task.description}")
        if controller.is_editing(task.id):
            draft = controller.editing
            lines.append(f"    editing: name={draft.name!r} description={draft.description!r} status={draft.status!r}")
        else:
            lines.append(f"    {task.time_stamp}")
    form = controller.form
    lines.append(f"new task: name={form.name!r} description={form.description!r} status={form.status!r}")
    return "\n".join(lines)


class Console:
    def __init__(
        self,
        controller: TaskController,
        output: Callable[[str], None] = print,
        read: Callable[[str], str] = input,
    ):
        self.controller = controller
        self.output = output
        self.read = read

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the session should end."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.output(f"Could not parse command: {e}")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        controller = self.controller

        if command == "exit":
            return False
        if command == "help":
            self.output(HELP)
        elif command == "list":
            controller.refresh()
            self.output(render_tasks(controller))
        elif command in ("new", "set"):
            self._set_field(command, args)
        elif command == "add":
            if controller.add_task() is not None:
                self.output(render_tasks(controller))
        elif command == "edit" and len(args) == 1:
            task = next((t for t in controller.tasks if t.id == args[0]), None)
            if task is None:
                self.output(f"No task {args[0]} in the list.")
            else:
                controller.start_edit(task)
                self.output(render_tasks(controller))
        elif command == "save":
            if controller.editing is None:
                self.output("Nothing is being edited.")
            elif controller.save_edit() is not None:
                self.output(render_tasks(controller))
        elif command == "cancel":
            controller.cancel_edit()
            self.output(render_tasks(controller))
        elif command == "delete" and len(args) == 1:
            deleted = controller.delete_task(args[0])
            if deleted is not None:
                self.output(f'Task "{deleted.name}" deleted.')
                self.output(render_tasks(controller))
        else:
            self.output(f"Unknown command: {line.strip()} (try 'help')")
        return True

    def _set_field(self, command: str, args: list[str]) -> None:
        if len(args) < 1:
            self.output(f"Usage: {command} <field> <value>")
            return
        name, value = args[0].lower(), " ".join(args[1:])
        try:
            if name == "status":
                value = normalize_status(value)
            if command == "new":
                self.controller.set_form_field(name, value)
            elif self.controller.editing is None:
                self.output("Nothing is being edited.")
                return
            else:
                self.controller.update_edit_field(name, value)
        except ValueError as e:
            self.output(str(e))
            return
        self.output(render_tasks(self.controller))

    def run(self) -> None:
        self.controller.refresh()
        self.output(render_tasks(self.controller))
        try:
            while self.handle(self.read("\n: ")):
                pass
        except (KeyboardInterrupt, EOFError):
            pass
        self.output("Goodbye.")


def _confirm(message: str) -> bool:
    return input(f"{message} [y/N] ").strip().lower() in ("y", "yes")


def main(base_url: Optional[str] = None) -> None:
    settings = get_settings()
    setup_logging("WARNING")
    client = TaskClient.connect(base_url or settings.base_url)
    logger.info("Connected to %s", client.http.base_url)
    controller = TaskController(client, alert=lambda message: print(f"! {message}"), confirm=_confirm)
    try:
        Console(controller).run()
    finally:
        client.close()
