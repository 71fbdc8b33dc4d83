class TaskboardError(Exception):
    """Base class for task store failures. The message is what callers see."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskNotFound(TaskboardError):
    def __init__(self, task_id: str):
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class TaskValidationError(TaskboardError):
    pass
