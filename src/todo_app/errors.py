"""Error taxonomy for the to-do application.

All errors are local and recoverable: the store stays in its last valid
state after any failed operation.
"""


class TodoError(Exception):
    """Base class for to-do application errors."""

    pass


class ValidationError(TodoError):
    """Raised when task text is empty or whitespace-only."""

    def __init__(self, message: str = "Task cannot be empty") -> None:
        super().__init__(message)


class NotFoundError(TodoError):
    """Raised when a task id is absent from the expected collection."""

    def __init__(self, task_id: int, from_completed: bool | None = None) -> None:
        self.task_id = task_id
        self.from_completed = from_completed
        if from_completed is None:
            where = "any collection"
        elif from_completed:
            where = "completed items"
        else:
            where = "active items"
        super().__init__(f"Task {task_id} not found in {where}")


class SavedStateError(TodoError):
    """Raised when saved-state bytes cannot be restored."""

    pass
