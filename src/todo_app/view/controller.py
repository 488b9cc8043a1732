"""Application controller: forwards user intents to the task store.

Each intent runs to completion and ends by requesting a redraw with
the new snapshot. The controller owns the store and the view state;
nothing here is global.
"""

from typing import Callable

from todo_app.constants import EMPTY_TASK_TOAST, truncate
from todo_app.errors import NotFoundError, ValidationError
from todo_app.logging import Loggers
from todo_app.store import Snapshot, TaskStore, TodoItem
from todo_app.view.state import Notifier, NullNotifier, ViewState

logger = Loggers.view()

RedrawCallback = Callable[[Snapshot, ViewState], None]


class TodoController:
    """Owns the task store and input state for one screen.

    Args:
        store: Task store to drive (a fresh empty store if omitted)
        view_state: Initial input state (empty if omitted)
        notifier: Where transient notifications go
        on_redraw: Called with the new snapshot after every intent
    """

    def __init__(
        self,
        store: TaskStore | None = None,
        view_state: ViewState | None = None,
        notifier: Notifier | None = None,
        on_redraw: RedrawCallback | None = None,
    ) -> None:
        self.store = store if store is not None else TaskStore()
        self.view_state = view_state if view_state is not None else ViewState()
        self._notifier: Notifier = notifier or NullNotifier()
        self._on_redraw = on_redraw

    def set_redraw_callback(self, callback: RedrawCallback | None) -> None:
        self._on_redraw = callback

    def snapshot(self) -> Snapshot:
        return self.store.snapshot()

    def request_redraw(self) -> None:
        if self._on_redraw is not None:
            self._on_redraw(self.store.snapshot(), self.view_state)

    # ---- intents ----

    def edit_input(self, text: str) -> None:
        """Replace the pending input; typing hides the error."""
        self.view_state.pending_input = text
        self.view_state.show_error = False
        self.request_redraw()

    def submit(self, text: str | None = None) -> TodoItem | None:
        """Add the pending input as a new task.

        Args:
            text: Replaces the pending input before adding (type-and-press
                Add as one gesture)

        Returns:
            The created task, or None if the input was empty. An empty
            input keeps the typed text, shows the inline error and sends
            a transient notification.
        """
        if text is not None:
            self.view_state.pending_input = text
        try:
            item = self.store.add(self.view_state.pending_input)
        except ValidationError:
            self.view_state.show_error = True
            self.request_redraw()
            self._notifier.notify(EMPTY_TASK_TOAST)
            return None

        self.view_state.pending_input = ""
        self.view_state.show_error = False
        logger.info("task_submitted", task_id=item.id, text=truncate(item.text))
        self.request_redraw()
        return item

    def toggle(self, task_id: int) -> TodoItem | None:
        """Flip a task between active and completed."""
        try:
            item = self.store.toggle(task_id)
        except NotFoundError as e:
            logger.warning("toggle_missing_task", task_id=e.task_id)
            item = None
        self.request_redraw()
        return item

    def delete(self, task_id: int, from_completed: bool) -> TodoItem | None:
        """Remove a task from the given section."""
        try:
            item = self.store.delete(task_id, from_completed)
        except NotFoundError as e:
            logger.warning(
                "delete_missing_task",
                task_id=e.task_id,
                from_completed=e.from_completed,
            )
            item = None
        self.request_redraw()
        return item
