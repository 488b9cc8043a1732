"""In-memory task store.

Holds two ordered collections, active and completed, and provides the
only mutation entry points: add, toggle and delete. Nothing is written
to disk; the hosting shell saves and restores the collections across
configuration changes through todo_app.persistence.
"""

from typing import Iterable

from todo_app.errors import NotFoundError, ValidationError
from todo_app.logging import Loggers
from todo_app.store.models import Snapshot, TodoItem

logger = Loggers.store()


class TaskStore:
    """Ordered active/completed task collections.

    Every task id lives in exactly one of the two collections. Failed
    operations raise before touching either collection.

    Example:
        >>> store = TaskStore()
        >>> a = store.add("a")
        >>> store.toggle(a.id)
        TodoItem(id=1, text='a', completed=True)
        >>> store.delete(a.id, from_completed=True)
    """

    def __init__(
        self,
        active: Iterable[TodoItem] = (),
        completed: Iterable[TodoItem] = (),
    ) -> None:
        """Create a store, optionally seeded with existing collections.

        Args:
            active: Tasks not yet completed, in display order
            completed: Tasks marked done, in display order

        Raises:
            ValueError: If ids repeat, a text is blank or untrimmed, or a flag
                disagrees with its collection
        """
        self._active: list[TodoItem] = list(active)
        self._completed: list[TodoItem] = list(completed)
        self._check_invariants()

    def _check_invariants(self) -> None:
        seen: set[int] = set()
        for items, expected in ((self._active, False), (self._completed, True)):
            for item in items:
                if item.id in seen:
                    raise ValueError(f"Duplicate task id {item.id}")
                seen.add(item.id)
                if not item.text or item.text != item.text.strip():
                    raise ValueError(f"Task {item.id} text must be non-empty and trimmed")
                if item.completed is not expected:
                    section = "completed" if expected else "active"
                    raise ValueError(
                        f"Task {item.id} has completed={item.completed} "
                        f"but is in the {section} collection"
                    )

    # ---- queries ----

    @property
    def active(self) -> tuple[TodoItem, ...]:
        return tuple(self._active)

    @property
    def completed(self) -> tuple[TodoItem, ...]:
        return tuple(self._completed)

    def snapshot(self) -> Snapshot:
        """Current ordered contents of both collections."""
        return Snapshot(active=tuple(self._active), completed=tuple(self._completed))

    def next_id(self) -> int:
        """Id the next added task will receive.

        One more than the largest id in either collection, or 1 when
        both are empty. Deleting the newest task makes its id available
        again.
        """
        ids = [item.id for item in self._active]
        ids.extend(item.id for item in self._completed)
        return max(ids) + 1 if ids else 1

    def __len__(self) -> int:
        return len(self._active) + len(self._completed)

    # ---- mutations ----

    def add(self, raw_text: str) -> TodoItem:
        """Append a new active task.

        Args:
            raw_text: User-entered text; surrounding whitespace is dropped

        Returns:
            The created task

        Raises:
            ValidationError: If the text is empty after trimming
        """
        text = raw_text.strip()
        if not text:
            logger.debug("task_rejected", reason="empty_text")
            raise ValidationError()

        item = TodoItem(id=self.next_id(), text=text)
        self._active.append(item)
        logger.debug("task_added", task_id=item.id, active=len(self._active))
        return item

    def toggle(self, task_id: int) -> TodoItem:
        """Move a task to the other collection with its flag flipped.

        Returns:
            The copy now held by the destination collection

        Raises:
            NotFoundError: If neither collection holds the id
        """
        for source, destination in (
            (self._active, self._completed),
            (self._completed, self._active),
        ):
            index = _index_of(source, task_id)
            if index is not None:
                moved = source.pop(index).flipped()
                destination.append(moved)
                logger.debug(
                    "task_toggled", task_id=task_id, completed=moved.completed
                )
                return moved

        raise NotFoundError(task_id)

    def delete(self, task_id: int, from_completed: bool) -> TodoItem:
        """Remove a task permanently.

        Args:
            task_id: Id of the task to remove
            from_completed: Look in the completed collection instead of active

        Returns:
            The removed task

        Raises:
            NotFoundError: If the indicated collection does not hold the id
        """
        collection = self._completed if from_completed else self._active
        index = _index_of(collection, task_id)
        if index is None:
            raise NotFoundError(task_id, from_completed)

        removed = collection.pop(index)
        logger.debug("task_deleted", task_id=task_id, from_completed=from_completed)
        return removed


def _index_of(items: list[TodoItem], task_id: int) -> int | None:
    for index, item in enumerate(items):
        if item.id == task_id:
            return index
    return None
