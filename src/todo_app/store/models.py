"""Value types held by the task store."""

from dataclasses import dataclass, replace
from typing import Any

TodoTriple = tuple[int, str, bool]


@dataclass(frozen=True)
class TodoItem:
    """A single to-do task.

    Items are immutable; moving between collections produces a copy
    with ``completed`` flipped. Identity is the ``id``, not the object.
    """

    id: int
    text: str
    completed: bool = False

    def flipped(self) -> "TodoItem":
        """Copy of this item with the completed flag inverted."""
        return replace(self, completed=not self.completed)

    def to_triple(self) -> TodoTriple:
        return (self.id, self.text, self.completed)

    @classmethod
    def from_triple(cls, triple: Any) -> "TodoItem":
        """Rebuild an item from an ``(id, text, completed)`` sequence.

        Raises:
            ValueError: If the triple has the wrong shape or types
        """
        try:
            task_id, text, completed = triple
        except (TypeError, ValueError) as e:
            raise ValueError(f"Expected (id, text, completed), got {triple!r}") from e
        # bool is an int subclass; an id of True is not an id
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"Task id must be an integer, got {task_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Task {task_id} has empty text")
        if text != text.strip():
            raise ValueError(f"Task {task_id} text is not trimmed: {text!r}")
        if not isinstance(completed, bool):
            raise ValueError(f"Task {task_id} completed flag must be a boolean")
        return cls(id=task_id, text=text, completed=completed)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of both collections at a point in time."""

    active: tuple[TodoItem, ...] = ()
    completed: tuple[TodoItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.active and not self.completed

    def find(self, task_id: int) -> tuple[TodoItem, bool] | None:
        """Locate a task by id.

        Returns:
            (item, in_completed) if present, None otherwise
        """
        for item in self.active:
            if item.id == task_id:
                return item, False
        for item in self.completed:
            if item.id == task_id:
                return item, True
        return None

    def __len__(self) -> int:
        return len(self.active) + len(self.completed)
