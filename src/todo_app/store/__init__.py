"""Task store for the to-do application.

Owns the active and completed collections and is the only place
they are mutated.

Example:
    >>> store = TaskStore()
    >>> item = store.add("buy milk")
    >>> store.toggle(item.id)
    >>> store.snapshot().completed
"""

from todo_app.store.models import Snapshot, TodoItem
from todo_app.store.task_store import TaskStore

__all__ = ["Snapshot", "TaskStore", "TodoItem"]
