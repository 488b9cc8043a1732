"""Saved state for configuration changes.

When the hosting shell changes its configuration it tears the screen
down and builds a new one. The two task collections and the pending
input cross that boundary as bytes:

    bundle = serialize(SavedState.capture(controller))
    ...
    controller = deserialize(bundle).restore(notifier=..., on_redraw=...)

Tasks travel as plain ``[id, text, completed]`` triples. The inline
error flag is not saved.
"""

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from todo_app.constants import SAVED_STATE_VERSION
from todo_app.errors import SavedStateError
from todo_app.logging import Loggers
from todo_app.store import TaskStore, TodoItem
from todo_app.store.models import TodoTriple
from todo_app.view.controller import RedrawCallback, TodoController
from todo_app.view.state import Notifier, ViewState

if TYPE_CHECKING:
    from todo_app.store import Snapshot

logger = Loggers.persistence()


@dataclass(frozen=True)
class SavedState:
    """Everything a rebuilt screen needs."""

    active: tuple[TodoTriple, ...] = ()
    completed: tuple[TodoTriple, ...] = ()
    pending_input: str = ""
    version: int = field(default=SAVED_STATE_VERSION)

    @classmethod
    def from_snapshot(cls, snapshot: "Snapshot", pending_input: str = "") -> "SavedState":
        return cls(
            active=tuple(item.to_triple() for item in snapshot.active),
            completed=tuple(item.to_triple() for item in snapshot.completed),
            pending_input=pending_input,
        )

    @classmethod
    def capture(cls, controller: TodoController) -> "SavedState":
        """Capture a controller's collections and pending input."""
        return cls.from_snapshot(
            controller.snapshot(), controller.view_state.pending_input
        )

    def build_store(self) -> TaskStore:
        """Rebuild the task store.

        Raises:
            SavedStateError: If the triples are malformed or violate
                the store invariants
        """
        try:
            return TaskStore(
                active=[TodoItem.from_triple(t) for t in self.active],
                completed=[TodoItem.from_triple(t) for t in self.completed],
            )
        except ValueError as e:
            raise SavedStateError(f"Invalid saved tasks: {e}") from e

    def restore(
        self,
        notifier: Notifier | None = None,
        on_redraw: RedrawCallback | None = None,
    ) -> TodoController:
        """Build a new controller from this state."""
        controller = TodoController(
            store=self.build_store(),
            view_state=ViewState(pending_input=self.pending_input),
            notifier=notifier,
            on_redraw=on_redraw,
        )
        logger.debug(
            "state_restored",
            active=len(self.active),
            completed=len(self.completed),
        )
        return controller

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "active": [list(t) for t in self.active],
            "completed": [list(t) for t in self.completed],
            "pending_input": self.pending_input,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedState":
        """Create from a dictionary produced by to_dict().

        Raises:
            SavedStateError: If the version or layout is not recognised
        """
        if not isinstance(data, dict):
            raise SavedStateError("Saved state must be a JSON object")
        version = data.get("version")
        if version != SAVED_STATE_VERSION:
            raise SavedStateError(f"Unsupported saved state version: {version!r}")

        pending_input = data.get("pending_input", "")
        if not isinstance(pending_input, str):
            raise SavedStateError("pending_input must be a string")

        state = cls(
            active=_triples(data.get("active", []), "active"),
            completed=_triples(data.get("completed", []), "completed"),
            pending_input=pending_input,
        )
        state.build_store()
        return state


def _triples(raw: Any, name: str) -> tuple[TodoTriple, ...]:
    if not isinstance(raw, list):
        raise SavedStateError(f"{name} must be a list")
    triples: list[TodoTriple] = []
    for entry in raw:
        try:
            triples.append(TodoItem.from_triple(entry).to_triple())
        except ValueError as e:
            raise SavedStateError(f"Invalid entry in {name}: {e}") from e
    return tuple(triples)


def serialize(state: SavedState) -> bytes:
    """Encode saved state as UTF-8 JSON."""
    data = json.dumps(state.to_dict(), ensure_ascii=False).encode("utf-8")
    logger.debug("state_serialized", size=len(data))
    return data


def deserialize(data: bytes) -> SavedState:
    """Decode bytes produced by serialize().

    Raises:
        SavedStateError: If the bytes are not a valid saved state
    """
    try:
        decoded = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SavedStateError(f"Saved state is not valid JSON: {e}") from e
    return SavedState.from_dict(decoded)
