"""todo-app - a single-screen to-do list for the terminal.

Users add short text tasks, mark them complete or incomplete, and delete
them. Tasks live in memory only; the hosting shell saves and restores
them across configuration changes.

- TaskStore: the active/completed collections and their mutations
- TodoController: forwards user intents and requests redraws
- render_screen: rich rendering of the screen
- serialize/deserialize: saved state as bytes
- TodoCLIApp: the interactive terminal shell
"""

from todo_app.cli.app import TodoCLIApp
from todo_app.config import (
    SettingsContext,
    SettingsValidationError,
    TodoSettings,
    get_settings,
    reload_settings,
    set_settings,
)
from todo_app.errors import NotFoundError, SavedStateError, TodoError, ValidationError
from todo_app.persistence import SavedState, deserialize, serialize
from todo_app.store import Snapshot, TaskStore, TodoItem
from todo_app.view import TodoController, ViewState, render_screen

__all__ = [
    # Store
    "Snapshot",
    "TaskStore",
    "TodoItem",
    # View
    "TodoController",
    "ViewState",
    "render_screen",
    # Saved state
    "SavedState",
    "deserialize",
    "serialize",
    # Errors
    "NotFoundError",
    "SavedStateError",
    "TodoError",
    "ValidationError",
    # Settings
    "SettingsContext",
    "SettingsValidationError",
    "TodoSettings",
    "get_settings",
    "reload_settings",
    "set_settings",
    # CLI
    "TodoCLIApp",
]

__version__ = "0.1.0"
