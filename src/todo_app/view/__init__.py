"""View layer: controller, view state and screen rendering."""

from todo_app.view.controller import RedrawCallback, TodoController
from todo_app.view.screen import render_screen
from todo_app.view.state import Notifier, NullNotifier, ViewState

__all__ = [
    "Notifier",
    "NullNotifier",
    "RedrawCallback",
    "TodoController",
    "ViewState",
    "render_screen",
]
