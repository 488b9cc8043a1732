"""Shared test fixtures for todo-app tests.

Provides:
- Isolation from settings sources (environment, project and user config)
- Recording notifier and redraw collectors for the controller
- A CLI app writing to an in-memory console
"""

import io
import os
from pathlib import Path
from typing import Generator

import pytest
from rich.console import Console, RenderableType

from todo_app.cli.app import TodoCLIApp
from todo_app.config import TodoSettings, reload_settings, set_context_settings
from todo_app.store import Snapshot, TaskStore
from todo_app.view import TodoController, ViewState


class RecordingNotifier:
    """Notifier that remembers every message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class RedrawRecorder:
    """Redraw callback that keeps every (snapshot, view state) pair."""

    def __init__(self) -> None:
        self.calls: list[tuple[Snapshot, ViewState]] = []

    def __call__(self, snapshot: Snapshot, view_state: ViewState) -> None:
        # ViewState is mutable; copy what was visible at redraw time
        self.calls.append(
            (snapshot, ViewState(view_state.pending_input, view_state.show_error))
        )

    @property
    def last(self) -> tuple[Snapshot, ViewState]:
        return self.calls[-1]


def make_console() -> Console:
    return Console(file=io.StringIO(), width=80, color_system=None, force_terminal=False)


def console_text(console: Console) -> str:
    return console.file.getvalue()


def render_text(renderable: RenderableType) -> str:
    console = make_console()
    console.print(renderable)
    return console_text(console)


@pytest.fixture(autouse=True)
def isolated_settings_sources(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Keep real config files and TODO_* variables out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for var in list(os.environ):
        if var.startswith("TODO_"):
            monkeypatch.delenv(var)
    yield project
    set_context_settings(None)
    reload_settings()


@pytest.fixture
def settings() -> TodoSettings:
    return TodoSettings()


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def redraws() -> RedrawRecorder:
    return RedrawRecorder()


@pytest.fixture
def controller(
    store: TaskStore, notifier: RecordingNotifier, redraws: RedrawRecorder
) -> TodoController:
    return TodoController(store=store, notifier=notifier, on_redraw=redraws)


@pytest.fixture
def console() -> Console:
    return make_console()


@pytest.fixture
def app(settings: TodoSettings, console: Console) -> TodoCLIApp:
    return TodoCLIApp(settings=settings, console=console)
