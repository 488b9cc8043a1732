"""View state that lives alongside the task store."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class ViewState:
    """Input-field state owned by the controller.

    Attributes:
        pending_input: Text typed but not yet added
        show_error: Whether the inline "empty task" error is visible
    """

    pending_input: str = ""
    show_error: bool = False


class Notifier(Protocol):
    """Sink for transient notifications (the mobile toast)."""

    def notify(self, message: str) -> None: ...


class NullNotifier:
    """Notifier that drops every message."""

    def notify(self, message: str) -> None:
        pass
