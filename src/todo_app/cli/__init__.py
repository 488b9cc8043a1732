"""Terminal host for the to-do application."""

from todo_app.cli.app import ConsoleNotifier, TodoCLIApp
from todo_app.cli.commands import (
    Command,
    CommandCategory,
    CommandError,
    CommandRegistry,
    ParsedArgs,
)

__all__ = [
    "Command",
    "CommandCategory",
    "CommandError",
    "CommandRegistry",
    "ConsoleNotifier",
    "ParsedArgs",
    "TodoCLIApp",
]
