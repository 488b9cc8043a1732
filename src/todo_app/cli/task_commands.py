"""Slash commands that drive the task list."""

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from todo_app.cli.commands import Command, CommandCategory, CommandError
from todo_app.constants import ACTIVE_SECTION_TITLE, COMPLETED_SECTION_TITLE

if TYPE_CHECKING:
    from todo_app.cli.app import TodoCLIApp


def _parse_task_id(raw: str, usage: str) -> int:
    raw = raw.strip().rstrip(".")
    if not raw:
        raise CommandError(f"Task id required. Usage: {usage}")
    try:
        return int(raw)
    except ValueError:
        raise CommandError(f"Invalid task id: {raw}") from None


class AddCommand(Command):
    """Add a task, from the arguments or the pending input."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a task (uses the pending input when no text is given)",
            aliases=["a"],
            usage="/add [text]",
            examples=["/add buy milk", "/add"],
            category=CommandCategory.TASKS,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        if args.strip():
            app.controller.submit(args)
        else:
            app.controller.submit()


class InputCommand(Command):
    """Edit the pending input without adding it."""

    def __init__(self) -> None:
        super().__init__(
            name="input",
            description="Set the pending input without adding it",
            aliases=["type"],
            usage="/input [text]",
            examples=["/input walk the d", "/input"],
            category=CommandCategory.TASKS,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        app.controller.edit_input(args)


class ToggleCommand(Command):
    """Mark a task complete, or incomplete again."""

    def __init__(self) -> None:
        super().__init__(
            name="toggle",
            description="Move a task between Items and Completed Items",
            aliases=["check", "x"],
            usage="/toggle <id>",
            examples=["/toggle 1"],
            category=CommandCategory.TASKS,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        task_id = _parse_task_id(args, self.usage)
        if app.controller.snapshot().find(task_id) is None:
            app.add_warning(f"No task with id {task_id}")
            return
        app.controller.toggle(task_id)


class DeleteCommand(Command):
    """Delete a task permanently."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm", "del"],
            usage="/delete <id> [--completed | --active]",
            examples=["/delete 2", "/delete 1 --completed"],
            category=CommandCategory.TASKS,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        parsed = self.parse_args(args, flags=frozenset({"completed", "active"}))
        task_id = _parse_task_id(parsed.positional, self.usage)

        for flag in ("completed", "active"):
            if parsed.has_flag(flag) and parsed.options[flag] != "true":
                raise CommandError(f"--{flag} does not take a value")
        if parsed.has_flag("completed") and parsed.has_flag("active"):
            raise CommandError("Use only one of --completed and --active")

        if parsed.has_flag("completed") or parsed.has_flag("active"):
            from_completed = parsed.has_flag("completed")
        else:
            found = app.controller.snapshot().find(task_id)
            if found is None:
                app.add_warning(f"No task with id {task_id}")
                return
            from_completed = found[1]

        if app.controller.delete(task_id, from_completed) is None:
            section = COMPLETED_SECTION_TITLE if from_completed else ACTIVE_SECTION_TITLE
            app.add_warning(f"Task {task_id} is not in {section}")


class ListCommand(Command):
    """Redraw the task list."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="Redraw the task list",
            aliases=["ls"],
            category=CommandCategory.TASKS,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        app.controller.request_redraw()


class StatusCommand(Command):
    """Show task counts."""

    def __init__(self) -> None:
        super().__init__(
            name="status",
            description="Show task counts and the next task id",
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        store = app.controller.store
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Key", style="bold cyan", no_wrap=True)
        table.add_column("Value")

        table.add_row(ACTIVE_SECTION_TITLE, str(len(store.active)))
        table.add_row(COMPLETED_SECTION_TITLE, str(len(store.completed)))
        table.add_row("Next id", str(store.next_id()))
        pending = app.controller.view_state.pending_input
        table.add_row(
            "Pending input",
            Text(repr(pending)) if pending else Text("(empty)", style="dim"),
        )

        app.add_rich(table)
