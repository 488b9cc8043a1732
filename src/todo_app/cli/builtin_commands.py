"""Built-in slash commands for the CLI."""

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todo_app.cli.commands import Command, CommandCategory, CommandError
from todo_app.config import SettingsValidationError, update_settings
from todo_app.settings_persistence import SettingsPersistence

if TYPE_CHECKING:
    from todo_app.cli.app import TodoCLIApp


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands and usage information",
            aliases=["?"],
            usage="/help [command]",
            examples=["/help", "/help delete"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        name = args.strip().lstrip("/")
        if name:
            command = app.command_registry.get(name)
            if command is None:
                raise CommandError(f"Unknown command: /{name}")
            app.add_rich(Panel(command.get_help(), border_style="cyan"))
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for category in CommandCategory:
            for cmd in sorted(app.command_registry.by_category(category), key=lambda c: c.name):
                aliases = ", ".join(f"/{a}" for a in cmd.aliases) if cmd.aliases else ""
                table.add_row(f"/{cmd.name}", aliases, cmd.description)

        panel = Panel(
            table,
            title="[bold]Available Commands[/bold]",
            subtitle="Type text and press Enter to add it as a task",
            border_style="cyan",
        )
        app.add_rich(panel)


class ClearCommand(Command):
    """Clear the screen."""

    def __init__(self) -> None:
        super().__init__(
            name="clear",
            description="Clear the screen and redraw the task list",
            aliases=["cls"],
            category=CommandCategory.GENERAL,
            silent=True,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        app.console.clear()
        app.controller.request_redraw()


class ExitCommand(Command):
    """Exit the application."""

    def __init__(self) -> None:
        super().__init__(
            name="exit",
            description="Exit the application (tasks are not kept)",
            aliases=["quit", "q"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        app.stop()


class ReloadCommand(Command):
    """Rebuild the screen from saved state."""

    def __init__(self) -> None:
        super().__init__(
            name="reload",
            description="Rebuild the screen from saved state, as on a configuration change",
            category=CommandCategory.SETTINGS,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        app.configuration_change()


class SettingsCommand(Command):
    """Show or change display settings.

    A change is a configuration change: the screen is rebuilt from
    saved state with the new settings.
    """

    def __init__(self) -> None:
        super().__init__(
            name="settings",
            description="Show or change display settings",
            aliases=["set", "config"],
            usage="/settings [<key> <value>] [--save]",
            examples=[
                "/settings",
                "/settings show_task_ids false",
                "/settings accent_color magenta --save",
            ],
            category=CommandCategory.SETTINGS,
        )

    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        parsed = self.parse_args(args, flags=frozenset({"save"}))
        key, _, value = parsed.positional.partition(" ")

        if not key:
            if parsed.has_flag("save"):
                self._save(app)
            else:
                self._show(app)
            return

        allowed = app.settings.display_setting_keys
        if key not in allowed:
            raise CommandError(
                f"Unknown setting: {key}. Choose from: {', '.join(allowed)}"
            )
        if not value:
            raise CommandError(f"Value required. Usage: {self.usage}")

        try:
            new_settings = update_settings(app.settings, {key: value})
        except SettingsValidationError as e:
            app.add_error(f"Invalid value for {key}: {e}")
            return

        app.configuration_change(new_settings)
        app.add_success(f"{key.replace('_', ' ').title()}: {getattr(new_settings, key)}")

        if parsed.has_flag("save"):
            self._save(app)

    def _show(self, app: "TodoCLIApp") -> None:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Key", style="bold cyan", no_wrap=True)
        table.add_column("Value")
        table.add_column("Description", style="dim")

        fields = type(app.settings).model_fields
        for key in app.settings.display_setting_keys:
            table.add_row(
                key,
                Text(repr(getattr(app.settings, key))),
                fields[key].description or "",
            )

        app.add_rich(Panel(table, title="[bold]Settings[/bold]", border_style="cyan"))

    def _save(self, app: "TodoCLIApp") -> None:
        persistence = SettingsPersistence(app.settings.app_name)
        try:
            path = persistence.save(app.settings)
        except OSError as e:
            app.add_warning(f"Settings applied but not saved: {e}")
            return
        app.add_success(f"Settings saved to {path}")
