"""Terminal host for the to-do screen.

This module provides the CLI application that:
1. Renders the task screen with rich after every intent
2. Reads input with prompt_toolkit (plain text adds a task, /commands do the rest)
3. Performs configuration changes by saving and restoring screen state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console, RenderableType
from rich.text import Text

from todo_app.cli.commands import CommandError, CommandRegistry
from todo_app.config import TodoSettings, get_settings
from todo_app.errors import SavedStateError
from todo_app.logging import Loggers, bind_context, clear_context, configure_logging
from todo_app.persistence import SavedState, deserialize, serialize
from todo_app.view import TodoController, ViewState, render_screen

if TYPE_CHECKING:
    from todo_app.store import Snapshot

logger = Loggers.cli()


# === Slash Command Completer ===


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor
        if not text.startswith("/") or " " in text:
            return

        partial = text[1:].lower()
        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


# === Transient notifications ===


class ConsoleNotifier:
    """Shows transient notifications below the screen."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def notify(self, message: str) -> None:
        self._console.print(Text(f" {message} ", style="reverse"), justify="center")


# === CLI Application ===


class TodoCLIApp:
    """Interactive to-do list in the terminal.

    The app owns the controller and hands it a redraw callback; the
    controller never prints. Save/restore across configuration changes
    happens here and nowhere else.
    """

    def __init__(
        self,
        settings: TodoSettings | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the CLI application.

        Args:
            settings: Optional settings override
            console: Optional rich console (tests pass a recording one)
        """
        self._settings = settings or get_settings()
        configure_logging(self._settings)
        bind_context(app_name=self._settings.app_name)

        logger.info("app_starting")

        self.console = console or Console()
        self.notifier = ConsoleNotifier(self.console)

        self.command_registry = CommandRegistry()
        self._register_builtin_commands()

        self.controller = TodoController(notifier=self.notifier, on_redraw=self._redraw)

        self.should_exit = False

    @property
    def settings(self) -> TodoSettings:
        return self._settings

    def stop(self) -> None:
        """Leave the input loop after the current line."""
        self.should_exit = True

    # ---- output ----

    def _redraw(self, snapshot: "Snapshot", view_state: ViewState) -> None:
        self.console.print(
            render_screen(
                snapshot,
                view_state,
                show_task_ids=self._settings.show_task_ids,
                accent_color=self._settings.accent_color,
            )
        )

    def add_message(self, message: str) -> None:
        self.console.print(Text(message, style="dim italic"))

    def add_success(self, message: str) -> None:
        self.console.print(Text(message, style="green"))

    def add_warning(self, message: str) -> None:
        self.console.print(Text(message, style="yellow"))

    def add_error(self, message: str) -> None:
        self.console.print(Text(message, style="bold red"))

    def add_rich(self, renderable: RenderableType) -> None:
        self.console.print(renderable)

    # ---- configuration changes ----

    def configuration_change(self, new_settings: TodoSettings | None = None) -> bool:
        """Rebuild the screen from saved state, optionally with new settings.

        Returns:
            True if the screen was rebuilt; False if the saved state
            could not be restored (the current screen is kept)
        """
        bundle = serialize(SavedState.capture(self.controller))
        try:
            restored = deserialize(bundle)
        except SavedStateError as e:
            logger.error("configuration_change_failed", error=str(e))
            self.add_error(f"Could not restore state: {e}")
            return False

        self.controller.set_redraw_callback(None)
        if new_settings is not None:
            self._settings = new_settings
            configure_logging(new_settings)

        self.controller = restored.restore(notifier=self.notifier, on_redraw=self._redraw)
        logger.info("configuration_changed", size=len(bundle))
        self.controller.request_redraw()
        return True

    # ---- input ----

    def _register_builtin_commands(self) -> None:
        from todo_app.cli.builtin_commands import (
            ClearCommand,
            ExitCommand,
            HelpCommand,
            ReloadCommand,
            SettingsCommand,
        )
        from todo_app.cli.task_commands import (
            AddCommand,
            DeleteCommand,
            InputCommand,
            ListCommand,
            StatusCommand,
            ToggleCommand,
        )

        for command in (
            AddCommand(),
            InputCommand(),
            ToggleCommand(),
            DeleteCommand(),
            ListCommand(),
            StatusCommand(),
            HelpCommand(),
            ClearCommand(),
            ExitCommand(),
            ReloadCommand(),
            SettingsCommand(),
        ):
            self.command_registry.register(command)

    async def process_input(self, user_input: str) -> None:
        """Process one submitted input line.

        Lines starting with / are commands; anything else, including an
        empty line, is typed into the input field and added.
        """
        if user_input.strip().startswith("/"):
            await self._handle_command(user_input.strip())
        else:
            self.controller.submit(user_input)

    async def _handle_command(self, user_input: str) -> None:
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.add_error(f"Unknown command: /{command_name}")
            self.add_message("Type /help to see available commands")
            return

        if not command.silent:
            self.console.print(Text(user_input, style="cyan"))
        logger.debug("executing_command", command=command.name, args=args)
        try:
            await command.execute(args, self)
            logger.debug("command_completed", command=command.name)
        except CommandError as e:
            self.add_error(str(e))
        except Exception as e:
            logger.exception("command_failed", command=command.name)
            self.add_error(f"Error executing command: {e}")

    async def run(self) -> None:
        """Run the main input loop."""
        logger.info("repl_starting")

        session: PromptSession[str] = PromptSession(
            history=InMemoryHistory(),
            completer=SlashCommandCompleter(self.command_registry.get_completions()),
            complete_while_typing=True,
        )

        self.controller.request_redraw()
        while not self.should_exit:
            try:
                text = await session.prompt_async(
                    self._settings.prompt_text,
                    default=self.controller.view_state.pending_input,
                )
            except KeyboardInterrupt:
                self.controller.edit_input("")
                continue
            except EOFError:
                break
            await self.process_input(text)

        logger.info("app_ending")
        clear_context()
        self.console.print("Goodbye!")
