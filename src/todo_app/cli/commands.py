"""Slash command registry and base command class.

Example of creating a custom command:

    from todo_app.cli.commands import Command, CommandCategory

    class CountCommand(Command):
        '''Print how many tasks are open.'''

        def __init__(self):
            super().__init__(
                name="count",
                description="Show how many tasks are open",
                category=CommandCategory.TASKS,
            )

        async def execute(self, args: str, app: Any) -> None:
            snapshot = app.controller.snapshot()
            app.add_message(f"{len(snapshot.active)} open")
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import re

from rich.markup import escape

if TYPE_CHECKING:
    from todo_app.cli.app import TodoCLIApp


class CommandCategory(Enum):
    """Categories for organizing commands."""

    GENERAL = "general"
    TASKS = "tasks"
    SETTINGS = "settings"


class CommandError(Exception):
    """Raised by a command when its arguments are unusable.

    The shell shows the message as an error; nothing is changed.
    """

    pass


@dataclass
class ParsedArgs:
    """Parsed command arguments."""

    positional: str
    """Positional arguments (everything not an option)."""

    options: dict[str, str] = field(default_factory=dict)
    """Named options (--key=value, --key value, or --flag)."""

    def has_flag(self, name: str) -> bool:
        return name in self.options


class Command(ABC):
    """Base class for slash commands.

    Subclass this and override execute(). Commands receive the raw
    argument string and the running application.
    """

    def __init__(
        self,
        name: str,
        description: str,
        aliases: list[str] | None = None,
        usage: str | None = None,
        examples: list[str] | None = None,
        category: CommandCategory = CommandCategory.GENERAL,
        silent: bool = False,
    ) -> None:
        """Initialize the command.

        Args:
            name: Command name (used as /name)
            description: Short description of what the command does
            aliases: Alternative names for the command
            usage: Usage string showing syntax (e.g., "/cmd <arg> [--opt]")
            examples: List of example usages
            category: Category for organizing in help
            silent: Don't echo the command line before running it
        """
        self.name = name
        self.description = description
        self.aliases = aliases or []
        self.usage = usage or f"/{name}"
        self.examples = examples or []
        self.category = category
        self.silent = silent

    @abstractmethod
    async def execute(self, args: str, app: "TodoCLIApp") -> None:
        """Execute the command with given arguments.

        Args:
            args: Command arguments string (everything after the command name)
            app: The CLI application instance

        Raises:
            CommandError: If the arguments are invalid
        """
        pass

    def parse_args(self, args: str, flags: frozenset[str] = frozenset()) -> ParsedArgs:
        """Parse command arguments into structured form.

        Parses options in the forms:
        - --key=value
        - --key value
        - --flag (boolean flag)
        - -k value / -k

        Names listed in ``flags`` never consume the following token, so
        ``--completed 3`` leaves ``3`` positional.
        """
        options: dict[str, str] = {}
        positional_parts: list[str] = []

        parts = self._tokenize(args)

        i = 0
        while i < len(parts):
            part = parts[i]

            if part.startswith("--"):
                key = part[2:]

                if "=" in key:
                    key, value = key.split("=", 1)
                    options[key] = value
                elif (
                    key not in flags
                    and i + 1 < len(parts)
                    and not parts[i + 1].startswith("-")
                ):
                    options[key] = parts[i + 1]
                    i += 1
                else:
                    options[key] = "true"
            elif part.startswith("-") and len(part) == 2 and not part[1].isdigit():
                key = part[1]
                if (
                    key not in flags
                    and i + 1 < len(parts)
                    and not parts[i + 1].startswith("-")
                ):
                    options[key] = parts[i + 1]
                    i += 1
                else:
                    options[key] = "true"
            else:
                positional_parts.append(part)

            i += 1

        return ParsedArgs(
            positional=" ".join(positional_parts),
            options=options,
        )

    def _tokenize(self, args: str) -> list[str]:
        """Split on whitespace, keeping quoted strings together."""
        pattern = r'"[^"]*"|\'[^\']*\'|\S+'
        tokens = re.findall(pattern, args)

        def strip_quotes(token: str) -> str:
            if len(token) >= 2 and token[0] in "\"'" and token[0] == token[-1]:
                return token[1:-1]
            return token

        return [strip_quotes(token) for token in tokens]

    def get_help(self) -> str:
        """Detailed help text for this command, as rich markup."""
        lines = [
            f"[bold]/{self.name}[/bold]",
            f"  {self.description}",
            "",
            f"[bold]Usage:[/bold] {escape(self.usage)}",
        ]

        if self.aliases:
            lines.append(f"[bold]Aliases:[/bold] {', '.join(f'/{a}' for a in self.aliases)}")

        if self.examples:
            lines.append("")
            lines.append("[bold]Examples:[/bold]")
            for example in self.examples:
                lines.append(f"  {escape(example)}")

        return "\n".join(lines)


class CommandRegistry:
    """Registry for managing slash commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._categories: dict[CommandCategory, list[Command]] = {
            cat: [] for cat in CommandCategory
        }

    def register(self, command: Command) -> None:
        """Register a command and its aliases."""
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

        if command not in self._categories[command.category]:
            self._categories[command.category].append(command)

    def get(self, name: str) -> Command | None:
        """Get a command by name or alias."""
        return self._commands.get(name)

    def by_category(self, category: CommandCategory) -> list[Command]:
        return self._categories.get(category, [])

    def get_completions(self) -> list[str]:
        """All command names and aliases for auto-completion."""
        return list(self._commands.keys())
