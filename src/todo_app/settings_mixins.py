"""Settings mixins for application identity, logging and display.

AppSettingsMixin: Application identity (app_name).
CLISettingsMixin: Logging configuration.
DisplaySettingsMixin: How the task screen is drawn.

Changing a display setting at runtime is a configuration change: the
hosting shell rebuilds the screen from saved state.
"""

from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity.

    Should be composed with TodoSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="todo_app",
        title="App Name",
        description="Application name used for config directories",
        json_schema_extra={"ui_order": 200},
    )


class CLISettingsMixin:
    """Settings for logging.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
        json_schema_extra={"ui_order": 50},
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
        json_schema_extra={"ui_order": 51},
    )


class DisplaySettingsMixin:
    """Settings for the task screen."""

    show_task_ids: bool = Field(
        default=True,
        title="Show Task IDs",
        description="Show each task's id next to its checkbox",
        json_schema_extra={"ui_order": 10},
    )
    accent_color: str = Field(
        default="cyan",
        title="Accent Color",
        description="Rich color name used for section headings",
        json_schema_extra={"ui_order": 11},
    )
    prompt_text: str = Field(
        default=">>> ",
        title="Prompt",
        description="Prompt shown in front of the input line",
        json_schema_extra={"ui_order": 12},
    )

    @field_validator("accent_color")
    @classmethod
    def validate_accent_color(cls, v: str) -> str:
        """Reject colors rich cannot parse."""
        from rich.color import Color, ColorParseError

        try:
            Color.parse(v)
        except ColorParseError as e:
            raise ValueError(f"Unknown color: {v}") from e
        return v

    @property
    def display_setting_keys(self) -> list[str]:
        """Field names that can be changed from the /settings command."""
        return ["show_task_ids", "accent_color", "prompt_text", "log_level"]
