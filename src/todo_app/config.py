"""Configuration for the to-do application.

Provides the TodoSettings class composed from the settings mixins.

Settings Management:
    1. Global instance (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (tests, embedded use):
        with SettingsContext(my_settings):
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (TODO_* prefix)
    3. Project config (./.todo_app/settings.json)
    4. User config (~/.todo_app/settings.json)
    5. .env file
    6. Default values
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Generator, Tuple, Type

from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from todo_app.settings_mixins import (
    AppSettingsMixin,
    CLISettingsMixin,
    DisplaySettingsMixin,
)

__all__ = [
    "TodoSettings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "reload_settings",
    "update_settings",
]


def _get_json_config_source(
    settings_cls: Type[PydanticBaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None

    from pydantic_settings import JsonConfigSettingsSource

    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class TodoSettings(
    DisplaySettingsMixin, AppSettingsMixin, CLISettingsMixin, PydanticBaseSettings
):
    """Settings for the to-do application.

    Mixins provide organized settings:
    - DisplaySettingsMixin: Screen rendering options
    - AppSettingsMixin: Application identity
    - CLISettingsMixin: Logging
    """

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between environment and .env.

        JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        app_name = "todo_app"
        if "app_name" in cls.model_fields:
            default = cls.model_fields["app_name"].default
            if isinstance(default, str) and default:
                app_name = default

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{app_name}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{app_name}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Context variable for settings (takes precedence over global instance)
_settings_context: ContextVar[TodoSettings | None] = ContextVar(
    "settings_context", default=None
)

_settings_instance: TodoSettings | None = None


def get_settings() -> TodoSettings:
    """Get the current settings instance.

    Resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global instance (set via set_settings)
    3. Fresh TodoSettings instance (created on first access)
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = TodoSettings()
    return _settings_instance


def set_settings(settings: TodoSettings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: TodoSettings | None) -> Token:
    """Set settings for the current context.

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


@contextmanager
def SettingsContext(settings: TodoSettings) -> Generator[TodoSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            assert get_settings() is s
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> TodoSettings:
    """Reload settings (clears global instance and context)."""
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()


class SettingsValidationError(Exception):
    """Raised when a settings change is rejected."""

    pass


def update_settings(settings: TodoSettings, changes: dict[str, Any]) -> TodoSettings:
    """Return a new settings instance with ``changes`` applied.

    The original instance is left untouched.

    Args:
        settings: Current settings
        changes: Field name to new value (strings are coerced by pydantic)

    Raises:
        SettingsValidationError: If a key is unknown or a value is invalid
    """
    settings_cls = type(settings)
    unknown = [key for key in changes if key not in settings_cls.model_fields]
    if unknown:
        raise SettingsValidationError(f"Unknown setting: {', '.join(unknown)}")

    data = settings.model_dump()
    data.update(changes)
    try:
        return settings_cls(**data)
    except PydanticValidationError as e:
        messages = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise SettingsValidationError("\n".join(messages)) from e
