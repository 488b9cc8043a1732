"""Read and write the settings files used by /settings --save.

Tasks never touch the disk; only display and logging settings do.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from todo_app.logging import Loggers

if TYPE_CHECKING:
    from todo_app.config import TodoSettings

logger = Loggers.config()

SETTINGS_FILENAME = "settings.json"


class SettingsPersistence:
    """Settings files for one app name.

    The project file (``./.todo_app/settings.json``) wins over the user
    file (``~/.todo_app/settings.json``) when both exist. Saving always
    targets the project file unless told otherwise.
    """

    def __init__(self, app_name: str = "todo_app"):
        self.app_name = app_name

    @property
    def project_config_path(self) -> Path:
        return Path.cwd() / f".{self.app_name}" / SETTINGS_FILENAME

    @property
    def user_config_path(self) -> Path:
        return Path.home() / f".{self.app_name}" / SETTINGS_FILENAME

    def save(
        self,
        settings: "TodoSettings",
        exclude_defaults: bool = True,
        path: Path | None = None,
    ) -> Path:
        """Write the settings that differ from their defaults.

        The file is replaced in one step, so a crash mid-write leaves
        the previous file in place.

        Returns:
            The file that was written
        """
        target = path or self.project_config_path
        target.parent.mkdir(parents=True, exist_ok=True)

        changed = settings.model_dump(exclude_defaults=exclude_defaults, exclude_none=True)

        staging = target.with_name(target.name + ".tmp")
        staging.write_text(json.dumps(changed, indent=2, default=str))
        staging.replace(target)

        logger.info("settings_saved", path=str(target), keys=sorted(changed))
        return target

    def load(self, path: Path | None = None) -> dict[str, Any]:
        """Stored overrides from ``path``, or from the first settings file found.

        Missing files give an empty dict.
        """
        candidates = [path] if path is not None else [
            self.project_config_path,
            self.user_config_path,
        ]
        for candidate in candidates:
            if candidate.exists():
                return json.loads(candidate.read_text())
        return {}
