"""
Host settings stores.

The host's settings persistence is an opaque key-value store with a
get/update contract. Two implementations are provided:

- WorkspaceSettingsFile: the workspace-scoped .vscode/settings.json file,
  using flat dotted keys exactly like the editor writes them
- InMemorySettingsStore: a dict-backed store that records every write,
  used for dry runs

Example:
    >>> store = WorkspaceSettingsFile("/work/app")
    >>> await store.update("chat.promptFiles", {"/work/app/.github/prompts": True})
    >>> store.get("chat.promptFiles")
    {'/work/app/.github/prompts': True}
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from copilot_prompt_sync.exceptions import SettingsReadError, SettingsWriteError
from copilot_prompt_sync.storage.layout import get_settings_path
from copilot_prompt_sync.storage.writer import read_text_if_exists, write_json

logger = logging.getLogger(__name__)


class SettingsScope(Enum):
    """Target of a settings write."""

    GLOBAL = "global"
    WORKSPACE = "workspace"
    WORKSPACE_FOLDER = "workspaceFolder"


class SettingsStore(Protocol):
    """Key-value settings store of the host editor."""

    def get(self, key: str, default: Any = None) -> Any: ...

    async def update(
        self, key: str, value: Any, scope: SettingsScope = SettingsScope.WORKSPACE
    ) -> None: ...


class InMemorySettingsStore:
    """
    Dict-backed settings store.

    Attributes:
        writes: Every (key, value) passed to update(), in call order
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})
        self.writes: list[tuple[str, Any]] = []

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    async def update(
        self, key: str, value: Any, scope: SettingsScope = SettingsScope.WORKSPACE
    ) -> None:
        self._values[key] = value
        self.writes.append((key, value))

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of all current values."""
        return dict(self._values)


class WorkspaceSettingsFile:
    """
    Settings store backed by <root>/.vscode/settings.json.

    The file is re-read on every access so external edits are always
    visible. Only workspace-scoped writes are supported. The file must be
    plain JSON (comments are not supported).
    """

    def __init__(self, root: str | Path):
        self.path = get_settings_path(root)

    def snapshot(self) -> dict[str, Any]:
        """
        Return every setting in the file.

        Raises:
            SettingsReadError: If the file cannot be read or is not a JSON object
        """
        try:
            content = read_text_if_exists(self.path)
        except OSError as e:
            raise SettingsReadError(f"Cannot read {self.path}: {e}") from e

        if content is None or not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SettingsReadError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsReadError(f"{self.path} must contain a JSON object")

        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.snapshot().get(key, default)

    async def update(
        self, key: str, value: Any, scope: SettingsScope = SettingsScope.WORKSPACE
    ) -> None:
        """
        Set key to value and rewrite the whole settings file.

        Raises:
            SettingsWriteError: If scope is not WORKSPACE, or the file cannot
                be read back or written
        """
        if scope is not SettingsScope.WORKSPACE:
            raise SettingsWriteError(
                f"Cannot write {scope.value} settings; only workspace settings are writable"
            )

        try:
            data = self.snapshot()
        except SettingsReadError as e:
            raise SettingsWriteError(f"Refusing to overwrite settings: {e}") from e

        data[key] = value

        try:
            write_json(self.path, data, indent=4, create_parents=True)
        except (OSError, TypeError) as e:
            raise SettingsWriteError(str(e)) from e

        logger.debug(f"Updated workspace setting {key}")
