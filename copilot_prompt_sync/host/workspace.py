"""
Host context shared by the reconciler, the watcher and the editor.

A Host bundles the external collaborators (settings store, action runner,
notifier) with the open workspace folders and the tool configuration.
open_workspace() builds the local host used by the CLI.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from copilot_prompt_sync.config.loader import load_config, load_workspace_config
from copilot_prompt_sync.config.schema import SyncConfig
from copilot_prompt_sync.exceptions import WorkspaceError

from .actions import ActionRunner, CommandActionRunner
from .notifier import ConsoleNotifier, Notifier
from .settings import InMemorySettingsStore, SettingsStore, WorkspaceSettingsFile

logger = logging.getLogger(__name__)


@dataclass
class Host:
    """
    External collaborators and workspace state.

    Attributes:
        settings: Settings store receiving Copilot settings
        actions: Runner for named host actions (reload chain)
        notifier: Sink for user-visible notices
        workspace_folders: Open workspace folders; may be empty
        config: Tool configuration
    """

    settings: SettingsStore
    actions: ActionRunner
    notifier: Notifier
    workspace_folders: list[Path] = field(default_factory=list)
    config: SyncConfig = field(default_factory=SyncConfig)

    @property
    def workspace_root(self) -> Path | None:
        """First open workspace folder, or None when no workspace is open."""
        if not self.workspace_folders:
            return None
        return self.workspace_folders[0]


def open_workspace(
    root: str | Path,
    config_path: str | Path | None = None,
    dry_run: bool = False,
) -> Host:
    """
    Build the local host for a workspace directory.

    Args:
        root: Workspace root directory
        config_path: Explicit YAML configuration; defaults to
            .vscode/copilot-prompt-sync.yaml when present
        dry_run: Use an in-memory settings store seeded from the workspace
            settings, and run no host actions

    Returns:
        Host for the workspace

    Raises:
        WorkspaceError: If root is not a directory
        ConfigurationError: If the configuration file is missing or invalid
        SettingsReadError: If dry_run is set and the settings file is unreadable
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise WorkspaceError(f"Workspace root is not a directory: {root}")

    config = load_config(config_path) if config_path else load_workspace_config(root)

    settings_file = WorkspaceSettingsFile(root)
    if dry_run:
        settings: SettingsStore = InMemorySettingsStore(settings_file.snapshot())
        actions: ActionRunner = CommandActionRunner({}, cwd=root)
    else:
        settings = settings_file
        actions = CommandActionRunner(config.reload.commands, cwd=root)

    logger.debug(f"Opened workspace {root} (dry_run={dry_run})")

    return Host(
        settings=settings,
        actions=actions,
        notifier=ConsoleNotifier(),
        workspace_folders=[root],
        config=config,
    )
