"""
Tests for host.workspace module.

Tests building the local host for a workspace directory.
"""

import pytest

from copilot_prompt_sync.exceptions import (
    ConfigFileNotFoundError,
    SettingsReadError,
    WorkspaceError,
)
from copilot_prompt_sync.host.actions import CommandActionRunner
from copilot_prompt_sync.host.notifier import ConsoleNotifier
from copilot_prompt_sync.host.settings import InMemorySettingsStore, WorkspaceSettingsFile
from copilot_prompt_sync.host.workspace import Host, open_workspace


class TestHost:
    """Tests for the Host dataclass."""

    def test_no_folders_means_no_workspace(self):
        """workspace_root is None without open folders."""
        host = Host(
            settings=InMemorySettingsStore(),
            actions=CommandActionRunner({}),
            notifier=ConsoleNotifier(),
        )

        assert host.workspace_root is None

    def test_first_folder_is_root(self, tmp_path):
        """Only the first folder is used."""
        host = Host(
            settings=InMemorySettingsStore(),
            actions=CommandActionRunner({}),
            notifier=ConsoleNotifier(),
            workspace_folders=[tmp_path / "a", tmp_path / "b"],
        )

        assert host.workspace_root == tmp_path / "a"


class TestOpenWorkspace:
    """Tests for open_workspace."""

    def test_local_host(self, tmp_path):
        """Default host writes to .vscode/settings.json."""
        host = open_workspace(tmp_path)

        assert isinstance(host.settings, WorkspaceSettingsFile)
        assert host.workspace_root == tmp_path.resolve()

    def test_not_a_directory(self, tmp_path):
        """A missing root raises WorkspaceError."""
        with pytest.raises(WorkspaceError):
            open_workspace(tmp_path / "missing")

    def test_explicit_config_must_exist(self, tmp_path):
        """An explicit config path that does not exist is an error."""
        with pytest.raises(ConfigFileNotFoundError):
            open_workspace(tmp_path, config_path=tmp_path / "nope.yaml")

    def test_workspace_config_applied(self, tmp_path):
        """.vscode/copilot-prompt-sync.yaml is loaded by default."""
        vscode = tmp_path / ".vscode"
        vscode.mkdir()
        (vscode / "copilot-prompt-sync.yaml").write_text(
            "reload:\n  pause_seconds: 0\n", encoding="utf-8"
        )

        host = open_workspace(tmp_path)

        assert host.config.reload.pause_seconds == 0

    def test_dry_run_seeds_memory_store(self, tmp_path):
        """Dry runs read the settings file once and never write it."""
        vscode = tmp_path / ".vscode"
        vscode.mkdir()
        (vscode / "settings.json").write_text('{"a": 1}', encoding="utf-8")

        host = open_workspace(tmp_path, dry_run=True)

        assert isinstance(host.settings, InMemorySettingsStore)
        assert host.settings.get("a") == 1

    def test_dry_run_with_malformed_settings(self, tmp_path):
        """Dry runs surface an unreadable settings file."""
        vscode = tmp_path / ".vscode"
        vscode.mkdir()
        (vscode / "settings.json").write_text("nope", encoding="utf-8")

        with pytest.raises(SettingsReadError):
            open_workspace(tmp_path, dry_run=True)
