"""
Settings reconciler for Copilot Prompt Sync.

Reads the workspace prompt files and pushes what they describe into the
host settings store:

- .github/copilot-instructions.md -> code-generation instructions
- .vscode/copilot.json            -> one setting per recognized instruction kind
- .github/prompts/                -> prompt-file registration settings

Every pass recomputes from disk, so running reconcile() repeatedly with no
file changes always converges on the same settings. Steps are independent:
a failing step is reported and the remaining steps still run.

Example:
    >>> reconciler = SettingsReconciler(host)
    >>> report = await reconciler.reconcile()
    >>> report.writes
    [('github.copilot.chat.codeGeneration.instructions', [{'text': 'Use tabs.'}])]
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from copilot_prompt_sync.config.loader import resolve_feature_flags
from copilot_prompt_sync.exceptions import (
    LanguageConfigError,
    PromptSyncError,
    SettingsError,
    SettingsWriteError,
)
from copilot_prompt_sync.host.settings import SettingsScope
from copilot_prompt_sync.host.workspace import Host
from copilot_prompt_sync.instructions import (
    PROMPT_FILES_SETTING,
    USE_INSTRUCTION_FILES_SETTING,
    InstructionKind,
    from_name,
)
from copilot_prompt_sync.storage.layout import (
    get_instructions_path,
    get_language_config_path,
    get_prompts_dir,
)
from copilot_prompt_sync.storage.writer import read_text_if_exists
from copilot_prompt_sync.utils.logging import log_with_context
from copilot_prompt_sync.utils.time import utc_timestamp

from .reload import reload_copilot

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """
    Outcome of one reconciliation pass.

    Attributes:
        workspace: Workspace root, or None if no workspace was open
        started_at: UTC timestamp of the pass
        steps: Names of the steps that ran
        writes: Successful settings writes as (key, value)
        errors: Failed steps as (step, message)
    """

    workspace: Path | None = None
    started_at: str = field(default_factory=utc_timestamp)
    steps: list[str] = field(default_factory=list)
    writes: list[tuple[str, Any]] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "workspace": str(self.workspace) if self.workspace else None,
            "started_at": self.started_at,
            "steps": list(self.steps),
            "writes": [{"key": key, "value": value} for key, value in self.writes],
            "errors": [{"step": step, "message": msg} for step, msg in self.errors],
        }


def load_language_config(root: str | Path) -> dict[str, Any] | None:
    """
    Read .vscode/copilot.json.

    Returns:
        The parsed object, or None if the file does not exist

    Raises:
        LanguageConfigError: If the file is not valid JSON or not an object
    """
    path = get_language_config_path(root)
    content = read_text_if_exists(path)
    if content is None:
        return None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LanguageConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise LanguageConfigError(
            f"{path} must contain a JSON object mapping instruction kinds to settings"
        )

    return data


class SettingsReconciler:
    """Pushes workspace prompt configuration into the host settings store."""

    def __init__(self, host: Host):
        self.host = host

    async def push_setting(
        self, key: str, value: Any, report: ReconcileReport | None = None
    ) -> bool:
        """
        Write one workspace setting, then make Copilot reload.

        Never raises: a failed write is shown to the user and logged.

        Args:
            key: Settings key
            value: Value to store
            report: Pass report recording the write

        Returns:
            True if the setting was written
        """
        try:
            await self.host.settings.update(key, value, SettingsScope.WORKSPACE)
        except (SettingsError, OSError) as e:
            logger.error(f"Error updating Copilot setting {key}: {e}", exc_info=True)
            self.host.notifier.error(f"Failed to update Copilot configuration: {e}")
            return False

        if report is not None:
            report.writes.append((key, value))

        await reload_copilot(
            self.host.actions,
            self.host.notifier,
            self.host.config.reload.pause_seconds,
        )
        self.host.notifier.info(f"Copilot configuration updated for {key}")
        return True

    async def apply_global_instructions(
        self, root: Path, report: ReconcileReport | None = None
    ) -> bool:
        """
        Push .github/copilot-instructions.md as code-generation instructions.

        Returns:
            True if the instructions file exists
        """
        instructions = read_text_if_exists(get_instructions_path(root))
        if instructions is None:
            return False

        await self.push_setting(
            InstructionKind.CODE_GENERATION.setting_key,
            [{"text": instructions}],
            report,
        )
        return True

    async def apply_language_specific(
        self, root: Path, report: ReconcileReport | None = None
    ) -> list[InstructionKind]:
        """
        Push every entry of .vscode/copilot.json keyed by an exact kind name.

        Keys are matched case-sensitively: "code-review" is skipped.

        Returns:
            Instruction kinds found in the file (unknown keys are skipped)

        Raises:
            LanguageConfigError: If the file is malformed
        """
        config = load_language_config(root)
        if config is None:
            return []

        applied = []
        for name, value in config.items():
            kind = from_name(name)
            if kind is None:
                logger.debug(f"Skipping unknown instruction kind in copilot.json: {name}")
                continue
            await self.push_setting(kind.setting_key, value, report)
            applied.append(kind)

        return applied

    async def setup_prompt_files(
        self, root: Path, report: ReconcileReport | None = None
    ) -> bool:
        """
        Register .github/prompts as a source of instruction files.

        Both settings are written concurrently; both writes are attempted
        even if one of them fails.

        Returns:
            True if the prompts directory exists

        Raises:
            SettingsWriteError: If either write failed (after both finished)
        """
        prompts_dir = get_prompts_dir(root)
        if not prompts_dir.is_dir():
            return False

        updates = [
            (PROMPT_FILES_SETTING, {str(prompts_dir): True}),
            (USE_INSTRUCTION_FILES_SETTING, True),
        ]
        results = await asyncio.gather(
            *(
                self.host.settings.update(key, value, SettingsScope.WORKSPACE)
                for key, value in updates
            ),
            return_exceptions=True,
        )

        failures = []
        for (key, value), result in zip(updates, results, strict=True):
            if isinstance(result, BaseException):
                failures.append(f"{key}: {result}")
            elif report is not None:
                report.writes.append((key, value))

        if failures:
            raise SettingsWriteError("; ".join(failures))

        return True

    async def reconcile(self) -> ReconcileReport:
        """
        Run one full reconciliation pass for the open workspace.

        Does nothing when no workspace is open. Flags are re-read from the
        settings store on every pass.

        Returns:
            ReconcileReport describing what ran and what was written
        """
        root = self.host.workspace_root
        report = ReconcileReport(workspace=root)
        if root is None:
            logger.debug("No workspace open; skipping reconciliation")
            return report

        defaults = self.host.config.features
        try:
            flags = resolve_feature_flags(self.host.settings, defaults)
        except SettingsError as e:
            logger.warning(f"Cannot read feature flags, using defaults: {e}")
            report.errors.append(("feature_flags", str(e)))
            flags = defaults

        if flags.enable_workspace_prompts:
            await self._run_step(
                "global_instructions", self.apply_global_instructions, root, report
            )
            if flags.enable_language_specific:
                await self._run_step(
                    "language_specific", self.apply_language_specific, root, report
                )

        if flags.enable_prompt_files:
            await self._run_step(
                "prompt_files", self.setup_prompt_files, root, report
            )

        log_with_context(
            logger,
            logging.INFO,
            "Reconciliation pass finished",
            context={
                "steps": report.steps,
                "writes": len(report.writes),
                "errors": len(report.errors),
            },
            workspace=str(root),
        )
        return report

    async def _run_step(
        self,
        name: str,
        step: Callable[[Path, ReconcileReport], Awaitable[Any]],
        root: Path,
        report: ReconcileReport,
    ) -> None:
        report.steps.append(name)
        try:
            await step(root, report)
        except (PromptSyncError, OSError) as e:
            logger.error(f"Reconcile step '{name}' failed: {e}")
            self.host.notifier.error(f"Failed to apply {name.replace('_', ' ')}: {e}")
            report.errors.append((name, str(e)))
