"""
Change-triggered reconciliation driver.

Watches the workspace with watchfiles and re-runs a full reconciliation
pass for every added, modified or deleted file matching one of:

- **/.github/copilot-instructions.md
- **/.github/prompts/*.prompt.md
- **/.vscode/copilot.json

There is no diffing: each matching change in a batch triggers one pass,
and passes are never cancelled. watchfiles groups changes that arrive
within the debounce window (50 ms by default) into one batch. A failing
pass is logged and the driver keeps watching.

Example:
    driver = ReconciliationDriver(SettingsReconciler(host), host.workspace_root)
    await driver.run()  # until stop_event is set or the task is cancelled
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from pathlib import Path, PurePath

from watchfiles import Change, awatch

from copilot_prompt_sync.storage.layout import (
    GITHUB_DIR,
    INSTRUCTIONS_FILENAME,
    LANGUAGE_CONFIG_FILENAME,
    PROMPT_FILE_SUFFIX,
    PROMPTS_DIRNAME,
    VSCODE_DIR,
    WATCHED_PATTERNS,
)

from .reconciler import ReconcileReport, SettingsReconciler

logger = logging.getLogger(__name__)

_TRIGGERING_CHANGES = {Change.added, Change.modified, Change.deleted}

DEFAULT_DEBOUNCE_MS = 50


def is_watched_path(path: str | PurePath) -> bool:
    """Return True if path matches one of the watched patterns, at any depth."""
    parts = PurePath(path).parts

    if parts[-2:] == (GITHUB_DIR, INSTRUCTIONS_FILENAME):
        return True
    if parts[-2:] == (VSCODE_DIR, LANGUAGE_CONFIG_FILENAME):
        return True
    return (
        len(parts) >= 3
        and parts[-3:-1] == (GITHUB_DIR, PROMPTS_DIRNAME)
        and parts[-1].endswith(PROMPT_FILE_SUFFIX)
    )


def watch_filter(change: Change, path: str) -> bool:
    """watchfiles filter: keep create/modify/delete of watched paths only."""
    return change in _TRIGGERING_CHANGES and is_watched_path(path)


class ReconciliationDriver:
    """
    Re-runs reconciliation whenever a watched workspace file changes.

    Args:
        reconciler: Reconciler to invoke
        root: Directory to watch (the workspace root)
        on_report: Called with the report of every finished pass
        debounce_ms: watchfiles debounce window in milliseconds
    """

    def __init__(
        self,
        reconciler: SettingsReconciler,
        root: str | Path,
        on_report: Callable[[ReconcileReport], None] | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ):
        self._reconciler = reconciler
        self._root = Path(root)
        self._on_report = on_report
        self._debounce_ms = debounce_ms
        self.passes = 0

    async def run_once(self) -> ReconcileReport | None:
        """
        Run one reconciliation pass.

        Returns:
            The pass report, or None if the pass raised unexpectedly
        """
        try:
            report = await self._reconciler.reconcile()
        except Exception as e:
            logger.error(f"Reconciliation pass failed: {e}", exc_info=True)
            return None

        self.passes += 1
        if self._on_report is not None:
            self._on_report(report)
        return report

    async def handle_changes(
        self, changes: Iterable[tuple[Change, str]]
    ) -> list[ReconcileReport | None]:
        """Run one pass per watched change in a batch."""
        reports = []
        for change, path in changes:
            if not watch_filter(change, path):
                continue
            logger.info(f"Detected {change.name} of {path}; reconciling")
            reports.append(await self.run_once())
        return reports

    async def run(
        self, stop_event: asyncio.Event | None = None, initial_pass: bool = True
    ) -> None:
        """
        Watch the workspace until stop_event is set.

        Args:
            stop_event: Event that ends the watch loop when set
            initial_pass: Reconcile once before waiting for changes
        """
        if initial_pass:
            await self.run_once()

        logger.info(
            f"Watching {self._root} for changes",
            extra={"context": {"patterns": list(WATCHED_PATTERNS)}},
        )

        async for changes in awatch(
            self._root,
            watch_filter=watch_filter,
            stop_event=stop_event,
            debounce=self._debounce_ms,
            recursive=True,
        ):
            await self.handle_changes(changes)

        logger.info(f"Stopped watching {self._root} after {self.passes} passes")
