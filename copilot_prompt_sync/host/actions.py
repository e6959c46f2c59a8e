"""
Named host actions.

Host actions take no arguments and report only success or failure. The
local runner maps action names to commands configured under
reload.commands in the tool configuration; a name without a command is
unavailable.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from copilot_prompt_sync.exceptions import ActionFailedError, ActionUnavailableError

logger = logging.getLogger(__name__)


class ActionRunner(Protocol):
    """Runs named host actions."""

    async def execute(self, name: str) -> None: ...


class CommandActionRunner:
    """
    Runs host actions as local commands.

    Args:
        commands: Action name -> argv
        cwd: Working directory for the commands (usually the workspace root)
    """

    def __init__(self, commands: dict[str, list[str]], cwd: str | Path | None = None):
        self._commands = dict(commands)
        self._cwd = cwd

    async def execute(self, name: str) -> None:
        """
        Run the command configured for name.

        Raises:
            ActionUnavailableError: If no command is configured for name
            ActionFailedError: If the command cannot be started or exits non-zero
        """
        argv = self._commands.get(name)
        if not argv:
            raise ActionUnavailableError(f"No command configured for {name}")

        logger.debug(f"Running host action {name}: {argv}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self._cwd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ActionFailedError(f"Cannot start {name}: {e}") from e

        _, stderr = await process.communicate()

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise ActionFailedError(
                f"{name} exited with status {process.returncode}"
                + (f": {detail}" if detail else "")
            )
