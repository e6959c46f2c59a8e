"""
Copilot reload fallback chain.

After a setting is written, Copilot has to re-read its configuration. The
chain tries each reload step in order and stops at the first success:

1. toggle: run github.copilot.toggleCopilot, pause, run it again
2. legacy: run github.copilot.reload
3. manual: ask the user to reload the editor

Failures of steps 1 and 2 are logged at DEBUG and swallowed; step 3 is a
notice and cannot fail.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from copilot_prompt_sync.config.constants import (
    LEGACY_RELOAD_ACTION,
    TOGGLE_COPILOT_ACTION,
)
from copilot_prompt_sync.host.actions import ActionRunner
from copilot_prompt_sync.host.notifier import Notifier

logger = logging.getLogger(__name__)

MANUAL_RELOAD_MESSAGE = "Please reload VS Code to apply the new Copilot settings"

ReloadStep = tuple[str, Callable[[], Awaitable[None]]]


def build_reload_steps(actions: ActionRunner, pause_seconds: float) -> list[ReloadStep]:
    """Return the automatic reload steps, in the order they are tried."""

    async def toggle() -> None:
        await actions.execute(TOGGLE_COPILOT_ACTION)
        await asyncio.sleep(pause_seconds)
        await actions.execute(TOGGLE_COPILOT_ACTION)

    async def legacy() -> None:
        await actions.execute(LEGACY_RELOAD_ACTION)

    return [("toggle", toggle), ("legacy", legacy)]


async def run_reload_chain(
    steps: Sequence[ReloadStep], on_exhausted: Callable[[], None]
) -> str:
    """
    Try each step until one succeeds.

    Args:
        steps: (name, coroutine function) pairs
        on_exhausted: Called once if every step failed

    Returns:
        Name of the step that succeeded, or "manual" if none did
    """
    for name, step in steps:
        try:
            await step()
        except Exception as e:
            logger.debug(f"Reload step '{name}' failed: {e}")
            continue
        logger.debug(f"Copilot reloaded via '{name}'")
        return name

    on_exhausted()
    return "manual"


async def reload_copilot(
    actions: ActionRunner, notifier: Notifier, pause_seconds: float
) -> str:
    """
    Make the host pick up changed Copilot settings.

    Returns:
        "toggle", "legacy" or "manual"
    """
    return await run_reload_chain(
        build_reload_steps(actions, pause_seconds),
        lambda: notifier.info(MANUAL_RELOAD_MESSAGE),
    )
