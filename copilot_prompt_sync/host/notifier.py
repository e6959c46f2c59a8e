"""User-visible notices."""

from typing import Protocol

from copilot_prompt_sync.utils import console


class Notifier(Protocol):
    """Shows informational and error notices to the user."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Routes notices to the Rich console helpers (JSON-buffered in agent mode)."""

    def info(self, message: str) -> None:
        console.notice(message)

    def error(self, message: str) -> None:
        console.error(message)
