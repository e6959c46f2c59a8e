"""
Prompt editor session.

A request/response facade over the prompt store for one editor view. The
view sends two messages and receives one:

    -> {"command": "loadTypeLanguagePrompt", "type": ..., "lang": ...}
    <- {"command": "setPrompt", "prompt": ...}

    -> {"command": "saveInstructions", "type": ..., "lang": ..., "prompt": ...}

Language-scoped and global prompts live in disjoint parts of the store:
saving one never changes the other.

At most one session is open at a time; SessionManager.create_or_show()
focuses the open session instead of creating a second one.
"""

import logging
from collections.abc import Callable
from typing import Any

from copilot_prompt_sync.exceptions import PromptSyncError, UnknownInstructionKindError
from copilot_prompt_sync.host.workspace import Host
from copilot_prompt_sync.instructions import GLOBAL_SCOPE_KEY, InstructionKind, parse
from copilot_prompt_sync.storage import prompt_store
from copilot_prompt_sync.sync.reconciler import SettingsReconciler

logger = logging.getLogger(__name__)

LOAD_COMMAND = "loadTypeLanguagePrompt"
SAVE_COMMAND = "saveInstructions"
SET_PROMPT_COMMAND = "setPrompt"


def _resolve_kind(kind: str) -> InstructionKind:
    resolved = parse(kind)
    if resolved is None:
        raise UnknownInstructionKindError(f"Unknown instruction kind: {kind!r}")
    return resolved


class EditorSession:
    """
    One open prompt editor.

    Args:
        host: Host whose workspace holds the prompt store
        reconciler: Reconciler used to push saved prompts to the settings store
        on_dispose: Called once when the session is disposed
    """

    def __init__(
        self,
        host: Host,
        reconciler: SettingsReconciler | None = None,
        on_dispose: Callable[["EditorSession"], None] | None = None,
    ):
        self._host = host
        self._reconciler = reconciler or SettingsReconciler(host)
        self._on_dispose = on_dispose
        self.disposed = False
        self.reveal_count = 0

    def load(self, kind: str, language: str | None = None) -> str:
        """
        Return the stored prompt for kind and language.

        When language is given and the store has an entry for it, the
        prompt comes from that entry only; otherwise it comes from the
        global entry. Missing prompts, and stored values that are not
        strings, load as "".

        Raises:
            UnknownInstructionKindError: If kind is not recognized
            OSError: If the prompt store cannot be read
        """
        resolved = _resolve_kind(kind)
        root = self._host.workspace_root
        if root is None:
            return ""

        store = prompt_store.read_from_disk(root)
        if language and language in store:
            prompt = store[language].get(resolved.name, "")
        else:
            prompt = store.get(GLOBAL_SCOPE_KEY, {}).get(resolved.name, "")
        return prompt if isinstance(prompt, str) else ""

    async def save(self, kind: str, language: str | None, text: str) -> bool:
        """
        Store a prompt and push it to the settings store.

        The prompt file is written before the settings push; a failed push
        leaves the saved file in place.

        Returns:
            True if the prompt was saved
        """
        root = self._host.workspace_root
        if root is None:
            return False

        try:
            resolved = _resolve_kind(kind)
            store = prompt_store.read_from_disk(root)
            scope = language or GLOBAL_SCOPE_KEY
            store.setdefault(scope, {})[resolved.name] = text
            prompt_store.write_to_disk(root, store)

            payload = {"text": text}
            if language:
                payload["language"] = language
            await self._reconciler.push_setting(resolved.setting_key, [payload])
        except (PromptSyncError, OSError) as e:
            logger.error(f"Error saving instructions: {e}", exc_info=True)
            self._host.notifier.error("Failed to save Copilot instructions")
            return False

        self._host.notifier.info("Copilot instructions saved successfully")
        return True

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """
        Dispatch one message from the view.

        Returns:
            A setPrompt reply for load requests, None otherwise
        """
        command = message.get("command")

        if command == LOAD_COMMAND:
            try:
                prompt = self.load(message.get("type", ""), message.get("lang"))
            except (PromptSyncError, OSError) as e:
                logger.error(f"Error loading prompt: {e}")
                self._host.notifier.error("Failed to load Copilot prompt")
                return None
            return {"command": SET_PROMPT_COMMAND, "prompt": prompt}

        if command == SAVE_COMMAND:
            await self.save(
                message.get("type", ""), message.get("lang"), message.get("prompt", "")
            )
            return None

        logger.warning(f"Ignoring unknown editor command: {command!r}")
        return None

    def reveal(self) -> None:
        """Bring the session to the front."""
        self.reveal_count += 1
        logger.debug("Revealing existing prompt editor session")

    def dispose(self) -> None:
        """Close the session. Safe to call more than once."""
        if self.disposed:
            return
        self.disposed = True
        if self._on_dispose is not None:
            self._on_dispose(self)


class SessionManager:
    """Owns zero or one active EditorSession."""

    def __init__(self, host: Host, reconciler: SettingsReconciler | None = None):
        self._host = host
        self._reconciler = reconciler
        self._current: EditorSession | None = None

    @property
    def current(self) -> EditorSession | None:
        return self._current

    def create_or_show(self) -> EditorSession:
        """Return the open session (revealing it), or open a new one."""
        if self._current is not None:
            self._current.reveal()
            return self._current

        self._current = EditorSession(
            self._host, self._reconciler, on_dispose=self._release
        )
        return self._current

    def _release(self, session: EditorSession) -> None:
        if self._current is session:
            self._current = None
