"""Instruction kinds and recognized languages.

Maps the four logical instruction kinds understood by Copilot Chat to the
settings keys that hold them, and lists the language identifiers offered by
the prompt editor.

The language list is for UI population only. Stored prompts are never
validated against it: any language key is accepted on disk.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

# Language key under which prompts without a language are stored
GLOBAL_SCOPE_KEY = "global"

# Settings that register .github/prompts as a source of instruction files
PROMPT_FILES_SETTING = "chat.promptFiles"
USE_INSTRUCTION_FILES_SETTING = "github.copilot.chat.codeGeneration.useInstructionFiles"


class InstructionKind(Enum):
    """Instruction kinds supported by Copilot, valued with their settings key."""

    CODE_GENERATION = "github.copilot.chat.codeGeneration.instructions"
    TEST_GENERATION = "github.copilot.chat.testGeneration.instructions"
    CODE_REVIEW = "github.copilot.chat.reviewSelection.instructions"
    COMMIT_MESSAGE = "github.copilot.chat.commitMessageGeneration.instructions"

    @property
    def setting_key(self) -> str:
        """Settings store key holding instructions of this kind."""
        return self.value

    @property
    def label(self) -> str:
        """Human-readable label, e.g. "Code Review"."""
        return self.name.replace("_", " ").title()


SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "python", "javascript", "typescript", "java", "c", "cpp", "csharp", "dart",
    "swift", "kotlin", "ruby", "php", "rust", "lua", "shellscript", "sql", "r",
    "html", "css", "scss", "sass", "react", "nextjs", "vue", "svelte", "angular",
    "flutter", "nodejs", "django", "flask", "express", "fastapi", "spring", "rails",
    "laravel", "unity", "unreal", "godot", "tensorflow", "pytorch", "arduino",
)  # fmt: skip


def parse(name: object) -> InstructionKind | None:
    """Resolve an instruction kind by name.

    Accepts the canonical name ("CODE_REVIEW") as well as its lowercase or
    kebab-case spelling ("code_review", "code-review"). Never raises.

    Args:
        name: Candidate kind name, usually a key read from a JSON file

    Returns:
        The matching InstructionKind, or None if the name is not recognized
    """
    if not isinstance(name, str):
        return None

    normalized = name.strip().upper().replace("-", "_")
    try:
        return InstructionKind[normalized]
    except KeyError:
        logger.debug(f"Unrecognized instruction kind: {name!r}")
        return None


def from_name(name: object) -> InstructionKind | None:
    """Resolve an instruction kind by its exact canonical name.

    Used for keys of .vscode/copilot.json, where "code-review" and
    "CODE_REVIEW" are distinct keys and only the latter is recognized.
    """
    if not isinstance(name, str):
        return None
    return InstructionKind.__members__.get(name)
