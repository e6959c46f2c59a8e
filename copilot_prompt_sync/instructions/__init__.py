"""Instruction-type registry for Copilot Prompt Sync.

Exposes the fixed set of instruction kinds, their settings keys, and the
language identifiers offered by the prompt editor.
"""

from copilot_prompt_sync.instructions.registry import (
    GLOBAL_SCOPE_KEY,
    PROMPT_FILES_SETTING,
    SUPPORTED_LANGUAGES,
    USE_INSTRUCTION_FILES_SETTING,
    InstructionKind,
    from_name,
    parse,
)

__all__ = [
    "InstructionKind",
    "parse",
    "from_name",
    "SUPPORTED_LANGUAGES",
    "GLOBAL_SCOPE_KEY",
    "PROMPT_FILES_SETTING",
    "USE_INSTRUCTION_FILES_SETTING",
]
