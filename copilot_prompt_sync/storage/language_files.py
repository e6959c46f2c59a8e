"""
Legacy per-language prompt files.

One flat file per language (.copilot-prompt-<language>) directly under the
workspace root, holding the raw prompt text with no structure. Files are
created on first write and overwritten afterwards; this module never
deletes them.
"""

import logging
from pathlib import Path

from .layout import get_language_prompt_path
from .writer import read_text_if_exists, write_text

logger = logging.getLogger(__name__)


def read(root: str | Path, language: str) -> str:
    """Return the stored prompt for language, or "" if there is none."""
    content = read_text_if_exists(get_language_prompt_path(root, language))
    return content if content is not None else ""


def write(root: str | Path, language: str, text: str) -> Path:
    """
    Create or overwrite the prompt file for language.

    Returns:
        Path of the written file
    """
    path = get_language_prompt_path(root, language)
    write_text(path, text)
    logger.info(f"Saved {language} prompt file: {path}")
    return path
