"""
File I/O helpers for Copilot Prompt Sync.

Every workspace file the tool touches is read and written through these
helpers so encoding, directory creation and error messages stay uniform.

Key features:
- UTF-8 encoding for all text files
- Pretty-printed JSON
- Whole-file writes (one write call per file, no partial updates)
- Parent directory creation on demand

Example:
    >>> write_text(Path("/work/app/.github/copilot-instructions.md"), "# Copilot...")
    >>> read_text_if_exists(Path("/work/app/.copilot-prompt-rust"))
    None
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_text_if_exists(filepath: Path) -> str | None:
    """
    Read a UTF-8 text file, or return None if it does not exist.

    Bytes that are not valid UTF-8 are decoded as U+FFFD instead of raising.

    Args:
        filepath: File to read

    Returns:
        File content, or None when the file is missing

    Raises:
        OSError: If the file exists but cannot be read
    """
    try:
        return filepath.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None


def write_text(filepath: Path, content: str, create_parents: bool = False) -> None:
    """
    Write a UTF-8 text file, replacing any previous content.

    Args:
        filepath: File to write
        content: Full file content
        create_parents: Create missing parent directories first

    Raises:
        PermissionError: If the file or its directory is not writable
        OSError: If the file cannot be written (disk full, ...)
    """
    try:
        if create_parents:
            filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote file: {filepath}")
    except PermissionError as e:
        logger.error(f"Permission denied writing file: {filepath}", exc_info=True)
        raise PermissionError(
            f"Cannot write '{filepath}': Permission denied. "
            f"Check directory permissions."
        ) from e
    except OSError as e:
        logger.error(f"Failed to write file: {filepath}", exc_info=True)
        raise OSError(
            f"Cannot write '{filepath}': {e}. Check disk space and permissions."
        ) from e


def write_json(
    filepath: Path, data: Any, indent: int = 2, create_parents: bool = False
) -> None:
    """
    Serialize data to a pretty-printed JSON file.

    Uses ensure_ascii=False so prompts keep their original characters, and
    terminates the file with a newline.

    Args:
        filepath: File to write
        data: JSON-serializable value
        indent: Indentation width
        create_parents: Create missing parent directories first

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If the file cannot be written
    """
    try:
        content = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    except TypeError as e:
        logger.error(f"Cannot serialize data to JSON: {e}", exc_info=True)
        raise TypeError(
            f"Cannot write JSON to '{filepath}': Data is not JSON-serializable. {e}"
        ) from e

    write_text(filepath, content, create_parents=create_parents)
