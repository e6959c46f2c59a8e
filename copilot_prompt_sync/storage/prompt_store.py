"""
Prompt store codec for Copilot Prompt Sync.

The prompt store maps a language key (a language identifier, or "global")
to a mapping of instruction kind name to prompt text. It is persisted as a
single JSON block fenced inside a human-readable markdown document at
.github/copilot-instructions.md.

Decoding never raises: a missing block, invalid JSON or a block whose
language entries are not objects all decode to an empty store. Values
inside a language entry are kept as they are, even when they are not
strings.

Round-trip law:
    decode(encode(store)) == store  for any store of strings

Example:
    >>> store = {"global": {"CODE_GENERATION": "Use tabs."}}
    >>> decode(encode(store)) == store
    True
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from copilot_prompt_sync.exceptions import PromptStoreError

from .layout import get_instructions_path
from .writer import read_text_if_exists, write_text

logger = logging.getLogger(__name__)

PromptStore = dict[str, dict[str, Any]]

_STORE_ADAPTER = TypeAdapter(PromptStore)

# First fenced block labelled json; the closing fence must start a line
_JSON_BLOCK_RE = re.compile(r"```json\r?\n([\s\S]*?)\r?\n```")

_DOCUMENT_TEMPLATE = """# Copilot Instructions

This file contains language-specific prompts for GitHub Copilot.

```json
{body}
```
"""


def parse_document(markdown_text: str) -> PromptStore:
    """
    Strictly extract the prompt store from a markdown document.

    A document without a JSON block is valid and holds an empty store.

    Args:
        markdown_text: Full text of the instructions document

    Returns:
        The decoded store

    Raises:
        PromptStoreError: If the JSON block is malformed or has the wrong shape
    """
    match = _JSON_BLOCK_RE.search(markdown_text)
    if match is None:
        return {}

    try:
        raw = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise PromptStoreError(f"Invalid JSON block in instructions document: {e}") from e

    try:
        return _STORE_ADAPTER.validate_python(raw, strict=True)
    except ValidationError as e:
        raise PromptStoreError(
            "Prompt store must map language keys to JSON objects "
            f"({e.error_count()} validation errors)"
        ) from e


def decode(markdown_text: str) -> PromptStore:
    """
    Extract the prompt store from a markdown document.

    Args:
        markdown_text: Full text of the instructions document

    Returns:
        The decoded store, or an empty store if the document holds no
        usable JSON block
    """
    try:
        return parse_document(markdown_text)
    except PromptStoreError as e:
        logger.warning(f"Ignoring stored prompts: {e}")
        return {}


def encode(store: PromptStore) -> str:
    """
    Render a prompt store as the instructions markdown document.

    Args:
        store: Prompt store to serialize

    Returns:
        Markdown document with the store pretty-printed in a json block
    """
    body = json.dumps(store, indent=2, ensure_ascii=False)
    return _DOCUMENT_TEMPLATE.format(body=body)


def read_from_disk(root: str | Path) -> PromptStore:
    """
    Load the prompt store of a workspace.

    Args:
        root: Workspace root directory

    Returns:
        Decoded store; empty if the instructions file does not exist

    Raises:
        OSError: If the file exists but cannot be read
    """
    content = read_text_if_exists(get_instructions_path(root))
    if content is None:
        return {}
    return decode(content)


def write_to_disk(root: str | Path, store: PromptStore) -> Path:
    """
    Persist the prompt store, replacing the whole instructions file.

    Creates .github/ if it is missing.

    Args:
        root: Workspace root directory
        store: Prompt store to write

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    path = get_instructions_path(root)
    write_text(path, encode(store), create_parents=True)
    logger.info(
        f"Saved prompt store: {path}",
        extra={"context": {"languages": sorted(store)}},
    )
    return path
