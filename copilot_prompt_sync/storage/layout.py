"""
Workspace file layout for Copilot Prompt Sync.

This module defines where every file read or written by the tool lives,
relative to the workspace root. All storage and sync code uses these
functions so the layout is defined in exactly one place.

Workspace structure:
    <root>/
        .github/
            copilot-instructions.md     prompt store (markdown + JSON block)
            prompts/
                *.prompt.md             prompt files (presence only)
        .vscode/
            copilot.json                instruction kind -> settings value
            settings.json               workspace settings store
            copilot-prompt-sync.yaml    optional tool configuration
        .copilot-prompt-<language>      legacy per-language prompt

Example:
    >>> get_instructions_path("/work/app")
    PosixPath('/work/app/.github/copilot-instructions.md')
    >>> get_language_prompt_filename("rust")
    '.copilot-prompt-rust'
"""

from pathlib import Path

GITHUB_DIR = ".github"
VSCODE_DIR = ".vscode"
INSTRUCTIONS_FILENAME = "copilot-instructions.md"
PROMPTS_DIRNAME = "prompts"
PROMPT_FILE_SUFFIX = ".prompt.md"
LANGUAGE_CONFIG_FILENAME = "copilot.json"
SETTINGS_FILENAME = "settings.json"
TOOL_CONFIG_FILENAME = "copilot-prompt-sync.yaml"
LANGUAGE_PROMPT_PREFIX = ".copilot-prompt-"

# Glob patterns whose changes trigger a reconciliation pass
WATCHED_PATTERNS: tuple[str, ...] = (
    f"**/{GITHUB_DIR}/{INSTRUCTIONS_FILENAME}",
    f"**/{GITHUB_DIR}/{PROMPTS_DIRNAME}/*{PROMPT_FILE_SUFFIX}",
    f"**/{VSCODE_DIR}/{LANGUAGE_CONFIG_FILENAME}",
)


def get_instructions_path(root: str | Path) -> Path:
    """Path of the prompt store markdown document."""
    return Path(root) / GITHUB_DIR / INSTRUCTIONS_FILENAME


def get_prompts_dir(root: str | Path) -> Path:
    """Directory registered with the host as a source of prompt files."""
    return Path(root) / GITHUB_DIR / PROMPTS_DIRNAME


def get_language_config_path(root: str | Path) -> Path:
    """Path of the flat instruction-kind -> settings value JSON file."""
    return Path(root) / VSCODE_DIR / LANGUAGE_CONFIG_FILENAME


def get_settings_path(root: str | Path) -> Path:
    """Path of the workspace-scoped settings file."""
    return Path(root) / VSCODE_DIR / SETTINGS_FILENAME


def get_tool_config_path(root: str | Path) -> Path:
    """Path of the optional YAML configuration for this tool."""
    return Path(root) / VSCODE_DIR / TOOL_CONFIG_FILENAME


def get_language_prompt_filename(language: str) -> str:
    """
    Get filename of the legacy per-language prompt file.

    The language identifier is used verbatim; callers control it.

    Example:
        >>> get_language_prompt_filename("python")
        '.copilot-prompt-python'
    """
    return f"{LANGUAGE_PROMPT_PREFIX}{language}"


def get_language_prompt_path(root: str | Path, language: str) -> Path:
    """Path of the legacy per-language prompt file, directly under root."""
    return Path(root) / get_language_prompt_filename(language)
