"""
Configuration loader for Copilot Prompt Sync.

This module loads the optional YAML tool configuration, validates it with
Pydantic models, and resolves the effective feature flags for a
reconciliation pass by overlaying the copilotPrompt.* values found in the
settings store.

Functions:
    load_config: Load and validate an explicit YAML configuration file
    load_workspace_config: Load .vscode/copilot-prompt-sync.yaml if present
    resolve_feature_flags: Overlay settings-store flags on config defaults
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from copilot_prompt_sync.exceptions import (
    ConfigFileNotFoundError,
    ConfigValidationError,
)
from copilot_prompt_sync.storage.layout import get_tool_config_path

from .constants import SETTINGS_SECTION
from .schema import FeatureFlags, SyncConfig

if TYPE_CHECKING:
    from copilot_prompt_sync.host.settings import SettingsStore

logger = logging.getLogger(__name__)


def load_config(config_path: str | Path) -> SyncConfig:
    """
    Load a copilot-prompt-sync YAML file.

    Args:
        config_path: Path to the YAML file (relative or absolute)

    Returns:
        Validated SyncConfig

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist
        ConfigValidationError: If YAML is invalid or validation fails

    Security:
        Uses yaml.safe_load() to prevent code injection
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(
            f"Failed to read configuration file {config_path}: {e}"
        ) from e

    # An empty file means "all defaults"
    if raw_config is None:
        raw_config = {}

    try:
        config = SyncConfig.model_validate(raw_config)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            msg = error["msg"]
            error_messages.append(f"  - {loc}: {msg}")

        raise ConfigValidationError(
            f"Configuration validation failed in {config_path}:\n"
            + "\n".join(error_messages)
        ) from e

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def load_workspace_config(root: str | Path) -> SyncConfig:
    """
    Load the workspace's tool configuration, falling back to defaults.

    Args:
        root: Workspace root directory

    Returns:
        SyncConfig from .vscode/copilot-prompt-sync.yaml, or defaults if the
        file does not exist

    Raises:
        ConfigValidationError: If the file exists but is invalid
    """
    path = get_tool_config_path(root)
    if not path.exists():
        return SyncConfig()
    return load_config(path)


def resolve_feature_flags(settings: "SettingsStore", defaults: FeatureFlags) -> FeatureFlags:
    """
    Compute the feature flags in effect for one reconciliation pass.

    Each flag is read from the settings store as copilotPrompt.<name>.
    Missing keys keep the default; non-boolean values are ignored with a
    warning.

    Args:
        settings: Settings store of the host
        defaults: Flag values from the tool configuration

    Returns:
        FeatureFlags with settings-store overrides applied

    Raises:
        SettingsReadError: If the settings store cannot be read
    """
    resolved = defaults.model_dump()

    for field_name, settings_name in FeatureFlags.settings_names().items():
        key = f"{SETTINGS_SECTION}.{settings_name}"
        value = settings.get(key)
        if value is None:
            continue
        if not isinstance(value, bool):
            logger.warning(f"Ignoring non-boolean setting {key}={value!r}")
            continue
        resolved[field_name] = value

    return FeatureFlags.model_validate(resolved)
