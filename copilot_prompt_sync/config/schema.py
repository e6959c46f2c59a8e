"""
Configuration schema models for Copilot Prompt Sync.

This module defines Pydantic models for validating and parsing the optional
.vscode/copilot-prompt-sync.yaml file. Every field has a default, so an
absent file and an empty mapping both yield a usable SyncConfig.

Models:
    FeatureFlags: Default values of the three copilotPrompt.* flags
    ReloadSettings: Reload chain tuning and host action commands
    SyncConfig: Root configuration model (validates entire YAML)

Example YAML:
    features:
      enable_workspace_prompts: true
      enable_language_specific: false
    reload:
      pause_seconds: 0.5
      commands:
        github.copilot.reload: ["code", "--reuse-window", "--command", "github.copilot.reload"]
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_RELOAD_PAUSE_SECONDS,
    ENABLE_LANGUAGE_SPECIFIC,
    ENABLE_PROMPT_FILES,
    ENABLE_WORKSPACE_PROMPTS,
)


class FeatureFlags(BaseModel):
    """
    Feature flags gating the reconcile steps.

    Values here are defaults; the settings store can override each flag
    per workspace (see config.loader.resolve_feature_flags).

    Attributes:
        enable_workspace_prompts: Apply .github/copilot-instructions.md
            (and allow the language-specific step)
        enable_language_specific: Apply .vscode/copilot.json
            (only when enable_workspace_prompts is also on)
        enable_prompt_files: Register .github/prompts with the host
    """

    model_config = ConfigDict(extra="forbid")

    enable_workspace_prompts: bool = True
    enable_language_specific: bool = True
    enable_prompt_files: bool = True

    @classmethod
    def settings_names(cls) -> dict[str, str]:
        """Map each field to its camelCase name in the settings store."""
        return {
            "enable_workspace_prompts": ENABLE_WORKSPACE_PROMPTS,
            "enable_language_specific": ENABLE_LANGUAGE_SPECIFIC,
            "enable_prompt_files": ENABLE_PROMPT_FILES,
        }


class ReloadSettings(BaseModel):
    """
    Settings for the Copilot reload fallback chain.

    Attributes:
        pause_seconds: Pause between the two toggle invocations
        commands: Host action name -> argv run by the local action runner.
            Actions without a command are unavailable and fall through.
    """

    model_config = ConfigDict(extra="forbid")

    pause_seconds: float = DEFAULT_RELOAD_PAUSE_SECONDS
    commands: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("pause_seconds")
    @classmethod
    def validate_pause(cls, v: float) -> float:
        """Validate pause is not negative."""
        if v < 0:
            raise ValueError(f"pause_seconds must be >= 0, got: {v}")
        return v

    @field_validator("commands")
    @classmethod
    def validate_commands(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Validate every configured command has a program to run."""
        for name, argv in v.items():
            if not argv or not argv[0].strip():
                raise ValueError(f"command for action '{name}' cannot be empty")
        return v


class SyncConfig(BaseModel):
    """
    Root configuration model for copilot-prompt-sync.yaml.

    Attributes:
        features: Default feature flag values
        reload: Reload chain settings
    """

    model_config = ConfigDict(extra="forbid")

    features: FeatureFlags = Field(default_factory=FeatureFlags)
    reload: ReloadSettings = Field(default_factory=ReloadSettings)
