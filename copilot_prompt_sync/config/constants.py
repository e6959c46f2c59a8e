"""
Configuration constants for Copilot Prompt Sync.

This module contains global constants used across the application
to avoid tight coupling between modules.
"""

# Settings section holding the feature flags (copilotPrompt.<flag>)
SETTINGS_SECTION = "copilotPrompt"

ENABLE_WORKSPACE_PROMPTS = "enableWorkspacePrompts"
ENABLE_LANGUAGE_SPECIFIC = "enableLanguageSpecific"
ENABLE_PROMPT_FILES = "enablePromptFiles"

# Pause between the two toggles of the Copilot reload action
DEFAULT_RELOAD_PAUSE_SECONDS = 1.0

# Host actions tried, in order, to make Copilot re-read its configuration
TOGGLE_COPILOT_ACTION = "github.copilot.toggleCopilot"
LEGACY_RELOAD_ACTION = "github.copilot.reload"
