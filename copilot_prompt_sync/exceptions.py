"""
Custom exceptions for Copilot Prompt Sync.

This module provides a hierarchy of exceptions that enable type-safe error
handling throughout the application. All exceptions inherit from the base
PromptSyncError for consistent catching.

Exception Hierarchy:
    PromptSyncError (base)
    ├── ConfigurationError
    │   ├── ConfigFileNotFoundError
    │   ├── ConfigValidationError
    │   ├── LanguageConfigError
    │   └── PromptStoreError
    ├── SettingsError
    │   ├── SettingsReadError
    │   └── SettingsWriteError
    ├── HostActionError
    │   ├── ActionUnavailableError
    │   └── ActionFailedError
    ├── UnknownInstructionKindError
    └── WorkspaceError

Usage:
    from copilot_prompt_sync.exceptions import ConfigurationError

    try:
        config = load_config(path)
    except ConfigFileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        sys.exit(1)
"""


class PromptSyncError(Exception):
    """
    Base exception for all Copilot Prompt Sync errors.

    All custom exceptions in this application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(PromptSyncError):
    """
    Base class for configuration-related errors.

    Raised when configuration loading, parsing, or validation fails.
    Should be caught and result in exit code 1 (configuration error).
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """
    Configuration file does not exist at the specified path.

    Example:
        raise ConfigFileNotFoundError("/path/to/copilot-prompt-sync.yaml")
    """

    pass


class ConfigValidationError(ConfigurationError):
    """
    Configuration file is invalid (schema validation failed).

    Should include details about which field(s) failed validation.

    Example:
        raise ConfigValidationError("reload.pause_seconds: must be >= 0")
    """

    pass


class LanguageConfigError(ConfigurationError):
    """
    The workspace .vscode/copilot.json file cannot be used.

    Raised when the file holds malformed JSON or a value that is not a
    flat JSON object. Aborts the language-specific reconcile step only.

    Example:
        raise LanguageConfigError("Invalid JSON in .vscode/copilot.json: ...")
    """

    pass


class PromptStoreError(ConfigurationError):
    """
    The JSON block of .github/copilot-instructions.md cannot be decoded.

    Only raised by strict parsing (validation). Regular reads treat a
    broken block as an empty prompt store.

    Example:
        raise PromptStoreError("Prompt store must map languages to objects")
    """

    pass


# ============================================================================
# Settings Store Errors
# ============================================================================


class SettingsError(PromptSyncError):
    """
    Base class for host settings store errors.

    Should be caught and result in exit code 2 (settings error).
    """

    pass


class SettingsReadError(SettingsError):
    """
    The settings store could not be read.

    Example:
        raise SettingsReadError("Invalid JSON in .vscode/settings.json")
    """

    pass


class SettingsWriteError(SettingsError):
    """
    A value could not be written to the settings store.

    Example:
        raise SettingsWriteError("Only workspace-scoped settings are writable")
    """

    pass


# ============================================================================
# Host Action Errors
# ============================================================================


class HostActionError(PromptSyncError):
    """
    Base class for failures of named host actions.

    These are never fatal: the reload chain swallows them and falls
    through to the next step.
    """

    pass


class ActionUnavailableError(HostActionError):
    """
    The host does not know how to run the requested action.

    Example:
        raise ActionUnavailableError("No command configured for github.copilot.reload")
    """

    pass


class ActionFailedError(HostActionError):
    """
    The host ran the action but it did not succeed.

    Example:
        raise ActionFailedError("github.copilot.toggleCopilot exited with status 1")
    """

    pass


# ============================================================================
# Domain Errors
# ============================================================================


class UnknownInstructionKindError(PromptSyncError):
    """
    A caller asked for an instruction kind that is not recognized.

    Example:
        raise UnknownInstructionKindError("Unknown instruction kind: 'DOCS'")
    """

    pass


class WorkspaceError(PromptSyncError):
    """
    The workspace root is unusable (for example, it is not a directory).

    A workspace that is simply not open is not an error; operations
    become no-ops instead.
    """

    pass
