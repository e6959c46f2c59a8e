"""
Entry point for running Copilot Prompt Sync as a module.

Enables execution via:
    python -m copilot_prompt_sync [command] [options]

This is equivalent to running the installed CLI:
    copilot-prompt-sync [command] [options]

Examples:
    python -m copilot_prompt_sync --help
    python -m copilot_prompt_sync sync --workspace .
    python -m copilot_prompt_sync watch
    python -m copilot_prompt_sync validate
"""

from copilot_prompt_sync.cli import app

if __name__ == "__main__":
    app()
