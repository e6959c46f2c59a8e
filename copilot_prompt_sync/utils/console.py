"""
Rich console utilities for dual-mode CLI output.

Provides terminal output for humans and structured JSON for AI agents.
All output functions automatically adapt based on the global output_mode setting.

This module provides:
- OutputMode: Class to manage output format (text/json/quiet)
- Context manager: spinner()
- Output functions: success(), error(), warning(), info(), notice()
- Display functions: print_banner(), print_reconcile_summary(),
  print_prompt_table(), print_settings_writes(), print_languages()

Human Mode (--format text):
    - Rich spinners, colored tables
    - ANSI colors and Unicode symbols

Agent Mode (--format json):
    - Structured JSON output to stdout
    - No ANSI codes or spinners

Quiet Mode (--quiet):
    - Minimal output
    - Tab-separated values

Examples:
    >>> from copilot_prompt_sync.utils.console import output_mode, spinner, success
    >>> output_mode.format = "text"
    >>> with spinner("Reconciling..."):
    ...     report = asyncio.run(reconcile(host))
    >>> success("Workspace synchronized")
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from copilot_prompt_sync.sync.reconciler import ReconcileReport


class OutputMode:
    """
    Output mode configuration for dual-mode CLI.

    Controls how messages and data are displayed to the user.
    Switches between human-friendly (Rich), agent-friendly (JSON),
    and minimal (quiet) output modes.

    Attributes:
        format: Output format - "text" (human) or "json" (agent)
        quiet: If True, suppress non-essential output
        _json_buffer: Internal buffer for JSON output in agent mode
    """

    def __init__(self, format_type: str = "text", quiet: bool = False):
        """
        Initialize output mode.

        Args:
            format_type: Output format - "text" for human, "json" for agent
            quiet: If True, suppress non-essential output

        Raises:
            ValueError: If format_type is not "text" or "json"
        """
        if format_type not in ["text", "json"]:
            raise ValueError(f"Invalid format: {format_type}. Must be 'text' or 'json'")

        self.format = format_type
        self.quiet = quiet
        self._json_buffer: dict[str, Any] = {}

    def is_human(self) -> bool:
        """Check if in human-friendly mode."""
        return self.format == "text"

    def is_agent(self) -> bool:
        """Check if in agent-friendly mode."""
        return self.format == "json"

    def add_json(self, key: str, value: Any) -> None:
        """
        Add key-value pair to JSON buffer.

        Used in agent mode to accumulate structured data
        before final output via flush_json().

        Args:
            key: JSON key
            value: JSON-serializable value
        """
        self._json_buffer[key] = value

    def append_json(self, key: str, value: Any) -> None:
        """
        Append a value to a list stored under key in the JSON buffer.

        Args:
            key: JSON key holding a list
            value: JSON-serializable value to append
        """
        self._json_buffer.setdefault(key, []).append(value)

    def flush_json(self) -> None:
        """
        Output buffered JSON to stdout and clear buffer.

        Only outputs in agent mode. In human mode, this is a no-op.
        """
        if self.is_agent() and self._json_buffer:
            json.dump(self._json_buffer, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._json_buffer.clear()


# Global output mode instance (set by CLI flags)
output_mode = OutputMode()

# Global Rich console instances for human mode
console = Console()  # stdout
console_err = Console(stderr=True)  # stderr


@contextmanager
def spinner(message: str):
    """
    Context manager for showing a spinner during operations.

    Displays a Rich spinner with message in human mode.
    Silent in agent/quiet modes.

    Args:
        message: Status message to display
    """
    if output_mode.is_human() and not output_mode.quiet:
        with console.status(f"[bold blue]{message}", spinner="dots") as status:
            yield status
    else:
        yield None


def success(message: str) -> None:
    """
    Print a success message.

    Human mode: Green checkmark with message
    Agent mode: Buffer to JSON
    """
    if output_mode.is_human():
        console.print(f"[green]✓[/green] {message}")
    elif output_mode.is_agent():
        output_mode.add_json("status", "success")
        output_mode.add_json("message", message)


def error(message: str) -> None:
    """
    Print an error message.

    Human mode: Red X with message to stderr
    Agent mode: Buffer to JSON (errors accumulate in a list)
    """
    if output_mode.is_human():
        console_err.print(f"[red]✗[/red] {message}", style="red")
    elif output_mode.is_agent():
        output_mode.add_json("status", "error")
        output_mode.append_json("errors", message)


def warning(message: str) -> None:
    """
    Print a warning message.

    Human mode: Yellow warning symbol with message
    Agent mode: Buffer to JSON
    """
    if output_mode.is_human():
        console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")
    elif output_mode.is_agent():
        output_mode.append_json("warnings", message)


def info(message: str) -> None:
    """
    Print an info message.

    Human mode: Blue info symbol with message
    Agent/Quiet mode: Silent
    """
    if output_mode.is_human() and not output_mode.quiet:
        console.print(f"[blue]ℹ[/blue] {message}")


def notice(message: str) -> None:
    """
    Print a user-facing notice that must not be suppressed.

    Unlike info(), notices are shown in quiet mode too (as plain lines),
    and are collected under "notices" in agent mode.
    """
    if output_mode.is_agent():
        output_mode.append_json("notices", message)
    elif output_mode.quiet:
        print(message)
    else:
        console.print(f"[cyan]→[/cyan] {message}")


def print_banner(version: str) -> None:
    """Print the startup banner (human mode only)."""
    if not output_mode.is_human() or output_mode.quiet:
        return

    console.print(
        f"[bold cyan]Copilot Prompt Sync[/bold cyan] [dim]v{version}[/dim]"
    )


def print_reconcile_summary(report: ReconcileReport) -> None:
    """
    Print the outcome of one reconciliation pass.

    Human mode: Rich panel listing steps, writes and errors
    Agent mode: Flush the report as JSON
    Quiet mode: Tab-separated counts (writes, errors)
    """
    if output_mode.is_agent():
        output_mode.add_json("report", report.to_dict())
        output_mode.flush_json()
        return

    if output_mode.quiet:
        print(f"{len(report.writes)}\t{len(report.errors)}")
        return

    if report.workspace is None:
        console.print("[yellow]No workspace open; nothing to synchronize.[/yellow]")
        return

    lines = [f"[bold]Workspace:[/bold] {report.workspace}"]
    lines.append(f"[bold]Steps run:[/bold] {', '.join(report.steps) or 'none'}")
    lines.append(f"[bold]Settings written:[/bold] {len(report.writes)}")
    for step, message in report.errors:
        lines.append(f"[red]✗ {step}:[/red] {message}")

    if report.errors:
        border_style = "yellow"
        title = "[bold yellow]⚠ Synchronized with errors[/bold yellow]"
    else:
        border_style = "green"
        title = "[bold green]✓ Synchronized[/bold green]"

    console.print(
        Panel("\n".join(lines), title=title, border_style=border_style, box=box.ROUNDED)
    )


def print_settings_writes(writes: list[tuple[str, Any]]) -> None:
    """
    Print settings writes (used by dry runs).

    Human mode: Table of key and JSON value
    Agent mode: Buffer the writes
    Quiet mode: key<TAB>json per line
    """
    if output_mode.is_agent():
        output_mode.add_json(
            "planned_writes", [{"key": key, "value": value} for key, value in writes]
        )
        return

    if output_mode.quiet:
        for key, value in writes:
            print(f"{key}\t{json.dumps(value, ensure_ascii=False)}")
        return

    table = Table(title="Planned Settings Writes", box=box.ROUNDED)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in writes:
        table.add_row(key, json.dumps(value, ensure_ascii=False, indent=2))

    console.print(table)


def print_prompt_table(store: dict[str, dict[str, Any]]) -> None:
    """
    Print every stored prompt, one row per language and instruction kind.

    Long prompts are truncated to 60 characters in human mode. Values that
    are not strings are shown as JSON.
    """
    if output_mode.is_agent():
        output_mode.add_json("prompts", store)
        output_mode.flush_json()
        return

    if output_mode.quiet:
        for language, prompts in store.items():
            for kind, text in prompts.items():
                print(f"{language}\t{kind}\t{json.dumps(text, ensure_ascii=False)}")
        return

    if not store:
        console.print("[yellow]No prompts stored yet.[/yellow]")
        return

    table = Table(title="Stored Prompts", box=box.ROUNDED)
    table.add_column("Language", style="magenta", no_wrap=True)
    table.add_column("Instruction", style="cyan", no_wrap=True)
    table.add_column("Prompt")

    for language, prompts in sorted(store.items()):
        for kind, text in sorted(prompts.items()):
            if not isinstance(text, str):
                text = json.dumps(text, ensure_ascii=False)
            snippet = text if len(text) <= 60 else text[:57] + "..."
            table.add_row(language, kind, snippet)

    console.print(table)


def print_languages(languages: tuple[str, ...] | list[str]) -> None:
    """Print the recognized language identifiers."""
    if output_mode.is_agent():
        output_mode.add_json("languages", list(languages))
        output_mode.flush_json()
        return

    if output_mode.quiet:
        for language in languages:
            print(language)
        return

    console.print(", ".join(languages))
