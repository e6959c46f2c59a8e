"""
CLI entrypoint for Copilot Prompt Sync.

Provides a dual-mode command-line interface with:
- Human-friendly output: Rich spinners, tables, panels, colored text
- Agent-friendly output: Structured JSON for AI automation
- Quiet mode: Tab-separated minimal output for shell scripts

Commands:
    sync: Apply workspace prompt files to the settings store once
    watch: Re-apply them whenever a watched file changes
    edit: Interactive prompt editor
    prompt: Read, write and list stored prompts (get, set, list)
    lang-file: Read and write legacy per-language prompt files (show, write)
    languages: List recognized language identifiers
    validate: Check workspace files without writing anything

Exit codes:
    0: Success
    1: Configuration error (invalid YAML, malformed JSON, unknown kind)
    2: Storage error (settings store or prompt file could not be written)
    3: Partial failure (a reconcile step reported an error)

Examples:
    # Synchronize the current directory
    copilot-prompt-sync sync

    # Preview the settings a pass would write
    copilot-prompt-sync sync --dry-run --format json

    # Keep settings in sync while editing
    copilot-prompt-sync watch --workspace ~/code/app
"""

import asyncio
from pathlib import Path

import click
import typer
from rich.traceback import install as install_rich_traceback

from copilot_prompt_sync.editor.interactive import run_interactive_editor
from copilot_prompt_sync.editor.session import EditorSession, SessionManager
from copilot_prompt_sync.exceptions import (
    ConfigurationError,
    PromptSyncError,
    SettingsError,
    WorkspaceError,
)
from copilot_prompt_sync.host.settings import InMemorySettingsStore, WorkspaceSettingsFile
from copilot_prompt_sync.host.workspace import Host, open_workspace
from copilot_prompt_sync.instructions import SUPPORTED_LANGUAGES, from_name, parse
from copilot_prompt_sync.storage import language_files, prompt_store
from copilot_prompt_sync.storage.layout import (
    get_instructions_path,
    get_language_prompt_path,
)
from copilot_prompt_sync.sync.reconciler import SettingsReconciler, load_language_config
from copilot_prompt_sync.sync.watcher import ReconciliationDriver
from copilot_prompt_sync.utils.console import (
    error,
    info,
    output_mode,
    print_banner,
    print_languages,
    print_prompt_table,
    print_reconcile_summary,
    print_settings_writes,
    spinner,
    success,
    warning,
)
from copilot_prompt_sync.utils.logging import setup_logging

# Install Rich tracebacks for better error messages
install_rich_traceback(show_locals=False)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_STORAGE_ERROR = 2
EXIT_PARTIAL_FAILURE = 3

app = typer.Typer(
    name="copilot-prompt-sync",
    help="Sync workspace Copilot prompt files into editor settings",
    add_completion=False,
)

WORKSPACE_OPTION = typer.Option(
    Path("."),
    "--workspace",
    "-w",
    help="Workspace root directory",
    file_okay=False,
    dir_okay=True,
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML configuration (default: .vscode/copilot-prompt-sync.yaml if present)",
    dir_okay=False,
)
FORMAT_OPTION = typer.Option(
    "text",
    "--format",
    "-f",
    help="Output format: 'text' (human-friendly) or 'json' (machine-readable)",
)
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Minimal output")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


def _configure_output(format: str, quiet: bool = False, verbose: bool = False) -> None:
    """Apply output flags and set up logging."""
    if format not in ("text", "json"):
        error(f"Invalid format: {format}. Must be 'text' or 'json'")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    output_mode.format = format
    output_mode.quiet = quiet

    # Suppress JSON logs in human mode (unless verbose=True)
    setup_logging(verbose=verbose, quiet_logs=output_mode.is_human())


def _open_host(workspace: Path, config: Path | None, dry_run: bool = False) -> Host:
    """Open the workspace host, mapping failures to exit codes."""
    try:
        return open_workspace(workspace, config_path=config, dry_run=dry_run)
    except (ConfigurationError, WorkspaceError) as e:
        error(str(e))
        output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)
    except SettingsError as e:
        error(str(e))
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORAGE_ERROR)


def _require_kind(kind: str) -> str:
    """Exit with a configuration error if kind is not recognized."""
    resolved = parse(kind)
    if resolved is None:
        error(f"Unknown instruction kind: {kind}")
        output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)
    return resolved.name


def _read_text_argument(text: str | None, file: Path | None) -> str:
    """Return prompt text from --text or --file (exactly one is required)."""
    if (text is None) == (file is None):
        error("Pass exactly one of --text or --file")
        output_mode.flush_json()
        raise typer.Exit(EXIT_CONFIG_ERROR)
    if file is not None:
        return file.read_text(encoding="utf-8", errors="replace")
    return text


@app.command()
def sync(
    workspace: Path = WORKSPACE_OPTION,
    config: Path = CONFIG_OPTION,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the settings that would be written without writing them",
    ),
    format: str = FORMAT_OPTION,
    quiet: bool = QUIET_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Apply workspace prompt files to the settings store once.

    Reads .github/copilot-instructions.md, .vscode/copilot.json and
    .github/prompts/, and writes the matching Copilot settings to
    .vscode/settings.json.

    Exit codes:
      0: All enabled steps succeeded
      1: Configuration error
      3: At least one step reported an error
    """
    _configure_output(format, quiet, verbose)
    print_banner(_read_version())

    host = _open_host(workspace, config, dry_run=dry_run)
    reconciler = SettingsReconciler(host)

    with spinner("Synchronizing workspace prompts..."):
        report = asyncio.run(reconciler.reconcile())

    if dry_run and isinstance(host.settings, InMemorySettingsStore):
        print_settings_writes(host.settings.writes)

    print_reconcile_summary(report)
    raise typer.Exit(EXIT_SUCCESS if report.ok else EXIT_PARTIAL_FAILURE)


@app.command()
def watch(
    workspace: Path = WORKSPACE_OPTION,
    config: Path = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
    quiet: bool = QUIET_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Synchronize once, then again whenever a watched file changes.

    Watched files: .github/copilot-instructions.md,
    .github/prompts/*.prompt.md and .vscode/copilot.json. Stop with Ctrl+C.
    """
    _configure_output(format, quiet, verbose)
    print_banner(_read_version())

    host = _open_host(workspace, config)
    driver = ReconciliationDriver(
        SettingsReconciler(host), host.workspace_root, on_report=print_reconcile_summary
    )

    info(f"Watching {host.workspace_root} (Ctrl+C to stop)")
    try:
        asyncio.run(driver.run())
    except KeyboardInterrupt:
        info(f"Stopped after {driver.passes} passes")

    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def edit(
    workspace: Path = WORKSPACE_OPTION,
    config: Path = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Edit stored prompts interactively.

    Pick an instruction type and a language (or none for the global
    setting); the current prompt opens in $EDITOR and is saved to
    .github/copilot-instructions.md and pushed to the settings store.
    """
    _configure_output("text", verbose=verbose)

    host = _open_host(workspace, config)
    manager = SessionManager(host)
    session = manager.create_or_show()

    try:
        submitted = asyncio.run(run_interactive_editor(session))
    except (KeyboardInterrupt, click.Abort):
        submitted = 0
        info("Editor closed")
    finally:
        session.dispose()

    success(f"Submitted {submitted} prompt(s)")
    raise typer.Exit(EXIT_SUCCESS)


# Create prompt command subapp
prompt_app = typer.Typer(help="Read and write prompts in copilot-instructions.md")
app.add_typer(prompt_app, name="prompt")


@prompt_app.command("get")
def prompt_get(
    kind: str = typer.Option(..., "--kind", "-k", help="Instruction kind, e.g. CODE_REVIEW"),
    language: str = typer.Option("", "--language", "-l", help="Language (blank: global)"),
    workspace: Path = WORKSPACE_OPTION,
    format: str = FORMAT_OPTION,
):
    """
    Print one stored prompt.

    Examples:
      copilot-prompt-sync prompt get --kind code-review --language python
    """
    _configure_output(format)
    kind_name = _require_kind(kind)

    session = EditorSession(_open_host(workspace, None))
    try:
        text = session.load(kind_name, language or None)
    except OSError as e:
        error(f"Cannot read {get_instructions_path(workspace)}: {e}")
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORAGE_ERROR)

    if output_mode.is_agent():
        output_mode.add_json("kind", kind_name)
        output_mode.add_json("language", language or None)
        output_mode.add_json("prompt", text)
        output_mode.flush_json()
    else:
        typer.echo(text)

    raise typer.Exit(EXIT_SUCCESS)


@prompt_app.command("set")
def prompt_set(
    kind: str = typer.Option(..., "--kind", "-k", help="Instruction kind, e.g. CODE_REVIEW"),
    language: str = typer.Option("", "--language", "-l", help="Language (blank: global)"),
    text: str = typer.Option(None, "--text", "-t", help="Prompt text"),
    file: Path = typer.Option(
        None, "--file", help="Read the prompt text from a file", exists=True, dir_okay=False
    ),
    workspace: Path = WORKSPACE_OPTION,
    config: Path = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Store one prompt and push it to the settings store.

    Examples:
      copilot-prompt-sync prompt set --kind test-generation --language rust --text "Use #[test]."
    """
    _configure_output(format, verbose=verbose)
    kind_name = _require_kind(kind)
    prompt_text = _read_text_argument(text, file)

    session = EditorSession(_open_host(workspace, config))
    saved = asyncio.run(session.save(kind_name, language or None, prompt_text))

    if output_mode.is_agent():
        output_mode.add_json("saved", saved)
    output_mode.flush_json()
    raise typer.Exit(EXIT_SUCCESS if saved else EXIT_STORAGE_ERROR)


@prompt_app.command("list")
def prompt_list(
    workspace: Path = WORKSPACE_OPTION,
    format: str = FORMAT_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """List every stored prompt."""
    _configure_output(format, quiet)

    try:
        store = prompt_store.read_from_disk(workspace)
    except OSError as e:
        error(f"Cannot read {get_instructions_path(workspace)}: {e}")
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORAGE_ERROR)

    print_prompt_table(store)
    raise typer.Exit(EXIT_SUCCESS)


# Create lang-file command subapp for the legacy per-language files
lang_file_app = typer.Typer(help="Read and write legacy .copilot-prompt-<language> files")
app.add_typer(lang_file_app, name="lang-file")


@lang_file_app.command("show")
def lang_file_show(
    language: str = typer.Option(..., "--language", "-l", help="Language identifier"),
    workspace: Path = WORKSPACE_OPTION,
    format: str = FORMAT_OPTION,
):
    """Print the per-language prompt file (empty if it does not exist)."""
    _configure_output(format)

    text = language_files.read(workspace, language)

    if output_mode.is_agent():
        output_mode.add_json("language", language)
        output_mode.add_json("path", str(get_language_prompt_path(workspace, language)))
        output_mode.add_json("prompt", text)
        output_mode.flush_json()
    else:
        typer.echo(text)

    raise typer.Exit(EXIT_SUCCESS)


@lang_file_app.command("write")
def lang_file_write(
    language: str = typer.Option(..., "--language", "-l", help="Language identifier"),
    text: str = typer.Option(None, "--text", "-t", help="Prompt text"),
    file: Path = typer.Option(
        None, "--file", help="Read the prompt text from a file", exists=True, dir_okay=False
    ),
    workspace: Path = WORKSPACE_OPTION,
    format: str = FORMAT_OPTION,
):
    """Create or overwrite the per-language prompt file."""
    _configure_output(format)
    prompt_text = _read_text_argument(text, file)

    if language not in SUPPORTED_LANGUAGES:
        warning(f"'{language}' is not a recognized language; writing anyway")

    try:
        path = language_files.write(workspace, language, prompt_text)
    except OSError as e:
        error(str(e))
        output_mode.flush_json()
        raise typer.Exit(EXIT_STORAGE_ERROR)

    success(f"Wrote {path}")
    output_mode.flush_json()
    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def languages(
    format: str = FORMAT_OPTION,
    quiet: bool = QUIET_OPTION,
):
    """List the recognized language identifiers."""
    _configure_output(format, quiet)
    print_languages(SUPPORTED_LANGUAGES)
    raise typer.Exit(EXIT_SUCCESS)


@app.command()
def validate(
    workspace: Path = WORKSPACE_OPTION,
    config: Path = CONFIG_OPTION,
    format: str = FORMAT_OPTION,
):
    """
    Check workspace files without writing anything.

    Checks:
    - the YAML configuration (if any) validates
    - the JSON block of .github/copilot-instructions.md parses
    - .vscode/copilot.json is a JSON object; unknown kinds are reported
    - .vscode/settings.json is readable

    Exit codes:
      0: Everything is valid
      1: At least one file is invalid
    """
    _configure_output(format)
    problems: list[str] = []

    with spinner("Validating workspace..."):
        try:
            open_workspace(workspace, config_path=config)
        except PromptSyncError as e:
            problems.append(str(e))

        instructions_path = get_instructions_path(workspace)
        if instructions_path.exists():
            try:
                store = prompt_store.parse_document(
                    instructions_path.read_text(encoding="utf-8", errors="replace")
                )
                info(f"Prompt store: {sum(len(p) for p in store.values())} prompts")
            except PromptSyncError as e:
                problems.append(str(e))

        try:
            language_config = load_language_config(workspace) or {}
            for name in language_config:
                if from_name(name) is None:
                    warning(f"Unknown instruction kind in copilot.json: {name}")
        except PromptSyncError as e:
            problems.append(str(e))

        try:
            WorkspaceSettingsFile(workspace).snapshot()
        except SettingsError as e:
            problems.append(str(e))

    for problem in problems:
        error(problem)

    if not problems:
        success("Workspace configuration is valid")

    if output_mode.is_agent():
        output_mode.add_json("valid", not problems)
    output_mode.flush_json()

    raise typer.Exit(EXIT_CONFIG_ERROR if problems else EXIT_SUCCESS)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    Copilot Prompt Sync - keep Copilot settings in line with workspace prompt files.

    Use 'copilot-prompt-sync COMMAND --help' for detailed command documentation.
    """
    if version:
        from rich.console import Console

        console = Console()
        console.print(
            f"[bold cyan]copilot-prompt-sync[/bold cyan] version {_read_version()}"
        )
        raise typer.Exit(EXIT_SUCCESS)

    if ctx.invoked_subcommand is None:
        from rich.console import Console

        console = Console()
        console.print("[yellow]Use --help to see available commands[/yellow]")
        console.print()
        console.print("Quick start:")
        console.print("  copilot-prompt-sync sync --workspace .")


def _read_version() -> str:
    """
    Read version from package metadata (pyproject.toml).

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        from importlib.metadata import version

        return version("copilot-prompt-sync")
    except Exception:
        # Fallback if package metadata is not available
        return "0.1.0"


if __name__ == "__main__":
    app()
