"""
Terminal front end for the prompt editor.

Plays the part of the editor view: it asks for an instruction kind and a
language, shows the stored prompt, opens it in $EDITOR and sends it back
to the session. All traffic goes through EditorSession.handle_message().
"""

from collections.abc import Callable

import click
import typer
from rich.panel import Panel

from copilot_prompt_sync.instructions import SUPPORTED_LANGUAGES, InstructionKind
from copilot_prompt_sync.utils.console import console, info

from .session import LOAD_COMMAND, SAVE_COMMAND, EditorSession

EditFn = Callable[[str], str | None]
PromptFn = Callable[..., str]
ConfirmFn = Callable[..., bool]

_KINDS = list(InstructionKind)


def _choose_kind(prompt: PromptFn) -> InstructionKind:
    for index, kind in enumerate(_KINDS, start=1):
        console.print(f"  [cyan]{index}[/cyan]. {kind.label}")

    while True:
        choice = prompt("Instruction type", default="1")
        if choice.isdigit() and 1 <= int(choice) <= len(_KINDS):
            return _KINDS[int(choice) - 1]
        console.print(f"[red]Enter a number between 1 and {len(_KINDS)}[/red]")


def _choose_language(prompt: PromptFn) -> str:
    console.print(f"[dim]Languages: {', '.join(SUPPORTED_LANGUAGES)}[/dim]")
    language = prompt("Language (blank for the global setting)", default="")
    return language.strip()


async def run_interactive_editor(
    session: EditorSession,
    edit: EditFn = click.edit,
    prompt: PromptFn = typer.prompt,
    confirm: ConfirmFn = typer.confirm,
) -> int:
    """
    Run the edit loop until the user is done.

    Args:
        session: Session that loads and saves prompts
        edit: Opens text in an editor; returns None if left unchanged
        prompt: Asks the user for a line of input
        confirm: Asks the user a yes/no question

    Returns:
        Number of prompts submitted for saving
    """
    submitted = 0

    while True:
        kind = _choose_kind(prompt)
        language = _choose_language(prompt)
        scope = language or "global"

        reply = await session.handle_message(
            {"command": LOAD_COMMAND, "type": kind.name, "lang": language}
        )
        current = reply["prompt"] if reply else ""

        console.print(
            Panel(
                current or "[dim](empty)[/dim]",
                title=f"{kind.label} / {scope}",
                border_style="cyan",
            )
        )

        updated = edit(current)
        if updated is None or updated.rstrip("\n") == current:
            info("No changes")
        elif confirm(f"Save {kind.label} instructions for {scope}?", default=True):
            await session.handle_message(
                {
                    "command": SAVE_COMMAND,
                    "type": kind.name,
                    "lang": language,
                    "prompt": updated.rstrip("\n"),
                }
            )
            submitted += 1

        if not confirm("Edit another prompt?", default=False):
            return submitted
