"""CLI error handling for refscheme."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

logger = logging.getLogger(__name__)
console = Console()


class CLIError(Exception):
    """A command failed; the message names the command."""

    def __init__(self, message: str, command: str) -> None:
        super().__init__(f"CLI command '{command}' failed: {message}")
        self.command = command


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Show any failure in command as a red panel titled title and exit 1.

    typer.Exit passes through so commands can set their own exit code.
    """
    try:
        yield
    except typer.Exit:
        raise
    except Exception as e:
        error = e if isinstance(e, CLIError) else CLIError(str(e), command)
        logger.error("%s: %s", title, error)
        console.print(
            Panel(
                f"[red]{escape(str(error))}[/red]",
                title=f"❌ {title}",
                border_style="red",
            )
        )
        raise typer.Exit(1) from e
