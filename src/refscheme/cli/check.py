"""CLI command implementations for checking scheme tokens."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from refscheme.cli.errors import cli_error_handler
from refscheme.configuration import SchemeConfiguration
from refscheme.logging import setup_logging
from refscheme.scheme import SchemeValidation, validate

logger = logging.getLogger(__name__)
console = Console()

STATUS_VALID = "[green]Valid[/green]"
STATUS_INVALID = "[red]Invalid[/red]"


def _format_results(results: Sequence[SchemeValidation]) -> None:
    table = Table(title="Scheme Validation", show_header=True)
    table.add_column("Candidate", style="cyan")
    table.add_column("Result")
    table.add_column("Reason", style="dim")

    for result in results:
        if result.error is None:
            table.add_row(escape(repr(result.candidate)), STATUS_VALID, "")
        else:
            table.add_row(
                escape(repr(result.candidate)),
                STATUS_INVALID,
                escape(f"{result.error.code}: {result.error.reason}"),
            )

    console.print(table)


def check_schemes_command(candidates: Sequence[str], log_level: str = "INFO") -> None:
    """CLI command implementation for checking scheme candidates.

    Exits with code 1 if any candidate is invalid.

    Args:
        candidates: Strings to validate
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("check", "Scheme check failed"):
        results = [validate(candidate) for candidate in candidates]
        _format_results(results)

        invalid = [result for result in results if not result.is_valid]
        logger.info("Checked %d scheme(s), %d invalid", len(results), len(invalid))
        if invalid:
            raise typer.Exit(1)


def check_config_command(config_path: Path, log_level: str = "INFO") -> None:
    """CLI command implementation for validating a scheme configuration file.

    Args:
        config_path: Path to the YAML configuration file
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("check-config", "Scheme configuration invalid"):
        config = SchemeConfiguration.from_yaml(config_path)

        console.print(f"[green]✅ {escape(str(config_path))} is valid[/green]")
        for scheme in config.schemes:
            marker = " (default)" if scheme == config.default_scheme else ""
            console.print(f"  • {scheme.prefix}{marker}")
