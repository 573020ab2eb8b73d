"""Main entry point for the refscheme command-line interface.

Commands:
- check: validate scheme tokens given as arguments
- check-config: validate a YAML scheme configuration file
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from refscheme.cli import check_config_command, check_schemes_command

# .env in the working directory can set REFSCHEME_ENV
load_dotenv()

app = typer.Typer(name="refscheme", no_args_is_help=True)


@app.command(context_settings={"ignore_unknown_options": True})
def check(
    candidates: Annotated[
        list[str],
        typer.Argument(help="Scheme tokens to validate"),
    ],
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Validate one or more scheme tokens.

    Exits with code 1 if any token is invalid. Tokens starting with "-" are
    validated like any other, so "refscheme check -hello" reports the leading
    hyphen instead of failing as an unknown option.

    Example:
        refscheme check file https my-scheme

    """
    check_schemes_command(candidates, log_level)


@app.command(name="check-config")
def check_config(
    config: Annotated[
        Path,
        typer.Argument(
            help="Path to the scheme configuration YAML file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Validate a scheme configuration file."""
    check_config_command(config, log_level)


if __name__ == "__main__":
    app()
