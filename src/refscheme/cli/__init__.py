"""CLI command implementations for refscheme."""

from refscheme.cli.check import check_config_command, check_schemes_command
from refscheme.cli.errors import CLIError, cli_error_handler

__all__ = [
    "CLIError",
    "check_config_command",
    "check_schemes_command",
    "cli_error_handler",
]
