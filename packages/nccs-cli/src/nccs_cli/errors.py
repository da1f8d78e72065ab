"""CLI error handling for nccs-cli.

This module maps nccs-core errors and build outcomes to user-friendly
messages and process exit codes:

- 0: success
- 1: invalid input, compilation failure, write failure, missing engine
- 2: no source files found in a scanned directory
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from nccs_cli.output import error
from nccs_core.errors import EXIT_FAILURE, EXIT_NO_SOURCE, EXIT_SUCCESS

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from nccs_core.models import BuildOutcome

__all__ = [
    "EXIT_FAILURE",
    "EXIT_NO_SOURCE",
    "EXIT_SUCCESS",
    "CLIError",
    "exit_for_outcome",
    "format_pydantic_error",
    "handle_settings_error",
    "handle_validation_error",
]


# CompilerOptions field -> compile flag, for validation messages
OPTION_FLAGS = {
    "output_directory": "--output",
    "contract_name": "--contract-name",
    "emit_debug_info": "--debug",
    "emit_assembly": "--assembly",
    "disable_optimization": "--no-optimize",
    "disable_inlining": "--no-inline",
    "address_version": "--address-version",
}


class CLIError(click.ClickException):
    """Failure reported on stderr with a specific exit code.

    Attributes:
        message: Text shown after the error marker.
        exit_code: Process exit code (1 unless the failure says otherwise).
    """

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        # Click passes its own stream; the rich error console replaces it
        error(self.format_message())


def format_pydantic_error(
    err: PydanticValidationError, names: Mapping[str, str] = OPTION_FLAGS
) -> str:
    """Render a validation error as one line per offending option.

    Fields are shown under the name the user set them by: a compile flag
    by default, or an environment variable for settings.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - --address-version: Input should be less than or equal to 255"
    """
    details: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]
    for detail in details:
        field = ".".join(str(part) for part in detail["loc"])
        lines.append(f"  - {names.get(field, field)}: {detail['msg']}")
    return "\n".join(lines)


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Raise a CLIError for invalid compiler options.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(f"Invalid compiler options:\n{format_pydantic_error(err)}")


def handle_settings_error(err: PydanticValidationError) -> NoReturn:
    """Raise a CLIError for invalid NCCS_ environment settings.

    Raises:
        CLIError: Always raises, naming the offending variables.
    """
    from nccs_core.settings import NccsSettings

    prefix = NccsSettings.model_config.get("env_prefix", "")
    names = {field: f"{prefix}{field.upper()}" for field in NccsSettings.model_fields}
    raise CLIError(f"Invalid settings:\n{format_pydantic_error(err, names)}")


def exit_for_outcome(outcome: BuildOutcome) -> NoReturn:
    """Report a build outcome and exit with its code.

    Args:
        outcome: Terminal outcome of a build.

    Raises:
        CLIError: For any failed outcome.
        SystemExit: With code 0 on success.
    """
    if outcome.succeeded:
        raise SystemExit(EXIT_SUCCESS)
    raise CLIError(outcome.message, exit_code=outcome.exit_code)
