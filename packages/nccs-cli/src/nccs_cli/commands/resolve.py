"""nccs resolve command - Show what compile would build."""

from __future__ import annotations

import click

from nccs_cli.output import info, success


@click.command()
@click.argument("paths", nargs=-1, type=click.Path())
def resolve(paths: tuple[str, ...]) -> None:
    """Resolve PATHS to a compilation mode without compiling.

    Uses the same rules as `nccs compile` and exits with the same codes
    for invalid input (1) or an empty directory (2).

    Examples:

        nccs resolve

        nccs resolve src/
    """
    from nccs_cli.errors import CLIError
    from nccs_core import FileListMode, NccsError, resolve_inputs

    try:
        mode = resolve_inputs(paths)
    except NccsError as e:
        raise CLIError(e.user_message, exit_code=e.exit_code) from None

    if isinstance(mode, FileListMode):
        success(f"Source files in {mode.base_folder} ({len(mode.files)})")
        for path in mode.files:
            info(f"  {path}")
    else:
        success(f"Project {mode.project_path}")
