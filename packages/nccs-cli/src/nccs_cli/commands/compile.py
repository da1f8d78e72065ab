"""nccs compile command - Build .nef and manifest artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from nccs_cli.output import ConsoleChannel


@dataclass
class CompileOptions:
    """Grouped compile CLI options."""

    paths: tuple[str, ...]
    output_path: str | None
    contract_name: str | None
    emit_debug_info: bool
    emit_assembly: bool
    no_optimize: bool
    no_inline: bool
    address_version: int | None
    engine_ref: str | None


def _run_compile(opts: CompileOptions, engine: object | None) -> None:
    """Build the compiler options, run the pipeline and exit.

    Raises:
        SystemExit: With code 0 on success.
        CLIError: With code 1 or 2 on failure.
    """
    # Import here to avoid heavy imports at CLI startup
    from pydantic import ValidationError as PydanticValidationError

    from nccs_cli.errors import exit_for_outcome, handle_settings_error, handle_validation_error
    from nccs_core import CompilerOptions, build
    from nccs_core.settings import NccsSettings

    try:
        settings = NccsSettings()
    except PydanticValidationError as e:
        handle_settings_error(e)

    try:
        options = CompilerOptions(
            output_directory=Path(opts.output_path) if opts.output_path else None,
            contract_name=opts.contract_name,
            emit_debug_info=opts.emit_debug_info,
            emit_assembly=opts.emit_assembly,
            disable_optimization=opts.no_optimize,
            disable_inlining=opts.no_inline,
            address_version=(
                opts.address_version
                if opts.address_version is not None
                else settings.address_version
            ),
        )
    except PydanticValidationError as e:
        handle_validation_error(e)

    outcome = build(
        opts.paths,
        options,
        engine or opts.engine_ref or settings.engine,
        out=ConsoleChannel(),
        err=ConsoleChannel(stderr=True),
    )
    exit_for_outcome(outcome)


@click.command("compile")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory [default: <source folder>/bin/sc]",
)
@click.option(
    "--contract-name",
    "contract_name",
    type=str,
    default=None,
    help="Contract name used for the artifact files",
)
@click.option(
    "-d",
    "--debug",
    "emit_debug_info",
    is_flag=True,
    default=False,
    help="Emit debug information (.nefdbgnfo)",
)
@click.option(
    "--assembly",
    "emit_assembly",
    is_flag=True,
    default=False,
    help="Emit the assembly listing (.asm)",
)
@click.option("--no-optimize", is_flag=True, default=False, help="Disable optimization")
@click.option("--no-inline", is_flag=True, default=False, help="Disable inlining")
@click.option(
    "--address-version",
    type=click.IntRange(0, 255),
    default=None,
    help="Network address version [default: NCCS_ADDRESS_VERSION or 53]",
)
@click.option(
    "--engine",
    "engine_ref",
    type=str,
    default=None,
    help="Compilation engine as package.module:attribute [default: NCCS_ENGINE]",
)
@click.pass_context
def compile_cmd(
    ctx: click.Context,
    paths: tuple[str, ...],
    output_path: str | None,
    contract_name: str | None,
    emit_debug_info: bool,
    emit_assembly: bool,
    no_optimize: bool,
    no_inline: bool,
    address_version: int | None,
    engine_ref: str | None,
) -> None:
    """Compile contract sources into .nef and manifest artifacts.

    PATHS may be one directory, one .csproj file, or any number of .cs
    files. With no PATHS the current directory is used: a .csproj there
    wins, otherwise every .cs file below it (outside obj/) is compiled.

    Exit codes: 0 success, 1 failure, 2 no source files found.

    Examples:

        nccs compile

        nccs compile Token.cs Storage.cs -o build/

        nccs compile src/Token.csproj --debug --assembly
    """
    opts = CompileOptions(
        paths=paths,
        output_path=output_path,
        contract_name=contract_name,
        emit_debug_info=emit_debug_info,
        emit_assembly=emit_assembly,
        no_optimize=no_optimize,
        no_inline=no_inline,
        address_version=address_version,
        engine_ref=engine_ref,
    )
    _run_compile(opts, (ctx.obj or {}).get("engine"))
