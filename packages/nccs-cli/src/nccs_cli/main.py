"""CLI entry point for nccs.

The root ``nccs`` group loads its subcommands lazily, so ``nccs --help``
and ``nccs --version`` never import the compilation pipeline.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from nccs_cli import __version__
from nccs_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


LAZY_COMMANDS = {
    "compile": "nccs_cli.commands.compile:compile_cmd",
    "resolve": "nccs_cli.commands.resolve:resolve",
}
"""Subcommand name to ``module:attribute`` of its click command."""


def _as_input_error(err: click.UsageError) -> click.UsageError:
    """Give a usage error the generic failure code; 2 means no sources found."""
    from nccs_cli.errors import EXIT_FAILURE

    err.exit_code = EXIT_FAILURE
    return err


class LazyGroup(rclick.RichGroup):
    """Rich group whose subcommands are imported on first use.

    Listing commands for ``--help`` only reads the names; a command module
    is imported when that command is invoked or its help is shown, and the
    loaded command is cached on the group.
    """

    def __init__(
        self, *args: Any, lazy_subcommands: dict[str, str] | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = dict(lazy_subcommands or {})
        self._loaded: dict[str, click.Command] = {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        registered = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if registered is not None:
            return registered
        reference = self.lazy_subcommands.get(cmd_name)
        if reference is None:
            return None
        if cmd_name not in self._loaded:
            self._loaded[cmd_name] = self._load(cmd_name, reference)
        return self._loaded[cmd_name]

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: click.Context | None = None,
        **extra: Any,
    ) -> click.Context:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            raise _as_input_error(e) from None

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            raise _as_input_error(e) from None

    @staticmethod
    def _load(cmd_name: str, reference: str) -> click.Command:
        module_name, _, attr_name = reference.partition(":")
        command = getattr(importlib.import_module(module_name), attr_name)
        if not isinstance(command, click.Command):
            raise TypeError(f"Lazy command '{cmd_name}' ({reference}) is not a click command")
        return command


def _disable_color(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if value:
        set_no_color(True)


def _configure_logging(ctx: click.Context, param: click.Parameter, value: str | None) -> None:
    from pydantic import ValidationError as PydanticValidationError

    from nccs_cli.errors import handle_settings_error
    from nccs_core.observability import configure_logging
    from nccs_core.settings import NccsSettings

    try:
        settings = NccsSettings()
    except PydanticValidationError as e:
        handle_settings_error(e)
    configure_logging(log_level=value or settings.log_level, json_format=settings.log_json)


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="nccs")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=_disable_color,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level for diagnostics logging [default: NCCS_LOG_LEVEL or WARNING]",
    expose_value=False,
    callback=_configure_logging,
)
def cli() -> None:
    """nccs - Smart contract compiler front end.

    Compile contract sources or projects into .nef and manifest artifacts.

    **Getting Started:**

    - `nccs compile` - Compile the project or sources in the current directory
    - `nccs compile Token.cs -o build/` - Compile explicit files
    - `nccs resolve` - Show what `compile` would build

    The compilation engine is selected with `--engine` or `NCCS_ENGINE`.
    """
    pass


if __name__ == "__main__":
    cli()
