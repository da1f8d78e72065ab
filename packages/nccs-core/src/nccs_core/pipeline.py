"""Build pipeline.

Composes the stages of a single build:

    Resolving -> Compiling -> Reporting -> (WritingArtifacts | Skipped) -> Done

``build`` returns a tagged :class:`BuildOutcome` instead of printing
errors or exiting; the CLI maps the outcome to console text and an exit
code. ``compile_source`` is the programmatic entry point: inline source
in, :class:`ArtifactBundle` out, no files written.

Both entry points log through structlog and leave its configuration to
the caller. Library callers should call
:func:`nccs_core.observability.configure_logging` first: without it,
structlog's defaults print ``compilation_started`` and friends to stdout.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from nccs_core.driver import CompilationDriver, effective_contract_name
from nccs_core.engine import CompilationEngine, load_engine
from nccs_core.errors import (
    ArtifactWriteError,
    CompilationFailure,
    EngineUnavailableError,
    InputValidationError,
    NccsError,
    NoSourceFoundError,
)
from nccs_core.models import (
    ArtifactBundle,
    BuildOutcome,
    BuildStatus,
    CompilerOptions,
    Diagnostic,
    InlineSourceMode,
)
from nccs_core.reporter import DiagnosticReporter
from nccs_core.resolver import absolute_path, resolve_inputs
from nccs_core.writer import ArtifactWriter

if TYPE_CHECKING:
    from nccs_core.channels import OutputChannel

logger = structlog.get_logger(__name__)

EngineSource = CompilationEngine | str | None
"""An engine instance, an import reference, or None for the registered default."""

_STATUS_BY_ERROR: tuple[tuple[type[NccsError], BuildStatus], ...] = (
    (InputValidationError, BuildStatus.INVALID_INPUT),
    (NoSourceFoundError, BuildStatus.NO_SOURCE),
    (CompilationFailure, BuildStatus.COMPILATION_FAILED),
    (ArtifactWriteError, BuildStatus.IO_FAILURE),
    (EngineUnavailableError, BuildStatus.ENGINE_UNAVAILABLE),
)


def _ensure_engine(engine: EngineSource) -> CompilationEngine:
    if engine is None or isinstance(engine, str):
        return load_engine(engine)
    return engine


def _anchor_output(options: CompilerOptions, cwd: str | os.PathLike[str] | None) -> CompilerOptions:
    """Make a relative output directory absolute against the build's cwd."""
    if options.output_directory is None:
        return options
    base = absolute_path(cwd, Path.cwd()) if cwd is not None else Path.cwd()
    return options.model_copy(
        update={"output_directory": absolute_path(options.output_directory, base)}
    )


def _outcome_from_error(err: NccsError, diagnostics: tuple[Diagnostic, ...]) -> BuildOutcome:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(err, error_type):
            return BuildOutcome(status=status, message=err.user_message, diagnostics=diagnostics)
    raise err


def build(
    paths: Sequence[str | os.PathLike[str]],
    options: CompilerOptions,
    engine: EngineSource,
    *,
    out: OutputChannel,
    err: OutputChannel,
    cwd: str | os.PathLike[str] | None = None,
) -> BuildOutcome:
    """Resolve, compile, report and write artifacts in one pass.

    The engine is only loaded once inputs resolve, so input errors are
    reported even when no engine is installed.

    Args:
        paths: Input paths (files, a directory, a project, or none).
        options: Compiler options.
        engine: Engine instance, ``package.module:attribute`` reference, or
            None to use the registered default.
        out: Channel for non-error diagnostics and created-file lines.
        err: Channel for error diagnostics.
        cwd: Base directory for relative paths.

    Returns:
        BuildOutcome describing how the build ended.

    Example:
        >>> outcome = build(["Token.cs"], CompilerOptions(), engine, out=out, err=err)
        >>> outcome.exit_code
        0
    """
    diagnostics: tuple[Diagnostic, ...] = ()
    try:
        mode = resolve_inputs(paths, cwd)
        result = CompilationDriver(_ensure_engine(engine)).compile(mode, options)

        diagnostics = tuple(result.diagnostics)
        DiagnosticReporter(out, err).report(diagnostics)

        if not result.success:
            raise CompilationFailure()

        layout = ArtifactWriter(out).write(
            result,
            _anchor_output(options, cwd),
            mode.source_folder,
            contract_name=effective_contract_name(result, options, mode),
        )
    except NccsError as e:
        outcome = _outcome_from_error(e, diagnostics)
        logger.info("build_finished", status=outcome.status.value, exit_code=outcome.exit_code)
        return outcome

    logger.info("build_finished", status=BuildStatus.SUCCEEDED.value, exit_code=0)
    return BuildOutcome(status=BuildStatus.SUCCEEDED, layout=layout, diagnostics=diagnostics)


def compile_source(
    source: str,
    engine: EngineSource = None,
    options: CompilerOptions | None = None,
) -> ArtifactBundle:
    """Compile inline source text into an in-memory bundle.

    The executable and manifest are produced whether or not compilation
    succeeded; callers judge success from the diagnostics
    (see :attr:`ArtifactBundle.success`).

    Call :func:`~nccs_core.observability.configure_logging` beforehand to
    keep log events off stdout.

    Args:
        source: Contract source text.
        engine: Engine instance, import reference, or None for the default.
        options: Compiler options (default: default address version, nothing else).

    Returns:
        ArtifactBundle with executable bytes, manifest and diagnostics.

    Raises:
        EngineUnavailableError: If no engine can be loaded.
    """
    options = options or CompilerOptions()
    result = CompilationDriver(_ensure_engine(engine)).compile(
        InlineSourceMode(text=source), options
    )
    return ArtifactBundle(
        nef=bytes(result.emit_executable()),
        manifest=result.emit_manifest(),
        diagnostics=tuple(result.diagnostics),
    )
