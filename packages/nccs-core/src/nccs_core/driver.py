"""Compilation driver.

Dispatches a resolved compilation mode to the matching engine entry
point. Compilation problems come back as an unsuccessful result with
diagnostics; only an unreachable engine is an error here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from nccs_core.errors import EngineUnavailableError
from nccs_core.models import (
    CompilerOptions,
    DirectoryMode,
    FileListMode,
    InlineSourceMode,
    ProjectMode,
)

if TYPE_CHECKING:
    from nccs_core.engine import CompilationEngine, CompilationResult
    from nccs_core.models import CompilationMode

logger = structlog.get_logger(__name__)

INLINE_CONTRACT_NAME = "Contract"
"""Contract name used for inline source when nothing else names it."""

# Raised by engines whose backing service or native library is gone
_UNAVAILABLE_ERRORS = (ImportError, ConnectionError)


def default_contract_name(mode: CompilationMode) -> str:
    """Contract name used when neither the engine nor the options supply one.

    Args:
        mode: Compilation mode.

    Returns:
        Project descriptor stem, source folder name, or ``"Contract"``.
    """
    if isinstance(mode, ProjectMode):
        return mode.project_path.stem
    if isinstance(mode, (FileListMode, DirectoryMode)):
        return mode.source_folder.name or INLINE_CONTRACT_NAME
    return INLINE_CONTRACT_NAME


def effective_contract_name(
    result: CompilationResult, options: CompilerOptions, mode: CompilationMode
) -> str:
    """Contract name the artifacts are written under.

    The engine's name wins; an empty engine name falls back to the
    configured name, then to :func:`default_contract_name`.
    """
    return result.contract_name or options.contract_name or default_contract_name(mode)


class CompilationDriver:
    """Invoke the engine for a resolved compilation mode.

    Attributes:
        engine: The compilation engine.

    Example:
        >>> driver = CompilationDriver(load_engine())
        >>> result = driver.compile(resolve_inputs(["Token.cs"]), CompilerOptions())
        >>> result.success
        True
    """

    def __init__(self, engine: CompilationEngine) -> None:
        self.engine = engine
        self._log = logger.bind(component="compilation_driver", engine=type(engine).__name__)

    def compile(self, mode: CompilationMode, options: CompilerOptions) -> CompilationResult:
        """Compile ``mode`` with ``options``.

        Args:
            mode: ProjectMode, FileListMode or InlineSourceMode.
            options: Compiler options, forwarded unchanged.

        Returns:
            The engine's result context.

        Raises:
            TypeError: If given an unresolved DirectoryMode.
            EngineUnavailableError: If the engine cannot be reached.
        """
        if isinstance(mode, DirectoryMode):
            raise TypeError("DirectoryMode must be resolved before compiling")

        self._log.info(
            "compilation_started",
            mode=mode.kind,
            file_count=len(mode.files) if isinstance(mode, FileListMode) else 1,
            contract_name=options.contract_name,
            address_version=options.address_version,
        )

        try:
            result = self._dispatch(mode, options)
        except _UNAVAILABLE_ERRORS as e:
            raise EngineUnavailableError(
                "Compilation engine is unavailable",
                internal_details=f"{type(e).__name__}: {e}",
            ) from e

        self._log.info(
            "compilation_finished",
            mode=mode.kind,
            success=result.success,
            contract_name=result.contract_name,
            diagnostics=len(result.diagnostics),
        )
        return result

    def _dispatch(self, mode: CompilationMode, options: CompilerOptions) -> CompilationResult:
        if isinstance(mode, ProjectMode):
            return self.engine.compile_project(mode.project_path, options)
        if isinstance(mode, FileListMode):
            return self.engine.compile_sources(list(mode.files), options)
        if isinstance(mode, InlineSourceMode):
            return self.engine.compile_source_text(mode.text, options)
        raise TypeError(f"Unsupported compilation mode: {type(mode).__name__}")
