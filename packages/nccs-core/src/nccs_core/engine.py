"""Compilation engine interface.

The engine does the actual semantic analysis, optimization and bytecode
emission. nccs only drives it through the protocols below and loads an
implementation by reference, the same way the CLI loads its commands:
from a ``"package.module:attribute"`` string, or from the first entry
point registered in the ``nccs.engines`` group.
"""

from __future__ import annotations

import importlib
from collections.abc import Sequence
from importlib.metadata import entry_points
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

from nccs_core.errors import EngineUnavailableError

if TYPE_CHECKING:
    from nccs_core.models import CompilerOptions, Diagnostic

logger = structlog.get_logger(__name__)

ENGINE_ENTRY_POINT_GROUP = "nccs.engines"


@runtime_checkable
class CompilationResult(Protocol):
    """Result context produced by the engine for one compilation.

    The four producers are only meaningful when ``success`` is true.

    Attributes:
        contract_name: Name of the compiled contract.
        diagnostics: Diagnostics in emission order.
        success: Whether compilation succeeded.
    """

    contract_name: str
    diagnostics: Sequence[Diagnostic]
    success: bool

    def emit_executable(self) -> bytes: ...

    def emit_manifest(self) -> dict[str, Any]: ...

    def emit_debug_info(self) -> dict[str, Any]: ...

    def emit_assembly_text(self) -> str: ...


@runtime_checkable
class CompilationEngine(Protocol):
    """The three compile entry points nccs dispatches to."""

    def compile_project(self, project_path: Path, options: CompilerOptions) -> CompilationResult: ...

    def compile_sources(
        self, source_files: Sequence[Path], options: CompilerOptions
    ) -> CompilationResult: ...

    def compile_source_text(self, source: str, options: CompilerOptions) -> CompilationResult: ...


def _import_reference(reference: str) -> Any:
    """Import the object named by ``package.module:attribute``.

    Args:
        reference: Import reference.

    Returns:
        The referenced object.

    Raises:
        EngineUnavailableError: If the reference is malformed or cannot be imported.
    """
    module_name, sep, attr_name = reference.partition(":")
    if not sep or not module_name or not attr_name:
        raise EngineUnavailableError(
            f"Invalid engine reference '{reference}'. Expected 'package.module:attribute'."
        )

    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise EngineUnavailableError(
            f"Compilation engine '{reference}' is not available",
            internal_details=f"{type(e).__name__}: {e}",
        ) from e

    try:
        return getattr(mod, attr_name)
    except AttributeError as e:
        raise EngineUnavailableError(
            f"Compilation engine '{reference}' is not available",
            internal_details=f"Module '{module_name}' has no attribute '{attr_name}'",
        ) from e


def _instantiate(target: Any, reference: str) -> CompilationEngine:
    """Turn an engine class, factory or instance into an engine instance."""
    engine = target
    # Classes satisfy the protocol check through their unbound methods
    if isinstance(target, type) or (
        callable(target) and not isinstance(target, CompilationEngine)
    ):
        engine = target()

    if not isinstance(engine, CompilationEngine):
        raise EngineUnavailableError(
            f"'{reference}' is not a compilation engine",
            internal_details=f"Resolved object of type {type(engine).__name__}",
        )
    return engine


def load_engine(reference: str | None = None) -> CompilationEngine:
    """Load a compilation engine.

    Args:
        reference: ``package.module:attribute`` naming an engine instance,
            class or zero-argument factory. When omitted, the first entry
            point in the ``nccs.engines`` group is used.

    Returns:
        A ready-to-use engine.

    Raises:
        EngineUnavailableError: If no engine can be loaded.

    Example:
        >>> engine = load_engine("neo_engine.service:Engine")
    """
    if reference is None:
        registered = sorted(entry_points(group=ENGINE_ENTRY_POINT_GROUP), key=lambda ep: ep.name)
        if not registered:
            raise EngineUnavailableError(
                "No compilation engine configured. "
                "Use --engine or set NCCS_ENGINE to 'package.module:attribute'."
            )
        reference = registered[0].value
        logger.debug("engine_entry_point_selected", name=registered[0].name, reference=reference)

    engine = _instantiate(_import_reference(reference), reference)
    logger.debug("engine_loaded", reference=reference, engine=type(engine).__name__)
    return engine
