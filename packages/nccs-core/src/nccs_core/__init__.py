"""nccs-core: Build pipeline driving a smart-contract compilation engine.

This package provides:
- resolve_inputs: Turn input paths into a compilation mode
- CompilationDriver: Dispatch a mode to the engine
- DiagnosticReporter: Route engine diagnostics to output channels
- ArtifactWriter: Write .nef, manifest, debug and assembly artifacts
- build / compile_source: The filesystem and in-memory entry points
"""

from __future__ import annotations

__version__ = "0.1.0"

from nccs_core.channels import BufferChannel, OutputChannel, StreamChannel
from nccs_core.driver import CompilationDriver, default_contract_name, effective_contract_name
from nccs_core.engine import CompilationEngine, CompilationResult, load_engine

# Error types
from nccs_core.errors import (
    ArtifactWriteError,
    CompilationFailure,
    EngineUnavailableError,
    InputValidationError,
    NccsError,
    NoSourceFoundError,
)
from nccs_core.models import (
    DEFAULT_ADDRESS_VERSION,
    ArtifactBundle,
    BuildOutcome,
    BuildStatus,
    CompilationMode,
    CompilerOptions,
    Diagnostic,
    DiagnosticSeverity,
    DirectoryMode,
    FileListMode,
    InlineSourceMode,
    OutputLayout,
    ProjectMode,
)
from nccs_core.pipeline import build, compile_source
from nccs_core.reporter import DiagnosticReporter
from nccs_core.resolver import classify_paths, resolve_inputs, scan_directory
from nccs_core.writer import ArtifactWriter, serialize_document

__all__ = [
    "__version__",
    # Pipeline
    "build",
    "compile_source",
    "resolve_inputs",
    "classify_paths",
    "scan_directory",
    "CompilationDriver",
    "DiagnosticReporter",
    "ArtifactWriter",
    "serialize_document",
    "default_contract_name",
    "effective_contract_name",
    # Engine
    "CompilationEngine",
    "CompilationResult",
    "load_engine",
    # Channels
    "OutputChannel",
    "StreamChannel",
    "BufferChannel",
    # Errors
    "NccsError",
    "InputValidationError",
    "NoSourceFoundError",
    "CompilationFailure",
    "ArtifactWriteError",
    "EngineUnavailableError",
    # Models
    "DEFAULT_ADDRESS_VERSION",
    "CompilerOptions",
    "CompilationMode",
    "DirectoryMode",
    "ProjectMode",
    "FileListMode",
    "InlineSourceMode",
    "Diagnostic",
    "DiagnosticSeverity",
    "OutputLayout",
    "ArtifactBundle",
    "BuildOutcome",
    "BuildStatus",
]
