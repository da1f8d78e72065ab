"""Data models for the nccs build pipeline.

This module defines the immutable values passed between pipeline stages:
- CompilerOptions: Per-invocation compiler configuration
- CompilationMode: Tagged variant naming what the engine compiles
- Diagnostic: A single engine diagnostic
- OutputLayout: Where artifacts were written
- ArtifactBundle: In-memory result of the programmatic entry point
- BuildOutcome: Tagged result of a filesystem build
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from nccs_core.errors import EXIT_FAILURE, EXIT_NO_SOURCE, EXIT_SUCCESS

DEFAULT_ADDRESS_VERSION = 0x35
"""Address version of the default network."""

NEF_SUFFIX = ".nef"
MANIFEST_SUFFIX = ".manifest.json"
DEBUG_INFO_SUFFIX = ".nefdbgnfo"
DEBUG_ENTRY_SUFFIX = ".debug.json"
ASSEMBLY_SUFFIX = ".asm"


class CompilerOptions(BaseModel):
    """Compiler configuration for a single invocation.

    Attributes:
        output_directory: Destination folder; defaults to <source>/bin/sc.
        contract_name: Contract name override passed to the engine.
        emit_debug_info: Write the .nefdbgnfo debug archive.
        emit_assembly: Write the .asm listing.
        disable_optimization: Ask the engine to skip optimization.
        disable_inlining: Ask the engine to skip inlining.
        address_version: Target network address version byte.

    Example:
        >>> options = CompilerOptions(
        ...     output_directory=Path("build"),
        ...     contract_name="Token",
        ...     emit_debug_info=True,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_directory: Path | None = Field(default=None, description="Output directory")
    contract_name: str | None = Field(default=None, description="Contract name override")
    emit_debug_info: bool = Field(default=False, description="Emit debug information")
    emit_assembly: bool = Field(default=False, description="Emit assembly listing")
    disable_optimization: bool = Field(default=False, description="Disable optimization")
    disable_inlining: bool = Field(default=False, description="Disable inlining")
    address_version: int = Field(
        default=DEFAULT_ADDRESS_VERSION,
        ge=0,
        le=255,
        description="Network address version byte",
    )


class DirectoryMode(BaseModel):
    """A directory that still has to be scanned for a project or sources."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["directory"] = "directory"
    path: Path

    @property
    def source_folder(self) -> Path:
        return self.path


class ProjectMode(BaseModel):
    """A project descriptor (.csproj) compiled as a whole."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["project"] = "project"
    project_path: Path

    @property
    def source_folder(self) -> Path:
        """Folder holding the project descriptor."""
        return self.project_path.parent


class FileListMode(BaseModel):
    """An ordered set of source files compiled together."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["files"] = "files"
    files: tuple[Path, ...] = Field(..., min_length=1)
    base_folder: Path

    @property
    def source_folder(self) -> Path:
        return self.base_folder


class InlineSourceMode(BaseModel):
    """Source text compiled without touching the filesystem."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["inline"] = "inline"
    text: str


CompilationMode = Annotated[
    Union[DirectoryMode, ProjectMode, FileListMode, InlineSourceMode],
    Field(discriminator="kind"),
]


class DiagnosticSeverity(str, Enum):
    """Severity of an engine diagnostic."""

    HIDDEN = "hidden"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A single diagnostic emitted by the engine.

    Attributes:
        severity: Diagnostic severity.
        message: Human-readable message.
        code: Optional diagnostic identifier (e.g. "CS0103").
        location: Optional source location (e.g. "Token.cs(12,5)").

    Example:
        >>> str(Diagnostic(
        ...     severity=DiagnosticSeverity.ERROR,
        ...     message="The name 'x' does not exist",
        ...     code="CS0103",
        ...     location="Token.cs(12,5)",
        ... ))
        "Token.cs(12,5): error CS0103: The name 'x' does not exist"
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    severity: DiagnosticSeverity = Field(..., description="Diagnostic severity")
    message: str = Field(..., description="Diagnostic message")
    code: str | None = Field(default=None, description="Diagnostic identifier")
    location: str | None = Field(default=None, description="Source location")

    @property
    def is_error(self) -> bool:
        return self.severity is DiagnosticSeverity.ERROR

    def __str__(self) -> str:
        head = self.severity.value
        if self.code:
            head = f"{head} {self.code}"
        if self.location:
            head = f"{self.location}: {head}"
        return f"{head}: {self.message}"


class OutputLayout(BaseModel):
    """Resolved output folder and the artifact files actually produced.

    Attributes:
        folder: Destination folder.
        contract_name: Contract name the filenames derive from.
        files: Written files, in write order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    folder: Path
    contract_name: str = Field(..., min_length=1)
    files: tuple[Path, ...] = Field(default=())

    def _artifact(self, suffix: str) -> Path:
        return self.folder / f"{self.contract_name}{suffix}"

    @property
    def nef_path(self) -> Path:
        return self._artifact(NEF_SUFFIX)

    @property
    def manifest_path(self) -> Path:
        return self._artifact(MANIFEST_SUFFIX)

    @property
    def debug_info_path(self) -> Path:
        return self._artifact(DEBUG_INFO_SUFFIX)

    @property
    def assembly_path(self) -> Path:
        return self._artifact(ASSEMBLY_SUFFIX)

    @property
    def debug_entry_name(self) -> str:
        """Name of the single entry inside the debug archive."""
        return f"{self.contract_name}{DEBUG_ENTRY_SUFFIX}"


class ArtifactBundle(BaseModel):
    """In-memory compilation output returned by the programmatic entry point.

    Attributes:
        nef: Executable bytes.
        manifest: Manifest document.
        diagnostics: Engine diagnostics in emission order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    nef: bytes = Field(default=b"", description="Executable bytes")
    manifest: dict[str, Any] = Field(default_factory=dict, description="Manifest document")
    diagnostics: tuple[Diagnostic, ...] = Field(default=(), description="Diagnostics")

    @property
    def success(self) -> bool:
        """True when no error-severity diagnostic was emitted."""
        return not any(d.is_error for d in self.diagnostics)


class BuildStatus(str, Enum):
    """Terminal status of a filesystem build."""

    SUCCEEDED = "succeeded"
    INVALID_INPUT = "invalid_input"
    NO_SOURCE = "no_source"
    COMPILATION_FAILED = "compilation_failed"
    IO_FAILURE = "io_failure"
    ENGINE_UNAVAILABLE = "engine_unavailable"


class BuildOutcome(BaseModel):
    """Tagged result of a filesystem build.

    Attributes:
        status: Terminal status.
        message: User-facing message for failures (empty on success).
        layout: Written artifacts (success only).
        diagnostics: Engine diagnostics, empty when the engine never ran.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: BuildStatus
    message: str = ""
    layout: OutputLayout | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is BuildStatus.SUCCEEDED

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome."""
        if self.status is BuildStatus.SUCCEEDED:
            return EXIT_SUCCESS
        if self.status is BuildStatus.NO_SOURCE:
            return EXIT_NO_SOURCE
        return EXIT_FAILURE
