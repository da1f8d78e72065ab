"""Unit tests for nccs_core.models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from nccs_core.models import (
    DEFAULT_ADDRESS_VERSION,
    ArtifactBundle,
    BuildOutcome,
    BuildStatus,
    CompilationMode,
    CompilerOptions,
    Diagnostic,
    DiagnosticSeverity,
    FileListMode,
    InlineSourceMode,
    OutputLayout,
    ProjectMode,
)


class TestCompilerOptions:
    """Tests for CompilerOptions."""

    def test_defaults(self) -> None:
        """Test default option values."""
        options = CompilerOptions()
        assert options.output_directory is None
        assert options.contract_name is None
        assert options.emit_debug_info is False
        assert options.emit_assembly is False
        assert options.address_version == DEFAULT_ADDRESS_VERSION

    def test_frozen(self) -> None:
        """Test that options cannot be mutated."""
        options = CompilerOptions()
        with pytest.raises(PydanticValidationError):
            options.emit_debug_info = True  # type: ignore[misc]

    @pytest.mark.parametrize("value", [-1, 256])
    def test_address_version_is_a_byte(self, value: int) -> None:
        """Test that the address version must fit in one byte."""
        with pytest.raises(PydanticValidationError):
            CompilerOptions(address_version=value)

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown options are rejected."""
        with pytest.raises(PydanticValidationError):
            CompilerOptions(optimize_level=3)  # type: ignore[call-arg]


class TestCompilationMode:
    """Tests for the CompilationMode variants."""

    def test_discriminated_by_kind(self) -> None:
        """Test that the kind tag selects the variant."""
        adapter: TypeAdapter[CompilationMode] = TypeAdapter(CompilationMode)
        mode = adapter.validate_python({"kind": "project", "project_path": "/work/Token.csproj"})
        assert isinstance(mode, ProjectMode)
        assert mode.source_folder == Path("/work")

    def test_file_list_needs_files(self) -> None:
        """Test that a file list cannot be empty."""
        with pytest.raises(PydanticValidationError):
            FileListMode(files=(), base_folder=Path("/work"))

    def test_inline_has_no_source_folder(self) -> None:
        """Test that inline source is not tied to a folder."""
        assert not hasattr(InlineSourceMode(text=""), "source_folder")


class TestDiagnostic:
    """Tests for Diagnostic rendering."""

    def test_message_only(self) -> None:
        """Test rendering without code or location."""
        diagnostic = Diagnostic(severity=DiagnosticSeverity.WARNING, message="careful")
        assert str(diagnostic) == "warning: careful"

    def test_code_without_location(self) -> None:
        """Test rendering with a code only."""
        diagnostic = Diagnostic(severity=DiagnosticSeverity.ERROR, message="bad", code="NC1001")
        assert str(diagnostic) == "error NC1001: bad"
        assert diagnostic.is_error


class TestOutputLayout:
    """Tests for OutputLayout paths."""

    def test_artifact_names(self) -> None:
        """Test filenames derived from the contract name."""
        layout = OutputLayout(folder=Path("/out"), contract_name="Token")
        assert layout.nef_path == Path("/out/Token.nef")
        assert layout.manifest_path == Path("/out/Token.manifest.json")
        assert layout.debug_info_path == Path("/out/Token.nefdbgnfo")
        assert layout.assembly_path == Path("/out/Token.asm")
        assert layout.debug_entry_name == "Token.debug.json"


class TestArtifactBundle:
    """Tests for ArtifactBundle."""

    def test_success_follows_error_diagnostics(self) -> None:
        """Test that any error diagnostic marks the bundle unsuccessful."""
        error = Diagnostic(severity=DiagnosticSeverity.ERROR, message="x")
        warning = Diagnostic(severity=DiagnosticSeverity.WARNING, message="y")
        assert ArtifactBundle(diagnostics=(warning,)).success is True
        assert ArtifactBundle(diagnostics=(warning, error)).success is False


class TestBuildOutcome:
    """Tests for BuildOutcome exit codes."""

    @pytest.mark.parametrize(
        ("status", "exit_code"),
        [
            (BuildStatus.SUCCEEDED, 0),
            (BuildStatus.INVALID_INPUT, 1),
            (BuildStatus.NO_SOURCE, 2),
            (BuildStatus.COMPILATION_FAILED, 1),
            (BuildStatus.IO_FAILURE, 1),
            (BuildStatus.ENGINE_UNAVAILABLE, 1),
        ],
    )
    def test_exit_codes(self, status: BuildStatus, exit_code: int) -> None:
        """Test the status to exit code mapping."""
        assert BuildOutcome(status=status).exit_code == exit_code
