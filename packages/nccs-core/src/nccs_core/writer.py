"""Artifact writer.

Materializes a successful compilation as files named after the contract:

- ``<name>.nef``: executable bytes
- ``<name>.manifest.json``: compact manifest JSON
- ``<name>.nefdbgnfo``: zip holding ``<name>.debug.json`` (debug info only)
- ``<name>.asm``: assembly listing (assembly only)

The destination is the configured output directory, or ``bin/sc`` under
the source folder.
"""

from __future__ import annotations

import contextlib
import json
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from nccs_core.errors import ArtifactWriteError
from nccs_core.models import CompilerOptions, OutputLayout

if TYPE_CHECKING:
    from nccs_core.channels import OutputChannel
    from nccs_core.engine import CompilationResult

logger = structlog.get_logger(__name__)

DEFAULT_OUTPUT_SUBDIR = Path("bin") / "sc"
COMPLETED_MESSAGE = "Compilation completed successfully."

# Fixed entry timestamp keeps the debug archive byte-identical across builds
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def serialize_document(document: dict[str, Any]) -> bytes:
    """Serialize a JSON document in compact form, preserving key order."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def resolve_output_folder(options: CompilerOptions, fallback_folder: Path) -> Path:
    """Destination folder for artifacts."""
    if options.output_directory is not None:
        return options.output_directory
    return fallback_folder / DEFAULT_OUTPUT_SUBDIR


class ArtifactWriter:
    """Write compilation artifacts to disk.

    Attributes:
        out: Channel receiving one ``Created <path>`` line per artifact.

    Example:
        >>> writer = ArtifactWriter(out=StreamChannel.stdout())
        >>> layout = writer.write(result, CompilerOptions(emit_debug_info=True), Path("src"))
        >>> [p.name for p in layout.files]
        ['Token.nef', 'Token.manifest.json', 'Token.nefdbgnfo']
    """

    def __init__(self, out: OutputChannel) -> None:
        self.out = out

    def write(
        self,
        result: CompilationResult,
        options: CompilerOptions,
        fallback_folder: Path,
        contract_name: str | None = None,
    ) -> OutputLayout:
        """Write all artifacts for a successful compilation.

        Args:
            result: Engine result with ``success`` set.
            options: Compiler options selecting optional artifacts.
            fallback_folder: Source folder used when no output directory is set.
            contract_name: Name for the artifact files (default: engine's name).

        Returns:
            OutputLayout listing the written files in write order.

        Raises:
            ValueError: If the result is unsuccessful or has no contract name.
            ArtifactWriteError: If a folder or file cannot be written.
        """
        if not result.success:
            raise ValueError("Cannot write artifacts for an unsuccessful compilation")

        name = contract_name or result.contract_name or options.contract_name
        if not name:
            raise ValueError("Cannot write artifacts without a contract name")

        folder = resolve_output_folder(options, fallback_folder)
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactWriteError(str(folder), internal_details=str(e)) from e

        layout = OutputLayout(folder=folder, contract_name=name)
        written: list[Path] = []

        executable = bytes(result.emit_executable())
        self._write(layout.nef_path, lambda p: p.write_bytes(executable), written)

        manifest = serialize_document(result.emit_manifest())
        self._write(layout.manifest_path, lambda p: p.write_bytes(manifest), written)

        if options.emit_debug_info:
            debug_info = serialize_document(result.emit_debug_info())
            self._write(
                layout.debug_info_path,
                lambda p: self._write_debug_archive(p, layout.debug_entry_name, debug_info),
                written,
            )

        if options.emit_assembly:
            assembly = result.emit_assembly_text()
            self._write(
                layout.assembly_path,
                lambda p: p.write_text(assembly, encoding="utf-8"),
                written,
            )

        self.out.write_line(COMPLETED_MESSAGE)
        logger.info("artifacts_written", folder=str(folder), count=len(written))
        return layout.model_copy(update={"files": tuple(written)})

    def _write(self, path: Path, write: Callable[[Path], Any], written: list[Path]) -> None:
        """Write one artifact; a failed write leaves no partial file behind."""
        try:
            write(path)
        except OSError as e:
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)
            logger.error("artifact_write_failed", path=str(path), error=str(e))
            raise ArtifactWriteError(str(path), internal_details=str(e)) from e
        written.append(path)
        self.out.write_line(f"Created {path}")

    @staticmethod
    def _write_debug_archive(path: Path, entry_name: str, payload: bytes) -> None:
        """Write the single-entry debug archive, removing it if writing fails."""
        entry = zipfile.ZipInfo(entry_name, date_time=_ZIP_EPOCH)
        entry.compress_type = zipfile.ZIP_DEFLATED
        try:
            with path.open("wb") as fh, zipfile.ZipFile(fh, mode="w") as archive:
                archive.writestr(entry, payload)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
