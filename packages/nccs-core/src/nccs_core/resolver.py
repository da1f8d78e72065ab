"""Input resolution.

Turns the paths given on the command line into the compilation mode the
engine is driven in. Rules, first match wins:

1. No paths: the current directory is scanned.
2. One directory: scanned. A top-level project descriptor (.csproj) wins;
   otherwise every .cs file below it, except under ``obj/``, is compiled.
3. One .csproj file: compiled as a project.
4. Anything else: every path must be an existing .cs file.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from pathlib import Path

import structlog

from nccs_core.errors import InputValidationError, NoSourceFoundError
from nccs_core.models import DirectoryMode, FileListMode, ProjectMode

logger = structlog.get_logger(__name__)

SOURCE_SUFFIX = ".cs"
PROJECT_SUFFIX = ".csproj"
EXCLUDED_DIRS = frozenset({"obj"})
"""Top-level build output folders never scanned for sources."""


def absolute_path(raw: str | os.PathLike[str], base: Path) -> Path:
    """Make a path absolute against ``base`` and collapse ``..`` segments."""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return Path(os.path.normpath(path))


def _has_suffix(path: Path, suffix: str) -> bool:
    return path.suffix.lower() == suffix


def classify_paths(
    paths: Sequence[str | os.PathLike[str]],
    cwd: str | os.PathLike[str] | None = None,
) -> DirectoryMode | ProjectMode | FileListMode:
    """Classify input paths without scanning directories.

    Args:
        paths: Zero or more input paths, relative to ``cwd``.
        cwd: Base directory for relative paths (default: process cwd).

    Returns:
        DirectoryMode, ProjectMode or FileListMode.

    Raises:
        InputValidationError: If an explicit path is not an existing .cs file.
    """
    base = absolute_path(cwd, Path.cwd()) if cwd is not None else Path.cwd()

    if not paths:
        return DirectoryMode(path=base)

    resolved = [absolute_path(p, base) for p in paths]

    if len(resolved) == 1:
        path = resolved[0]
        if path.is_dir():
            return DirectoryMode(path=path)
        if path.is_file() and _has_suffix(path, PROJECT_SUFFIX):
            return ProjectMode(project_path=path)

    for path in resolved:
        if not _has_suffix(path, SOURCE_SUFFIX):
            raise InputValidationError(
                f'The files must have a {SOURCE_SUFFIX} extension: "{path}".',
                path=str(path),
            )
        if not path.is_file():
            raise InputValidationError(f'The file "{path}" doesn\'t exist.', path=str(path))

    return FileListMode(files=tuple(resolved), base_folder=resolved[0].parent)


def iter_source_files(directory: Path) -> Iterator[Path]:
    """Yield source files below ``directory``, skipping top-level build output.

    Args:
        directory: Directory to walk.

    Yields:
        Paths of .cs files, in walk order.
    """
    for root, dirnames, filenames in os.walk(directory):
        if Path(root) == directory:
            dirnames[:] = [d for d in dirnames if d not in EXCLUDED_DIRS]
        for name in filenames:
            candidate = Path(root) / name
            if _has_suffix(candidate, SOURCE_SUFFIX):
                yield candidate


def scan_directory(directory: Path) -> ProjectMode | FileListMode:
    """Pick a project descriptor or the source files of a directory.

    Args:
        directory: Absolute directory path.

    Returns:
        ProjectMode when a top-level .csproj exists, else FileListMode.

    Raises:
        NoSourceFoundError: If neither a descriptor nor any source file exists.
    """
    projects = sorted(
        p for p in directory.iterdir() if p.is_file() and _has_suffix(p, PROJECT_SUFFIX)
    )
    if projects:
        if len(projects) > 1:
            logger.warning(
                "multiple_project_files",
                directory=str(directory),
                selected=projects[0].name,
                candidates=[p.name for p in projects],
            )
        return ProjectMode(project_path=projects[0])

    sources = sorted(iter_source_files(directory))
    if not sources:
        raise NoSourceFoundError(str(directory))
    return FileListMode(files=tuple(sources), base_folder=directory)


def resolve_inputs(
    paths: Sequence[str | os.PathLike[str]],
    cwd: str | os.PathLike[str] | None = None,
) -> ProjectMode | FileListMode:
    """Resolve input paths to a compilable mode.

    Args:
        paths: Zero or more input paths.
        cwd: Base directory for relative paths and the empty-input case.

    Returns:
        ProjectMode or FileListMode ready for the driver.

    Raises:
        InputValidationError: If an explicit path is unusable.
        NoSourceFoundError: If a scanned directory holds nothing to build.

    Example:
        >>> mode = resolve_inputs(["Token.cs", "Storage.cs"])
        >>> mode.kind
        'files'
    """
    mode = classify_paths(paths, cwd)
    if isinstance(mode, DirectoryMode):
        mode = scan_directory(mode.path)

    logger.debug(
        "inputs_resolved",
        mode=mode.kind,
        source_folder=str(mode.source_folder),
        file_count=len(mode.files) if isinstance(mode, FileListMode) else 1,
    )
    return mode
