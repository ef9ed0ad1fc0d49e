"""
Manifest of source files known to a project.

Each entry maps a path relative to the source directory to a FileStatus.
Entries keep their insertion order; re-marking a file changes its status in
place.
"""

import os
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Optional, Tuple

from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.errors import (
    FileNotFoundInProjectError,
    NotInSourceDirectoryError,
    SourceNotSetError,
)
from translate_dir.logger import get_logger

logger = get_logger(__name__)


class FileStatus(str, Enum):
    TRANSLATABLE = 'translatable'
    UNTRANSLATABLE = 'untranslatable'


def to_relative_key(path: Path, source_path: Path) -> str:
    """
    Convert a path to the manifest key (POSIX, relative to the source directory).

    Relative paths are taken as relative to the source directory already.

    Raises:
        NotInSourceDirectoryError: If the path escapes the source directory.
    """
    source_path = Path(os.path.abspath(source_path))
    path = Path(path)
    absolute = Path(os.path.abspath(path if path.is_absolute() else source_path / path))
    try:
        relative = absolute.relative_to(source_path)
    except ValueError:
        raise NotInSourceDirectoryError(
            f"'{path}' is not inside the source directory '{source_path}'",
            details={"path": str(path), "source_dir": str(source_path)},
        )
    if not relative.parts:
        raise NotInSourceDirectoryError(
            f"'{path}' is the source directory itself, not a file inside it",
            details={"path": str(path), "source_dir": str(source_path)},
        )
    return PurePosixPath(*relative.parts).as_posix()


class Manifest:
    """Insertion-ordered store of ManifestEntry records."""

    def __init__(self, source_path: Optional[Path] = None, fs: LocalFileSystem = None,
                 entries: Optional[List[Tuple[str, FileStatus]]] = None):
        self.source_path = Path(source_path) if source_path else None
        self.fs = fs or LocalFileSystem()
        self._entries: Dict[str, FileStatus] = {}
        for relative_path, status in entries or []:
            self._entries[relative_path] = FileStatus(status)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, relative_path: str) -> bool:
        return relative_path in self._entries

    def entries(self) -> List[Tuple[str, FileStatus]]:
        return list(self._entries.items())

    def get(self, relative_path: str) -> Optional[FileStatus]:
        return self._entries.get(relative_path)

    def _require_source(self) -> Path:
        if self.source_path is None:
            raise SourceNotSetError()
        return self.source_path

    def resolve(self, relative_path: str) -> Path:
        """Absolute path of an entry inside the source directory."""
        return self._require_source() / relative_path

    def mark(self, path: Path, status: FileStatus) -> str:
        """
        Record a source file with the given status.

        Args:
            path: Absolute path, or path relative to the source directory
            status: New status for the file

        Returns:
            The manifest key of the file

        Raises:
            SourceNotSetError: If no source directory is set.
            NotInSourceDirectoryError: If the path is outside the source directory.
            FileNotFoundInProjectError: If the file does not exist.
        """
        source_path = self._require_source()
        status = FileStatus(status)
        key = to_relative_key(path, source_path)

        if not self.fs.is_file(source_path / key):
            raise FileNotFoundInProjectError(
                f"File not found: '{path}'",
                details={"path": str(path)},
            )

        previous = self._entries.get(key)
        if previous == status:
            logger.debug(f"'{key}' already marked {status.value}")
            return key

        self._entries[key] = status
        if previous is None:
            logger.info(f"Marked '{key}' as {status.value}")
        else:
            logger.info(f"Re-marked '{key}' from {previous.value} to {status.value}")
        return key

    def list_translatable(self) -> List[str]:
        return [key for key, status in self._entries.items() if status is FileStatus.TRANSLATABLE]

    def list_untranslatable(self) -> List[str]:
        return [key for key, status in self._entries.items() if status is FileStatus.UNTRANSLATABLE]

    def stale(self, exists: Callable[[Path], bool] = None) -> List[Tuple[str, FileStatus]]:
        """Entries whose source file no longer exists, in manifest order."""
        source_path = self._require_source()
        exists = exists or self.fs.is_file
        return [(key, status) for key, status in self._entries.items()
                if not exists(source_path / key)]

    def discard(self, relative_path: str) -> None:
        if self._entries.pop(relative_path, None) is not None:
            logger.info(f"Pruned '{relative_path}' from manifest (file no longer exists)")

    def prune(self, exists: Callable[[Path], bool] = None) -> List[Tuple[str, FileStatus]]:
        """
        Drop entries whose source file no longer exists.

        Returns:
            The removed (relative_path, status) pairs, in manifest order
        """
        removed = self.stale(exists)
        for key, _ in removed:
            self.discard(key)
        return removed
