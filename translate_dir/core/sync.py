"""
Untranslatable-file synchronization module.

This module mirrors untranslatable source files into every target-language
directory:
- Pruning manifest entries whose source file has disappeared, once their
  mirrors are removed
- Removing the mirrors of pruned untranslatable entries
- Copying missing or out-of-date mirrors

Translatable files are never touched here; their target copies are written
only by the translation pipeline.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple

from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.core.lang_dirs import LanguageDirectorySet
from translate_dir.core.manifest import FileStatus, Manifest
from translate_dir.errors import SourceNotSetError, SyncError
from translate_dir.logger import get_logger

logger = get_logger(__name__)


class SyncResult:
    """Container for synchronization results."""

    def __init__(self):
        self.copied: List[str] = []  # target paths written this run
        self.unchanged: int = 0
        self.pruned: List[str] = []  # manifest keys dropped
        self.removed_mirrors: List[str] = []  # stale mirror paths deleted
        self.failures: List[Tuple[str, str]] = []  # (target path, error)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_paths(self) -> List[str]:
        return [path for path, _ in self.failures]

    def raise_for_failures(self) -> None:
        """Raise SyncError listing every failed path, if any."""
        if self.failures:
            raise SyncError(
                f"Failed to sync {len(self.failures)} file(s): {', '.join(self.failed_paths)}",
                details={"failed": [{"path": p, "error": e} for p, e in self.failures]},
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "copied": list(self.copied),
            "unchanged": self.unchanged,
            "pruned": list(self.pruned),
            "removed_mirrors": list(self.removed_mirrors),
            "successful": len(self.copied),
            "errors": len(self.failures),
            "failed": [{"path": p, "error": e} for p, e in self.failures],
        }

    def __str__(self):
        return (f"SyncResult(copied={len(self.copied)}, "
                f"unchanged={self.unchanged}, "
                f"pruned={len(self.pruned)}, "
                f"failed={len(self.failures)})")


class Synchronizer:
    """Brings target-language mirrors of untranslatable files in line with the manifest."""

    def __init__(self, fs: LocalFileSystem = None):
        self.fs = fs or LocalFileSystem()

    def needs_copy(self, source: Path, mirror: Path) -> bool:
        """True when the mirror is missing or its content signature differs."""
        if not self.fs.is_file(mirror):
            return True
        return self.fs.signature(source) != self.fs.signature(mirror)

    def sync(self, manifest: Manifest, lang_dirs: LanguageDirectorySet) -> SyncResult:
        """
        Run one synchronization pass.

        Copy and delete errors are recorded per file; the pass always
        completes. Check SyncResult.ok or call raise_for_failures().
        """
        if lang_dirs.source is None:
            raise SourceNotSetError()

        source_path = lang_dirs.source.path
        targets = list(lang_dirs)
        result = SyncResult()
        logger.info(f"Starting sync of '{source_path}' into {len(targets)} target director(ies)")

        # A stale entry stays in the manifest until all of its mirrors are removed
        pending = set()
        for key, status in manifest.stale():
            removed_all = True
            if status is FileStatus.UNTRANSLATABLE:
                for lang_dir in targets:
                    mirror = lang_dir.path / key
                    if not self.fs.is_file(mirror):
                        continue
                    try:
                        self.fs.remove(mirror)
                        result.removed_mirrors.append(str(mirror))
                        logger.debug(f"Removed stale mirror {mirror}")
                    except OSError as e:
                        logger.error(f"Failed to remove stale mirror {mirror}: {e}")
                        result.failures.append((str(mirror), str(e)))
                        removed_all = False
            if removed_all:
                manifest.discard(key)
                result.pruned.append(key)
            else:
                pending.add(key)

        for key in manifest.list_untranslatable():
            if key in pending:
                continue
            source = source_path / key
            for lang_dir in targets:
                mirror = lang_dir.path / key
                try:
                    if not self.needs_copy(source, mirror):
                        result.unchanged += 1
                        continue
                    self.fs.copy(source, mirror)
                    result.copied.append(str(mirror))
                    logger.debug(f"Copied {source} -> {mirror}")
                except OSError as e:
                    logger.error(f"Failed to copy {source} -> {mirror}: {e}")
                    result.failures.append((str(mirror), str(e)))

        logger.info(f"Sync complete: {result}")
        return result
