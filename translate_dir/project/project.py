"""
Project aggregate.

A Project owns the source directory, the manifest and the target-language
directories. All mutations go through it; persistence lives in
project/creator.py.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from translate_dir.core import matcher
from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.core.lang_dirs import LangDirectory, LanguageDirectorySet, SourceDirectory
from translate_dir.core.manifest import FileStatus, Manifest
from translate_dir.core.results import MarkResult
from translate_dir.core.sync import Synchronizer, SyncResult
from translate_dir.errors import SourceNotSetError, TranslateDirError
from translate_dir.language_codes import Language, parse_language
from translate_dir.logger import get_logger

logger = get_logger(__name__)

LanguageLike = Union[Language, str]


class Project:
    """A source directory, its manifest and its target-language directories."""

    def __init__(self, name: str, root: Path, fs: LocalFileSystem = None,
                 lang_dirs: Optional[LanguageDirectorySet] = None,
                 manifest: Optional[Manifest] = None):
        self.name = name
        self.root = Path(root)
        self.fs = fs or LocalFileSystem()
        self.lang_dirs = lang_dirs if lang_dirs is not None else LanguageDirectorySet(self.root, fs=self.fs)
        self.manifest = manifest if manifest is not None else Manifest(fs=self.fs)
        if self.lang_dirs.source is not None:
            self.manifest.source_path = self.lang_dirs.source.path

    def __repr__(self):
        return f"Project(name={self.name!r}, root={str(self.root)!r})"

    @property
    def source(self) -> Optional[SourceDirectory]:
        return self.lang_dirs.source

    def require_source(self) -> SourceDirectory:
        if self.lang_dirs.source is None:
            raise SourceNotSetError()
        return self.lang_dirs.source

    def resolve_path(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    # ------------------------------------------------------------
    # Languages
    # ------------------------------------------------------------

    def set_source_dir(self, dir_name: str, language: LanguageLike) -> SourceDirectory:
        source = self.lang_dirs.set_source(dir_name, parse_language(language))
        self.manifest.source_path = source.path
        return source

    def add_lang(self, language: LanguageLike) -> LangDirectory:
        return self.lang_dirs.add(parse_language(language))

    def remove_lang(self, language: LanguageLike) -> LangDirectory:
        return self.lang_dirs.remove(parse_language(language))

    # ------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------

    def make_translatable_file(self, path: Union[str, Path]) -> str:
        """Mark a file (absolute or relative to the project root) as translatable."""
        return self.manifest.mark(self.resolve_path(path), FileStatus.TRANSLATABLE)

    def make_untranslatable_file(self, path: Union[str, Path]) -> str:
        """Mark a file (absolute or relative to the project root) as untranslatable."""
        return self.manifest.mark(self.resolve_path(path), FileStatus.UNTRANSLATABLE)

    def mark_patterns(self, patterns: Iterable[str], status: FileStatus,
                      cwd: Optional[Union[str, Path]] = None) -> MarkResult:
        """
        Mark every file matched by the patterns.

        Each pattern and each matched file is attempted independently.
        Malformed patterns and failed files are recorded as errors; glob
        patterns matching nothing are listed in no_match_patterns. Patterns
        expand against cwd, which is taken relative to the project root and
        defaults to it.
        """
        status = FileStatus(status)
        cwd = self.resolve_path(cwd) if cwd else self.root
        result = MarkResult(action=status.value)

        # Fail fast for the whole batch rather than once per file
        self.require_source()

        for match in matcher.resolve_patterns(patterns, cwd, self.fs):
            if match.error is not None:
                result.record_failure(match.pattern, match.error)
                continue
            if match.no_match:
                result.no_match_patterns.append(match.pattern)
                continue
            for path in match.paths:
                try:
                    self.manifest.mark(path, status)
                except TranslateDirError as e:
                    label = "literal path" if match.literal else "file"
                    logger.warning(f"Error marking {label} '{path}' as {status.value}: {e}")
                    result.record_failure(str(path), e)
                else:
                    result.record_success(str(path))

        for pattern in result.no_match_patterns:
            logger.warning(f"No files matched the pattern '{pattern}'")
        logger.info(f"Mark {status.value} summary: {result.success_count} successful, "
                    f"{result.failure_count} errors")
        return result

    def get_translatable_files(self) -> List[str]:
        self.require_source()
        return self.manifest.list_translatable()

    def get_untranslatable_files(self) -> List[str]:
        self.require_source()
        return self.manifest.list_untranslatable()

    # ------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------

    def sync_files(self, synchronizer: Optional[Synchronizer] = None) -> SyncResult:
        synchronizer = synchronizer or Synchronizer(self.fs)
        return synchronizer.sync(self.manifest, self.lang_dirs)

    # ------------------------------------------------------------
    # Info
    # ------------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        source = self.source
        return {
            "name": self.name,
            "root_path": str(self.root),
            "source_language": source.language.value if source else None,
            "source_language_name": source.language.display_name if source else None,
            "source_dir": str(source.path) if source else None,
            "target_languages": [
                {
                    "language": d.language.value,
                    "language_name": d.language.display_name,
                    "path": str(d.path),
                }
                for d in self.lang_dirs
            ],
            "translatable_count": len(self.manifest.list_translatable()),
            "untranslatable_count": len(self.manifest.list_untranslatable()),
        }
