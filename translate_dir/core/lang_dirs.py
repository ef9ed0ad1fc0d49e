"""
Source directory and target-language directories of a project.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.errors import (
    ConfigurationError,
    DuplicateLanguageError,
    FileOperationError,
    LanguageNotFoundError,
    SourceAlreadySetError,
    SourceNotSetError,
    ValidationError,
)
from translate_dir.language_codes import Language, get_language_dir_name
from translate_dir.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceDirectory:
    path: Path
    language: Language


@dataclass(frozen=True)
class LangDirectory:
    language: Language
    path: Path


class LanguageDirectorySet:
    """Ordered target-language directories plus the single source directory."""

    def __init__(self, root: Path, fs: LocalFileSystem = None,
                 source: Optional[SourceDirectory] = None,
                 lang_dirs: Optional[List[LangDirectory]] = None):
        self.root = Path(root)
        self.fs = fs or LocalFileSystem()
        self.source = source
        self._dirs: List[LangDirectory] = list(lang_dirs or [])

    def __iter__(self) -> Iterator[LangDirectory]:
        return iter(list(self._dirs))

    def __len__(self) -> int:
        return len(self._dirs)

    def languages(self) -> List[Language]:
        return [d.language for d in self._dirs]

    def get(self, language: Language) -> Optional[LangDirectory]:
        for lang_dir in self._dirs:
            if lang_dir.language is language:
                return lang_dir
        return None

    def _makedirs(self, path: Path) -> None:
        try:
            self.fs.makedirs(path)
        except OSError as e:
            raise FileOperationError(
                f"Could not create directory '{path}': {e}",
                details={"path": str(path)},
            )

    def set_source(self, dir_name: str, language: Language) -> SourceDirectory:
        """
        Set the source directory (root / dir_name) and its language. Allowed once.

        Raises:
            SourceAlreadySetError: If a source directory is already set.
            DuplicateLanguageError: If language is already a target language.
            ValidationError: If dir_name would leave the project root.
        """
        if self.source is not None:
            raise SourceAlreadySetError(
                f"Source directory is already set to '{self.source.path.name}' ({self.source.language.value})",
                details={"dir_name": self.source.path.name, "language": self.source.language.value},
            )
        if self.get(language) is not None:
            raise DuplicateLanguageError(
                f"Language {language.value} is already a target language",
                details={"language": language.value},
            )

        parts = [p for p in Path(dir_name).parts if p != '.'] if dir_name else []
        if not parts or Path(dir_name).is_absolute() or '..' in parts:
            raise ValidationError(
                f"Source directory name must be a relative path inside the project: '{dir_name}'",
                details={"dir_name": dir_name},
            )

        path = self.root.joinpath(*parts)
        self._makedirs(path)
        self.source = SourceDirectory(path=path, language=language)
        logger.info(f"Source directory set to '{path}' ({language.value})")
        return self.source

    def add(self, language: Language) -> LangDirectory:
        """
        Add a target language; its directory is root / <language code>.

        Raises:
            SourceNotSetError: If no source directory is set.
            DuplicateLanguageError: If language is the source or already a target.
            ConfigurationError: If the directory would overlap the source directory.
        """
        if self.source is None:
            raise SourceNotSetError()
        if language is self.source.language:
            raise DuplicateLanguageError(
                f"Language {language.value} is the source language",
                details={"language": language.value},
            )
        if self.get(language) is not None:
            raise DuplicateLanguageError(
                f"Language {language.value} is already a target language",
                details={"language": language.value},
            )

        path = self.root / get_language_dir_name(language)
        if (path == self.source.path or self.source.path in path.parents
                or path in self.source.path.parents):
            raise ConfigurationError(
                f"Directory for {language.value} would overlap the source directory '{self.source.path}'",
                details={"language": language.value, "path": str(path)},
            )
        self._makedirs(path)
        lang_dir = LangDirectory(language=language, path=path)
        self._dirs.append(lang_dir)
        logger.info(f"Added target language {language.value} at '{path}'")
        return lang_dir

    def remove(self, language: Language) -> LangDirectory:
        """
        Stop tracking a target language. Its directory and files stay on disk.

        Raises:
            LanguageNotFoundError: If language is not a target language.
        """
        lang_dir = self.get(language)
        if lang_dir is None:
            raise LanguageNotFoundError(
                f"Language {language.value} is not a target language",
                details={"language": language.value},
            )
        self._dirs.remove(lang_dir)
        logger.info(f"Removed target language {language.value} (kept '{lang_dir.path}' on disk)")
        return lang_dir
