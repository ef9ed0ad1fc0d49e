"""
Translation submission pipeline.

Sends translatable source files to the translation provider and writes the
results to the mirrored path under a target-language directory.

Credentials are checked once per call, before any file is read. translate_all
fans out to a bounded thread pool; outcomes are reported in manifest order
and one failed file never stops the others. There is no retry here: a
transient provider error is reported as a failed file.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Protocol, Union

from translate_dir.ai.service import ProviderCredentials, require_credentials
from translate_dir.config import DEFAULT_MAX_WORKERS
from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.core.lang_dirs import LangDirectory
from translate_dir.core.manifest import FileStatus, to_relative_key
from translate_dir.errors import (
    FileOperationError,
    NotInSourceDirectoryError,
    NotTranslatableError,
    TranslateDirError,
    UnknownTargetLanguageError,
    ValidationError,
)
from translate_dir.language_codes import Language, parse_language
from translate_dir.logger import get_logger
from translate_dir.project.project import Project
from translate_dir.translation.jobs import JobOutcome, TranslationJob, TranslationSummary

logger = get_logger(__name__)


class TranslationProvider(Protocol):
    def translate(self, content: str, source_language: Language, target_language: Language) -> str:
        ...


class TranslationPipeline:
    """Submits a project's translatable files to a TranslationProvider."""

    def __init__(self, project: Project, provider: TranslationProvider,
                 credentials: Optional[ProviderCredentials],
                 fs: LocalFileSystem = None, max_workers: int = DEFAULT_MAX_WORKERS):
        self.project = project
        self.provider = provider
        self.credentials = credentials
        self.fs = fs or project.fs
        self.max_workers = max(1, int(max_workers))

    # ------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------

    def _manifest_key(self, path: Union[str, Path]) -> str:
        """Map a user path to a translatable manifest key or raise NotTranslatableError."""
        manifest = self.project.manifest
        source = self.project.require_source()

        candidates = []
        if not Path(path).is_absolute():
            # As listed by list-translatable: relative to the source directory
            candidates.append(Path(path).as_posix())
        try:
            candidates.append(to_relative_key(self.project.resolve_path(path), source.path))
        except NotInSourceDirectoryError:
            pass

        for key in candidates:
            if manifest.get(key) is FileStatus.TRANSLATABLE:
                return key

        raise NotTranslatableError(
            f"'{path}' is not marked as translatable",
            details={"path": str(path)},
        )

    def _target_dir(self, target_language: Language) -> LangDirectory:
        lang_dir = self.project.lang_dirs.get(target_language)
        if lang_dir is None:
            raise UnknownTargetLanguageError(
                f"Language {target_language.value} is not a target language of this project",
                details={"language": target_language.value},
            )
        return lang_dir

    # ------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------

    def _submit(self, key: str, lang_dir: LangDirectory) -> TranslationJob:
        """Translate one manifest entry; errors propagate."""
        source = self.project.require_source()
        job = TranslationJob(source_path=key, target_language=lang_dir.language)
        source_file = source.path / key
        target_file = lang_dir.path / key

        try:
            raw = self.fs.read_bytes(source_file)
        except OSError as e:
            raise FileOperationError(f"Could not read '{source_file}': {e}", details={"path": key})
        try:
            content = raw.decode('utf-8')
        except UnicodeDecodeError:
            raise ValidationError(f"'{key}' is not UTF-8 text", details={"path": key})

        logger.debug(f"Submitting '{key}' for translation to {lang_dir.language.value}")
        translated = self.provider.translate(content, source.language, lang_dir.language)

        try:
            self.fs.write_bytes(target_file, translated.encode('utf-8'))
        except OSError as e:
            raise FileOperationError(f"Could not write '{target_file}': {e}", details={"path": key})

        job.outcome = JobOutcome.SUCCEEDED
        job.target_path = str(target_file)
        logger.info(f"Translated '{key}' -> {target_file}")
        return job

    def _submit_collecting(self, key: str, lang_dir: LangDirectory) -> TranslationJob:
        """Translate one entry, recording any failure on the job instead of raising."""
        try:
            return self._submit(key, lang_dir)
        except TranslateDirError as e:
            logger.error(f"Translation of '{key}' to {lang_dir.language.value} failed: {e}")
            return TranslationJob(source_path=key, target_language=lang_dir.language,
                                  outcome=JobOutcome.FAILED, error=str(e), error_code=e.code)
        except Exception as e:
            logger.exception(f"Unexpected error translating '{key}' to {lang_dir.language.value}")
            return TranslationJob(source_path=key, target_language=lang_dir.language,
                                  outcome=JobOutcome.FAILED, error=str(e), error_code=type(e).__name__)

    def translate_file(self, path: Union[str, Path], target_language: Union[Language, str]) -> TranslationJob:
        """
        Translate a single translatable file.

        Raises:
            ProviderError: AUTH_MISSING before anything else; otherwise as
                returned by the provider.
            NotTranslatableError: If path is not a translatable manifest entry.
            UnknownTargetLanguageError: If the language has no target directory.
            FileOperationError: If the source cannot be read or the result written.
        """
        require_credentials(self.credentials)
        target_language = parse_language(target_language)
        key = self._manifest_key(path)
        lang_dir = self._target_dir(target_language)
        return self._submit(key, lang_dir)

    def translate_all(self, target_language: Union[Language, str]) -> TranslationSummary:
        """
        Translate every translatable file, in manifest order.

        Raises:
            ProviderError: AUTH_MISSING, before any file is processed.
            UnknownTargetLanguageError: If the language has no target directory.
        """
        require_credentials(self.credentials)
        target_language = parse_language(target_language)
        lang_dir = self._target_dir(target_language)
        keys = self.project.get_translatable_files()

        summary = TranslationSummary(action="translate", target_language=target_language)
        if not keys:
            logger.info("No translatable files to submit")
            return summary

        workers = min(self.max_workers, len(keys))
        logger.info(f"Translating {len(keys)} file(s) to {target_language.value} with {workers} worker(s)")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="translate") as executor:
            # map() yields in submission order regardless of completion order
            for job in executor.map(lambda key: self._submit_collecting(key, lang_dir), keys):
                summary.add_job(job)

        logger.info(f"Translate-all summary: {summary.success_count} successful, "
                    f"{summary.failure_count} errors")
        return summary
