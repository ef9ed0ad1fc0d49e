"""
Project Exceptions

Error taxonomy shared by the engine and the HTTP surface:
- ConfigurationError: project set-up conflicts (source, languages)
- NotFoundError: missing files, languages or projects
- ValidationError: bad input (paths outside the source, malformed patterns)
- FileOperationError: copy, write and persistence failures

Provider failures live in translate_dir.ai.exceptions.
"""


class TranslateDirError(Exception):
    """Base error with optional code and details."""

    default_code = "error"

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, "details": self.details}


class ConfigurationError(TranslateDirError):
    default_code = "configuration_error"


class NotFoundError(TranslateDirError):
    default_code = "not_found"


class ValidationError(TranslateDirError):
    default_code = "validation_error"


class FileOperationError(TranslateDirError):
    default_code = "io_error"


# Configuration

class SourceNotSetError(ConfigurationError):
    default_code = "source_not_set"

    def __init__(self):
        super().__init__("Source directory is not set for this project")


class SourceAlreadySetError(ConfigurationError):
    default_code = "source_already_set"


class DuplicateLanguageError(ConfigurationError):
    default_code = "duplicate_language"


class UnknownTargetLanguageError(ConfigurationError):
    default_code = "unknown_target_language"


class ProjectExistsError(ConfigurationError):
    default_code = "project_exists"


# Not found

class FileNotFoundInProjectError(NotFoundError):
    default_code = "file_not_found"


class LanguageNotFoundError(NotFoundError):
    default_code = "language_not_found"


class ProjectNotFoundError(NotFoundError):
    default_code = "project_not_found"


# Validation

class NotInSourceDirectoryError(ValidationError):
    default_code = "not_in_source_directory"


class InvalidPatternError(ValidationError):
    default_code = "invalid_pattern"


class NotTranslatableError(ValidationError):
    default_code = "not_translatable"


class UnsupportedLanguageError(ValidationError):
    default_code = "unsupported_language"


# File operations

class StorageError(FileOperationError):
    default_code = "storage_error"


class SyncError(FileOperationError):
    """Raised by SyncResult.raise_for_failures with the failing paths in details."""

    default_code = "sync_failed"
