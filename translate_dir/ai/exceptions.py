"""
AI Service Exceptions

This module contains exception classes for the translation provider.
Separated to avoid circular imports between service.py and providers.py.
"""

from enum import Enum

from translate_dir.errors import TranslateDirError


class ProviderErrorKind(str, Enum):
    TRANSIENT = 'transient'
    PERMANENT = 'permanent'
    AUTH_MISSING = 'auth_missing'


class ProviderError(TranslateDirError):
    """Translation provider error; kind tells the caller whether a retry may help."""

    def __init__(self, message: str, kind: ProviderErrorKind = ProviderErrorKind.PERMANENT,
                 details: dict = None):
        kind = ProviderErrorKind(kind)
        super().__init__(message, code=kind.value, details=details)
        self.kind = kind

    @property
    def transient(self) -> bool:
        return self.kind is ProviderErrorKind.TRANSIENT
