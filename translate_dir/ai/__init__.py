"""
AI Module

This module provides the translation provider and its credentials.
"""

from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind
from translate_dir.ai.service import (
    AIService,
    ProviderCredentials,
    require_credentials,
    resolve_credentials,
)

__all__ = [
    'ProviderError',
    'ProviderErrorKind',
    'AIService',
    'ProviderCredentials',
    'require_credentials',
    'resolve_credentials',
]
