"""
AI Translation Service Module

This module provides the translation provider used by the submission pipeline:
- ProviderCredentials, the explicit credential object handed to the pipeline
- resolve_credentials() to build it from configuration and the environment
- AIService, which translates one document per call

For provider-specific API implementations, see ai/providers.py
"""

import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import httpx

from translate_dir.config import (
    API_KEY_PLACEHOLDER,
    BUILTIN_PROVIDER_DISPLAY_NAMES,
    DEFAULT_SYSTEM_MESSAGE,
    GOOGLE_API_KEY_ENV,
    get_prompt,
    load_config,
)
from translate_dir.language_codes import Language
from translate_dir.logger import get_logger
from translate_dir.ai.exceptions import ProviderError, ProviderErrorKind
from translate_dir.ai import providers

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProviderCredentials:
    """Credentials and endpoint settings for one provider."""
    provider: str
    api_key: Optional[str] = None
    models: List[str] = field(default_factory=list)
    api_url: Optional[str] = None
    timeout: Any = 120

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != API_KEY_PLACEHOLDER

    def __repr__(self):
        # Never print the key itself
        return (f"ProviderCredentials(provider={self.provider!r}, "
                f"api_key={'***' if self.api_key else None}, models={self.models!r})")


def resolve_credentials(config: Optional[Dict[str, Any]] = None,
                        environ: Optional[Mapping[str, str]] = None,
                        provider_override: Optional[str] = None) -> ProviderCredentials:
    """
    Build ProviderCredentials from configuration.

    The GOOGLE_API_KEY environment variable supplies the Gemini key when the
    configured key is missing or still the placeholder. The result may be
    unconfigured; the pipeline refuses to start in that case.
    """
    config = config if config is not None else load_config()
    environ = environ if environ is not None else os.environ
    provider = provider_override or config.get('ai_provider', 'gemini')
    provider_config = config.get(provider)
    if not isinstance(provider_config, dict):
        provider_config = {}

    api_key = provider_config.get('api_key') or None
    if provider == 'gemini' and (not api_key or api_key == API_KEY_PLACEHOLDER):
        api_key = environ.get(GOOGLE_API_KEY_ENV) or api_key

    models = provider_config.get('models') or []
    if not models and provider_config.get('model'):
        # Legacy single-model field
        models = [provider_config['model']]

    return ProviderCredentials(
        provider=provider,
        api_key=api_key,
        models=[m for m in models if m and isinstance(m, str)],
        api_url=provider_config.get('api_url'),
        timeout=provider_config.get('timeout', 120),
    )


def require_credentials(credentials: Optional[ProviderCredentials]) -> ProviderCredentials:
    """
    Raise AUTH_MISSING unless credentials carry a usable API key.

    Raises:
        ProviderError: kind AUTH_MISSING.
    """
    if credentials is None or not credentials.is_configured:
        provider = credentials.provider if credentials else None
        env_hint = f" or set {GOOGLE_API_KEY_ENV}" if provider in (None, 'gemini') else ""
        raise ProviderError(
            f"No API key configured for translation provider '{provider or 'unknown'}'. "
            f"Set it in the config file{env_hint}.",
            kind=ProviderErrorKind.AUTH_MISSING,
            details={"provider": provider, "missing_field": "api_key"},
        )
    return credentials


class AIService:
    """Translation provider backed by an LLM API."""

    def __init__(self, credentials: ProviderCredentials, config: Optional[Dict[str, Any]] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.credentials = credentials
        self.config = config if config is not None else load_config()
        self.system_message = self.config.get('translation', {}).get('system_message') or DEFAULT_SYSTEM_MESSAGE
        self._transport = transport
        self._usage_lock = threading.Lock()
        self.total_prompt_tokens = 0
        self.total_completion_tokens = 0
        logger.info(f"Initialized AI service with provider: {credentials.provider}")

    @property
    def provider_display_name(self) -> str:
        provider = self.credentials.provider
        return BUILTIN_PROVIDER_DISPLAY_NAMES.get(provider, provider.replace('-', ' ').title())

    def get_model(self, default_model: str = "") -> str:
        """
        Get the model to use for translation: the first configured model,
        otherwise default_model.
        """
        if self.credentials.models:
            return self.credentials.models[0]
        return default_model

    def http_client(self) -> httpx.Client:
        return httpx.Client(timeout=providers.get_httpx_timeout(self.credentials.timeout),
                            transport=self._transport)

    def record_usage(self, prompt_tokens: int, completion_tokens: int) -> None:
        with self._usage_lock:
            self.total_prompt_tokens += prompt_tokens or 0
            self.total_completion_tokens += completion_tokens or 0

    def get_total_token_usage(self) -> Dict[str, int]:
        """Get accumulated token usage."""
        with self._usage_lock:
            return {
                'prompt_tokens': self.total_prompt_tokens,
                'completion_tokens': self.total_completion_tokens,
            }

    def build_prompt(self, content: str, source_language: Language, target_language: Language) -> str:
        template = get_prompt("document_translation_prompt")["prompt"]
        return template.format(
            source_language_name=source_language.display_name,
            source_language_code=source_language.value,
            target_language_name=target_language.display_name,
            target_language_code=target_language.value,
            content=content,
        )

    def call_api(self, prompt: str) -> str:
        if self.credentials.provider == 'gemini':
            return providers.call_gemini_api(self, prompt)
        return providers.call_openai_compatible_api(self, prompt)

    def translate(self, content: str, source_language: Language, target_language: Language) -> str:
        """
        Translate a whole document.

        Raises:
            ProviderError: TRANSIENT, PERMANENT or AUTH_MISSING.
        """
        require_credentials(self.credentials)
        if not content.strip():
            # Nothing to translate; keep whitespace-only files as they are
            return content

        prompt = self.build_prompt(content, source_language, target_language)
        text = self.call_api(prompt)
        if content.lstrip().startswith("```"):
            return text
        return strip_code_fence(text)


def strip_code_fence(text: str) -> str:
    """Remove a single markdown fence the model may wrap the document in."""
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```") and stripped.count("\n") >= 1:
        first_newline = stripped.index("\n")
        return stripped[first_newline + 1:-3].rstrip("\n") + ("\n" if text.endswith("\n") else "")
    return text
