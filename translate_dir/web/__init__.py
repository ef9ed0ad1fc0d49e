"""Web application package for translate-dir."""

from typing import Any, Dict, Optional

from flask import Flask

from translate_dir.config import load_config


def create_app(config: Optional[Dict[str, Any]] = None, provider: Optional[Any] = None,
               credentials: Optional[Any] = None) -> Flask:
    """
    Application factory for the HTTP API.

    Args:
        config: Configuration dict; loaded from the config file when omitted
        provider: Translation provider to use instead of AIService
        credentials: ProviderCredentials to use instead of resolving them from config
    """
    from .app import build_app  # Import here to avoid circular imports

    return build_app(config if config is not None else load_config(), provider=provider,
                     credentials=credentials)


__all__ = ["create_app"]
