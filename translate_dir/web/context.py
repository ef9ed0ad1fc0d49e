"""
Request helpers shared by the route blueprints.

Operations on the same project root are serialised through a per-root lock:
one logical operation (load, mutate, save) runs at a time per project.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from flask import current_app, request

from translate_dir.ai.service import AIService, ProviderCredentials, resolve_credentials
from translate_dir.config import get_max_workers
from translate_dir.errors import ValidationError
from translate_dir.logger import get_logger
from translate_dir.project.creator import load_project, save_project
from translate_dir.project.project import Project
from translate_dir.translation.pipeline import TranslationPipeline

logger = get_logger(__name__)

_locks: Dict[str, threading.Lock] = {}
_locks_lock = threading.Lock()


def get_project_lock(root: Path) -> threading.Lock:
    key = str(Path(root).absolute())
    with _locks_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


def request_data() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def require_field(data: Dict[str, Any], name: str) -> Any:
    value = data.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required field '{name}'", details={"field": name})
    return value


def project_root() -> Path:
    """Project root from the JSON body or the query string ('path', default '.')."""
    data = request_data()
    path = data.get("path") or request.args.get("path") or "."
    return Path(path).absolute()


@contextmanager
def open_project(save: bool = False) -> Iterator[Project]:
    """
    Load the request's project under its lock; save it afterwards when asked.

    Nothing is saved if the body raises.
    """
    root = project_root()
    with get_project_lock(root):
        project = load_project(root)
        yield project
        if save:
            save_project(project)


def get_credentials() -> ProviderCredentials:
    credentials = current_app.config.get("PROVIDER_CREDENTIALS")
    if credentials is None:
        credentials = resolve_credentials(current_app.config["TRANSLATE_DIR"])
    return credentials


def build_pipeline(project: Project) -> TranslationPipeline:
    config = current_app.config["TRANSLATE_DIR"]
    credentials = get_credentials()
    provider: Optional[Any] = current_app.config.get("TRANSLATION_PROVIDER")
    if provider is None:
        provider = AIService(credentials, config=config)
    return TranslationPipeline(
        project,
        provider=provider,
        credentials=credentials,
        max_workers=get_max_workers(config),
    )
