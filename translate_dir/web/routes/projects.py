"""Project management API routes - init, info, source and target languages, manifest."""

from __future__ import annotations

from typing import Any, Dict, List

from flask import Blueprint, jsonify

from translate_dir.core.manifest import FileStatus
from translate_dir.errors import ValidationError
from translate_dir.language_codes import get_all_languages
from translate_dir.logger import get_logger
from translate_dir.project.creator import init_project
from translate_dir.web.context import (
    get_project_lock,
    open_project,
    project_root,
    request_data,
    require_field,
)

projects_bp = Blueprint("projects", __name__)
logger = get_logger(__name__)


def _bulk_status(result) -> int:
    return 200 if result.ok else 207


@projects_bp.post("")
def create_project():
    """Initialise a new project in the given directory."""
    data = request_data()
    name = require_field(data, "name")
    root = project_root()

    with get_project_lock(root):
        project = init_project(name, root)

    logger.info("Initialized project '%s' in %s", project.name, project.root)
    return jsonify({"project": project.info()}), 201


@projects_bp.get("/info")
def project_info():
    """Return project name, source and target languages."""
    with open_project() as project:
        info = project.info()
    return jsonify({"project": info})


@projects_bp.get("/languages/supported")
def supported_languages():
    return jsonify({"languages": get_all_languages()})


@projects_bp.post("/source")
def set_source():
    """Set the source directory and its language (once per project)."""
    data = request_data()
    dir_name = require_field(data, "dir_name")
    language = require_field(data, "language")

    with open_project(save=True) as project:
        source = project.set_source_dir(dir_name, language)
        info = project.info()

    logger.info("Source directory set to %s (%s)", source.path, source.language.value)
    return jsonify({"project": info})


@projects_bp.post("/languages")
def add_target_language():
    data = request_data()
    language = require_field(data, "language")

    with open_project(save=True) as project:
        lang_dir = project.add_lang(language)
        info = project.info()

    return jsonify({
        "language": lang_dir.language.value,
        "path": str(lang_dir.path),
        "project": info,
    }), 201


@projects_bp.delete("/languages/<language>")
def remove_target_language(language: str):
    """Stop tracking a target language; its directory is left on disk."""
    with open_project(save=True) as project:
        lang_dir = project.remove_lang(language)
        info = project.info()

    return jsonify({
        "language": lang_dir.language.value,
        "path": str(lang_dir.path),
        "kept_on_disk": True,
        "project": info,
    })


def _mark(status: FileStatus):
    data = request_data()
    patterns = require_field(data, "patterns")
    if isinstance(patterns, str):
        patterns = [patterns]
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ValidationError("'patterns' must be a list of strings", details={"field": "patterns"})

    cwd = data.get("cwd")
    with open_project(save=True) as project:
        result = project.mark_patterns(patterns, status, cwd=cwd or None)

    return jsonify(result.to_dict()), _bulk_status(result)


@projects_bp.post("/files/translatable")
def mark_translatable():
    """Mark files matching glob patterns or literal paths as translatable."""
    return _mark(FileStatus.TRANSLATABLE)


@projects_bp.post("/files/untranslatable")
def mark_untranslatable():
    """Mark files matching glob patterns or literal paths as untranslatable."""
    return _mark(FileStatus.UNTRANSLATABLE)


@projects_bp.get("/files/translatable")
def list_translatable():
    with open_project() as project:
        files: List[str] = project.get_translatable_files()
    payload: Dict[str, Any] = {"files": files, "count": len(files)}
    return jsonify(payload)


@projects_bp.get("/files/untranslatable")
def list_untranslatable():
    with open_project() as project:
        files = project.get_untranslatable_files()
    return jsonify({"files": files, "count": len(files)})
