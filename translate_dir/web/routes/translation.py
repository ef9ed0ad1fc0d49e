"""Translation submission API routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

from translate_dir.logger import get_logger
from translate_dir.web.context import (
    build_pipeline,
    open_project,
    request_data,
    require_field,
)

translation_bp = Blueprint("translation", __name__)
logger = get_logger(__name__)


@translation_bp.post("/translate")
def translate_file():
    """Translate one translatable file into a target language."""
    data = request_data()
    file_path = require_field(data, "file")
    target_language = require_field(data, "target_language")

    with open_project() as project:
        pipeline = build_pipeline(project)
        logger.info("Translating '%s' to %s...", file_path, target_language)
        job = pipeline.translate_file(file_path, target_language)

    return jsonify({"job": job.to_dict()})


@translation_bp.post("/translate-all")
def translate_all():
    """Translate every translatable file into a target language."""
    data = request_data()
    target_language = require_field(data, "target_language")

    with open_project() as project:
        pipeline = build_pipeline(project)
        logger.info("Translating all files to %s...", target_language)
        summary = pipeline.translate_all(target_language)

    return jsonify(summary.to_dict()), 200 if summary.ok else 207
