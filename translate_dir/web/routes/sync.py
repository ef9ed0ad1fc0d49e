"""Synchronization API routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

from translate_dir.logger import get_logger
from translate_dir.project.creator import record_sync
from translate_dir.web.context import open_project

sync_bp = Blueprint("sync", __name__)
logger = get_logger(__name__)


@sync_bp.post("/sync")
def sync_project_endpoint():
    """Mirror untranslatable files into every target-language directory."""
    with open_project(save=True) as project:
        result = project.sync_files()
        if result.ok:
            record_sync(project)

    if not result.ok:
        logger.warning("Sync finished with %s failure(s) for %s", len(result.failures), project.root)
        return jsonify(result.to_dict()), 207

    logger.info("Successfully synced untranslatable files for %s", project.root)
    return jsonify(result.to_dict())
