"""
Project module - Project aggregate and persistence

This module provides:
- project: the Project aggregate
- creator: init, load and save
"""

from translate_dir.project.project import Project

from translate_dir.project.creator import (
    init_project,
    load_project,
    save_project,
    record_sync,
)
