"""
Project initialization and persistence.

This module handles:
1. Creating a project database in a root directory
2. Loading a Project aggregate from it
3. Saving a Project aggregate back
"""

import sqlite3
from pathlib import Path
from typing import Optional, Union

from translate_dir.core import database as db
from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.core.lang_dirs import LangDirectory, LanguageDirectorySet, SourceDirectory
from translate_dir.core.manifest import FileStatus, Manifest
from translate_dir.core.schema import initialize_database
from translate_dir.errors import (
    ProjectExistsError,
    ProjectNotFoundError,
    StorageError,
    UnsupportedLanguageError,
    ValidationError,
)
from translate_dir.language_codes import get_language_dir_name, parse_language
from translate_dir.logger import get_logger
from translate_dir.project.project import Project

logger = get_logger(__name__)


def init_project(name: str, root: Union[str, Path], fs: LocalFileSystem = None) -> Project:
    """
    Create a new, empty project rooted at root.

    Args:
        name: Project display name
        root: Project root directory (created if missing)
        fs: Filesystem capability

    Raises:
        ValidationError: If the name is blank.
        ProjectExistsError: If root already holds a project.
        StorageError: If the project database cannot be written.
    """
    root = Path(root).absolute()
    if not name or not name.strip():
        raise ValidationError("Project name must not be empty")
    if db.project_exists(root):
        raise ProjectExistsError(
            f"A project already exists in '{root}'",
            details={"path": str(root)},
        )

    logger.info(f"Initializing project '{name}' in {root}")
    try:
        root.mkdir(parents=True, exist_ok=True)
        initialize_database(root)
        db.create_project(root, name.strip())
    except (OSError, sqlite3.Error) as e:
        logger.error(f"Failed to initialize project in {root}: {e}")
        raise StorageError(f"Could not initialize project in '{root}': {e}", details={"path": str(root)})

    return Project(name=name.strip(), root=root, fs=fs)


def load_project(root: Union[str, Path], fs: LocalFileSystem = None) -> Project:
    """
    Load the project stored at root.

    Raises:
        ProjectNotFoundError: If root holds no project.
        StorageError: If the stored state cannot be read or is inconsistent.
    """
    root = Path(root).absolute()
    if not db.project_exists(root):
        raise ProjectNotFoundError(
            f"No project found in '{root}'. Run init first or specify a valid path.",
            details={"path": str(root)},
        )

    fs = fs or LocalFileSystem()
    try:
        initialize_database(root)
        row = db.get_project(root)
        lang_rows = db.get_lang_dirs(root)
        entry_rows = db.get_manifest_entries(root)
    except sqlite3.Error as e:
        logger.error(f"Failed to read project database in {root}: {e}")
        raise StorageError(f"Could not read project in '{root}': {e}", details={"path": str(root)})

    if not row:
        raise StorageError(f"Project database in '{root}' has no project record", details={"path": str(root)})

    try:
        source: Optional[SourceDirectory] = None
        if row.get('source_dir') and row.get('source_language'):
            source = SourceDirectory(path=root / row['source_dir'],
                                     language=parse_language(row['source_language']))

        lang_dirs = [
            LangDirectory(language=parse_language(r['language']), path=root / r['dir_name'])
            for r in lang_rows
        ]
        entries = [(r['relative_path'], FileStatus(r['status'])) for r in entry_rows]
    except (UnsupportedLanguageError, ValueError) as e:
        raise StorageError(f"Project database in '{root}' holds invalid data: {e}",
                           details={"path": str(root)})

    project = Project(
        name=row['name'],
        root=root,
        fs=fs,
        lang_dirs=LanguageDirectorySet(root, fs=fs, source=source, lang_dirs=lang_dirs),
        manifest=Manifest(source_path=source.path if source else None, fs=fs, entries=entries),
    )
    logger.debug(f"Loaded project '{project.name}' from {root}: "
                 f"{len(project.lang_dirs)} target language(s), {len(project.manifest)} manifest entries")
    return project


def save_project(project: Project) -> None:
    """
    Persist the project state.

    Raises:
        StorageError: If the project database cannot be written.
    """
    source = project.source
    source_dir = None
    if source is not None:
        source_dir = source.path.relative_to(project.root).as_posix()

    lang_dirs = [
        {'language': d.language.value, 'dir_name': get_language_dir_name(d.language)}
        for d in project.lang_dirs
    ]
    entries = [
        {'relative_path': key, 'status': status.value}
        for key, status in project.manifest.entries()
    ]

    try:
        initialize_database(project.root)
        db.replace_project_state(
            project.root,
            name=project.name,
            source_dir=source_dir,
            source_language=source.language.value if source else None,
            lang_dirs=lang_dirs,
            manifest_entries=entries,
        )
    except (OSError, sqlite3.Error) as e:
        logger.error(f"Failed to save project '{project.name}': {e}")
        raise StorageError(f"Could not save project in '{project.root}': {e}",
                           details={"path": str(project.root)})
    logger.debug(f"Saved project '{project.name}'")


def record_sync(project: Project) -> None:
    """Stamp the project's last_synced_at."""
    try:
        db.update_project_last_synced(project.root)
    except sqlite3.Error as e:
        raise StorageError(f"Could not update sync time in '{project.root}': {e}",
                           details={"path": str(project.root)})
