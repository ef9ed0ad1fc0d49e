"""
Project Database Operations Module

Each project keeps its state in an SQLite file at its root. This module
handles reading and writing:
- Project settings (name, source directory, source language)
- Target-language directories
- Manifest entries

For schema management and migrations, see core/schema.py
"""

import sqlite3
from pathlib import Path
from typing import Optional, List, Dict, Any

DB_FILE_NAME = ".translate-dir.db"


def get_db_file(root: Path) -> Path:
    """Database file of the project rooted at root."""
    return Path(root) / DB_FILE_NAME


def get_connection(root: Path):
    """Get a database connection for a project root."""
    return sqlite3.connect(get_db_file(root))


def project_exists(root: Path) -> bool:
    return get_db_file(root).exists()


# ============================================================
# Project Operations
# ============================================================

def create_project(root: Path, name: str):
    """Insert the single project row."""
    with get_connection(root) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO project (id, name) VALUES (1, ?)
        """, (name,))
        conn.commit()


def get_project(root: Path) -> Optional[Dict[str, Any]]:
    """Get the project row."""
    with get_connection(root) as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM project WHERE id = 1")
        row = cursor.fetchone()
        return dict(row) if row else None


def get_lang_dirs(root: Path) -> List[Dict[str, Any]]:
    """Get target-language directories in insertion order."""
    with get_connection(root) as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT language, dir_name FROM lang_dirs ORDER BY sort_order")
        return [dict(row) for row in cursor.fetchall()]


def get_manifest_entries(root: Path) -> List[Dict[str, Any]]:
    """Get manifest entries in insertion order."""
    with get_connection(root) as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("SELECT relative_path, status FROM manifest_entries ORDER BY sort_order")
        return [dict(row) for row in cursor.fetchall()]


def replace_project_state(root: Path, name: str,
                          source_dir: Optional[str], source_language: Optional[str],
                          lang_dirs: List[Dict[str, str]],
                          manifest_entries: List[Dict[str, str]]):
    """
    Overwrite the stored project state in a single transaction.

    Args:
        root: Project root
        name: Project name
        source_dir: Source directory name relative to root, or None
        source_language: Source language code, or None
        lang_dirs: [{'language', 'dir_name'}] in order
        manifest_entries: [{'relative_path', 'status'}] in order
    """
    conn = get_connection(root)
    cursor = conn.cursor()

    try:
        cursor.execute("""
            UPDATE project
            SET name = ?, source_dir = ?, source_language = ?, updated_at = datetime('now')
            WHERE id = 1
        """, (name, source_dir, source_language))

        cursor.execute("DELETE FROM lang_dirs")
        cursor.executemany("""
            INSERT INTO lang_dirs (language, dir_name, sort_order) VALUES (?, ?, ?)
        """, [(d['language'], d['dir_name'], i) for i, d in enumerate(lang_dirs)])

        cursor.execute("DELETE FROM manifest_entries")
        cursor.executemany("""
            INSERT INTO manifest_entries (relative_path, status, sort_order) VALUES (?, ?, ?)
        """, [(e['relative_path'], e['status'], i) for i, e in enumerate(manifest_entries)])

        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def update_project_last_synced(root: Path):
    """Update the last_synced_at timestamp for a project."""
    with get_connection(root) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            UPDATE project
            SET last_synced_at = datetime('now')
            WHERE id = 1
        """)
        conn.commit()
