"""
Project Database Schema Management Module

This module handles database initialization, schema validation, and migrations.
For read/write operations, see core/database.py
"""

import sqlite3
from pathlib import Path

# Import database module to use get_connection dynamically
# This keeps monkeypatching in tests effective
import translate_dir.core.database as db

DB_VERSION = 2  # Increment when schema changes (added project.updated_at/last_synced_at in v2)


def get_connection(root: Path):
    """Get a database connection using the database module."""
    return db.get_connection(root)


def get_db_version(root: Path) -> int:
    """Get current database version."""
    try:
        with get_connection(root) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT version FROM db_version LIMIT 1")
            row = cursor.fetchone()
            return row[0] if row else 0
    except sqlite3.OperationalError:
        return 0


def set_db_version(root: Path, version: int):
    """Set database version."""
    with get_connection(root) as conn:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS db_version (version INTEGER)")
        cursor.execute("DELETE FROM db_version")
        cursor.execute("INSERT INTO db_version (version) VALUES (?)", (version,))
        conn.commit()


def initialize_database(root: Path):
    """Initializes the project database and creates the tables."""
    from translate_dir.logger import get_logger
    logger = get_logger(__name__)

    if db.get_db_file(root).exists():
        # Check if migration needed
        current_version = get_db_version(root)
        if current_version < DB_VERSION:
            migrate_database(root, current_version, DB_VERSION)
        elif current_version == DB_VERSION:
            try:
                ensure_all_schemas(root)
            except Exception as e:
                logger.warning(f"Failed to verify project schema: {e}")
        return

    with get_connection(root) as conn:
        cursor = conn.cursor()

        # Single-row project table
        cursor.execute("""
        CREATE TABLE project (
            id INTEGER PRIMARY KEY CHECK (id = 1),
            name TEXT NOT NULL,
            source_dir TEXT,
            source_language TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP,
            last_synced_at TIMESTAMP
        )
        """)

        cursor.execute("""
        CREATE TABLE lang_dirs (
            language TEXT PRIMARY KEY,
            dir_name TEXT NOT NULL,
            sort_order INTEGER NOT NULL DEFAULT 0
        )
        """)

        cursor.execute("""
        CREATE TABLE manifest_entries (
            relative_path TEXT PRIMARY KEY,
            status TEXT NOT NULL CHECK (status IN ('translatable', 'untranslatable')),
            sort_order INTEGER NOT NULL DEFAULT 0
        )
        """)

        conn.commit()

    ensure_database_indexes(root)
    set_db_version(root, DB_VERSION)
    logger.debug(f"Created project database at {db.get_db_file(root)}")


# ============================================================
# Database Schema Validation
# ============================================================

def ensure_project_schema(root: Path):
    """
    Ensure project table has all required columns.
    This function should be called during database initialization/migration.
    """
    from translate_dir.logger import get_logger
    logger = get_logger(__name__)

    try:
        with get_connection(root) as conn:
            cursor = conn.cursor()

            cursor.execute("PRAGMA table_info(project)")
            existing_cols = {row[1] for row in cursor.fetchall()}

            if "updated_at" not in existing_cols:
                logger.info("Adding updated_at column to project table")
                cursor.execute("ALTER TABLE project ADD COLUMN updated_at TIMESTAMP")

            if "last_synced_at" not in existing_cols:
                logger.info("Adding last_synced_at column to project table")
                cursor.execute("ALTER TABLE project ADD COLUMN last_synced_at TIMESTAMP")

            conn.commit()
    except Exception as e:
        logger.error(f"Failed to ensure project schema: {e}")
        raise


def ensure_database_indexes(root: Path):
    """Ensure the ordering indexes exist."""
    with get_connection(root) as conn:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_manifest_sort
            ON manifest_entries(sort_order)
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_lang_dirs_sort
            ON lang_dirs(sort_order)
        """)
        conn.commit()


def ensure_all_schemas(root: Path):
    """Ensure all tables have all required columns and indexes."""
    ensure_project_schema(root)
    ensure_database_indexes(root)


# ============================================================
# Database Migration
# ============================================================

def migrate_database(root: Path, from_version: int, to_version: int):
    """
    Migrate a project database from one version to another.

    Version 1 lacked the project timestamps; ensure_all_schemas adds them.
    """
    from translate_dir.logger import get_logger
    logger = get_logger(__name__)

    logger.info(f"Migrating project database from version {from_version} to {to_version}")
    ensure_all_schemas(root)
    set_db_version(root, to_version)
    logger.info(f"Project database migration completed: now at version {to_version}")
