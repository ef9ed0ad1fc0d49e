import sqlite3

import pytest

from translate_dir.core import database as db
from translate_dir.core.manifest import FileStatus
from translate_dir.core.schema import DB_VERSION, get_db_version
from translate_dir.errors import ProjectExistsError, ProjectNotFoundError, StorageError, ValidationError
from translate_dir.language_codes import Language
from translate_dir.project.creator import init_project, load_project, save_project


def test_init_creates_database(tmp_path):
    root = tmp_path / "new"
    project = init_project("demo", root)
    assert project.name == "demo"
    assert (root / db.DB_FILE_NAME).exists()
    assert get_db_version(root) == DB_VERSION


def test_init_twice_is_rejected(tmp_path):
    init_project("demo", tmp_path)
    with pytest.raises(ProjectExistsError):
        init_project("again", tmp_path)


def test_init_requires_name(tmp_path):
    with pytest.raises(ValidationError):
        init_project("  ", tmp_path)


def test_load_missing_project(tmp_path):
    with pytest.raises(ProjectNotFoundError):
        load_project(tmp_path)


def test_round_trip_preserves_source_manifest_and_languages(project):
    project.add_lang(Language.JAPANESE)
    project.add_lang(Language.FRENCH)
    project.make_translatable_file("src/b.txt")
    project.make_untranslatable_file("src/logo.svg")
    project.make_translatable_file("src/a.txt")
    save_project(project)

    loaded = load_project(project.root)

    assert loaded.name == "demo"
    assert loaded.source == project.source
    assert loaded.lang_dirs.languages() == [Language.JAPANESE, Language.FRENCH]
    assert [d.path for d in loaded.lang_dirs] == [project.root / "ja", project.root / "fr"]
    assert loaded.manifest.entries() == [
        ("b.txt", FileStatus.TRANSLATABLE),
        ("logo.svg", FileStatus.UNTRANSLATABLE),
        ("a.txt", FileStatus.TRANSLATABLE),
    ]


def test_saved_removal_stays_removed(project):
    project.add_lang(Language.FRENCH)
    save_project(project)
    loaded = load_project(project.root)
    loaded.remove_lang(Language.FRENCH)
    save_project(loaded)

    assert load_project(project.root).lang_dirs.languages() == []


def test_loaded_project_can_keep_marking(project):
    save_project(project)
    loaded = load_project(project.root)
    loaded.make_translatable_file("src/a.txt")
    assert loaded.get_translatable_files() == ["a.txt"]


def test_invalid_stored_language_is_a_storage_error(project):
    save_project(project)
    with sqlite3.connect(db.get_db_file(project.root)) as conn:
        conn.execute("UPDATE project SET source_language = 'tlh'")
        conn.commit()

    with pytest.raises(StorageError):
        load_project(project.root)


def test_old_schema_is_migrated(tmp_path):
    root = tmp_path / "old"
    root.mkdir()
    with sqlite3.connect(db.get_db_file(root)) as conn:
        conn.execute("CREATE TABLE project (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
                     "source_dir TEXT, source_language TEXT)")
        conn.execute("CREATE TABLE lang_dirs (language TEXT PRIMARY KEY, dir_name TEXT NOT NULL, "
                     "sort_order INTEGER NOT NULL DEFAULT 0)")
        conn.execute("CREATE TABLE manifest_entries (relative_path TEXT PRIMARY KEY, status TEXT NOT NULL, "
                     "sort_order INTEGER NOT NULL DEFAULT 0)")
        conn.execute("CREATE TABLE db_version (version INTEGER)")
        conn.execute("INSERT INTO db_version VALUES (1)")
        conn.execute("INSERT INTO project (id, name) VALUES (1, 'legacy')")
        conn.commit()

    project = load_project(root)
    save_project(project)

    assert project.name == "legacy"
    assert get_db_version(root) == DB_VERSION


def test_source_survives_reload_without_target_languages(tmp_path):
    project = init_project("demo", tmp_path / "proj")
    project.set_source_dir("src", Language.ENGLISH)
    save_project(project)

    loaded = load_project(project.root)

    assert loaded.source == project.source
    assert loaded.lang_dirs.languages() == []
    # the reloaded source is usable straight away
    assert loaded.add_lang(Language.FRENCH).path == project.root / "fr"
