import pytest

from translate_dir.core.lang_dirs import LanguageDirectorySet
from translate_dir.errors import (
    ConfigurationError,
    DuplicateLanguageError,
    LanguageNotFoundError,
    SourceAlreadySetError,
    SourceNotSetError,
    UnsupportedLanguageError,
    ValidationError,
)
from translate_dir.language_codes import Language, parse_language


def test_set_source_creates_directory(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    source = dirs.set_source("content", Language.ENGLISH)
    assert source.path == tmp_path / "content"
    assert source.path.is_dir()


def test_source_can_only_be_set_once(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    with pytest.raises(SourceAlreadySetError):
        dirs.set_source("other", Language.FRENCH)
    assert dirs.source.path == tmp_path / "content"


def test_source_dir_must_stay_inside_root(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    with pytest.raises(ValidationError):
        dirs.set_source("../outside", Language.ENGLISH)
    assert dirs.source is None


def test_add_requires_source(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    with pytest.raises(SourceNotSetError):
        dirs.add(Language.FRENCH)


def test_add_creates_language_directory(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    lang_dir = dirs.add(Language.CHINESE_SIMPLIFIED)
    assert lang_dir.path == tmp_path / "zh-CN"
    assert lang_dir.path.is_dir()


def test_add_rejects_source_language_and_duplicates(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    dirs.add(Language.FRENCH)

    with pytest.raises(DuplicateLanguageError):
        dirs.add(Language.ENGLISH)
    with pytest.raises(DuplicateLanguageError):
        dirs.add(Language.FRENCH)
    assert dirs.languages() == [Language.FRENCH]


def test_add_rejects_directory_equal_to_source(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("fr", Language.ENGLISH)
    with pytest.raises(ConfigurationError):
        dirs.add(Language.FRENCH)
    assert len(dirs) == 0


def test_membership_is_adds_minus_removes(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    for lang in (Language.FRENCH, Language.GERMAN, Language.JAPANESE):
        dirs.add(lang)
    dirs.remove(Language.GERMAN)
    dirs.add(Language.SPANISH)
    assert dirs.languages() == [Language.FRENCH, Language.JAPANESE, Language.SPANISH]


def test_remove_unknown_language(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    with pytest.raises(LanguageNotFoundError):
        dirs.remove(Language.FRENCH)


def test_remove_keeps_directory_contents(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("content", Language.ENGLISH)
    lang_dir = dirs.add(Language.FRENCH)
    mirrored = lang_dir.path / "readme.txt"
    mirrored.write_text("bonjour")

    dirs.remove(Language.FRENCH)

    assert mirrored.read_text() == "bonjour"
    assert dirs.get(Language.FRENCH) is None


def test_parse_language():
    assert parse_language("fr") is Language.FRENCH
    assert parse_language("ZH_cn") is Language.CHINESE_SIMPLIFIED
    assert parse_language("german") is Language.GERMAN
    assert parse_language("PORTUGUESE_BRAZIL") is Language.PORTUGUESE_BRAZIL
    assert parse_language(Language.ITALIAN) is Language.ITALIAN
    with pytest.raises(UnsupportedLanguageError):
        parse_language("klingon")


@pytest.mark.parametrize("dir_name", [".", "./", "", "a/../.."])
def test_source_dir_must_not_be_the_root(tmp_path, dir_name):
    dirs = LanguageDirectorySet(tmp_path)
    with pytest.raises(ValidationError):
        dirs.set_source(dir_name, Language.ENGLISH)
    assert dirs.source is None


def test_source_dot_segments_are_normalised(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    assert dirs.set_source("./content", Language.ENGLISH).path == tmp_path / "content"


def test_target_directory_must_not_contain_the_source(tmp_path):
    dirs = LanguageDirectorySet(tmp_path)
    dirs.set_source("fr/content", Language.ENGLISH)
    with pytest.raises(ConfigurationError):
        dirs.add(Language.FRENCH)
    assert dirs.languages() == []
