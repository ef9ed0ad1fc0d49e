import pytest

from translate_dir.core.matcher import (
    has_glob_metacharacters,
    resolve_pattern,
    resolve_patterns,
    validate_pattern,
)
from translate_dir.errors import InvalidPatternError


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "docs").mkdir()
    for name in ("b.txt", "a.txt", "notes.md", "docs/guide.md", "docs/api.md"):
        (tmp_path / name).write_text(name)
    return tmp_path


def test_glob_results_are_sorted_and_absolute(tree):
    match = resolve_pattern("*.txt", tree)
    assert match.paths == [tree / "a.txt", tree / "b.txt"]
    assert not match.literal
    assert not match.no_match


def test_recursive_glob(tree):
    match = resolve_pattern("**/*.md", tree)
    assert match.paths == [tree / "docs" / "api.md", tree / "docs" / "guide.md", tree / "notes.md"]


def test_directories_are_not_candidates(tree):
    match = resolve_pattern("*", tree)
    assert tree / "docs" not in match.paths
    assert tree / "a.txt" in match.paths


def test_hidden_files_are_matched(tree):
    (tree / ".htaccess").write_text("deny")
    (tree / "docs" / ".env.example").write_text("KEY=")

    assert tree / ".htaccess" in resolve_pattern("*", tree).paths
    assert tree / "docs" / ".env.example" in resolve_pattern("**/*", tree).paths


def test_glob_without_matches_is_no_match_and_not_retried_as_literal(tree):
    # Glob-looking patterns never fall back to a literal path
    match = resolve_pattern("*.rst", tree)
    assert match.no_match
    assert match.paths == []
    assert not match.literal


def test_literal_without_matches_falls_back_to_literal_path(tree):
    # Literal-looking patterns are handed back even if the file is missing
    match = resolve_pattern("missing.txt", tree)
    assert match.literal
    assert match.paths == [tree / "missing.txt"]
    assert not match.no_match


def test_existing_literal_is_found_by_glob(tree):
    match = resolve_pattern("notes.md", tree)
    assert match.paths == [tree / "notes.md"]
    assert not match.literal


def test_malformed_pattern_is_an_error_and_skipped(tree):
    match = resolve_pattern("[abc.txt", tree)
    assert isinstance(match.error, InvalidPatternError)
    assert match.paths == []
    assert not match.no_match


def test_brace_pattern_counts_as_glob(tree):
    assert has_glob_metacharacters("{a,b}.txt")
    match = resolve_pattern("{a,b}.txt", tree)
    assert match.no_match


def test_patterns_resolved_in_input_order(tree):
    matches = resolve_patterns(["notes.md", "*.rst", "*.txt"], tree)
    assert [m.pattern for m in matches] == ["notes.md", "*.rst", "*.txt"]
    assert [m.no_match for m in matches] == [False, True, False]


def test_absolute_pattern(tree):
    match = resolve_pattern(str(tree / "docs" / "*.md"), tree / "docs")
    assert len(match.paths) == 2


def test_validate_pattern_rules():
    validate_pattern("docs/**/*.md")
    validate_pattern("[]]x")
    validate_pattern("[!a]b")
    with pytest.raises(InvalidPatternError):
        validate_pattern("")
    with pytest.raises(InvalidPatternError):
        validate_pattern("a**/b")
    with pytest.raises(InvalidPatternError):
        validate_pattern("docs/***")
    with pytest.raises(InvalidPatternError):
        validate_pattern("[!")
