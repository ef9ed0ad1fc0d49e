"""
Pattern resolution for bulk file operations.

Each user-supplied pattern is expanded as a glob first. A pattern that looks
like a literal path (no glob metacharacters) and matches nothing is handed
back as a literal candidate; a pattern with metacharacters that matches
nothing is reported as "no match" and never retried as a literal.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.errors import InvalidPatternError
from translate_dir.logger import get_logger

logger = get_logger(__name__)

GLOB_METACHARACTERS = ('*', '?', '[', '{')

_SEPARATORS = re.compile(r'[\\/]')


@dataclass
class PatternMatch:
    """Resolution of one pattern."""
    pattern: str
    paths: List[Path] = field(default_factory=list)
    literal: bool = False
    error: Optional[InvalidPatternError] = None

    @property
    def no_match(self) -> bool:
        return self.error is None and not self.paths


def has_glob_metacharacters(pattern: str) -> bool:
    return any(ch in pattern for ch in GLOB_METACHARACTERS)


def validate_pattern(pattern: str) -> None:
    """
    Reject malformed glob patterns.

    Raises:
        InvalidPatternError: For an empty pattern, an unclosed character
            class, or a '**' that is not a whole path component.
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError("Pattern is empty", details={"pattern": pattern})

    i = 0
    while i < len(pattern):
        if pattern[i] == '[':
            j = i + 1
            if j < len(pattern) and pattern[j] == '!':
                j += 1
            # A ']' directly after '[' or '[!' is part of the class
            if j < len(pattern) and pattern[j] == ']':
                j += 1
            close = pattern.find(']', j)
            if close == -1:
                raise InvalidPatternError(
                    f"Invalid glob pattern '{pattern}': unclosed character class at position {i}",
                    details={"pattern": pattern, "position": i},
                )
            i = close
        i += 1

    for component in _SEPARATORS.split(pattern):
        if '**' in component and component != '**':
            raise InvalidPatternError(
                f"Invalid glob pattern '{pattern}': recursive wildcards must form a single path component",
                details={"pattern": pattern},
            )


def resolve_pattern(pattern: str, cwd: Path, fs: LocalFileSystem = None) -> PatternMatch:
    """Resolve a single pattern against cwd."""
    fs = fs or LocalFileSystem()
    match = PatternMatch(pattern=pattern)

    try:
        validate_pattern(pattern)
    except InvalidPatternError as e:
        logger.warning(f"Skipping pattern: {e}")
        match.error = e
        return match

    expanded = [p for p in fs.glob(pattern, cwd) if not fs.is_dir(p)]
    if expanded:
        match.paths = expanded
        logger.debug(f"Pattern '{pattern}' matched {len(expanded)} file(s)")
        return match

    if not has_glob_metacharacters(pattern):
        candidate = Path(pattern)
        match.paths = [candidate if candidate.is_absolute() else Path(cwd) / candidate]
        match.literal = True
        logger.debug(f"Pattern '{pattern}' matched nothing, retrying as literal path")
        return match

    logger.debug(f"Pattern '{pattern}' matched nothing")
    return match


def resolve_patterns(patterns: Iterable[str], cwd: Path, fs: LocalFileSystem = None) -> List[PatternMatch]:
    """
    Resolve patterns in input order.

    Args:
        patterns: Glob patterns or literal paths
        cwd: Directory relative patterns are expanded against
        fs: Filesystem capability

    Returns:
        One PatternMatch per pattern, same order as the input
    """
    fs = fs or LocalFileSystem()
    return [resolve_pattern(pattern, cwd, fs) for pattern in patterns]
