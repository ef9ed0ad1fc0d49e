"""
Core module - Manifest, language directories and synchronization

This module provides:
- filesystem: injectable filesystem capability
- matcher: glob/literal pattern resolution
- manifest: translatable/untranslatable file records
- lang_dirs: source and target-language directories
- sync: mirroring of untranslatable files
- results: accumulators for bulk operations
- database / schema: per-project SQLite storage
"""

from translate_dir.core.filesystem import LocalFileSystem
from translate_dir.core.matcher import PatternMatch, resolve_pattern, resolve_patterns
from translate_dir.core.manifest import FileStatus, Manifest
from translate_dir.core.lang_dirs import LangDirectory, LanguageDirectorySet, SourceDirectory
from translate_dir.core.results import BulkResult, ItemOutcome, MarkResult
from translate_dir.core.sync import Synchronizer, SyncResult
