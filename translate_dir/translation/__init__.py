"""
Translation module - Translation submission

This module provides:
- TranslationPipeline: submits translatable files to a provider
- TranslationJob / TranslationSummary: per-file outcomes and tallies
"""

from translate_dir.translation.jobs import JobOutcome, TranslationJob, TranslationSummary
from translate_dir.translation.pipeline import TranslationPipeline, TranslationProvider
