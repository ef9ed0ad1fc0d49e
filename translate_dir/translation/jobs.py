"""
Translation job records.

TranslationJob is created per submission and handed back to the caller;
nothing here is persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from translate_dir.core.results import BulkResult, ItemOutcome
from translate_dir.language_codes import Language


class JobOutcome(str, Enum):
    PENDING = 'pending'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class TranslationJob:
    """One file submitted for one target language."""
    source_path: str  # manifest key
    target_language: Language
    outcome: JobOutcome = JobOutcome.PENDING
    target_path: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_path": self.source_path,
            "target_language": self.target_language.value,
            "outcome": self.outcome.value,
            "target_path": self.target_path,
            "error": self.error,
            "error_code": self.error_code,
        }


@dataclass
class TranslationSummary(BulkResult):
    """Result of translate-all: per-file jobs in manifest order plus the tally."""
    target_language: Optional[Language] = None
    jobs: List[TranslationJob] = field(default_factory=list)

    def add_job(self, job: TranslationJob) -> None:
        self.jobs.append(job)
        if job.outcome is JobOutcome.SUCCEEDED:
            self.record_success(job.source_path)
        else:
            self.outcomes.append(ItemOutcome(
                item=job.source_path, ok=False, error=job.error, code=job.error_code,
            ))

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["target_language"] = self.target_language.value if self.target_language else None
        payload["jobs"] = [job.to_dict() for job in self.jobs]
        return payload

