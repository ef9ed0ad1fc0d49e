"""
Result accumulators for bulk operations.

Bulk operations (marking by pattern, synchronization, translate-all) attempt
every item and collect outcomes here instead of raising on the first error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ItemOutcome:
    """Outcome of a single item inside a bulk operation."""
    item: str
    ok: bool
    error: Optional[str] = None
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {"item": self.item, "ok": self.ok}
        if not self.ok:
            payload["error"] = self.error
            payload["code"] = self.code
        return payload


@dataclass
class BulkResult:
    """Ordered per-item outcomes plus success/failure counts."""
    action: str
    outcomes: List[ItemOutcome] = field(default_factory=list)

    def record_success(self, item: str) -> None:
        self.outcomes.append(ItemOutcome(item=item, ok=True))

    def record_failure(self, item: str, error: Exception) -> None:
        self.outcomes.append(ItemOutcome(
            item=item,
            ok=False,
            error=str(error),
            code=getattr(error, 'code', type(error).__name__),
        ))

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def failed_items(self) -> List[str]:
        return [o.item for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return self.failure_count == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "successful": self.success_count,
            "errors": self.failure_count,
            "failed": self.failed_items,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }

    def __str__(self):
        return (f"{type(self).__name__}(action={self.action}, "
                f"successful={self.success_count}, errors={self.failure_count})")


@dataclass
class MarkResult(BulkResult):
    """Bulk result for marking files by pattern; also tracks patterns that matched nothing."""
    no_match_patterns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["no_match"] = list(self.no_match_patterns)
        return payload
