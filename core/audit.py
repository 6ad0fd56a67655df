"""Change history for adjustment matrix edits.

Entries travel with the persisted matrix so the history survives restarts.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from core.logging_utils import get_logger

logger = get_logger(__name__)

MAX_ENTRIES = 200


def changed_buckets(old: Any, new: Any) -> List[str]:
    """``category.bucket`` paths whose points differ between two program tables."""

    old = old if isinstance(old, Mapping) else {}
    new = new if isinstance(new, Mapping) else {}
    changed = []
    for category in sorted(set(old) | set(new)):
        before = old.get(category) if isinstance(old.get(category), Mapping) else {}
        after = new.get(category) if isinstance(new.get(category), Mapping) else {}
        for bucket in sorted(set(before) | set(after)):
            if before.get(bucket) != after.get(bucket):
                changed.append(f"{category}.{bucket}")
    return changed


@dataclass(frozen=True)
class AuditEntry:
    user: str
    program: str
    action: str
    old_value: Any
    new_value: Any
    timestamp: datetime

    @property
    def changes(self) -> List[str]:
        return changed_buckets(self.old_value, self.new_value)

    def as_dict(self) -> dict:
        return {
            "user": self.user,
            "program": self.program,
            "action": self.action,
            "old": self.old_value,
            "new": self.new_value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, row: Mapping) -> "AuditEntry":
        return cls(
            user=str(row["user"]),
            program=str(row["program"]),
            action=str(row.get("action", "save")),
            old_value=row.get("old"),
            new_value=row.get("new"),
            timestamp=datetime.fromisoformat(row["timestamp"]),
        )


class AuditLog:
    """Bounded log of matrix saves and resets, oldest first."""

    def __init__(self, entries: Optional[Iterable[AuditEntry]] = None, limit: int = MAX_ENTRIES) -> None:
        self.limit = limit
        self.entries: List[AuditEntry] = list(entries or [])[-limit:]

    @classmethod
    def from_rows(cls, rows: Any, limit: int = MAX_ENTRIES) -> "AuditLog":
        """Rebuild a log from persisted rows, skipping any that are malformed."""
        entries = []
        for row in rows if isinstance(rows, list) else []:
            try:
                entries.append(AuditEntry.from_dict(row))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("skipping malformed audit row", extra={"context": {"error": str(e)}})
        return cls(entries, limit)

    def record(self, user: str, program: str, old_value: Any, new_value: Any, action: str = "save") -> AuditEntry:
        entry = AuditEntry(
            user=user,
            program=program,
            action=action,
            old_value=old_value,
            new_value=new_value,
            timestamp=datetime.now(timezone.utc),
        )
        self.entries.append(entry)
        del self.entries[: -self.limit]
        return entry

    def latest(self, n: int = 10) -> List[AuditEntry]:
        return list(reversed(self.entries[-n:]))

    def as_dict(self) -> List[dict]:
        return [e.as_dict() for e in self.entries]
