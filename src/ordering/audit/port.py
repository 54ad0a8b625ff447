"""Audit sink port and the entry it receives."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class AuditAction(Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class AuditEntry:
    user: str
    action: str
    entity: str
    entity_id: str
    before: dict | None
    after: dict | None
    metadata: dict = field(default_factory=dict)
    recorded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class AuditSinkPort(ABC):
    @abstractmethod
    def record(self, entry: AuditEntry) -> None:
        """Persist or forward one audit entry."""
        ...
