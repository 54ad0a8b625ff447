"""In-memory audit sink for tests."""

from ordering.audit.port import AuditEntry, AuditSinkPort


class InMemoryAuditSink(AuditSinkPort):
    def __init__(self):
        self.entries: list[AuditEntry] = []

    def record(self, entry: AuditEntry) -> None:
        self.entries.append(entry)

    def for_entity(self, entity_id: str) -> list[AuditEntry]:
        return [entry for entry in self.entries if entry.entity_id == str(entity_id)]

    def reset(self):
        self.entries.clear()
