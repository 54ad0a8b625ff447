"""Audit sink that writes entries to the structured log."""

import structlog

from ordering.audit.port import AuditEntry, AuditSinkPort

logger = structlog.get_logger("ordering.audit")


class LogAuditSink(AuditSinkPort):
    def record(self, entry: AuditEntry) -> None:
        logger.info(
            "Audit",
            user=entry.user,
            action=entry.action,
            entity=entry.entity,
            entity_id=entry.entity_id,
            before=entry.before,
            after=entry.after,
            metadata=entry.metadata,
        )
