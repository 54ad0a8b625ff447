"""Forward a mutation's before/after snapshots to the audit sink."""

import structlog

from ordering.audit import get_audit_sink
from ordering.audit.port import AuditAction, AuditEntry
from ordering.order.results import MutationResult

logger = structlog.get_logger(__name__)


def record_mutation(user_id: str, result: MutationResult, metadata: dict | None = None) -> None:
    """Record ``result`` as CREATE, UPDATE or DELETE depending on its snapshots.

    The mutation has already committed, so a failing sink is logged and
    otherwise ignored.
    """
    if result.before is None:
        action = AuditAction.CREATE
    elif result.after is None:
        action = AuditAction.DELETE
    else:
        action = AuditAction.UPDATE

    entry = AuditEntry(
        user=str(user_id),
        action=action.value,
        entity="Order",
        entity_id=str(result.order_id),
        before=result.before,
        after=result.after,
        metadata=metadata or {},
    )
    try:
        get_audit_sink().record(entry)
    except Exception:
        logger.exception("Audit sink failed", entity_id=entry.entity_id, action=entry.action)
