"""Audit sink registry: where before/after snapshots of mutations end up."""

import os

_sink_instance = None


def get_audit_sink():
    """Return the configured audit sink (singleton).

    Logs entries through structlog by default. Set AUDIT_SINK=memory to keep
    them in memory instead.
    """
    global _sink_instance
    if _sink_instance is None:
        sink = os.environ.get("AUDIT_SINK", "log")
        if sink == "log":
            from ordering.audit.log_sink import LogAuditSink

            _sink_instance = LogAuditSink()
        elif sink == "memory":
            from ordering.audit.memory_sink import InMemoryAuditSink

            _sink_instance = InMemoryAuditSink()
        else:
            raise ValueError(f"Unknown audit sink: {sink}")
    return _sink_instance


def set_audit_sink(sink):
    global _sink_instance
    _sink_instance = sink


def reset_audit_sink():
    """Reset the audit sink singleton (useful for testing)."""
    global _sink_instance
    _sink_instance = None
