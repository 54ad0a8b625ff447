"""Per-order locks serialising read-modify-write on a single order.

Orders are independent units of concurrency; there is no cross-order lock.
A lock that cannot be acquired within the timeout surfaces as ``Conflict``.

The locks guard callers running on different threads, such as the
protean Engine next to a threaded server. The async routes run
each mutation on the event loop with no ``await`` inside the locked block,
so requests handled there never contend for a lock.

A registry entry lives only while some caller holds or waits for it, so
order ids that were never found leave nothing behind.
"""

import os
import threading
from contextlib import contextmanager

from ordering.errors import Conflict

LOCK_TIMEOUT_SECONDS = float(os.getenv("ORDER_LOCK_TIMEOUT_SECONDS", "5.0"))


class _OrderLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


_registry_guard = threading.Lock()
_order_locks: dict[str, _OrderLock] = {}


def _checkout(order_id: str) -> _OrderLock:
    with _registry_guard:
        entry = _order_locks.get(order_id)
        if entry is None:
            entry = _order_locks[order_id] = _OrderLock()
        entry.users += 1
        return entry


def _checkin(order_id: str, entry: _OrderLock) -> None:
    with _registry_guard:
        entry.users -= 1
        if entry.users == 0:
            _order_locks.pop(order_id, None)


@contextmanager
def order_lock(order_id, timeout: float | None = None):
    """Hold the lock for ``order_id`` for the duration of the block."""
    key = str(order_id)
    entry = _checkout(key)
    try:
        if not entry.lock.acquire(timeout=LOCK_TIMEOUT_SECONDS if timeout is None else timeout):
            raise Conflict(f"Order {order_id} is being modified by another request, please retry")
        try:
            yield
        finally:
            entry.lock.release()
    finally:
        _checkin(key, entry)


def registered_orders() -> int:
    """Number of orders that currently have a lock entry."""
    with _registry_guard:
        return len(_order_locks)
