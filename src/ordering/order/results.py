"""Return value of every mutating order operation."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MutationResult:
    """What a mutation produced, plus the before/after snapshots for audit.

    ``order`` is None after a delete; ``before`` is None after a create.
    """

    order: Any
    before: dict | None
    after: dict | None
    order_id: str | None = None
