"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
across users. State keeps the ids returned by the API so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class BuyerState:
    """Tracks a single simulated buyer's checkout."""

    buyer_id: str | None = None
    headers: dict = field(default_factory=dict)
    order_id: str | None = None
    sub_order_ids: list[str] = field(default_factory=list)
    current_status: str = "pending"


@dataclass
class SellerState:
    """Tracks the sub-orders a simulated seller is working through."""

    seller_id: str | None = None
    headers: dict = field(default_factory=dict)
    # (order_id, sub_order_id, item_id) still waiting for the next status
    open_items: list[tuple[str, str, str]] = field(default_factory=list)
    delivered_count: int = 0
