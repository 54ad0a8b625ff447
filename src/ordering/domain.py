"""Ordering bounded context: multi-vendor checkout and order fulfilment.

Turns a buyer's checkout into one Order with a SubOrder per seller,
reserves listing stock all-or-nothing, and tracks fulfilment through the
item → sub-order → order status hierarchy.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
