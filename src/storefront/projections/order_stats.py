"""Order statistics: derived on demand from an order collection, never stored."""

from collections import Counter
from dataclasses import dataclass, field

from storefront.order.status import OPEN_STATES, OrderStatus


@dataclass(frozen=True)
class OrderStats:
    total_orders: int = 0
    open_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0
    revenue: float = 0.0
    by_status: dict[str, int] = field(default_factory=dict)


def compute_order_stats(orders) -> OrderStats:
    """Counts per status plus revenue, which only counts delivered orders.

    Accepts Order records or OrderWithItems views.
    """
    orders = [getattr(o, "order", o) for o in orders]
    counts = Counter(o.status for o in orders)
    delivered = [o for o in orders if o.status == OrderStatus.DELIVERED.value]

    return OrderStats(
        total_orders=len(orders),
        open_orders=sum(counts[s.value] for s in OPEN_STATES),
        delivered_orders=len(delivered),
        cancelled_orders=counts[OrderStatus.CANCELLED.value],
        revenue=round(sum(o.total_amount or 0.0 for o in delivered), 2),
        by_status={s.value: counts[s.value] for s in OrderStatus},
    )
