"""View models behind the admin dashboard and the customer's order history.

Both load through the order aggregator. A failed load leaves an empty list
and a ``load_error`` instead of raising; an access-denied result is raised as
AuthorizationError so the caller can render the denial.
"""

import structlog
from protean.exceptions import ValidationError

from storefront.exceptions import PersistenceError
from storefront.order.status import assert_can_transition, parse_status
from storefront.projections.order_listing import ALL_STATUSES, OrderAggregator, OrderWithItems
from storefront.projections.order_stats import OrderStats, compute_order_stats

logger = structlog.get_logger(__name__)


class OrderBoard:
    """Admin dashboard: every order, a status filter and live statistics."""

    def __init__(self, aggregator: OrderAggregator, user):
        self.aggregator = aggregator
        self.user = user
        self.orders: list[OrderWithItems] = []
        self.load_error: str | None = None

    def refresh(self) -> list[OrderWithItems]:
        try:
            self.orders = self.aggregator.list_all(self.user)
            self.load_error = None
        except PersistenceError as exc:
            logger.error("Failed to load orders", error=str(exc))
            self.orders = []
            self.load_error = str(exc)
        return self.orders

    def visible_orders(self, status_filter: str = ALL_STATUSES) -> list[OrderWithItems]:
        if not status_filter or status_filter == ALL_STATUSES:
            return list(self.orders)
        wanted = parse_status(status_filter).value
        return [view for view in self.orders if view.status == wanted]

    @property
    def stats(self) -> OrderStats:
        return compute_order_stats(self.orders)

    def change_status(self, order_id, new_status) -> OrderWithItems:
        """Show ``new_status`` immediately, then persist it; revert if persisting fails."""
        view = next((v for v in self.orders if v.order_id == str(order_id)), None)
        if view is None:
            raise ValidationError({"order_id": [f"Order {order_id} is not on the board"]})

        previous = view.order.status
        target = parse_status(new_status).value
        assert_can_transition(previous, target)

        view.order.status = target
        try:
            view.order = self.aggregator.update_status(self.user, order_id, target)
        except Exception:
            view.order.status = previous
            raise
        return view


class CustomerOrderHistory:
    """The signed-in customer's own orders."""

    def __init__(self, aggregator: OrderAggregator, user):
        self.aggregator = aggregator
        self.user = user
        self.orders: list[OrderWithItems] = []
        self.load_error: str | None = None

    def refresh(self) -> list[OrderWithItems]:
        try:
            self.orders = self.aggregator.list_for_customer(self.user.email)
            self.load_error = None
        except PersistenceError as exc:
            logger.error("Failed to load customer orders", error=str(exc))
            self.orders = []
            self.load_error = str(exc)
        return self.orders
