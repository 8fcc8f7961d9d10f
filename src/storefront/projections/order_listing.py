"""Order aggregator: orders joined with their items, for customers and admins.

Customers see their own orders by email. Listing every order and changing a
status require the matching admin capability, checked once here at the
boundary against the user passed in.
"""

from dataclasses import dataclass, field

import structlog

from storefront.checkout.records import OrderRecords
from storefront.identity.access import Capability, require
from storefront.order.status import parse_status

logger = structlog.get_logger(__name__)

ALL_STATUSES = "all"


@dataclass
class OrderWithItems:
    order: object
    items: list = field(default_factory=list)

    @property
    def order_id(self) -> str:
        return str(self.order.id)

    @property
    def status(self) -> str:
        return self.order.status

    @property
    def total_amount(self) -> float:
        return self.order.total_amount

    @property
    def created_at(self):
        return self.order.created_at


class OrderAggregator:
    def __init__(self, records: OrderRecords | None = None):
        self.records = records or OrderRecords()

    def list_for_customer(self, email) -> list[OrderWithItems]:
        """Orders placed under ``email``, newest first."""
        orders = self.records.list_orders(customer_email=email)
        return self._with_items(orders)

    def list_all(self, user, status_filter: str = ALL_STATUSES) -> list[OrderWithItems]:
        """Every order, newest first, optionally narrowed to one status. Admin only."""
        require(user, Capability.VIEW_ALL_ORDERS)

        if status_filter and status_filter != ALL_STATUSES:
            orders = self.records.list_orders(status=parse_status(status_filter).value)
        else:
            orders = self.records.list_orders()
        return self._with_items(orders)

    def update_status(self, user, order_id, new_status):
        """Apply a status transition on behalf of an admin and return the updated order."""
        require(user, Capability.UPDATE_ORDER_STATUS)

        order = self.records.update_status(order_id, parse_status(new_status).value)
        logger.info(
            "Order status updated",
            order_id=str(order_id),
            status=order.status,
            changed_by=user.email,
        )
        return order

    def _with_items(self, orders) -> list[OrderWithItems]:
        return [OrderWithItems(order=order, items=self.records.items_for(order.id)) for order in orders]
