"""Order records: the persistence boundary for orders and their items.

Every call either fully succeeds or fails for its single record. Failures of
the underlying store surface as PersistenceError; domain rule violations
(ValidationError), missing records (ObjectNotFoundError) and programming errors
pass through unchanged.
"""

import structlog
from protean.exceptions import DatabaseError
from protean.utils.globals import current_domain

from storefront.exceptions import PersistenceError
from storefront.order.item import OrderItem
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder, RecordOrderItem
from storefront.order.status_update import UpdateOrderStatus

logger = structlog.get_logger(__name__)


class OrderRecords:
    def _call(self, operation, fn):
        try:
            return fn()
        except (DatabaseError, OSError) as exc:
            logger.error("Order records call failed", operation=operation, error=str(exc))
            raise PersistenceError(operation, str(exc)) from exc

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def create_order(self, customer, total_amount, checkout_key=None) -> Order:
        command = PlaceOrder(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            delivery_address=customer.address,
            notes=customer.notes,
            total_amount=total_amount,
            checkout_key=checkout_key,
        )
        order_id = self._call("create order", lambda: current_domain.process(command, asynchronous=False))
        return self.get_order(order_id)

    def create_item(self, order_id, entry) -> OrderItem:
        command = RecordOrderItem(
            order_id=str(order_id),
            product_id=entry.product_id,
            product_name=entry.name,
            quantity=entry.quantity,
            unit_price=entry.unit_price,
        )
        item_id = self._call("create order item", lambda: current_domain.process(command, asynchronous=False))
        return self._call("load order item", lambda: current_domain.repository_for(OrderItem).get(item_id))

    def update_status(self, order_id, status) -> Order:
        command = UpdateOrderStatus(order_id=str(order_id), status=str(status))
        self._call("update order status", lambda: current_domain.process(command, asynchronous=False))
        return self.get_order(order_id)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_order(self, order_id) -> Order:
        return self._call("load order", lambda: current_domain.repository_for(Order).get(str(order_id)))

    def find_by_checkout_key(self, checkout_key) -> Order | None:
        if not checkout_key:
            return None
        matches = self.list_orders(checkout_key=checkout_key)
        return matches[0] if matches else None

    def list_orders(self, **filters) -> list[Order]:
        """Orders matching ``filters`` (exact field matches), newest first."""

        def _query():
            query = current_domain.repository_for(Order)._dao.query
            if filters:
                query = query.filter(**filters)
            return query.order_by("-created_at").limit(None).all().items

        return self._call("list orders", _query)

    def items_for(self, order_id) -> list[OrderItem]:
        """Items of one order, in the order they were written."""

        def _query():
            query = current_domain.repository_for(OrderItem)._dao.query.filter(order_id=str(order_id))
            return query.order_by("created_at").limit(None).all().items

        return self._call("list order items", _query)
