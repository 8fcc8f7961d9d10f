"""Checkout coordinator: converts the cart into an Order plus its OrderItems.

Flow:
    1. Validate the cart and customer details (no writes on failure)
    2. Create the Order in the pending state with the frozen cart total
    3. Write one OrderItem per cart entry, in cart order, each independently
    4. Clear the cart and return the Order

Steps 2 and 3 are separate writes and are not rolled back when a later one
fails: the error reaches the caller and the cart is left intact for a retry.
Every attempt carries a checkout key. Retrying with the same key resumes the
order it already created and only writes the items that are still missing;
a retry under a fresh key creates a second order.
"""

from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from storefront.cart.store import CartStore
from storefront.checkout.customer import CustomerInfo
from storefront.checkout.records import OrderRecords
from storefront.exceptions import PersistenceError
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


class CheckoutCoordinator:
    def __init__(self, records: OrderRecords | None = None):
        self.records = records or OrderRecords()

    def submit(self, cart: CartStore, customer_info: CustomerInfo, checkout_key: str | None = None) -> Order:
        entries = cart.load()
        _validate(entries, customer_info)

        checkout_key = checkout_key or uuid4().hex
        total_amount = round(sum(entry.line_total for entry in entries), 2)
        log = logger.bind(checkout_key=checkout_key, customer_email=customer_info.email)

        order = self.records.find_by_checkout_key(checkout_key)
        if order is None:
            log.info("Checkout started", item_count=len(entries), total_amount=total_amount)
            order = self.records.create_order(customer_info, total_amount, checkout_key)
            recorded = set()
        else:
            if round(order.total_amount, 2) != total_amount:
                raise ValidationError({"checkout_key": ["Checkout key already used for a different cart"]})
            recorded = {item.product_id for item in self.records.items_for(order.id)}
            log.info("Resuming checkout", order_id=str(order.id), items_already_recorded=len(recorded))

        written = 0
        for entry in entries:
            if entry.product_id in recorded:
                continue
            try:
                self.records.create_item(order.id, entry)
            except PersistenceError:
                log.error(
                    "Checkout interrupted",
                    order_id=str(order.id),
                    product_id=entry.product_id,
                    items_written=len(recorded) + written,
                    items_expected=len(entries),
                )
                raise
            written += 1

        cart.clear()
        log.info("Checkout complete", order_id=str(order.id), items_written=written)
        return order


def _validate(entries, customer_info):
    errors = {}
    if not entries:
        errors["cart"] = ["Cannot check out an empty cart"]
    for field in customer_info.missing_fields():
        errors[field] = [f"{field.capitalize()} is required"]
    if errors:
        raise ValidationError(errors)
