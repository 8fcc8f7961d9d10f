"""Domain events for the Order and OrderItem aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checkout created a new order in the pending state."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_email = String(required=True)
    total_amount = Float(required=True)
    checkout_key = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved an order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="OrderItem")
class OrderItemRecorded:
    """A cart line was written as an order item."""

    __version__ = 1

    order_item_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_id = String(required=True)
    quantity = Integer(required=True)
    total_price = Float(required=True)
