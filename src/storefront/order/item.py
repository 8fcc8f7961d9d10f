"""OrderItem aggregate: one line of an order, written per cart entry at checkout."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront
from storefront.order.events import OrderItemRecorded


@storefront.aggregate
class OrderItem:
    order_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    created_at = DateTime()

    @invariant.post
    def total_price_is_unit_price_times_quantity(self):
        if round(self.unit_price * self.quantity, 2) != round(self.total_price, 2):
            raise ValidationError({"total_price": ["Total price must equal unit price times quantity"]})

    @classmethod
    def record(cls, order_id, product_id, product_name, quantity, unit_price):
        item = cls(
            order_id=order_id,
            product_id=str(product_id),
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
            total_price=round(unit_price * quantity, 2),
            created_at=datetime.now(UTC),
        )
        item.raise_(
            OrderItemRecorded(
                order_item_id=str(item.id),
                order_id=str(order_id),
                product_id=str(product_id),
                quantity=quantity,
                total_price=item.total_price,
            )
        )
        return item
