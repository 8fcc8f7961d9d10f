"""Order aggregate: a submitted purchase with delivery details and a frozen total.

An Order is created once, by checkout, and afterwards only its status moves.
``total_amount`` is the cart total at checkout time and is never recomputed.
Line items live in the separate OrderItem aggregate and reference the order by
id, so an order can exist with fewer items than it was priced for when a
checkout was interrupted.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.status import TERMINAL_STATES, OrderStatus, assert_can_transition, parse_status


@storefront.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=50)
    delivery_address = Text(required=True)
    notes = Text()
    total_amount = Float(required=True, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    checkout_key = String(max_length=64)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer, total_amount, checkout_key=None, placed_at=None):
        """Create a pending order for ``customer`` (a CustomerInfo-like record)."""
        now = placed_at or datetime.now(UTC)
        order = cls(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            delivery_address=customer.address,
            notes=customer.notes,
            total_amount=round(total_amount, 2),
            status=OrderStatus.PENDING.value,
            checkout_key=checkout_key,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_email=order.customer_email,
                total_amount=order.total_amount,
                checkout_key=checkout_key,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def transition_to(self, new_status) -> bool:
        """Move the order to ``new_status``. Returns False when it already has it."""
        target = parse_status(new_status)
        current = OrderStatus(self.status)
        if target == current:
            return False

        assert_can_transition(current, target)

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True

    @property
    def is_terminal(self) -> bool:
        return OrderStatus(self.status) in TERMINAL_STATES
