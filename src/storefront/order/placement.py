"""Order placement: commands and handlers that write an order and its items.

Each command runs in its own unit of work, so the order and every one of its
items are persisted independently. Only the checkout coordinator issues them.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.checkout.customer import CustomerInfo
from storefront.domain import storefront
from storefront.order.item import OrderItem
from storefront.order.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)
    customer_phone = String(required=True, max_length=50)
    delivery_address = Text(required=True)
    notes = Text()
    total_amount = Float(required=True, min_value=0.0)
    checkout_key = String(max_length=64)


@storefront.command(part_of="OrderItem")
class RecordOrderItem:
    order_id = Identifier(required=True)
    product_id = String(required=True, max_length=255)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        customer = CustomerInfo(
            name=command.customer_name,
            email=command.customer_email,
            phone=command.customer_phone,
            address=command.delivery_address,
            notes=command.notes,
        )
        order = Order.place(
            customer=customer,
            total_amount=command.total_amount,
            checkout_key=command.checkout_key,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)


@storefront.command_handler(part_of=OrderItem)
class RecordOrderItemHandler:
    @handle(RecordOrderItem)
    def record_order_item(self, command):
        # The parent order must already exist; raises ObjectNotFoundError otherwise
        current_domain.repository_for(Order).get(command.order_id)

        item = OrderItem.record(
            order_id=command.order_id,
            product_id=command.product_id,
            product_name=command.product_name,
            quantity=command.quantity,
            unit_price=command.unit_price,
        )
        current_domain.repository_for(OrderItem).add(item)
        return str(item.id)
