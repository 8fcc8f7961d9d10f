"""CartEntry: one product line in the client-local cart."""

from protean.fields import Float, Integer, String

from storefront.domain import storefront


@storefront.value_object
class CartEntry:
    """A product snapshot taken when it was added, plus the chosen quantity.

    Name, price, unit and image are captured at add time and are never
    refreshed from the catalogue, so later price changes do not reach carts
    that already hold the product.
    """

    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    unit = String(max_length=50)
    image_ref = String(max_length=1024)
    quantity = Integer(required=True, min_value=1)

    @classmethod
    def from_product(cls, product, quantity):
        return cls(
            product_id=str(product.id),
            name=product.name,
            unit_price=product.price,
            unit=product.unit,
            image_ref=product.image_ref,
            quantity=quantity,
        )

    def with_quantity(self, quantity):
        return CartEntry(**{**self.to_dict(), "quantity": quantity})

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity
