"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the internal Protean commands
and value objects.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    category: str | None = None
    price: float
    unit: str | None = None
    stock: int | None = None
    image_ref: str | None = None


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CartEntrySchema(BaseModel):
    product_id: str
    name: str
    unit_price: float = Field(ge=0)
    unit: str | None = None
    image_ref: str | None = None
    quantity: int = Field(ge=1)


class CustomerSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class CheckoutRequest(BaseModel):
    items: list[CartEntrySchema]
    customer: CustomerSchema = Field(default_factory=CustomerSchema)
    checkout_key: str | None = Field(default=None, max_length=64)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "prod-001",
                            "name": "Água Mineral 500ml",
                            "unit_price": 10.0,
                            "unit": "un",
                            "quantity": 2,
                        }
                    ],
                    "customer": {
                        "name": "Maria Silva",
                        "email": "maria@example.com",
                        "phone": "+55 11 99999-0000",
                        "address": "Rua das Flores, 123",
                        "notes": "Ring twice",
                    },
                    "checkout_key": "3f2b9c0e4a5d4c8e9b1a2c3d4e5f6a7b",
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    order_id: str
    checkout_key: str | None = None
    total_amount: float
    status: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


class OrderResponse(BaseModel):
    order_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    notes: str | None = None
    total_amount: float
    status: str
    status_label: str
    created_at: datetime | None = None
    items: list[OrderItemResponse] = Field(default_factory=list)


class StatusUpdateRequest(BaseModel):
    status: str


class OrderStatsResponse(BaseModel):
    total_orders: int
    open_orders: int
    delivered_orders: int
    cancelled_orders: int
    revenue: float
    by_status: dict[str, int]
