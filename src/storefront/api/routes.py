"""FastAPI routes for the storefront: catalogue, checkout and orders."""

from fastapi import APIRouter, HTTPException, Request

from storefront.api.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    OrderItemResponse,
    OrderResponse,
    OrderStatsResponse,
    ProductResponse,
    StatusUpdateRequest,
)
from storefront.cart.entry import CartEntry
from storefront.cart.memory_storage import InMemoryCartStorage
from storefront.cart.store import CartStore
from storefront.catalogue.gateway import ALL_CATEGORIES, CatalogueGateway, ProductFilter
from storefront.checkout.coordinator import CheckoutCoordinator
from storefront.checkout.customer import CustomerInfo
from storefront.exceptions import AuthorizationError
from storefront.identity.provider import HeaderIdentityProvider
from storefront.order.status import label_for
from storefront.projections.order_listing import ALL_STATUSES, OrderAggregator, OrderWithItems
from storefront.projections.order_stats import compute_order_stats


def _current_user(request: Request):
    try:
        return HeaderIdentityProvider(request.headers).current_user()
    except AuthorizationError as exc:
        raise HTTPException(status_code=401, detail=exc.reason) from exc


def _optional_user(request: Request):
    try:
        return HeaderIdentityProvider(request.headers).current_user()
    except AuthorizationError:
        return None


def _order_response(view) -> OrderResponse:
    order = view.order
    return OrderResponse(
        order_id=str(order.id),
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        notes=order.notes,
        total_amount=order.total_amount,
        status=order.status,
        status_label=label_for(order.status),
        created_at=order.created_at,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in view.items
        ],
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products(search: str | None = None, category: str = ALL_CATEGORIES, sort: str = "name"):
    products = CatalogueGateway().list(ProductFilter(search=search, category=category), sort_key=sort)
    return [
        ProductResponse(
            product_id=str(p.id),
            name=p.name,
            description=p.description,
            category=p.category,
            price=p.price,
            unit=p.unit,
            stock=p.stock,
            image_ref=p.image_ref,
        )
        for p in products
    ]


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, request: Request) -> CheckoutResponse:
    """Check out the cart the client holds.

    The request's items are loaded into a request-scoped cart store, so the
    same validation and item-by-item writes apply as for a local cart.
    """
    cart = CartStore(InMemoryCartStorage())
    cart.restore(CartEntry(**item.model_dump()) for item in body.items)

    user = _optional_user(request)
    details = body.customer.model_dump(exclude_none=True)
    customer = CustomerInfo.prefilled_from(user, **details) if user else CustomerInfo(**details)

    order = CheckoutCoordinator().submit(cart, customer, checkout_key=body.checkout_key)
    return CheckoutResponse(
        order_id=str(order.id),
        checkout_key=order.checkout_key,
        total_amount=order.total_amount,
        status=order.status,
    )


# ---------------------------------------------------------------------------
# Order Router (customer)
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def my_orders(request: Request):
    user = _current_user(request)
    return [_order_response(view) for view in OrderAggregator().list_for_customer(user.email)]


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.get("", response_model=list[OrderResponse])
async def list_all_orders(request: Request, status: str = ALL_STATUSES):
    user = _current_user(request)
    return [_order_response(view) for view in OrderAggregator().list_all(user, status_filter=status)]


@admin_router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(request: Request) -> OrderStatsResponse:
    user = _current_user(request)
    stats = compute_order_stats(OrderAggregator().list_all(user))
    return OrderStatsResponse(
        total_orders=stats.total_orders,
        open_orders=stats.open_orders,
        delivered_orders=stats.delivered_orders,
        cancelled_orders=stats.cancelled_orders,
        revenue=stats.revenue,
        by_status=stats.by_status,
    )


@admin_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: StatusUpdateRequest, request: Request) -> OrderResponse:
    user = _current_user(request)
    aggregator = OrderAggregator()
    order = aggregator.update_status(user, order_id, body.status)
    return _order_response(OrderWithItems(order=order, items=aggregator.records.items_for(order.id)))
