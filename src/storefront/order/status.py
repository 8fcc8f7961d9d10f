"""Order status machine.

States:
    PENDING → CONFIRMED → PREPARING → OUT_FOR_DELIVERY → DELIVERED
    CANCELLED (from any non-terminal state)

DELIVERED and CANCELLED are terminal. Between non-terminal states any jump is
allowed, including out of sequence: administrators may skip or step back
through the delivery stages, but a terminal state is never left.
"""

from enum import Enum

from protean.exceptions import ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# Statuses still moving through the delivery pipeline
OPEN_STATES = frozenset(set(OrderStatus) - TERMINAL_STATES)

STATUS_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.CONFIRMED: "Confirmed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELLED: "Cancelled",
}

# Status values written by the first storefront release
_LEGACY_ALIASES = {
    "pendente": OrderStatus.PENDING,
    "confirmado": OrderStatus.CONFIRMED,
    "em_preparacao": OrderStatus.PREPARING,
    "saiu_para_entrega": OrderStatus.OUT_FOR_DELIVERY,
    "entregue": OrderStatus.DELIVERED,
    "cancelado": OrderStatus.CANCELLED,
}


def parse_status(value) -> OrderStatus:
    """Resolve a status value, enum member or legacy alias to an OrderStatus."""
    if isinstance(value, OrderStatus):
        return value
    normalized = str(value or "").strip().lower()
    if normalized in _LEGACY_ALIASES:
        return _LEGACY_ALIASES[normalized]
    try:
        return OrderStatus(normalized)
    except ValueError:
        raise ValidationError(
            {"status": [f"Unknown order status {value!r}. Expected one of: {', '.join(s.value for s in OrderStatus)}"]}
        ) from None


def is_terminal(status) -> bool:
    return parse_status(status) in TERMINAL_STATES


def can_transition(current, target) -> bool:
    current, target = parse_status(current), parse_status(target)
    return current == target or current not in TERMINAL_STATES


def assert_can_transition(current, target) -> None:
    current, target = parse_status(current), parse_status(target)
    if not can_transition(current, target):
        raise ValidationError(
            {"status": [f"Cannot transition from {current.value} to {target.value}: {current.value} is final"]}
        )


def label_for(status) -> str:
    return STATUS_LABELS[parse_status(status)]
