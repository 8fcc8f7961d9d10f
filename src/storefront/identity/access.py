"""Capability checks for order administration.

Role checks happen once, at the boundary of the component that needs them,
and yield an explicit decision instead of branching on ambient user state.
"""

from enum import Enum

import structlog
from protean.fields import Boolean, String

from storefront.domain import storefront
from storefront.exceptions import AuthorizationError

logger = structlog.get_logger(__name__)


class Capability(Enum):
    VIEW_ALL_ORDERS = "view_all_orders"
    UPDATE_ORDER_STATUS = "update_order_status"


_ADMIN_CAPABILITIES = {Capability.VIEW_ALL_ORDERS, Capability.UPDATE_ORDER_STATUS}


@storefront.value_object
class AccessDecision:
    capability = String(required=True, max_length=50)
    allowed = Boolean(default=False)
    reason = String(max_length=255)


def authorize(user, capability: Capability) -> AccessDecision:
    if user is None:
        return AccessDecision(capability=capability.value, allowed=False, reason="Not authenticated")
    if capability in _ADMIN_CAPABILITIES and not user.is_admin:
        return AccessDecision(
            capability=capability.value,
            allowed=False,
            reason="Access denied. Only administrators can access this area.",
        )
    return AccessDecision(capability=capability.value, allowed=True)


def require(user, capability: Capability) -> AccessDecision:
    """Authorize ``user`` for ``capability`` or raise AuthorizationError."""
    decision = authorize(user, capability)
    if not decision.allowed:
        logger.warning(
            "Access denied",
            capability=capability.value,
            user=user.email if user is not None else None,
        )
        raise AuthorizationError(decision.reason, capability=capability.value)
    return decision
