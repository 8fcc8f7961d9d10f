"""Storefront bounded context: cart, checkout and the order lifecycle.

Customers fill a locally persisted cart and check it out into an Order plus
its OrderItems; administrators advance orders through the delivery lifecycle.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
