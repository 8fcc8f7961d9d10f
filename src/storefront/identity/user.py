"""The authenticated user as the storefront sees it."""

from enum import Enum

from protean.fields import String

from storefront.domain import storefront


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@storefront.value_object
class CurrentUser:
    """Identity handed over by the identity provider.

    The storefront trusts this record as-is; authentication happens upstream.
    """

    email = String(required=True, max_length=254)
    full_name = String(max_length=255)
    role = String(max_length=50, default=Role.CUSTOMER.value)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
