"""Identity provider port and adapters."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from urllib.parse import unquote

from storefront.exceptions import AuthorizationError
from storefront.identity.user import CurrentUser, Role


class IdentityProvider(ABC):
    @abstractmethod
    def current_user(self) -> CurrentUser:
        """Return the authenticated user, or raise AuthorizationError if there is none."""
        ...


class StaticIdentityProvider(IdentityProvider):
    """Provider with a fixed user; ``None`` models an anonymous visitor."""

    def __init__(self, user: CurrentUser | None = None):
        self.user = user

    def current_user(self) -> CurrentUser:
        if self.user is None:
            raise AuthorizationError("Not authenticated")
        return self.user


class HeaderIdentityProvider(IdentityProvider):
    """Reads the identity a fronting gateway has already authenticated.

    Header values are ASCII, so the display name arrives percent-encoded
    (``Jo%C3%A3o``) and is decoded here.
    """

    EMAIL_HEADER = "x-user-email"
    NAME_HEADER = "x-user-name"
    ROLE_HEADER = "x-user-role"

    def __init__(self, headers: Mapping[str, str]):
        self.headers = {key.lower(): value for key, value in headers.items()}

    def current_user(self) -> CurrentUser:
        email = (self.headers.get(self.EMAIL_HEADER) or "").strip()
        if not email:
            raise AuthorizationError("Not authenticated")
        name = self.headers.get(self.NAME_HEADER)
        return CurrentUser(
            email=email,
            full_name=unquote(name) if name else None,
            role=self.headers.get(self.ROLE_HEADER) or Role.CUSTOMER.value,
        )
