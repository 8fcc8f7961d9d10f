"""Header cart badge: a second surface observing the shared cart."""

from storefront.cart.store import CartStore


class CartBadge:
    """Keeps a unit count in step with the cart by re-reading on every notification."""

    def __init__(self, store: CartStore):
        self.store = store
        self.count = store.count()
        self._unsubscribe = store.channel.subscribe(self.refresh)

    def refresh(self) -> None:
        self.count = self.store.count()

    def close(self) -> None:
        self._unsubscribe()

    @property
    def visible(self) -> bool:
        return self.count > 0
