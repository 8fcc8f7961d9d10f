"""Cart store: the single source of truth for pre-checkout cart contents.

The cart lives in a local key-value store under a fixed key, not in memory:
independent surfaces (catalogue page, header badge, cart page) each build a
store over the same storage and channel, and every read goes back to storage.
Each mutation writes the full snapshot immediately and then notifies the
channel. Concurrent writers are last-write-wins at snapshot granularity.
"""

import json

import structlog
from protean.exceptions import ValidationError

from storefront.cart.channel import CartChannel
from storefront.cart.entry import CartEntry
from storefront.cart.storage import CartStorage

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


class CartStore:
    def __init__(self, storage: CartStorage, channel: CartChannel | None = None, key: str = CART_KEY):
        self.storage = storage
        self.channel = channel or CartChannel()
        self.key = key

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def load(self) -> list[CartEntry]:
        """Read the persisted cart. Absent or malformed content is an empty cart."""
        raw = self.storage.read(self.key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding unparseable cart", key=self.key)
            return []

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.warning("Discarding malformed cart", key=self.key)
            return []

        try:
            entries = [CartEntry(**item) for item in data]
        except (ValidationError, TypeError, ValueError) as exc:
            logger.warning("Discarding cart with invalid entries", key=self.key, error=str(exc))
            return []

        return _deduplicate(entries)

    def total(self) -> float:
        return sum(entry.line_total for entry in self.load())

    def count(self) -> int:
        """Number of units in the cart, as shown on the header badge."""
        return sum(entry.quantity for entry in self.load())

    def quantity_of(self, product_id) -> int:
        entry = _find(self.load(), product_id)
        return entry.quantity if entry else 0

    def is_empty(self) -> bool:
        return not self.load()

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product, quantity: int = 1) -> CartEntry:
        """Add ``quantity`` units of ``product``, merging with an existing entry."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not getattr(product, "active", True):
            raise ValidationError({"product": ["Inactive products cannot be added to the cart"]})

        entries = self.load()
        existing = _find(entries, product.id)
        if existing:
            entry = existing.with_quantity(existing.quantity + quantity)
            entries = [entry if e.product_id == existing.product_id else e for e in entries]
        else:
            entry = CartEntry.from_product(product, quantity)
            entries.append(entry)

        self._save(entries)
        logger.debug("Added to cart", product_id=entry.product_id, quantity=entry.quantity)
        return entry

    def set_quantity(self, product_id, quantity: int) -> None:
        """Set the quantity of a cart entry; zero or less removes it."""
        if quantity <= 0:
            self.remove(product_id)
            return

        entries = self.load()
        existing = _find(entries, product_id)
        if existing is None:
            logger.debug("Quantity update for product not in cart", product_id=str(product_id))
            return

        updated = existing.with_quantity(quantity)
        self._save([updated if e.product_id == existing.product_id else e for e in entries])
        logger.debug("Cart quantity updated", product_id=existing.product_id, quantity=quantity)

    def remove(self, product_id) -> None:
        entries = self.load()
        self._save([e for e in entries if e.product_id != str(product_id)])
        logger.debug("Removed from cart", product_id=str(product_id))

    def restore(self, entries) -> None:
        """Replace the whole cart with ``entries``, folding repeated product ids together."""
        self._save(_deduplicate(list(entries)))

    def clear(self) -> None:
        self.storage.delete(self.key)
        self.channel.publish()
        logger.debug("Cart cleared", key=self.key)

    def _save(self, entries: list[CartEntry]) -> None:
        self.storage.write(self.key, json.dumps([entry.to_dict() for entry in entries]))
        self.channel.publish()


def _find(entries, product_id):
    return next((e for e in entries if e.product_id == str(product_id)), None)


def _deduplicate(entries):
    """Fold repeated product ids (e.g. from a hand-edited store) into one entry."""
    merged: dict[str, CartEntry] = {}
    for entry in entries:
        if entry.product_id in merged:
            previous = merged[entry.product_id]
            merged[entry.product_id] = previous.with_quantity(previous.quantity + entry.quantity)
        else:
            merged[entry.product_id] = entry
    return list(merged.values())
