"""In-memory cart storage: one process, shared by every store built on it."""

from storefront.cart.storage import CartStorage


class InMemoryCartStorage(CartStorage):
    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes += 1

    def delete(self, key: str) -> None:
        self.values.pop(key, None)
        self.writes += 1
