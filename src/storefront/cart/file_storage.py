"""File-backed cart storage: one JSON document per key under a directory.

Writes go to a temporary sibling first and are moved into place, so a reader
never observes a half-written snapshot.
"""

import os
from pathlib import Path

from storefront.cart.storage import CartStorage

CART_DIR_ENV = "STOREFRONT_CART_DIR"


class JsonFileCartStorage(CartStorage):
    def __init__(self, directory: str | os.PathLike | None = None):
        self.directory = Path(directory or os.getenv(CART_DIR_ENV, ".storefront"))
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
