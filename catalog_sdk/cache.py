# catalog_sdk/cache.py
import logging
from typing import Iterable, List

from pydantic import ValidationError as ModelError

from .models import Product

logger = logging.getLogger(__name__)

CACHE_KEY = "products_cache"


class ProductCache:
    """
    Last known product list, as displayed to the user.

    Writes replace the whole collection, so callers read-modify-write.
    There is no lock: all callers run on one event loop and never await
    between the read and the write.
    """

    def __init__(self, storage, key: str = CACHE_KEY):
        self._storage = storage
        self._key = key

    def read(self) -> List[Product]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed product cache (%s)", type(raw).__name__)
            return []
        try:
            return [Product.model_validate(p) for p in raw]
        except ModelError as e:
            logger.warning("Ignoring malformed product cache: %s", e)
            return []

    def write(self, products: Iterable[Product]) -> None:
        self._storage.set(self._key, [p.model_dump() for p in products])

    def upsert(self, product: Product) -> None:
        products = self.read()
        for i, existing in enumerate(products):
            if existing.id == product.id:
                products[i] = product
                break
        else:
            products.append(product)
        self.write(products)

    def remove(self, product_id: int) -> List[Product]:
        """Drop every record with this id; returns the removed records."""
        products = self.read()
        kept = [p for p in products if p.id != product_id]
        removed = [p for p in products if p.id == product_id]
        if removed:
            self.write(kept)
        return removed

    def find(self, product_id: int):
        for p in self.read():
            if p.id == product_id:
                return p
        return None
