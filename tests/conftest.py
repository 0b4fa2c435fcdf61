# tests/conftest.py
import asyncio
from typing import Any, Callable, List, Optional, Tuple

import httpx
import pytest

from catalog_api.database import SEED_PRODUCTS, seed_products, _LOCKS
from catalog_sdk.cache import ProductCache
from catalog_sdk.filters import apply_filters
from catalog_sdk.models import Product, ProductDraft
from catalog_sdk.pending import PendingOperationLog
from catalog_sdk.storage import MemoryStorage


def as_draft(draft) -> ProductDraft:
    if isinstance(draft, ProductDraft):
        draft = draft.model_dump()
    return ProductDraft.model_validate(draft)


class FakeBackend:
    """
    Stands in for CatalogClient. Records every call in order and yields to the
    event loop inside each one, like a real network round trip.
    """

    def __init__(self, products=None, fail_on: Optional[Callable[[str, Any], bool]] = None, healthy=True):
        self.products: List[Product] = list(products or [])
        self.calls: List[Tuple[str, Any]] = []
        self.fail_on = fail_on or (lambda method, payload: False)
        self.healthy = healthy
        self.health_calls = 0
        self.next_id = 1000

    async def _call(self, method: str, payload: Any):
        self.calls.append((method, payload))
        await asyncio.sleep(0)
        if self.fail_on(method, payload):
            raise httpx.ConnectError("backend unreachable")

    async def health(self) -> bool:
        self.health_calls += 1
        await asyncio.sleep(0)
        if isinstance(self.healthy, Exception):
            raise self.healthy
        return self.healthy

    async def list_products(self, filters=None):
        await self._call("GET", filters)
        return apply_filters(self.products, filters)

    async def get_product(self, product_id):
        await self._call("GET", product_id)
        for p in self.products:
            if p.id == product_id:
                return p
        raise httpx.HTTPStatusError(
            "not found",
            request=httpx.Request("GET", f"http://test/api/products/{product_id}"),
            response=httpx.Response(404),
        )

    async def create_product(self, draft):
        draft = as_draft(draft)
        await self._call("POST", draft)
        self.next_id += 1
        created = Product(id=self.next_id, **draft.model_dump())
        self.products.append(created)
        return created

    async def update_product(self, product_id, draft):
        draft = as_draft(draft)
        await self._call("PUT", (product_id, draft))
        updated = Product(id=product_id, **draft.model_dump())
        self.products = [updated if p.id == product_id else p for p in self.products]
        return updated

    async def delete_product(self, product_id):
        await self._call("DELETE", product_id)
        self.products = [p for p in self.products if p.id != product_id]


class StaticMonitor:
    def __init__(self, offline: bool = False):
        self.is_offline = offline


@pytest.fixture
def fixture_products() -> List[Product]:
    return [Product.model_validate(p) for p in SEED_PRODUCTS]


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cache(storage):
    return ProductCache(storage)


@pytest.fixture
def pending(storage):
    return PendingOperationLog(storage)


@pytest.fixture
def backend_state():
    seed_products()
    _LOCKS.clear()
    yield
    seed_products()
    _LOCKS.clear()


def valid_draft(**overrides) -> dict:
    draft = {
        "name": "Trail Runner X",
        "price": 129.0,
        "image": "https://example.com/trail.jpg",
        "description": "Grippy trail running shoe",
        "category": "Shoes",
    }
    draft.update(overrides)
    return draft
