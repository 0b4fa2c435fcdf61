# catalog_sdk/api.py
import logging
from typing import Optional, List, Dict, Any, Union

import httpx

from .models import Product, ProductDraft, ProductFilters

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Async client for the catalog REST backend.

    Non-2xx answers raise httpx.HTTPStatusError, transport problems raise the
    other httpx.HTTPError subclasses and bodies that do not parse raise
    ValueError. Callers decide what a failure means.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 10.0,
        probe_timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    # Health probe: True only on a 2xx answer; errors are left to the caller
    async def health(self) -> bool:
        r = await self.client.get("/api/health", timeout=self.probe_timeout)
        return r.is_success

    async def list_products(self, filters: Optional[ProductFilters] = None) -> List[Product]:
        params = filters.to_query_params() if filters else {}
        r = await self.client.get("/api/products", params=params)
        r.raise_for_status()
        body = r.json()
        if not isinstance(body, list):
            raise ValueError(f"expected a product list, got {type(body).__name__}")
        return [Product.model_validate(p) for p in body]

    async def get_product(self, product_id: int) -> Product:
        r = await self.client.get(f"/api/products/{product_id}")
        r.raise_for_status()
        return Product.model_validate(r.json())

    async def create_product(self, draft: Union[ProductDraft, Dict[str, Any]]) -> Product:
        payload = _draft_payload(draft)
        r = await self.client.post("/api/products", json=payload)
        r.raise_for_status()
        return Product.model_validate(r.json())

    async def update_product(self, product_id: int, draft: Union[ProductDraft, Dict[str, Any]]) -> Product:
        payload = _draft_payload(draft)
        payload["id"] = product_id
        r = await self.client.put(f"/api/products/{product_id}", json=payload)
        r.raise_for_status()
        return Product.model_validate(r.json())

    async def delete_product(self, product_id: int) -> None:
        r = await self.client.delete(f"/api/products/{product_id}")
        r.raise_for_status()


def _draft_payload(draft: Union[ProductDraft, Dict[str, Any]]) -> Dict[str, Any]:
    # a stored record may still carry its (temporary) id; the backend gets the draft fields only
    if isinstance(draft, ProductDraft):
        draft = draft.model_dump()
    return ProductDraft.model_validate(draft).model_dump()
