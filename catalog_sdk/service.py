# catalog_sdk/service.py
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as SchemaError

from .filters import apply_filters
from .models import (
    CatalogStatistics, CategoryCount, MutationResult, OperationType, PendingOperation,
    Product, ProductDraft, ProductFilters, ValidationError, now_ms,
)
from .validation import validate_product

logger = logging.getLogger(__name__)

DraftIn = Union[ProductDraft, Dict[str, Any]]
FiltersIn = Union[ProductFilters, Dict[str, Any], None]


class ProductService:
    """
    Entry point for every product read and write.

    Each call looks at the connectivity status first. Online calls go to the
    backend and their errors reach the caller unchanged. Offline calls work on
    the local cache and log one PendingOperation per mutation.

    Records created offline keep their temporary id in the cache after the
    queued create has been replayed; nothing maps them to the id the backend
    assigned. The next full online listing replaces them.
    """

    def __init__(self, backend, monitor, cache, log):
        self._backend = backend
        self._monitor = monitor
        self._cache = cache
        self._log = log
        self._last_temp_id = 0

    @property
    def is_offline(self) -> bool:
        return self._monitor.is_offline

    # ---------------------------
    # Reads
    # ---------------------------
    async def get_products(self, filters: FiltersIn = None) -> List[Product]:
        filters = _coerce_filters(filters)
        if self.is_offline:
            return apply_filters(self._cache.read(), filters)

        products = await self._backend.list_products(filters)
        if filters is None or filters.is_unfiltered():
            self._cache.write(products)
        else:
            for p in products:
                self._cache.upsert(p)
        return products

    async def get_product(self, product_id: int) -> Optional[Product]:
        if self.is_offline:
            return self._cache.find(product_id)
        product = await self._backend.get_product(product_id)
        self._cache.upsert(product)
        return product

    def get_categories(self) -> List[str]:
        seen: Dict[str, None] = {}
        for p in self._cache.read():
            seen.setdefault(p.category, None)
        return list(seen)

    async def get_statistics(self) -> CatalogStatistics:
        products = await self.get_products()
        counts: Dict[str, int] = {}
        total = 0.0
        for p in products:
            total += p.price
            counts[p.category] = counts.get(p.category, 0) + 1
        return CatalogStatistics(
            total_products=len(products),
            total_value=total,
            avg_price=total / len(products) if products else 0.0,
            categories=[CategoryCount(name=k, count=v) for k, v in counts.items()],
        )

    # ---------------------------
    # Writes
    # ---------------------------
    async def create_product(self, draft: DraftIn) -> MutationResult:
        draft, errors = _coerce_draft(draft)
        if errors:
            return MutationResult(errors=errors)

        if self.is_offline:
            product = Product(id=self._temporary_id(), temporary=True, **draft.model_dump())
            products = self._cache.read()
            products.append(product)
            self._cache.write(products)
            self._log.append(PendingOperation.for_product(OperationType.CREATE, product))
            logger.info("Offline: created product %s locally", product.id)
            return MutationResult(product=product, queued=True)

        created = await self._backend.create_product(draft)
        self._cache.upsert(created)
        return MutationResult(product=created)

    async def update_product(self, product_id: int, draft: DraftIn) -> MutationResult:
        draft, errors = _coerce_draft(draft)
        if errors:
            return MutationResult(errors=errors)

        if self.is_offline:
            existing = self._cache.find(product_id)
            product = Product(
                id=product_id,
                temporary=existing.temporary if existing else False,
                **draft.model_dump(),
            )
            # only records the cache already shows are replaced; the log entry is written either way
            if existing is not None:
                self._cache.upsert(product)
            self._log.append(PendingOperation.for_product(OperationType.UPDATE, product))
            logger.info("Offline: updated product %s locally", product_id)
            return MutationResult(product=product, queued=True)

        updated = await self._backend.update_product(product_id, draft)
        self._cache.upsert(updated)
        return MutationResult(product=updated)

    async def delete_product(self, product_id: int) -> MutationResult:
        if self.is_offline:
            removed = self._cache.remove(product_id)
            product = removed[0] if removed else Product(id=product_id)
            record = product.model_dump() if removed else {"id": product_id}
            self._log.append(PendingOperation(type=OperationType.DELETE, product=record))
            logger.info("Offline: deleted product %s locally", product_id)
            return MutationResult(product=product, queued=True)

        await self._backend.delete_product(product_id)
        removed = self._cache.remove(product_id)
        return MutationResult(product=removed[0] if removed else Product(id=product_id))

    def _temporary_id(self) -> int:
        # millisecond timestamp, bumped so two creates in the same ms stay distinct
        self._last_temp_id = max(now_ms(), self._last_temp_id + 1)
        return self._last_temp_id


def _coerce_draft(draft: DraftIn) -> Tuple[Optional[ProductDraft], List[ValidationError]]:
    """Parse and validate a draft. Type errors come back as field errors, never raised."""
    if isinstance(draft, ProductDraft):
        draft = draft.model_dump()
    try:
        # missing and null fields fall back to blanks and are reported by validate_product
        parsed = ProductDraft.model_validate({k: v for k, v in draft.items() if v is not None})
    except SchemaError as e:
        return None, [
            ValidationError(field=str(err["loc"][0]) if err["loc"] else "product", message=err["msg"])
            for err in e.errors()
        ]
    return parsed, validate_product(parsed)


def _coerce_filters(filters: FiltersIn) -> Optional[ProductFilters]:
    if filters is None or isinstance(filters, ProductFilters):
        return filters
    return ProductFilters.model_validate(filters)
