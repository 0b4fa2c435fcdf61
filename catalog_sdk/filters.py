# catalog_sdk/filters.py
from typing import List, Optional, Sequence

from .models import Product, ProductFilters

SORTABLE_FIELDS = ("id", "name", "price", "category", "description")


def apply_filters(products: Sequence[Product], filters: Optional[ProductFilters] = None) -> List[Product]:
    """
    Local equivalent of the backend list query, used on the offline path.
    Keeps input order unless a sort is requested; sorting is stable in both directions.
    """
    out = list(products)
    if filters is None:
        return out

    if filters.category:
        out = [p for p in out if p.category == filters.category]
    if filters.min_price is not None:
        out = [p for p in out if p.price >= filters.min_price]
    if filters.max_price is not None:
        out = [p for p in out if p.price <= filters.max_price]
    if filters.search_term:
        term = filters.search_term.lower()
        out = [
            p for p in out
            if term in p.name.lower() or term in p.description.lower() or term in p.category.lower()
        ]

    if filters.sort_by in SORTABLE_FIELDS:
        field = filters.sort_by
        out = sorted(out, key=lambda p: getattr(p, field), reverse=filters.sort_order == "desc")

    start = filters.offset or 0
    if filters.limit is not None:
        return out[start:start + filters.limit]
    return out[start:]
