import random
from pydantic import BaseModel
from typing import Optional, Dict, Any, List

class ProductIn(BaseModel):
    name: str
    price: float
    image: str = ""
    description: str = ""
    category: str

class ProductQuery(BaseModel):
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search_term: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: str = "asc"
    offset: Optional[int] = None
    limit: Optional[int] = None

SORTABLE_FIELDS = ("name", "price", "category")

def validate_product_in(p: ProductIn) -> Optional[str]:
    """Returns the first problem found, or None."""
    if not p.name.strip():
        return "Product name cannot be empty"
    if p.price <= 0:
        return "Product price must be greater than 0"
    if not p.category.strip():
        return "Product category cannot be empty"
    if p.description and len(p.description) < 10:
        return "Product description must be at least 10 characters long"
    return None

def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "price": p.price,
        "image": p.image,
        "description": p.description,
        "category": p.category
    }

def filter_and_sort_products(products: List[Dict[str, Any]], q: ProductQuery) -> List[Dict[str, Any]]:
    out = []
    term = q.search_term.lower() if q.search_term else None
    for p in products:
        if q.category and p["category"] != q.category:
            continue
        if q.min_price is not None and p["price"] < q.min_price:
            continue
        if q.max_price is not None and p["price"] > q.max_price:
            continue
        if term and not (
            term in p["name"].lower()
            or term in p["description"].lower()
            or term in p["category"].lower()
        ):
            continue
        out.append(p)

    # sorted() is stable, also with reverse=True; unknown fields leave the order alone
    if q.sort_by in SORTABLE_FIELDS:
        out = sorted(out, key=lambda p: p[q.sort_by], reverse=q.sort_order == "desc")

    start = q.offset or 0
    if q.limit is not None:
        return out[start:start + q.limit]
    return out[start:]

def drift_price(price: float) -> float:
    change = random.uniform(-5.0, 5.0)
    return round(max(0.01, price * (1 + change / 100)), 2)
