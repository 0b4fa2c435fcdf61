import asyncio
from typing import Dict, Any, List

# In-memory product store and its locks. State lives for the process only.

PRODUCTS: Dict[int, Dict[str, Any]] = {}
_LOCKS: Dict[str, asyncio.Lock] = {}

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Nike Air Max", "price": 199.99, "image": "/assets/images/nike.jpg",
     "description": "Classic Nike Air Max sneakers", "category": "Shoes"},
    {"id": 2, "name": "Adidas Ultra Boost", "price": 179.99, "image": "/assets/images/adidas-ultraboost.jpg",
     "description": "Comfortable running shoes", "category": "Shoes"},
    {"id": 3, "name": "T-Shirt", "price": 19.99, "image": "/assets/images/tshirt.jpeg",
     "description": "Soft cotton crew neck t-shirt", "category": "Clothes"},
    {"id": 4, "name": "Nike Air Max", "price": 199.99, "image": "/assets/images/nike.jpg",
     "description": "Classic Nike Air Max sneakers", "category": "Shoes"},
    {"id": 5, "name": "Adidas Ultra Boost", "price": 179.99, "image": "/assets/images/adidas-ultraboost.jpg",
     "description": "Comfortable running shoes", "category": "Shoes"},
    {"id": 6, "name": "T-Shirt", "price": 19.99, "image": "/assets/images/tshirt.jpeg",
     "description": "Soft cotton crew neck t-shirt", "category": "Clothes"},
    {"id": 7, "name": "Nike Air Max 2", "price": 199.99, "image": "/assets/images/nike.jpg",
     "description": "Classic Nike Air Max sneakers", "category": "Shoes"},
    {"id": 8, "name": "Adidas Ultra Boost 2", "price": 179.99, "image": "/assets/images/adidas-ultraboost.jpg",
     "description": "Comfortable running shoes", "category": "Shoes"},
    {"id": 9, "name": "T-Shirt 2", "price": 19.99, "image": "/assets/images/tshirt.jpeg",
     "description": "Soft cotton crew neck t-shirt", "category": "Clothes"},
]


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def seed_products() -> None:
    PRODUCTS.clear()
    for p in SEED_PRODUCTS:
        PRODUCTS[p["id"]] = dict(p)


def next_product_id() -> int:
    return max(PRODUCTS.keys(), default=0) + 1


seed_products()
