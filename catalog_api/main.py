# catalog_api/main.py
from fastapi import FastAPI, HTTPException, Query, UploadFile, File, Response
from fastapi.responses import FileResponse
from pathlib import Path
from typing import Optional

from .config import settings
from .core import (
    ProductIn, ProductQuery, validate_product_in, _make_product_dict,
    filter_and_sort_products, drift_price
)
from .database import PRODUCTS, _LOCKS, _get_lock, seed_products, next_product_id

app = FastAPI(title="catalog-api (in-memory reference backend)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Health
# ---------------------------
@app.get("/api/health")
async def health():
    return {"status": "ok"}

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products(
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    search_term: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    offset: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=0),
    # camelCase spellings sent by browser clients
    minPrice: Optional[float] = None,
    maxPrice: Optional[float] = None,
    searchTerm: Optional[str] = None,
    sortBy: Optional[str] = None,
    sortOrder: Optional[str] = None,
):
    q = ProductQuery(
        category=category,
        min_price=min_price if min_price is not None else minPrice,
        max_price=max_price if max_price is not None else maxPrice,
        search_term=search_term or searchTerm,
        sort_by=sort_by or sortBy,
        sort_order=sort_order or sortOrder or "asc",
        offset=offset,
        limit=limit,
    )
    if settings.simulate_price_drift:
        async with _get_lock("products"):
            for p in PRODUCTS.values():
                p["price"] = drift_price(p["price"])
    return filter_and_sort_products(list(PRODUCTS.values()), q)

@app.get("/api/products/{product_id}")
async def get_product(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

@app.post("/api/products", status_code=201)
async def create_product(payload: ProductIn):
    problem = validate_product_in(payload)
    if problem:
        raise HTTPException(status_code=400, detail=problem)

    async with _get_lock("products"):
        pid = next_product_id()
        PRODUCTS[pid] = _make_product_dict(pid, payload)
        return PRODUCTS[pid]

@app.put("/api/products/{product_id}")
async def update_product(product_id: int, payload: ProductIn):
    problem = validate_product_in(payload)
    if problem:
        raise HTTPException(status_code=400, detail=problem)

    async with _get_lock("products"):
        if product_id not in PRODUCTS:
            raise HTTPException(status_code=404, detail="product not found")
        # the path id wins over any id in the body
        PRODUCTS[product_id] = _make_product_dict(product_id, payload)
        return PRODUCTS[product_id]

@app.delete("/api/products/{product_id}", status_code=204)
async def delete_product(product_id: int):
    async with _get_lock("products"):
        if product_id not in PRODUCTS:
            raise HTTPException(status_code=404, detail="product not found")
        del PRODUCTS[product_id]
    return Response(status_code=204)

# ---------------------------
# File endpoints
# ---------------------------
def _safe_upload_path(filename: str) -> Path:
    name = Path(filename or "").name
    if not name or name != filename or name in (".", ".."):
        raise HTTPException(status_code=400, detail="invalid filename")
    return settings.upload_dir / name

@app.post("/api/upload")
async def upload_file(file: UploadFile = File(...)):
    target = _safe_upload_path(file.filename)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    data = await file.read()
    target.write_bytes(data)
    return {"status": "success", "message": "File uploaded successfully", "filename": target.name}

@app.get("/api/files")
async def list_files():
    if not settings.upload_dir.is_dir():
        return []
    return sorted(p.name for p in settings.upload_dir.iterdir() if p.is_file())

@app.get("/api/download/{filename}")
async def download_file(filename: str):
    target = _safe_upload_path(filename)
    if not target.is_file():
        raise HTTPException(status_code=404, detail="file not found")
    return FileResponse(target, filename=target.name)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    seed_products()
    _LOCKS.clear()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
