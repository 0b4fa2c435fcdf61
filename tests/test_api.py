# tests/test_api.py
from fastapi.testclient import TestClient
from catalog_api.main import app

client = TestClient(app)

def reset():
    client.post("/reset")

NEW_PRODUCT = {
    "name": "Trail Runner X",
    "price": 129.0,
    "image": "https://example.com/trail.jpg",
    "description": "Grippy trail running shoe",
    "category": "Shoes",
}

def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_list_filters_snake_and_camel_case():
    reset()
    r = client.get("/api/products", params={"category": "Shoes", "min_price": 50, "max_price": 200})
    assert [p["id"] for p in r.json()] == [1, 2, 4, 5, 7, 8]
    r = client.get("/api/products", params={"category": "Shoes", "minPrice": 170, "maxPrice": 190})
    assert [p["id"] for p in r.json()] == [2, 5, 8]
    r = client.get("/api/products", params={"searchTerm": "air max 2"})
    assert [p["id"] for p in r.json()] == [7]

def test_sort_and_pagination():
    reset()
    r = client.get("/api/products", params={"sort_by": "price", "sort_order": "desc"})
    assert [p["id"] for p in r.json()] == [1, 4, 7, 2, 5, 8, 3, 6, 9]
    r = client.get("/api/products", params={"sortBy": "price", "offset": 2, "limit": 3})
    assert [p["id"] for p in r.json()] == [9, 2, 5]
    assert client.get("/api/products", params={"limit": -1}).status_code == 422

def test_create_update_delete():
    reset()
    r = client.post("/api/products", json=NEW_PRODUCT)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] == 10
    assert created["name"] == NEW_PRODUCT["name"]

    # id in the body is ignored in favour of the path
    r = client.put("/api/products/10", json=dict(NEW_PRODUCT, id=999, price=99.5))
    assert r.status_code == 200
    assert r.json()["id"] == 10 and r.json()["price"] == 99.5
    assert client.get("/api/products/10").json()["price"] == 99.5

    r = client.delete("/api/products/10")
    assert r.status_code == 204
    assert client.get("/api/products/10").status_code == 404

def test_validation_rejected():
    reset()
    for bad in (
        dict(NEW_PRODUCT, name=""),
        dict(NEW_PRODUCT, price=0),
        dict(NEW_PRODUCT, category=" "),
        dict(NEW_PRODUCT, description="short"),
    ):
        r = client.post("/api/products", json=bad)
        assert r.status_code == 400, bad
        assert r.json()["detail"]
    assert len(client.get("/api/products").json()) == 9

def test_unknown_product_404():
    reset()
    assert client.get("/api/products/404").status_code == 404
    assert client.put("/api/products/404", json=NEW_PRODUCT).status_code == 404
    assert client.delete("/api/products/404").status_code == 404

def test_reset_restores_seed():
    client.delete("/api/products/1")
    client.post("/api/products", json=NEW_PRODUCT)
    reset()
    assert [p["id"] for p in client.get("/api/products").json()] == list(range(1, 10))

def test_price_drift(monkeypatch):
    from catalog_api.config import settings
    reset()
    monkeypatch.setattr(settings, "simulate_price_drift", True)
    prices = [p["price"] for p in client.get("/api/products").json()]
    assert all(0 < p <= 199.99 * 1.05 + 0.01 for p in prices)
    reset()
