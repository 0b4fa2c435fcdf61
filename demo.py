#!/usr/bin/env python
# Walks through an offline session against a running catalog_api (python -m catalog_api.main).
import asyncio
import tempfile
from pathlib import Path

from catalog_sdk.config import Settings
from catalog_sdk.container import CatalogApp
from catalog_sdk.log import setup_logging
from catalog_sdk.storage import JsonFileStorage
from catalog_sdk.sync import DrainState


async def main():
    setup_logging()
    storage = JsonFileStorage(Path(tempfile.mkdtemp()) / "storage.json")
    settings = Settings(api_base_url="http://127.0.0.1:3001", health_check_interval=2.0)

    async with CatalogApp(settings, storage=storage) as app:
        # -----------------------------
        # Online: fill the local cache
        # -----------------------------
        await app.backend.client.post("/reset")
        await app.monitor.check_server_status()
        products = await app.products.get_products()
        print(f"Online, {len(products)} products cached")

        # -----------------------------
        # Lose the network and keep working
        # -----------------------------
        app.monitor.handle_offline()
        print("\nNetwork lost:", app.monitor.status)

        created = await app.products.create_product({
            "name": "Offline Running Jacket",
            "price": 89.5,
            "image": "/assets/images/jacket.jpg",
            "description": "Light jacket created while offline",
            "category": "Clothes",
        })
        print("Created offline:", created.product)

        updated = await app.products.update_product(2, {
            "name": "Adidas Ultra Boost Light",
            "price": 169.99,
            "image": "/assets/images/adidas-ultraboost.jpg",
            "description": "Lighter edition of a comfortable running shoe",
            "category": "Shoes",
        })
        print("Updated offline:", updated.product)

        deleted = await app.products.delete_product(3)
        print("Deleted offline:", deleted.product.id)

        rejected = await app.products.create_product({"name": "x", "price": -1})
        print("Rejected:", [(e.field, e.message) for e in rejected.errors])

        print("\nPending operations:")
        for op in app.pending.peek():
            print(f"  {op.type.value:<6} {op.product_id}")

        # -----------------------------
        # Back online: the monitor triggers the drain
        # -----------------------------
        print("\nNetwork restored...")
        await app.monitor.handle_online()
        await asyncio.sleep(0)  # let the scheduled drain start
        while app.sync.state is DrainState.DRAINING:
            await asyncio.sleep(0.1)
        print("Pending after sync:", len(app.pending))

        print("\nServer view:")
        for p in await app.products.get_products({"sortBy": "price", "sortOrder": "desc"}):
            print(f"  {p.id:>3} {p.name:<28} {p.price:>8.2f} {p.category}")


if __name__ == "__main__":
    asyncio.run(main())
