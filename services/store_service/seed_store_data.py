"""Seed script for the egg catalog.

Inserts the BundleUp product range. Product ids match the image file names
under ``/assets/eggs``; rows whose id already exists are left alone, so the
script can be re-run safely.

Usage:
    python -m services.store_service.seed_store_data
"""

import asyncio
from decimal import Decimal

from libs.common.logging import configure_logging, get_logger
from libs.db.config import AsyncSessionLocal
from services.store_service.models import Product
from sqlalchemy import select

logger = get_logger(__name__)

# (id, name, description, category, egg_color, egg_count, image_url,
#  b2c_price, b2b_price, inventory_by_carton, inventory_by_box)
PRODUCTS = [
    (
        101,
        "Commodity White Eggs - 12 Count",
        "Fresh commodity white eggs, 12 count carton. Perfect for everyday cooking and baking.",
        "commodity",
        "white",
        12,
        "/assets/eggs/Commodity White Eggs/101-commodity.png",
        "3.99",
        "2.99",
        150,
        25,
    ),
    (
        102,
        "Commodity White Eggs - 18 Count",
        "Fresh commodity white eggs, 18 count carton. Great value for larger families.",
        "commodity",
        "white",
        18,
        "/assets/eggs/Commodity White Eggs/102-commodity.png",
        "5.49",
        "4.19",
        120,
        20,
    ),
    (
        103,
        "Commodity White Eggs - 24 Count",
        "Fresh commodity white eggs, 24 count carton. Ideal for restaurants and food service.",
        "commodity",
        "white",
        24,
        "/assets/eggs/Commodity White Eggs/103-commodity.png",
        "6.99",
        "5.29",
        100,
        15,
    ),
    (
        104,
        "Commodity White Eggs - 30 Count",
        "Fresh commodity white eggs, 30 count carton. Perfect for high-volume cooking.",
        "commodity",
        "white",
        30,
        "/assets/eggs/Commodity White Eggs/104-commodity.png",
        "8.49",
        "6.49",
        80,
        12,
    ),
    (
        105,
        "Commodity White Eggs - 36 Count",
        "Fresh commodity white eggs, 36 count carton. Great for commercial kitchens.",
        "commodity",
        "white",
        36,
        "/assets/eggs/Commodity White Eggs/105-commodity.png",
        "9.99",
        "7.69",
        60,
        10,
    ),
    (
        106,
        "Commodity White Eggs - 48 Count",
        "Fresh commodity white eggs, 48 count carton. Maximum value for bulk purchases.",
        "commodity",
        "white",
        48,
        "/assets/eggs/Commodity White Eggs/106-commodity.png",
        "12.99",
        "9.99",
        40,
        8,
    ),
    (
        109,
        "Commodity White Eggs - 60 Count",
        "Fresh commodity white eggs, 60 count carton. Ultimate bulk option for commercial use.",
        "commodity",
        "white",
        60,
        "/assets/eggs/Commodity White Eggs/109-commodity.png",
        "15.99",
        "12.49",
        30,
        6,
    ),
    (
        110,
        "Commodity White Eggs - 72 Count",
        "Fresh commodity white eggs, 72 count carton. Premium bulk option for large operations.",
        "commodity",
        "white",
        72,
        "/assets/eggs/Commodity White Eggs/110-commodity.png",
        "18.99",
        "14.99",
        25,
        5,
    ),
    (
        111,
        "Commodity Brown Eggs - 12 Count",
        "Fresh commodity brown eggs, 12 count carton. Rich flavor and golden yolks.",
        "commodity",
        "brown",
        12,
        "/assets/eggs/Commodity Brown Eggs/111-commodity.png",
        "4.49",
        "3.39",
        120,
        20,
    ),
    (
        112,
        "Commodity Brown Eggs - 18 Count",
        "Fresh commodity brown eggs, 18 count carton. Perfect for families who prefer brown eggs.",
        "commodity",
        "brown",
        18,
        "/assets/eggs/Commodity Brown Eggs/112-commodity.png",
        "6.19",
        "4.79",
        100,
        15,
    ),
    (
        113,
        "Commodity Brown Eggs - 24 Count",
        "Fresh commodity brown eggs, 24 count carton. Great for restaurants and bakeries.",
        "commodity",
        "brown",
        24,
        "/assets/eggs/Commodity Brown Eggs/113-commodity.png",
        "7.89",
        "6.09",
        80,
        12,
    ),
    (
        114,
        "Commodity Brown Eggs - 30 Count",
        "Fresh commodity brown eggs, 30 count carton. Ideal for high-volume commercial use.",
        "commodity",
        "brown",
        30,
        "/assets/eggs/Commodity Brown Eggs/114-commodity.png",
        "9.59",
        "7.39",
        60,
        10,
    ),
    (
        115,
        "Commodity Brown Eggs - 36 Count",
        "Fresh commodity brown eggs, 36 count carton. Perfect for large commercial kitchens.",
        "commodity",
        "brown",
        36,
        "/assets/eggs/Commodity Brown Eggs/115-commodity.png",
        "11.29",
        "8.79",
        50,
        8,
    ),
    (
        121,
        "Organic Brown Eggs - 12 Count",
        "Certified organic brown eggs, 12 count carton. Free-range, no antibiotics or hormones.",
        "organic",
        "brown",
        12,
        "/assets/eggs/Organic Brown Eggs/121-organic.png",
        "6.99",
        "5.29",
        80,
        15,
    ),
    (
        122,
        "Organic Brown Eggs - 18 Count",
        "Certified organic brown eggs, 18 count carton. Premium quality for health-conscious consumers.",
        "organic",
        "brown",
        18,
        "/assets/eggs/Organic Brown Eggs/122-organic.png",
        "9.99",
        "7.69",
        60,
        12,
    ),
    (
        123,
        "Organic Brown Eggs - 24 Count",
        "Certified organic brown eggs, 24 count carton. Perfect for organic restaurants and cafes.",
        "organic",
        "brown",
        24,
        "/assets/eggs/Organic Brown Eggs/123-organic.png",
        "12.99",
        "9.99",
        50,
        10,
    ),
    (
        125,
        "Organic Brown Eggs - 30 Count",
        "Certified organic brown eggs, 30 count carton. Ideal for organic food service operations.",
        "organic",
        "brown",
        30,
        "/assets/eggs/Organic Brown Eggs/125-organic.png",
        "15.99",
        "12.49",
        40,
        8,
    ),
    (
        126,
        "Organic Brown Eggs - 36 Count",
        "Certified organic brown eggs, 36 count carton. Premium bulk option for organic establishments.",
        "organic",
        "brown",
        36,
        "/assets/eggs/Organic Brown Eggs/126-organic.png",
        "18.99",
        "14.99",
        30,
        6,
    ),
    (
        127,
        "Organic Brown Eggs - 48 Count",
        "Certified organic brown eggs, 48 count carton. Maximum value for organic bulk purchases.",
        "organic",
        "brown",
        48,
        "/assets/eggs/Organic Brown Eggs/127-organic.png",
        "23.99",
        "18.99",
        25,
        5,
    ),
    (
        131,
        "Cage Free Brown Eggs - 12 Count",
        "Cage-free brown eggs, 12 count carton. Hens raised in spacious, humane conditions.",
        "cage-free",
        "brown",
        12,
        "/assets/eggs/Cage Free Brown Eggs/131-cage-free.png",
        "5.49",
        "4.19",
        100,
        18,
    ),
    (
        132,
        "Cage Free Brown Eggs - 18 Count",
        "Cage-free brown eggs, 18 count carton. Ethical choice for families and businesses.",
        "cage-free",
        "brown",
        18,
        "/assets/eggs/Cage Free Brown Eggs/132-cage-free.png",
        "7.99",
        "6.19",
        80,
        15,
    ),
    (
        133,
        "Cage Free Brown Eggs - 24 Count",
        "Cage-free brown eggs, 24 count carton. Perfect for restaurants with ethical sourcing policies.",
        "cage-free",
        "brown",
        24,
        "/assets/eggs/Cage Free Brown Eggs/133-cage-free.png",
        "10.49",
        "8.19",
        60,
        12,
    ),
    (
        134,
        "Cage Free Brown Eggs - 30 Count",
        "Cage-free brown eggs, 30 count carton. Ideal for food service with humane animal practices.",
        "cage-free",
        "brown",
        30,
        "/assets/eggs/Cage Free Brown Eggs/134-cage-free.png",
        "12.99",
        "10.19",
        50,
        10,
    ),
    (
        135,
        "Cage Free Brown Eggs - 36 Count",
        "Cage-free brown eggs, 36 count carton. Premium bulk option for ethical establishments.",
        "cage-free",
        "brown",
        36,
        "/assets/eggs/Cage Free Brown Eggs/135-cage-free.png",
        "15.49",
        "12.19",
        40,
        8,
    ),
    (
        136,
        "Cage Free White Eggs - 12 Count",
        "Cage-free white eggs, 12 count carton. Hens raised in spacious, humane conditions.",
        "cage-free",
        "white",
        12,
        "/assets/eggs/Cage Free White Eggs/136-cage-free.png",
        "5.19",
        "3.99",
        100,
        18,
    ),
    (
        137,
        "Cage Free White Eggs - 18 Count",
        "Cage-free white eggs, 18 count carton. Ethical choice for families and businesses.",
        "cage-free",
        "white",
        18,
        "/assets/eggs/Cage Free White Eggs/137-cage-free.png",
        "7.69",
        "5.99",
        80,
        15,
    ),
    (
        142,
        "Quail Eggs - 12 Count",
        "Delicate quail eggs, 12 count carton. Perfect for gourmet dishes and specialty cuisine.",
        "specialty",
        "white",
        12,
        "/assets/eggs/Quail White Eggs/142-copy.png",
        "8.99",
        "6.99",
        30,
        8,
    ),
    (
        143,
        "Duck Eggs - 12 Count",
        "Rich duck eggs, 12 count carton. Larger yolks and richer flavor than chicken eggs.",
        "specialty",
        "white",
        12,
        "/assets/eggs/Duck White Eggs/143-duck.png",
        "9.99",
        "7.79",
        25,
        6,
    ),
    (
        145,
        "Hard Boiled Eggs - 12 Count",
        "Pre-cooked hard boiled eggs, 12 count carton. Ready to eat, perfect for snacks and salads.",
        "specialty",
        "white",
        12,
        "/assets/eggs/Hard Boiled Eggs/145-hard-boiled.png",
        "7.99",
        "6.19",
        40,
        10,
    ),
    (
        146,
        "Pasture Raised Brown Eggs - 12 Count",
        "Pasture-raised brown eggs, 12 count carton. Hens forage on natural pasture for optimal nutrition.",
        "pasture-raised",
        "brown",
        12,
        "/assets/eggs/Pasture Raised Brown Eggs/146-pasture.png",
        "8.99",
        "6.99",
        50,
        12,
    ),
    (
        147,
        "Pasture Raised Brown Eggs - 18 Count",
        "Pasture-raised brown eggs, 18 count carton. Premium quality with superior nutritional profile.",
        "pasture-raised",
        "brown",
        18,
        "/assets/eggs/Pasture Raised Brown Eggs/147-pasture.png",
        "12.99",
        "10.19",
        40,
        10,
    ),
    (
        148,
        "Heirloom Blue Eggs - 12 Count",
        "Heirloom blue eggs, 12 count carton. Rare heritage breed with beautiful blue shells.",
        "heirloom",
        "blue",
        12,
        "/assets/eggs/Heirloom Blue & Brown Eggs/148-heirloom-blue.png",
        "11.99",
        "9.29",
        20,
        5,
    ),
    (
        149,
        "Heirloom Brown Eggs - 12 Count",
        "Heirloom brown eggs, 12 count carton. Heritage breed with rich flavor and golden yolks.",
        "heirloom",
        "brown",
        12,
        "/assets/eggs/Heirloom Blue & Brown Eggs/149-heirloom-brown.png",
        "10.99",
        "8.49",
        25,
        6,
    ),
]


def product_rows() -> list[dict]:
    return [
        {
            "id": row[0],
            "name": row[1],
            "description": row[2],
            "category": row[3],
            "egg_color": row[4],
            "egg_count": row[5],
            "image_url": row[6],
            "b2c_price": Decimal(row[7]),
            "b2b_price": Decimal(row[8]),
            "inventory_by_carton": row[9],
            "inventory_by_box": row[10],
            "is_available": True,
            "is_active": True,
        }
        for row in PRODUCTS
    ]


async def seed_products(db) -> int:
    """Insert missing catalog rows and return how many were added."""
    existing = set((await db.execute(select(Product.id))).scalars().all())
    added = 0
    for values in product_rows():
        if values["id"] in existing:
            continue
        db.add(Product(**values))
        added += 1
    await db.commit()
    return added


async def seed_store_data():
    async with AsyncSessionLocal() as db:
        logger.info("Seeding egg catalog...")
        added = await seed_products(db)
        logger.info(
            "Catalog seeded: %d added, %d already present",
            added,
            len(PRODUCTS) - added,
        )


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed_store_data())
