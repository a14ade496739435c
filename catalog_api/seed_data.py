"""
Catalog API — Bundled Sample Data
===================================

What:  A small deterministic data set for each database, loaded by the init
       script and by the test suite.
How:   Plain row dicts keyed by table, inserted in foreign-key order with
       explicit primary keys and timestamps so IDs and ordering are stable.

Both sets contain a few soft-deleted rows (`is_active` False) so the
active-row filters have something to exclude.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Sequence, Tuple, Type

from sqlalchemy import func, insert, select
from sqlalchemy.orm import DeclarativeBase

from catalog_api.database import Database
from catalog_api.models.catalog import (
    Brand,
    Category,
    Order,
    OrderItem,
    Product,
    ProductCategory,
    ProductImage,
    Review,
    Supplier,
    User,
)
from catalog_api.models.lore import Character, CharacterAppearance, Episode

logger = logging.getLogger(__name__)

Rows = List[Dict[str, Any]]


def _at(day: str) -> datetime:
    return datetime.fromisoformat(day)


# ══════════════════════════════════════════════════════════════════════════
# Lore
# ══════════════════════════════════════════════════════════════════════════

EPISODES: Rows = [
    {"id": 1, "episode_number": 1, "title": "The Phantom Menace", "release_year": 1999,
     "director": "George Lucas", "description": "Two Jedi uncover a Sith plot on Naboo."},
    {"id": 2, "episode_number": 2, "title": "Attack of the Clones", "release_year": 2002,
     "director": "George Lucas", "description": "The Clone Wars begin."},
    {"id": 3, "episode_number": 3, "title": "Revenge of the Sith", "release_year": 2005,
     "director": "George Lucas", "description": "Anakin falls to the dark side."},
    {"id": 4, "episode_number": 4, "title": "A New Hope", "release_year": 1977,
     "director": "George Lucas", "description": "A farm boy joins the Rebellion."},
    {"id": 5, "episode_number": 5, "title": "The Empire Strikes Back", "release_year": 1980,
     "director": "Irvin Kershner", "description": "The Empire hunts the rebels across the galaxy."},
    {"id": 6, "episode_number": 6, "title": "Return of the Jedi", "release_year": 1983,
     "director": "Richard Marquand", "description": "The second Death Star falls."},
]

CHARACTERS: Rows = [
    {"id": 1, "name": "Luke Skywalker", "species": "Human", "homeworld": "Tatooine",
     "affiliation": "Rebel Alliance", "description": "Jedi Knight and son of Anakin."},
    {"id": 2, "name": "Darth Vader", "species": "Human", "homeworld": "Tatooine",
     "affiliation": "Galactic Empire", "description": "Sith Lord, formerly Anakin."},
    {"id": 3, "name": "Leia Organa", "species": "Human", "homeworld": "Alderaan",
     "affiliation": "Rebel Alliance", "description": "Princess and general."},
    {"id": 4, "name": "Han Solo", "species": "Human", "homeworld": "Corellia",
     "affiliation": "Rebel Alliance", "description": "Captain of the Millennium Falcon."},
    {"id": 5, "name": "Obi-Wan Kenobi", "species": "Human", "homeworld": "Stewjon",
     "affiliation": "Jedi Order", "description": "Jedi Master and mentor."},
    {"id": 6, "name": "Yoda", "species": "Unknown", "homeworld": "Unknown",
     "affiliation": "Jedi Order", "description": "Grand Master of the Jedi Order."},
    {"id": 7, "name": "Padmé Amidala", "species": "Human", "homeworld": "Naboo",
     "affiliation": "Galactic Republic", "description": "Queen, then senator, of Naboo."},
    {"id": 8, "name": "Chewbacca", "species": "Wookiee", "homeworld": "Kashyyyk",
     "affiliation": "Rebel Alliance", "description": "Co-pilot of the Millennium Falcon."},
    {"id": 9, "name": "R2-D2", "species": "Droid", "homeworld": "Naboo",
     "affiliation": "Rebel Alliance", "description": "Astromech droid."},
    {"id": 10, "name": "C-3PO", "species": "Droid", "homeworld": "Tatooine",
     "affiliation": "Rebel Alliance", "description": "Protocol droid."},
    {"id": 11, "name": "Jar Jar Binks", "species": "Gungan", "homeworld": "Naboo",
     "affiliation": "Galactic Republic", "description": "Gungan representative.",
     "is_active": False},
    {"id": 12, "name": "Sheev Palpatine", "species": "Human", "homeworld": "Naboo",
     "affiliation": "Galactic Empire", "description": "Chancellor, then Emperor."},
]

# (character_id, episode_id, role, screen_time_minutes)
_APPEARANCES: Sequence[Tuple[int, int, str, int]] = [
    (1, 3, "cameo", 1), (1, 4, "main", 60), (1, 5, "main", 50), (1, 6, "main", 55),
    (2, 3, "main", 30), (2, 4, "supporting", 20), (2, 5, "main", 25), (2, 6, "main", 25),
    (3, 4, "main", 35), (3, 5, "main", 30), (3, 6, "main", 30),
    (4, 4, "main", 40), (4, 5, "main", 40), (4, 6, "supporting", 30),
    (5, 1, "main", 40), (5, 2, "main", 50), (5, 3, "main", 55), (5, 4, "supporting", 25),
    (6, 1, "minor", 5), (6, 2, "supporting", 15), (6, 3, "supporting", 20),
    (6, 5, "supporting", 20), (6, 6, "minor", 5),
    (7, 1, "main", 45), (7, 2, "main", 50), (7, 3, "main", 40),
    (8, 3, "minor", 3), (8, 4, "supporting", 20), (8, 5, "supporting", 20), (8, 6, "supporting", 18),
    (9, 1, "supporting", 10), (9, 2, "supporting", 10), (9, 3, "supporting", 10),
    (9, 4, "supporting", 10), (9, 5, "supporting", 10), (9, 6, "supporting", 10),
    (10, 1, "minor", 5), (10, 2, "minor", 8), (10, 3, "minor", 4),
    (10, 4, "supporting", 20), (10, 5, "supporting", 18), (10, 6, "supporting", 15),
    (11, 1, "main", 30), (11, 2, "minor", 4),
    (12, 1, "supporting", 15), (12, 2, "supporting", 12), (12, 3, "main", 35),
    (12, 5, "cameo", 2), (12, 6, "main", 25),
]

APPEARANCES: Rows = [
    {"id": index, "character_id": character_id, "episode_id": episode_id,
     "role": role, "screen_time_minutes": minutes}
    for index, (character_id, episode_id, role, minutes) in enumerate(_APPEARANCES, start=1)
]

LORE_TABLES: Sequence[Tuple[Type[DeclarativeBase], Rows]] = [
    (Episode, EPISODES),
    (Character, CHARACTERS),
    (CharacterAppearance, APPEARANCES),
]


# ══════════════════════════════════════════════════════════════════════════
# Catalog
# ══════════════════════════════════════════════════════════════════════════

BRANDS: Rows = [
    {"id": 1, "name": "Acme Outdoors", "description": "Gear for mountains and trails.",
     "website": "https://acme-outdoors.example.com"},
    {"id": 2, "name": "Northwind Audio", "description": "Headphones and speakers.",
     "website": "https://northwind-audio.example.com"},
    {"id": 3, "name": "Contoso Home", "description": "Everyday home goods."},
    {"id": 4, "name": "Fabrikam", "description": "Retired brand.", "is_active": False},
]

SUPPLIERS: Rows = [
    {"id": 1, "name": "Global Supply Co", "contact_email": "orders@globalsupply.example.com",
     "phone": "+1-555-0100", "country": "United States"},
    {"id": 2, "name": "Pacific Traders", "contact_email": "sales@pacific.example.com",
     "phone": "+81-3-5555-0199", "country": "Japan"},
]

CATEGORIES: Rows = [
    {"id": 1, "name": "Outdoor", "slug": "outdoor", "parent_id": None, "sort_order": 1},
    {"id": 2, "name": "Skiing", "slug": "skiing", "parent_id": 1, "sort_order": 1},
    {"id": 3, "name": "Camping", "slug": "camping", "parent_id": 1, "sort_order": 2},
    {"id": 4, "name": "Electronics", "slug": "electronics", "parent_id": None, "sort_order": 2},
    {"id": 5, "name": "Headphones", "slug": "headphones", "parent_id": 4, "sort_order": 1},
    {"id": 6, "name": "Home", "slug": "home", "parent_id": None, "sort_order": 3},
    {"id": 7, "name": "Clearance", "slug": "clearance", "parent_id": 6, "sort_order": 1,
     "is_active": False},
]

# Descriptions avoid the letters "ski" outside the two skiing products
PRODUCTS: Rows = [
    {"id": 1, "sku": "ACM-SKI-001", "name": "Alpine Ski Set", "price": 499.99,
     "compare_at_price": 599.99, "stock_quantity": 5, "brand_id": 1, "supplier_id": 1,
     "is_featured": True, "description": "Carving pair with bindings.",
     "created_at": _at("2024-01-01T09:00:00")},
    {"id": 2, "sku": "ACM-SKI-002", "name": "Ski Goggles", "price": 79.5,
     "compare_at_price": None, "stock_quantity": 0, "brand_id": 1, "supplier_id": 1,
     "is_featured": False, "description": "Anti-fog double lens.",
     "created_at": _at("2024-01-05T09:00:00")},
    {"id": 3, "sku": "ACM-TNT-001", "name": "Two-Person Tent", "price": 189.0,
     "compare_at_price": 220.0, "stock_quantity": 12, "brand_id": 1, "supplier_id": 2,
     "is_featured": True, "description": "Three-season dome tent.",
     "created_at": _at("2024-01-10T09:00:00")},
    {"id": 4, "sku": "ACM-BAG-001", "name": "Down Sleeping Bag", "price": 129.0,
     "compare_at_price": None, "stock_quantity": 7, "brand_id": 1, "supplier_id": 2,
     "is_featured": False, "description": "Rated to minus five degrees.",
     "created_at": _at("2024-01-15T09:00:00")},
    {"id": 5, "sku": "NWA-HP-100", "name": "Studio Headphones", "price": 149.99,
     "compare_at_price": 179.99, "stock_quantity": 20, "brand_id": 2, "supplier_id": 2,
     "is_featured": True, "description": "Closed-back monitoring headphones.",
     "created_at": _at("2024-02-01T09:00:00")},
    {"id": 6, "sku": "NWA-HP-050", "name": "Wireless Earbuds", "price": 49.99,
     "compare_at_price": None, "stock_quantity": 0, "brand_id": 2, "supplier_id": 2,
     "is_featured": False, "description": "Noise cancelling, eight hour battery.",
     "created_at": _at("2024-02-10T09:00:00")},
    {"id": 7, "sku": "NWA-SPK-010", "name": "Bluetooth Speaker", "price": 35.0,
     "compare_at_price": 45.0, "stock_quantity": 30, "brand_id": 2, "supplier_id": 1,
     "is_featured": True, "description": "Waterproof portable speaker.",
     "created_at": _at("2024-02-20T09:00:00")},
    {"id": 8, "sku": "CTH-LMP-001", "name": "Desk Lamp", "price": 24.99,
     "compare_at_price": None, "stock_quantity": 15, "brand_id": 3, "supplier_id": 1,
     "is_featured": False, "description": "Dimmable LED lamp.",
     "created_at": _at("2024-03-01T09:00:00")},
    {"id": 9, "sku": "CTH-MUG-001", "name": "Ceramic Mug 50% Off", "price": 12.0,
     "compare_at_price": 24.0, "stock_quantity": 100, "brand_id": 3, "supplier_id": None,
     "is_featured": False, "description": "Stoneware mug, 350 ml.",
     "created_at": _at("2024-03-05T09:00:00")},
    {"id": 10, "sku": "CTH-KTL-001", "name": "Discontinued Kettle", "price": 39.0,
     "compare_at_price": None, "stock_quantity": 0, "brand_id": 3, "supplier_id": 1,
     "is_featured": False, "description": "No longer sold.", "is_active": False,
     "created_at": _at("2023-12-01T09:00:00")},
    {"id": 11, "sku": "GEN-CBL-001", "name": "USB-C Cable", "price": 9.99,
     "compare_at_price": None, "stock_quantity": 200, "brand_id": None, "supplier_id": None,
     "is_featured": False, "description": "One metre, braided.",
     "created_at": _at("2024-03-10T09:00:00")},
]

PRODUCT_CATEGORIES: Rows = [
    {"product_id": 1, "category_id": 2, "sort_order": 0},
    {"product_id": 1, "category_id": 1, "sort_order": 1},
    {"product_id": 2, "category_id": 2, "sort_order": 0},
    {"product_id": 3, "category_id": 3, "sort_order": 0},
    {"product_id": 3, "category_id": 1, "sort_order": 1},
    {"product_id": 4, "category_id": 3, "sort_order": 0},
    {"product_id": 5, "category_id": 5, "sort_order": 0},
    {"product_id": 5, "category_id": 4, "sort_order": 1},
    {"product_id": 6, "category_id": 5, "sort_order": 0},
    {"product_id": 7, "category_id": 4, "sort_order": 0},
    {"product_id": 8, "category_id": 6, "sort_order": 0},
    {"product_id": 9, "category_id": 6, "sort_order": 0},
    {"product_id": 9, "category_id": 7, "sort_order": 1},
    {"product_id": 10, "category_id": 6, "sort_order": 0},
    {"product_id": 11, "category_id": 4, "sort_order": 0},
]

PRODUCT_IMAGES: Rows = [
    {"id": 1, "product_id": 1, "url": "https://cdn.example.com/p/1-side.jpg",
     "alt_text": "Ski set, side view", "is_primary": False, "sort_order": 2},
    {"id": 2, "product_id": 1, "url": "https://cdn.example.com/p/1-main.jpg",
     "alt_text": "Ski set", "is_primary": True, "sort_order": 1},
    {"id": 3, "product_id": 5, "url": "https://cdn.example.com/p/5-main.jpg",
     "alt_text": "Studio headphones", "is_primary": True, "sort_order": 1},
]

USERS: Rows = [
    {"id": 1, "email": "alice@example.com", "first_name": "Alice", "last_name": "Johnson",
     "phone": "+1-555-0101"},
    {"id": 2, "email": "bob@example.com", "first_name": "Bob", "last_name": "Smith"},
    {"id": 3, "email": "carol@example.com", "first_name": "Carol", "last_name": "Diaz"},
    {"id": 4, "email": "dave@example.com", "first_name": "Dave", "last_name": "Lee",
     "is_active": False},
]

REVIEWS: Rows = [
    {"id": 1, "product_id": 1, "user_id": 1, "rating": 5, "title": "Great on groomed runs",
     "body": "Turns easily.", "created_at": _at("2024-02-01T10:00:00")},
    {"id": 2, "product_id": 1, "user_id": 2, "rating": 4, "title": "Solid",
     "body": "Bindings took a while to adjust.", "created_at": _at("2024-02-03T10:00:00")},
    {"id": 3, "product_id": 1, "user_id": 3, "rating": 1, "title": "Removed",
     "body": "Spam.", "is_active": False, "created_at": _at("2024-02-04T10:00:00")},
    {"id": 4, "product_id": 5, "user_id": 1, "rating": 3, "title": "Comfortable",
     "body": "A little heavy.", "created_at": _at("2024-02-15T10:00:00")},
]

ORDERS: Rows = [
    {"id": 1, "order_number": "ORD-1001", "user_id": 1, "status": "delivered",
     "total_amount": 579.49, "shipping_address": "1 Main St, Springfield",
     "created_at": _at("2024-02-02T12:00:00")},
    {"id": 2, "order_number": "ORD-1002", "user_id": 1, "status": "pending",
     "total_amount": 69.97, "shipping_address": "1 Main St, Springfield",
     "created_at": _at("2024-03-12T12:00:00")},
    {"id": 3, "order_number": "ORD-1003", "user_id": 2, "status": "shipped",
     "total_amount": 139.99, "shipping_address": "22 Oak Ave, Shelbyville",
     "created_at": _at("2024-02-05T12:00:00")},
]

# Order 3 was placed before the headphones were renamed and repriced
ORDER_ITEMS: Rows = [
    {"id": 1, "order_id": 1, "product_id": 1, "product_name": "Alpine Ski Set",
     "product_sku": "ACM-SKI-001", "unit_price": 499.99, "quantity": 1, "line_total": 499.99},
    {"id": 2, "order_id": 1, "product_id": 2, "product_name": "Ski Goggles",
     "product_sku": "ACM-SKI-002", "unit_price": 79.5, "quantity": 1, "line_total": 79.5},
    {"id": 3, "order_id": 2, "product_id": 6, "product_name": "Wireless Earbuds",
     "product_sku": "NWA-HP-050", "unit_price": 49.99, "quantity": 1, "line_total": 49.99},
    {"id": 4, "order_id": 2, "product_id": 11, "product_name": "USB-C Cable",
     "product_sku": "GEN-CBL-001", "unit_price": 9.99, "quantity": 2, "line_total": 19.98},
    {"id": 5, "order_id": 3, "product_id": 5, "product_name": "Studio Monitor Headphones",
     "product_sku": "NWA-HP-100", "unit_price": 139.99, "quantity": 1, "line_total": 139.99},
]

CATALOG_TABLES: Sequence[Tuple[Type[DeclarativeBase], Rows]] = [
    (Brand, BRANDS),
    (Supplier, SUPPLIERS),
    (Category, CATEGORIES),
    (Product, PRODUCTS),
    (ProductCategory, PRODUCT_CATEGORIES),
    (ProductImage, PRODUCT_IMAGES),
    (User, USERS),
    (Review, REVIEWS),
    (Order, ORDERS),
    (OrderItem, ORDER_ITEMS),
]

# variant → (table checked for existing rows, tables to load in order)
SEED_SETS = {
    "lore": (Episode, LORE_TABLES),
    "catalog": (Product, CATALOG_TABLES),
}


def _uniform(model: Type[DeclarativeBase], rows: Rows) -> Rows:
    # executemany compiles one INSERT from the first row, so every row needs the same keys
    defaults: Dict[str, Any] = {key: None for row in rows for key in row}
    if "is_active" in model.__table__.c:
        defaults["is_active"] = True
    return [{**defaults, **row} for row in rows]


async def seed(database: Database, variant: str) -> bool:
    """
    Loads the sample rows for `variant` into an existing schema.

    Returns False without writing anything when the variant's primary table
    (episodes or products) already has rows, so running the init script twice is harmless.
    """
    primary_model, tables = SEED_SETS[variant]
    primary = primary_model.__table__
    async with database.engine.begin() as conn:
        existing = (await conn.execute(select(func.count()).select_from(primary))).scalar()
        if existing:
            logger.info("Skipping %s seed: %s already has %d rows", variant, primary.name, existing)
            return False
        for model, rows in tables:
            await conn.execute(insert(model.__table__), _uniform(model, rows))
            logger.info("Seeded %d rows into %s", len(rows), model.__tablename__)
    return True
