# Routes package init
"""
Catalog API — Routes Package
==============================

What:  HTTP route handlers. Each module owns one resource.
How:   Handlers parse and validate request input, call a repository facade,
       and map "absent" to 404. SQL lives in the repositories, never here.

Route Inventory:
    lore server
        - episodes.py:    GET /api/episodes, /api/episodes/{id}, /api/episodes/{id}/characters
        - characters.py:  GET /api/characters, /search/{query}, /affiliation/{affiliation},
                              /{id}, /{id}/appearances, /{id}/roles
    catalog server
        - products.py:    GET /api/products, /search, /featured, /{id}, /{id}/full, /{id}/reviews
        - categories.py:  GET /api/categories, /{id}, /{id}/children, /{id}/products
        - brands.py:      GET /api/brands, /{id}; /api/suppliers, /{id}
        - users.py:       GET /api/users, /{id}, /{id}/orders
        - orders.py:      GET /api/orders/{id}
    both servers
        - health.py:      GET /health, /health/db
        - misc.py:        GET /api/hello, POST /api/echo
"""

from catalog_api.routes import (
    brands,
    categories,
    characters,
    episodes,
    health,
    misc,
    orders,
    products,
    users,
)

LORE_ROUTERS = [episodes.router, characters.router]
CATALOG_ROUTERS = [
    products.router,
    categories.router,
    brands.router,
    users.router,
    orders.router,
]
SHARED_ROUTERS = [health.router, misc.router]
