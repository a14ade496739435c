"""
Catalog API — Application Package Initializer
===============================================

What: Marks the `catalog_api` directory as a Python package.
Who:  Imported by uvicorn (`catalog_api.main:lore_app`, `catalog_api.main:catalog_app`),
      by the init script and by pytest.

Architecture Note:
    Two read-only REST servers (Star Wars lore, e-commerce catalog) share one
    layered core:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parameter parsing, status codes
    ├─────────────────────────────────────┤
    │      Repositories (Query Facade)    │  ← SQL text, typed results
    ├─────────────────────────────────────┤
    │  Query builder / Pagination / Joins │  ← WHERE + ORDER, envelopes, fork-join
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘

    Routes never build SQL; repositories never look at HTTP requests.
"""

__version__ = "1.0.0"
