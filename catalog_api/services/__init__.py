# Services package init
"""
Catalog API — Services Layer
==============================

What:  Everything between the route handlers (HTTP) and the persistence
       handle (SQL execution).

Service Inventory:
    - query_builder.py:       FilterBuilder, SortSpec, PageRequest (WHERE / ORDER BY / paging)
    - pagination.py:          PagedQuery, paginate(), the pagination envelope
    - aggregator.py:          gather_relations() fork-join for related rows
    - repository.py:          Repository base (row → model validation)
    - lore_repository.py:     episodes, characters, appearances
    - catalog_repository.py:  products, categories, brands, suppliers, users, orders
"""
