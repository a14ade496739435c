# Middleware package init
"""
Catalog API — Middleware Package
==================================

Middleware Chain (request direction):
    Request → [Security Headers] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Security headers wrap every routed response, including 400/404/500
       bodies from the CatalogAPIError handlers
    2. Request ID is set before logging reads it
    3. Logging measures the full handler duration, including serialization

Responses travel the same chain in reverse.

The catch-all Exception handler runs in Starlette's ServerErrorMiddleware,
outside this chain; it adds the security headers and the request ID
(read from request.state) to its 500 response itself.
"""
