"""
Catalog API — Health Check Routes
===================================

What:  Liveness and database-readiness probes, mounted on both servers.
How:   /health answers without touching the database. /health/db runs the
       cheapest meaningful query for the server's variant (a row count on its
       primary table) and reports it.
Who:   Docker health checks, load balancers, monitoring.

Status codes:
    /health     always 200 while the process answers
    /health/db  200 when the count query succeeds, 500 when it fails
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog_api import __version__
from catalog_api.database import Database, get_database
from catalog_api.exceptions import DatabaseError
from catalog_api.routes.misc import utc_now
from catalog_api.schemas.common import HealthResponse
from catalog_api.services.catalog_repository import CatalogRepository
from catalog_api.services.lore_repository import LoreRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Process liveness")
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=request.app.state.variant,
        version=__version__,
        timestamp=utc_now(),
    )


@router.get(
    "/health/db",
    summary="Database connectivity",
    description=(
        "Counts the rows of the server's primary table (episodes or products). "
        "Returns 500 with `database: disconnected` when the query fails."
    ),
)
async def database_health(request: Request, db: Database = Depends(get_database)) -> JSONResponse:
    variant = request.app.state.variant
    try:
        if variant == "lore":
            counts: Dict[str, Any] = {"episodes_count": await LoreRepository(db).count_episodes()}
        else:
            counts = {"products_count": await CatalogRepository(db).count_products()}
    except DatabaseError as exc:
        logger.warning("Health check: %s database unreachable: %s", variant, exc.details)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "database": "disconnected",
                "error": exc.details or exc.message,
                "timestamp": utc_now(),
            },
        )

    return JSONResponse(
        content={"status": "ok", "database": "connected", **counts, "timestamp": utc_now()}
    )
