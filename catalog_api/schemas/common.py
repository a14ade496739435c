"""
Catalog API — Shared Response Schemas
=======================================

What:  Pydantic models used by both servers: the pagination envelope, the
       generic page wrapper, and the error and health bodies.
How:   FastAPI serializes these through `response_model`, using field aliases,
       so the pagination block reads `totalPages` / `hasNext` / `hasPrev` on
       the wire while Python code uses snake_case.
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Pagination(BaseModel):
    """
    Pagination envelope accompanying a paginated list.

    Invariants:
        total_pages == ceil(total / limit)
        has_next    == page < total_pages
        has_prev    == page > 1

    Example (zero matches on page 1):
        {"page": 1, "limit": 10, "total": 0, "totalPages": 0,
         "hasNext": false, "hasPrev": false}
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Page size")
    total: int = Field(description="Rows matching the filters across all pages")
    total_pages: int = Field(description="ceil(total / limit)")
    has_next: bool = Field(description="Whether a following page exists")
    has_prev: bool = Field(description="Whether a preceding page exists")


class Page(BaseModel, Generic[T]):
    """Paginated list body: `{data, pagination}`."""

    data: List[T] = Field(description="Rows on the requested page")
    pagination: Pagination


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Failed to fetch episodes", "details": "no such table: episodes"}
    """

    error: str = Field(description="Human-readable error description")
    details: Optional[str] = Field(default=None, description="Underlying failure text, if any")


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'ok' when the process answers")
    service: str = Field(description="Which server answered: lore or catalog")
    version: str = Field(description="Application version")
    timestamp: str = Field(description="Server time (UTC ISO 8601)")


class HelloResponse(BaseModel):
    message: str
    timestamp: str


class EchoResponse(BaseModel):
    message: str = "Echo response"
    data: Any = None
    timestamp: str
