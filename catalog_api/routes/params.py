"""
Catalog API — Request Parameter Helpers
=========================================

What:  Parsing and validation shared by every route handler.
How:   Path parameters arrive as raw strings and are parsed here so the error
       message can name the resource ("Invalid episode ID") instead of
       FastAPI's generic 422 body. Query parameters use typed `Query(...)`
       declarations; their type/range failures are answered with 400 by the
       RequestValidationError handler in main.py.
"""

import re
from contextlib import contextmanager
from typing import Iterator

from fastapi import Query

from catalog_api.config import settings
from catalog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from catalog_api.services.query_builder import MAX_SQL_INTEGER, PageRequest, fits_sql_integer

# Optional sign followed by digits only: "12abc", "1.5" and "" are rejected
_INTEGER = re.compile(r"^[+-]?\d+$")

MIN_SEARCH_LENGTH = 2


def parse_id(raw: str, resource: str) -> int:
    """
    Parses a path ID strictly as an integer.

    Raises:
        ValidationError: "Invalid <resource> ID" for anything that is not an integer
        NotFoundError:   a well-formed integer outside the 64-bit range no row can have
    """
    value = (raw or "").strip()
    if not _INTEGER.match(value):
        raise ValidationError(message=f"Invalid {resource} ID", field="id")
    sign = "-" if value.startswith("-") else ""
    digits = value.lstrip("+-").lstrip("0") or "0"
    # 19 digits cover the 64-bit range; longer strings are never converted
    if len(digits) > 19 or not fits_sql_integer(int(sign + digits)):
        raise NotFoundError(resource=resource.capitalize())
    return int(sign + digits)


def search_term(raw: str) -> str:
    """
    Trims a search query and enforces the minimum length.

    Raises:
        ValidationError: fewer than 2 characters after trimming
    """
    term = (raw or "").strip()
    if len(term) < MIN_SEARCH_LENGTH:
        raise ValidationError(
            message=f"Search query must be at least {MIN_SEARCH_LENGTH} characters long",
            field="query",
        )
    return term


def pagination(
    page: int = Query(default=1, ge=1, le=MAX_SQL_INTEGER, description="Page number (1-based)"),
    limit: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Items per page (max {settings.max_page_size})",
    ),
) -> PageRequest:
    """FastAPI dependency: `?page=&limit=` → PageRequest, defaults 1 and 10."""
    return PageRequest(page=page, limit=limit)


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """
    Gives persistence failures raised inside the block an endpoint-specific message.

    Example:
        with failure_message("Failed to fetch episodes"):
            episodes = await repo.list_episodes()

    A DatabaseError leaving the block carries `message` as its `error` text and
    keeps the driver's text in `details`. Other exceptions pass through untouched.
    """
    try:
        yield
    except DatabaseError as exc:
        raise DatabaseError(message=message, details=exc.details, context=exc.context) from exc
