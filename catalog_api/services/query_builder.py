"""
Catalog API — Filter / Sort / Page Composer
=============================================

What:  Turns optional filter criteria, a sort request and a page/limit pair
       into SQL fragments (WHERE, ORDER BY) plus a matching parameter list.
How:   FilterBuilder appends predicate and parameter pairs to two parallel
       lists. Every value becomes a named bind (`:p1`, `:p2`, ...) numbered in
       the order it was appended, so parameter order always equals placeholder
       order. Unset filters (None) append nothing and impose no constraint.
Who:   Used by the repositories for every filtered or paginated query.

Injection boundary:
    User-supplied values are only ever bound. The single identifier that is
    interpolated into SQL text is the sort column, and SortSpec only emits
    column expressions from its own fixed allow-list.

Example:
    >>> where = (
    ...     FilterBuilder("p.is_active = TRUE")
    ...     .at_least("p.price", 10)
    ...     .at_most("p.price", 50)
    ...     .equals("p.brand_id", None)
    ...     .build()
    ... )
    >>> where.sql
    'WHERE p.is_active = TRUE AND p.price >= :p1 AND p.price <= :p2'
    >>> where.params
    [10, 50]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from catalog_api.exceptions import ValidationError

SORT_DIRECTIONS = ("asc", "desc")

# Signed 64-bit range of an SQL INTEGER bind (SQLite and PostgreSQL BIGINT)
MIN_SQL_INTEGER = -(2**63)
MAX_SQL_INTEGER = 2**63 - 1


def fits_sql_integer(value: int) -> bool:
    return MIN_SQL_INTEGER <= value <= MAX_SQL_INTEGER


@dataclass(frozen=True)
class PageRequest:
    """
    A 1-based page number and a page size.

    Raises:
        ValueError: page < 1 or limit < 1 (route handlers reject these
                    with a 400 before a PageRequest is ever built)
    """

    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class WhereClause:
    """A rendered WHERE fragment and its ordered parameter values."""

    sql: str = ""
    params: List[Any] = field(default_factory=list)

    def bind(self) -> Dict[str, Any]:
        """Returns the bind mapping (`{"p1": ..., "p2": ...}`) for the driver."""
        return {f"p{index}": value for index, value in enumerate(self.params, start=1)}


def escape_like(term: str) -> str:
    """Escapes LIKE wildcards so the term matches literally (ESCAPE '\\')."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FilterBuilder:
    """
    Accumulates a conjunction of predicates.

    Base predicates (e.g. the soft-delete filter) are passed to the
    constructor; they carry no parameters. Every other method takes a column
    expression chosen by the repository and a caller value, and does nothing
    when the value is None.
    """

    def __init__(self, *base_predicates: str):
        self._predicates: List[str] = list(base_predicates)
        self._params: List[Any] = []

    def _bind(self, value: Any) -> str:
        self._params.append(value)
        return f":p{len(self._params)}"

    def equals(self, column: str, value: Any) -> "FilterBuilder":
        if value is not None:
            self._predicates.append(f"{column} = {self._bind(value)}")
        return self

    def at_least(self, column: str, value: Any) -> "FilterBuilder":
        if value is not None:
            self._predicates.append(f"{column} >= {self._bind(value)}")
        return self

    def at_most(self, column: str, value: Any) -> "FilterBuilder":
        if value is not None:
            self._predicates.append(f"{column} <= {self._bind(value)}")
        return self

    def flag(self, column: str, value: Optional[bool]) -> "FilterBuilder":
        """Boolean column equality; binds a real bool so each driver renders it natively."""
        if value is not None:
            self._predicates.append(f"{column} = {self._bind(bool(value))}")
        return self

    def in_stock(self, column: str, value: Optional[bool]) -> "FilterBuilder":
        """True keeps rows with stock left (`> 0`); False keeps sold-out rows (`<= 0`)."""
        if value is not None:
            operator = ">" if value else "<="
            self._predicates.append(f"{column} {operator} {self._bind(0)}")
        return self

    def contains(self, columns: Sequence[str], term: Optional[str]) -> "FilterBuilder":
        """
        Case-insensitive substring match against one or more text columns.

        Several columns form one parenthesised OR group. Each column gets its
        own bind so placeholder order stays strictly sequential.
        """
        if term is None or not term.strip() or not columns:
            return self
        pattern = f"%{escape_like(term.strip().lower())}%"
        matches = [
            f"LOWER({column}) LIKE {self._bind(pattern)} ESCAPE '\\'" for column in columns
        ]
        if len(matches) == 1:
            self._predicates.append(matches[0])
        else:
            self._predicates.append("(" + " OR ".join(matches) + ")")
        return self

    def raw(self, predicate: str, *values: Any) -> "FilterBuilder":
        """
        Appends a predicate with `{}` slots filled by fresh binds, in order.

        Used for shapes the helpers above do not cover, such as an EXISTS
        sub-select on a join table. Does nothing if any value is None.
        """
        if any(value is None for value in values):
            return self
        placeholders = [self._bind(value) for value in values]
        self._predicates.append(predicate.format(*placeholders))
        return self

    def build(self) -> WhereClause:
        if not self._predicates:
            return WhereClause()
        return WhereClause(sql="WHERE " + " AND ".join(self._predicates), params=list(self._params))


class SortSpec:
    """
    Fixed allow-list of sortable fields for one query shape.

    Args:
        allowed:            public field name → column expression
        default_field:      used when the caller does not ask for a field
        default_direction:  "desc" unless stated otherwise
        tiebreak:           appended column (usually the primary key) so rows
                            with equal sort keys keep a stable page order
    """

    def __init__(
        self,
        allowed: Mapping[str, str],
        default_field: str,
        default_direction: str = "desc",
        tiebreak: Optional[str] = None,
    ):
        if default_field not in allowed:
            raise ValueError(f"default sort field '{default_field}' is not in the allow-list")
        self.allowed = dict(allowed)
        self.default_field = default_field
        self.default_direction = default_direction
        self.tiebreak = tiebreak

    @property
    def fields(self) -> List[str]:
        return sorted(self.allowed)

    def order_by(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> str:
        """
        Renders `ORDER BY <column> <DIR>[, <tiebreak> <DIR>]`.

        Raises:
            ValidationError: sort field outside the allow-list, or a direction
                             other than asc/desc
        """
        field_name = sort_by or self.default_field
        if field_name not in self.allowed:
            raise ValidationError(
                message=f"Invalid sort_by '{field_name}'. Must be one of: {', '.join(self.fields)}",
                field="sort_by",
            )
        direction = (sort_order or self.default_direction).lower()
        if direction not in SORT_DIRECTIONS:
            raise ValidationError(
                message=f"Invalid sort_order '{sort_order}'. Must be 'asc' or 'desc'",
                field="sort_order",
            )
        column = self.allowed[field_name]
        clause = f"ORDER BY {column} {direction.upper()}"
        if self.tiebreak and self.tiebreak != column:
            clause += f", {self.tiebreak} {direction.upper()}"
        return clause
