"""
SQL helpers - partial UPDATE builder.

Turns a sparse field map into a parameterized SET clause:

    >>> upd = sql_for_partial_update({"firstName": "Aliya", "age": 32},
    ...                              {"firstName": "first_name"})
    >>> upd.set_cols
    '"first_name"=$1, "age"=$2'
    >>> upd.values
    ['Aliya', 32]

The field map is first turned into an ordered list of (column, value)
assignments; SQL text and values are both rendered from that list, so
fragment k always pairs with value k.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jobly.core.errors import BadRequestError

# Placeholder styles: "$1" for display/psql, ":p1" for SQLAlchemy text()
DOLLAR = "${}"
BIND = ":p{}"

# Largest value an INTEGER column holds (int4 on PostgreSQL)
INT_MAX = 2_147_483_647


def quote_ident(name: str) -> str:
    """Double-quote a column identifier."""
    return '"' + name.replace('"', '""') + '"'


def bind_name(index: int) -> str:
    """Bind parameter name used with the BIND placeholder style."""
    return f"p{index}"


@dataclass(frozen=True)
class PartialUpdate:
    assignments: Tuple[Tuple[str, Any], ...]
    placeholder: str = DOLLAR
    start: int = 1

    @property
    def set_cols(self) -> str:
        return ", ".join(
            f"{quote_ident(col)}={self.placeholder.format(self.start + i)}"
            for i, (col, _) in enumerate(self.assignments)
        )

    @property
    def values(self) -> List[Any]:
        return [value for _, value in self.assignments]

    @property
    def next_index(self) -> int:
        """First placeholder index not used by this clause."""
        return self.start + len(self.assignments)

    @property
    def params(self) -> Dict[str, Any]:
        return {bind_name(self.start + i): value for i, value in enumerate(self.values)}


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
    *,
    placeholder: str = DOLLAR,
    start: int = 1,
) -> PartialUpdate:
    """
    Build the SET clause for a partial update.

    Args:
        data_to_update: logical field name -> new value, only fields to change
        js_to_sql: logical field name -> column name, for names that differ
        placeholder: format string for the k-th parameter
        start: index of the first parameter

    Raises:
        BadRequestError: if there is nothing to update
    """
    if not data_to_update:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    assignments = tuple(
        (js_to_sql.get(field, field), value) for field, value in data_to_update.items()
    )
    return PartialUpdate(assignments=assignments, placeholder=placeholder, start=start)
