"""
Search filter compiler.

Optional, independent search criteria become one parameterized WHERE clause.

Each supplied criterion is first validated and turned into a Predicate
(column, op, value). The predicate list is then folded into a single
conjunction. Filter values only ever travel as bound parameters.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jobly.core.errors import BadRequestError
from jobly.utils.sql import DOLLAR, INT_MAX, bind_name, quote_ident

CONTAINS = "contains"
GTE = "gte"
LTE = "lte"
GT = "gt"

_COMPARATORS = {GTE: ">=", LTE: "<=", GT: ">"}

# Kinds of logical filter input
TEXT = "text"
BOUND = "bound"  # non-negative integer
FLAG = "flag"    # boolean; only True adds a predicate


@dataclass(frozen=True)
class Predicate:
    column: str
    op: str
    value: Any

    def render(self, param: str) -> str:
        col = quote_ident(self.column)
        if self.op == CONTAINS:
            return f"LOWER({col}) LIKE LOWER({param}) ESCAPE '\\'"
        return f"{col} {_COMPARATORS[self.op]} {param}"

    @property
    def bound_value(self) -> Any:
        if self.op == CONTAINS:
            return f"%{escape_like(self.value)}%"
        return self.value


@dataclass(frozen=True)
class FilterField:
    column: str
    op: str
    kind: str
    flag_value: Any = None  # value compared against when a FLAG is set


@dataclass(frozen=True)
class FilterSet:
    fields: Mapping[str, FilterField]
    ranges: Tuple[Tuple[str, str], ...] = ()


JOB_FILTERS = FilterSet(
    fields={
        "title": FilterField("title", CONTAINS, TEXT),
        "minSalary": FilterField("salary", GTE, BOUND),
        "maxSalary": FilterField("salary", LTE, BOUND),
        "hasEquity": FilterField("equity", GT, FLAG, flag_value=0),
    },
    ranges=(("minSalary", "maxSalary"),),
)

COMPANY_FILTERS = FilterSet(
    fields={
        "name": FilterField("name", CONTAINS, TEXT),
        "minEmployees": FilterField("num_employees", GTE, BOUND),
        "maxEmployees": FilterField("num_employees", LTE, BOUND),
    },
    ranges=(("minEmployees", "maxEmployees"),),
)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _check(name: str, field: FilterField, value: Any) -> Optional[str]:
    if field.kind == TEXT:
        if not isinstance(value, str):
            return f"{name} must be a string"
    elif field.kind == BOUND:
        if isinstance(value, bool) or not isinstance(value, int):
            return f"{name} must be an integer"
        if value < 0:
            return f"{name} must be greater than or equal to 0"
        if value > INT_MAX:
            return f"{name} must be less than or equal to {INT_MAX}"
    elif field.kind == FLAG:
        if not isinstance(value, bool):
            return f"{name} must be a boolean"
    return None


def collect_predicates(
    filters: Optional[Mapping[str, Any]], filter_set: FilterSet
) -> Tuple[List[Predicate], List[str]]:
    """Validate the supplied filters and build one predicate per criterion."""
    # None and "" both mean the filter was not given
    supplied = {k: v for k, v in (filters or {}).items() if v is not None and v != ""}
    predicates: List[Predicate] = []
    errors: List[str] = []

    for name, value in supplied.items():
        field = filter_set.fields.get(name)
        if field is None:
            errors.append(f"{name} is not a valid filter")
            continue
        error = _check(name, field, value)
        if error:
            errors.append(error)
            continue
        if field.kind == FLAG:
            if value:
                predicates.append(Predicate(field.column, field.op, field.flag_value))
        else:
            predicates.append(Predicate(field.column, field.op, value))

    if not errors:
        for low, high in filter_set.ranges:
            if low in supplied and high in supplied and supplied[low] > supplied[high]:
                errors.append(f"{low} cannot be greater than {high}")

    return predicates, errors


@dataclass(frozen=True)
class WhereClause:
    predicates: Tuple[Predicate, ...]
    placeholder: str = DOLLAR
    start: int = 1

    @property
    def where(self) -> str:
        """'WHERE a AND b', or '' when nothing was supplied."""
        if not self.predicates:
            return ""
        parts = [
            p.render(self.placeholder.format(self.start + i))
            for i, p in enumerate(self.predicates)
        ]
        return "WHERE " + " AND ".join(parts)

    @property
    def values(self) -> List[Any]:
        return [p.bound_value for p in self.predicates]

    @property
    def params(self) -> Dict[str, Any]:
        return {bind_name(self.start + i): v for i, v in enumerate(self.values)}


def compile_filters(
    filters: Optional[Mapping[str, Any]],
    filter_set: FilterSet,
    *,
    placeholder: str = DOLLAR,
    start: int = 1,
) -> WhereClause:
    """
    Compile optional search criteria into a WHERE clause.

    Raises:
        BadRequestError: with every validation message, if any criterion is invalid
    """
    predicates, errors = collect_predicates(filters, filter_set)
    if errors:
        raise BadRequestError(errors)
    return WhereClause(predicates=tuple(predicates), placeholder=placeholder, start=start)
