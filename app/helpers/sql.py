"""
SQL fragment helpers shared by every repository.

Both helpers return statement text plus an ordered value list. Values are
never written into the text: each one is bound through a positional
placeholder ``:p1``, ``:p2``, ... and ``bind_params`` turns the value list into
the mapping SQLAlchemy's ``text()`` expects.

    set_cols, values = sql_for_partial_update(
        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    # set_cols == '"first_name"=:p1, "age"=:p2'
    # values   == ["Aliya", 32]
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from app.core.errors import BadRequestError

logger = logging.getLogger(__name__)


def placeholder(idx: int) -> str:
    """Render the bind marker for position ``idx`` (1-based)."""
    return f":p{idx}"


def bind_params(values: List[Any], start: int = 1) -> Dict[str, Any]:
    """Map an ordered value list onto the ``p<idx>`` bind names."""
    return {f"p{idx}": value for idx, value in enumerate(values, start=start)}


def sql_for_partial_update(data_to_update: Mapping[str, Any],
                           js_to_sql: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: logical field name -> new value; only these change
        js_to_sql: logical field name -> column name; unlisted fields are
            used verbatim as the column name

    Returns:
        (set_cols, values) where the Nth term of set_cols binds placeholder N
        and values[N-1]

    Raises:
        BadRequestError: data_to_update is empty
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(key, key)}"={placeholder(idx)}'
        for idx, key in enumerate(keys, start=1)
    ]
    return ", ".join(cols), [data_to_update[key] for key in keys]


def require_fields(data: Mapping[str, Any], *fields: str) -> None:
    """Raise BadRequestError unless every field is present and not None."""
    missing = [field for field in fields if data.get(field) is None]
    if missing:
        raise BadRequestError(f"Missing required fields: {', '.join(missing)}")


@dataclass(frozen=True)
class FilterRule:
    """
    One recognized filter.

    template: predicate text with a single ``{}`` slot for the placeholder,
        e.g. ``"num_employees >= {}"``
    convert: maps the caller's value to the bound value
    flag: boolean-presence filter; the template is used as-is (no slot, no
        bound value) and only when the caller's value is truthy
    """
    template: str
    convert: Optional[Callable[[Any], Any]] = None
    flag: bool = False


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_ci(value: Any) -> str:
    """Bound value for a case-insensitive substring match."""
    return f"%{escape_like(str(value).lower())}%"


def text_contains(column: str) -> FilterRule:
    """Case-insensitive substring filter on a text column."""
    return FilterRule(f"LOWER({column}) LIKE {{}} ESCAPE '\\'", convert=contains_ci)


def sql_for_filters(filters: Optional[Mapping[str, Any]],
                    rules: Mapping[str, FilterRule],
                    start: int = 1) -> Tuple[str, List[Any]]:
    """
    Build an AND-joined predicate from the caller's filters.

    Filters missing from ``rules`` are ignored, as are filters whose value is
    None. No filters gives ``("", [])``.

    Returns:
        (predicate, values) with placeholders numbered from ``start``
    """
    terms: List[str] = []
    values: List[Any] = []

    for name, value in (filters or {}).items():
        rule = rules.get(name)
        if rule is None:
            logger.debug("Ignoring unrecognized filter %r", name)
            continue
        if value is None:
            continue
        if rule.flag:
            if value:
                terms.append(rule.template)
            continue

        values.append(rule.convert(value) if rule.convert else value)
        terms.append(rule.template.format(placeholder(start + len(values) - 1)))

    return " AND ".join(terms), values


def where_clause(predicate: str) -> str:
    """Prefix a non-empty predicate with WHERE."""
    return f"WHERE {predicate}" if predicate else ""
