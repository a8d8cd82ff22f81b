"""
Helpers for building parameterized SQL fragments.

Fragments use positional placeholders ($1, $2, ...) numbered in the order
their values are appended. bind_positional() converts a finished statement
into SQLAlchemy named binds so it can run through text() on any dialect.
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jobly.core.exceptions import BadRequestError

_PLACEHOLDER = re.compile(r"\$(\d+)")


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of an UPDATE from a subset of fields.

    Args:
        data: Field name -> new value, e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: Field name -> column name, e.g. {"firstName": "first_name"}.
            Fields missing here are used as the column name verbatim.

    Returns:
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: If data is empty
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(name, name)}"=${idx}' for idx, name in enumerate(keys, start=1)]
    return ", ".join(cols), [data[name] for name in keys]


def sql_for_job_filters(
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for a job search.

    Only supplied filters contribute a predicate. has_equity=True restricts
    to equity > 0; False or None applies no equity filter.

    Returns:
        ("WHERE LOWER(title) LIKE $1 AND salary >= $2", ["%eng%", 95000]),
        or ("", []) when no filter is given.
    """
    where: List[str] = []
    values: List[Any] = []

    if title:
        values.append(f"%{title.lower()}%")
        where.append(f"LOWER(title) LIKE ${len(values)}")

    if min_salary is not None:
        values.append(min_salary)
        where.append(f"salary >= ${len(values)}")

    if has_equity is True:
        where.append("equity > 0")

    if not where:
        return "", values
    return "WHERE " + " AND ".join(where), values


def bind_positional(sql: str, values: List[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite $n placeholders into :p<n> named binds.

    >>> bind_positional('"title"=$1 WHERE id = $2', ["Dev", 7])
    ('"title"=:p1 WHERE id = :p2', {'p1': 'Dev', 'p2': 7})
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _replace(match: "re.Match[str]") -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(f"No value bound for placeholder ${match.group(1)}")
        return f":{name}"

    return _PLACEHOLDER.sub(_replace, sql), params
