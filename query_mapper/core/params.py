"""Command parameters and SQL placeholder normalization.

Converts `:name` parameter syntax to driver-specific format.
Handles string literal exclusion and PostgreSQL `::typecast` syntax.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from query_mapper.core.enums import DbType, ParameterDirection

# Matches :name but not ::typecast and not inside words
# Negative lookbehind for : (handles ::), \w (handles mid-word colons)
_PARAM_PATTERN = re.compile(r"(?<![:\w]):([a-zA-Z_]\w*)")

# Matches single-quoted string literals (with escaped quotes handled)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'")


@dataclass
class Parameter:
    """A named value bound to a command.

    Output and input-output parameters have ``value`` replaced with the
    driver-returned value after a procedure call, on adapters that support it.
    """

    name: str
    value: Any = None
    direction: ParameterDirection = ParameterDirection.INPUT
    db_type: DbType = DbType.STRING
    size: int | None = None


def parameters_from_object(obj: Any) -> dict[str, Any]:
    """Return a name -> value dict for a mapping, dataclass, pydantic model or object.

    Plain objects contribute their public instance attributes.
    """
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    if hasattr(obj, "model_dump"):
        return dict(obj.model_dump())
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    try:
        attributes = vars(obj)
    except TypeError as e:
        raise TypeError(
            f"Cannot read parameters from {type(obj).__name__}: expected a mapping or object"
        ) from e
    return {name: value for name, value in attributes.items() if not name.startswith("_")}


def parameter_values(parameters: Iterable[Parameter]) -> dict[str, Any]:
    """Return the name -> value dict of the input-capable parameters."""
    return {p.name: p.value for p in parameters if p.direction.is_input}


def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert :name parameters to the target param style.

    Args:
        sql: SQL string with :name parameters.
        paramstyle: Target style - 'named' (no conversion) or 'pyformat' (%(name)s).

    Returns:
        SQL with parameters converted to the target style.
    """
    if paramstyle == "named":
        return sql
    return _convert_to_pyformat(sql)


@lru_cache(maxsize=256)
def _convert_to_pyformat(sql: str) -> str:
    """Convert :name params to %(name)s, preserving string literals.

    Literal percent signs become %% everywhere, string literals included,
    since pyformat drivers scan the whole statement for placeholders.
    """
    sql = sql.replace("%", "%%")
    parts: list[str] = []
    last_end = 0

    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:start]))
        parts.append(match.group())
        last_end = end

    if last_end < len(sql):
        parts.append(_PARAM_PATTERN.sub(r"%(\1)s", sql[last_end:]))

    return "".join(parts)
