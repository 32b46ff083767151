"""Helpers for building parameterized SQL fragments.

Functions:
- sql_for_partial_update(data_to_update, js_to_sql) -> PartialUpdate
- allowed_fields(entity, data, allowed) -> dict (raises BadRequestError on unknown fields)
"""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, NamedTuple, Optional
from errors import BadRequestError, EmptyUpdateError


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]

    @property
    def params(self) -> Dict[str, Any]:
        """Bind parameters keyed the way the placeholders in `set_cols` are named."""
        return {f"v{idx}": value for idx, value in enumerate(self.values, start=1)}


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Optional[Mapping[str, str]] = None) -> PartialUpdate:
    """Build the SET clause of an UPDATE from a sparse field -> value mapping.

    `js_to_sql` renames fields whose column name differs from the field name;
    fields not in it are used as-is. Columns keep the iteration order of
    `data_to_update` and `values` matches it one-to-one:

        sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        -> PartialUpdate('"first_name"=:v1, "age"=:v2', ["Aliya", 32])

    Column names are NOT validated here; callers must restrict `data_to_update`
    to known columns first (see allowed_fields).
    """
    keys = list(data_to_update)
    if not keys:
        raise EmptyUpdateError("No data")
    js_to_sql = js_to_sql or {}
    cols = [f'"{js_to_sql.get(col_name, col_name)}"=:v{idx}' for idx, col_name in enumerate(keys, start=1)]
    return PartialUpdate(", ".join(cols), [data_to_update[k] for k in keys])


def allowed_fields(entity: str, data: Mapping[str, Any], allowed: Mapping[str, str]) -> Dict[str, Any]:
    """Reject any field outside an entity's mutable allowlist.

    Empty input passes through untouched so the builder reports it as an empty update.
    """
    unknown = [k for k in data if k not in allowed]
    if unknown:
        raise BadRequestError(f"Cannot update {entity} field(s): {', '.join(sorted(unknown))}")
    return dict(data)
