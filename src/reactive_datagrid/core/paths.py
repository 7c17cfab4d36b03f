"""Field-path lookup on records (mappings or plain objects)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .values import UNDEFINED


def _get_part(current: Any, part: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(part, UNDEFINED)
    if isinstance(current, (list, tuple)) and part.lstrip("-").isdigit():
        try:
            return current[int(part)]
        except IndexError:
            return UNDEFINED
    return getattr(current, part, UNDEFINED)


def get_value_by_path(item: Any, path: str) -> Any:
    """Resolve a dotted path such as ``"address.city"`` on *item*.

    Returns ``UNDEFINED`` when any segment is missing, and ``str(item)``
    for an empty path.
    """
    if not path:
        return str(item)
    current = item
    for part in path.split("."):
        if current is None or current is UNDEFINED or isinstance(
            current, (str, int, float, bool)
        ):
            return UNDEFINED
        current = _get_part(current, part)
    return current


def record_id(record: Any) -> Any:
    """Return the ``id`` of a record, raising if it has none."""
    if isinstance(record, Mapping):
        if "id" not in record:
            raise ValueError(f"Record has no 'id' key: {dict(record)!r}")
        return record["id"]
    try:
        return record.id
    except AttributeError:
        raise ValueError(
            f"Record of type {type(record).__name__} has no 'id' attribute."
        ) from None


def create_map(
    items: Iterable[Any],
    id_key: str = "id",
    name_key: str = "name",
) -> dict[Any, Any]:
    """Build ``{item[id_key]: item[name_key]}`` from a sequence of records.

    ``name_key`` may be a dotted path. Anything that is not iterable
    yields an empty map.
    """
    if isinstance(items, (str, bytes, Mapping)):
        return {}
    try:
        iterator = iter(items)
    except TypeError:
        return {}
    return {
        get_value_by_path(item, id_key): get_value_by_path(item, name_key)
        for item in iterator
    }
