"""Input validation with clear error messages for grid hosts."""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from .column import Column
from .paths import record_id


def _dupes_message(what: str, dupes: list) -> str:
    return (
        f"{what} must be unique. Found duplicates: {dupes[:5]}"
        + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
    )


def validate_columns(columns: Iterable[Any]) -> list[Column]:
    """Validate that every entry is a Column and keys are unique.

    Returns the columns as a list (unchanged).
    """
    columns = list(columns)
    for col in columns:
        if not isinstance(col, Column):
            raise TypeError(
                f"Expected Column instances, got {type(col).__name__}. "
                "Wrap your definitions with Column(key=..., ...)."
            )
    counts = Counter(col.key for col in columns)
    dupes = [k for k, n in counts.items() if n > 1]
    if dupes:
        raise ValueError(_dupes_message("Column keys", dupes))
    return columns


def validate_records(records: Iterable[Any] | None) -> list:
    """Validate that every record has an id and ids are unique.

    ``None`` is treated as an empty collection. Returns a new list.
    """
    if records is None:
        return []
    if isinstance(records, (str, bytes)):
        raise TypeError("Records must be a collection of records, not a string.")
    records = list(records)
    ids = [record_id(r) for r in records]
    for rid in ids:
        if not isinstance(rid, (str, int)) or isinstance(rid, bool):
            raise TypeError(
                f"Record ids must be str or int, got {type(rid).__name__} ({rid!r})."
            )
    counts = Counter(ids)
    dupes = [k for k, n in counts.items() if n > 1]
    if dupes:
        raise ValueError(_dupes_message("Record ids", dupes))
    return records
