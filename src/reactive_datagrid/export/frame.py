"""pandas interop: records from a DataFrame, and grid rows back to one."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pandas as pd

from ..core.column import Column, Derivation, resolve_cell_value
from ..core.paths import record_id
from ..core.values import display_value, is_missing, normalize, to_python_scalar


def records_from_frame(df: pd.DataFrame, id_column: str | None = None) -> list[dict]:
    """Convert each DataFrame row to a dict record.

    The index supplies ``id`` unless *id_column* names a column to use
    (a column literally called ``id`` also takes precedence over the index).
    Missing values (NaN, NA, NaT) become None and numpy scalars become
    Python scalars.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(df).__name__}."
        )
    if id_column is not None and id_column not in df.columns:
        raise KeyError(
            f"Column '{id_column}' not found. Available: {list(df.columns)}"
        )
    records = []
    for idx, row in df.iterrows():
        record = {
            str(col): None if is_missing(val) else to_python_scalar(val)
            for col, val in row.items()
        }
        if id_column is None:
            record = {"id": to_python_scalar(idx), **record}
        else:
            record["id"] = record[str(id_column)]
        records.append(record)
    return records


def frame_columns(df: pd.DataFrame) -> list[Column]:
    """One sortable column per DataFrame column.

    Cells are read by exact column name, so names containing dots are not
    taken for nested paths.
    """
    return [
        Column(str(c), sorter=str(c), accessor=Derivation(lambda r, k=str(c): r.get(k)))
        for c in df.columns
    ]


def rows_to_frame(
    rows: Sequence[Any],
    columns: Sequence[Column],
    display: bool = False,
    translate: Callable[[str], str] | None = None,
) -> pd.DataFrame:
    """Build a DataFrame with one column per grid column, indexed by id.

    With ``display=True`` cells hold the display strings shown in filter
    menus (sentinels rendered as "(empty)", "(null)", ...) instead of the
    resolved values.
    """
    data: dict[str, list] = {col.key: [] for col in columns}
    ids = []
    for row in rows:
        ids.append(record_id(row))
        for col in columns:
            value = resolve_cell_value(col, row)
            if display:
                value = display_value(normalize(value), translate)
            data[col.key].append(value)
    return pd.DataFrame(data, index=pd.Index(ids, name="id"), columns=[c.key for c in columns])
