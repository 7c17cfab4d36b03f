"""Value normalization: canonical filterable strings for arbitrary cell values.

Cell values are reduced to strings before they take part in filtering or
in the distinct-value lists of a filter menu. Empty strings, ``None`` and
undefined cells each get their own reserved token so they can be selected
and displayed separately from real data.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
import pandas as pd


class _Undefined:
    """Marker for a cell that has no value at all (not even ``None``)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

# NUL never appears in display text, so these cannot collide with data.
EMPTY = "\x00empty\x00"
NULL = "\x00null\x00"
UNDEFINED_TOKEN = "\x00undefined\x00"

SENTINELS = frozenset({EMPTY, NULL, UNDEFINED_TOKEN})

# translation key -> fallback label
SENTINEL_LABELS = {
    EMPTY: ("grid.value.empty", "(empty)"),
    NULL: ("grid.value.null", "(null)"),
    UNDEFINED_TOKEN: ("grid.value.undefined", "(undefined)"),
}


def is_missing(raw: Any) -> bool:
    """Return True for ``None``, NaN, ``pd.NA`` and ``NaT``."""
    if raw is None:
        return True
    if isinstance(raw, (str, bool)) or not pd.api.types.is_scalar(raw):
        return False
    return bool(pd.isna(raw))


def to_python_scalar(raw: Any) -> Any:
    """Unwrap numpy scalars so they compare and print like Python values."""
    if isinstance(raw, np.generic):
        return raw.item()
    return raw


def normalize(raw: Any = UNDEFINED) -> str:
    """Convert a cell value to its canonical string form.

    Examples::

        normalize(UNDEFINED)  # -> UNDEFINED_TOKEN
        normalize(None)       # -> NULL
        normalize(float("nan"))  # -> NULL
        normalize("")         # -> EMPTY
        normalize(True)       # -> "true"
        normalize(42)         # -> "42"
    """
    if raw is UNDEFINED:
        return UNDEFINED_TOKEN
    if is_missing(raw):
        return NULL
    raw = to_python_scalar(raw)
    if isinstance(raw, str):
        return raw if raw != "" else EMPTY
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)


def is_sentinel(normalized: str) -> bool:
    return normalized in SENTINELS


def display_value(
    normalized: str,
    translate: Callable[[str], str] | None = None,
) -> str:
    """Map a normalized value to a human label.

    Sentinels become "(empty)", "(null)" or "(undefined)" (or their
    translations when ``translate`` is given); other values pass through.
    """
    entry = SENTINEL_LABELS.get(normalized)
    if entry is None:
        return normalized
    key, fallback = entry
    if translate is None:
        return fallback
    label = translate(key)
    return fallback if not label or label == key else label
