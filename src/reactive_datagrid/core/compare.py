"""Comparer: accent-insensitive, numeric-aware ordering for cell values."""

from __future__ import annotations

import re
import unicodedata
from functools import cmp_to_key
from typing import Any, Iterable

from .values import to_python_scalar

_DIGITS = re.compile(r"(\d+)")


def fold(value: str) -> str:
    """Strip accents and case: ``"Café"`` -> ``"cafe"``."""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def natural_key(value: str) -> tuple:
    """Sort key matching :func:`accent_numeric_compare`.

    Digit runs become integers so ``"item2"`` sorts before ``"item10"``.
    Digits sort before letters at the same position.
    """
    parts = []
    for chunk in _DIGITS.split(fold(value)):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk))
    return tuple(parts)


def accent_numeric_compare(a: str, b: str) -> int:
    """Compare two strings ignoring accents and case, digits numerically.

    Returns -1, 0 or 1.
    """
    ka, kb = natural_key(a), natural_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def compare_values(a: Any, b: Any) -> int:
    """Order two resolved cell values.

    ``None`` sorts before anything else and equals itself. Strings use
    :func:`accent_numeric_compare`; numbers and booleans use their natural
    order. Values of incomparable types fall back to their string forms.
    """
    a, b = to_python_scalar(a), to_python_scalar(b)
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if isinstance(a, str) and isinstance(b, str):
        return accent_numeric_compare(a, b)
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        return accent_numeric_compare(str(a), str(b))


def unique_values_sorted(values: Iterable[str]) -> list[str]:
    """Distinct values in comparer order (first spelling wins on ties)."""
    seen: dict[str, None] = {}
    for v in values:
        seen.setdefault(v, None)
    return sorted(seen, key=cmp_to_key(accent_numeric_compare))
