"""Localizable labels: literal strings or translation keys."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, Union

Translate = Callable[[str], str]


@dataclass(frozen=True)
class LabelKey:
    """A label looked up through the host's translation function."""

    key: str


Localizable = Union[str, LabelKey]


def resolve_label(label: Localizable, translate: Translate | None = None) -> str:
    if isinstance(label, LabelKey):
        return translate(label.key) if translate is not None else label.key
    return label


class DictTranslator:
    """Flat key -> string translation table; unknown keys echo back.

    Nested mappings are flattened into dot-separated keys, so
    ``{"grid": {"value": {"null": "(nulo)"}}}`` answers ``"grid.value.null"``.
    """

    def __init__(self, table: Mapping[str, object] | None = None) -> None:
        self._table: dict[str, str] = {}
        if table:
            self._flatten("", table)

    def _flatten(self, prefix: str, table: Mapping[str, object]) -> None:
        for k, v in table.items():
            full = f"{prefix}.{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                self._flatten(full, v)
            else:
                self._table[full] = str(v)

    def __call__(self, key: str) -> str:
        return self._table.get(key, key)

    def __contains__(self, key: str) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)
