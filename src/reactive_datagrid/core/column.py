"""Column descriptors and cell-value resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from ..display_utils import prettify_name
from .labels import LabelKey, Localizable
from .paths import get_value_by_path
from .values import UNDEFINED, is_missing


@dataclass(frozen=True)
class FieldPath:
    """Dotted path into a record, e.g. ``"address.city"``."""

    path: str


@dataclass(frozen=True)
class Derivation:
    """Function computing a cell value from a whole record."""

    fn: Callable[[Any], Any]


@dataclass(frozen=True)
class Comparator:
    """Two-record comparison function returning negative, zero or positive."""

    fn: Callable[[Any, Any], int]


Accessor = Union[FieldPath, Derivation]
Sorter = Union[FieldPath, Comparator]


def _as_accessor(value: Any) -> Accessor | None:
    if value is None or isinstance(value, (FieldPath, Derivation)):
        return value
    if isinstance(value, str):
        return FieldPath(value)
    if callable(value):
        return Derivation(value)
    raise TypeError(
        f"Column accessor must be a field path or a function, "
        f"got {type(value).__name__}."
    )


def _as_sorter(value: Any) -> Sorter | None:
    if value is None or isinstance(value, (FieldPath, Comparator)):
        return value
    if isinstance(value, str):
        return FieldPath(value)
    if callable(value):
        return Comparator(value)
    raise TypeError(
        f"Column sorter must be a field path or a comparison function, "
        f"got {type(value).__name__}."
    )


@dataclass(frozen=True)
class Column:
    """Static description of one grid column.

    ``accessor`` and ``sorter`` accept the tagged variants directly, or a
    plain string (field path) / callable, which are wrapped on creation.
    A column without a sorter cannot be sorted. A :class:`FieldPath`
    sorter sorts by the resolved cell value; a :class:`Comparator`
    compares whole records.
    """

    key: str
    title: Localizable | None = None
    visible: bool = True
    class_name: str = ""
    sorter: Sorter | None = None
    accessor: Accessor | None = None
    map: Callable[[Any], Any] | None = field(default=None, compare=False)
    hide_value_selection: bool = False
    hide_search_button: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("Column key must be a non-empty string.")
        object.__setattr__(self, "accessor", _as_accessor(self.accessor))
        object.__setattr__(self, "sorter", _as_sorter(self.sorter))
        if self.title is None:
            object.__setattr__(self, "title", prettify_name(self.key))
        elif not isinstance(self.title, (str, LabelKey)):
            raise TypeError(
                f"Column title must be a string or LabelKey, "
                f"got {type(self.title).__name__}."
            )

    @property
    def sortable(self) -> bool:
        return self.sorter is not None


def resolve_cell_value(column: Column, record: Any) -> Any:
    """Return the value shown in *column* for *record*.

    An explicit accessor wins over the column key as path; the optional
    ``map`` transform is applied last. Missing values come back as None.
    """
    accessor = column.accessor
    if isinstance(accessor, Derivation):
        value = accessor.fn(record)
    elif isinstance(accessor, FieldPath):
        value = get_value_by_path(record, accessor.path)
    else:
        value = get_value_by_path(record, column.key)

    if value is UNDEFINED:
        value = None
    if column.map is not None:
        value = column.map(value)
    if value is UNDEFINED or is_missing(value):
        return None
    return value
