"""SortEngine: single-column ordering of the filtered records."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Literal, Sequence

from ..core.column import Column, Comparator, resolve_cell_value
from ..core.compare import compare_values

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction; both None means unsorted."""

    column_key: str | None = None
    direction: Direction | None = None

    @property
    def active(self) -> bool:
        return self.column_key is not None and self.direction is not None

    def toggled(self, column_key: str) -> SortState:
        """Next state after clicking *column_key*.

        Same column cycles asc -> desc -> unsorted -> asc; a different
        column always starts at asc.
        """
        if self.column_key != column_key:
            return SortState(column_key, "asc")
        next_direction = {None: "asc", "asc": "desc", "desc": None}[self.direction]
        return SortState(column_key, next_direction)


class SortEngine:
    """Orders records by one column. Sorting is stable."""

    @staticmethod
    def comparator(column: Column) -> Callable[[Any, Any], int]:
        """Two-record comparison function for an ascending sort."""
        sorter = column.sorter
        if isinstance(sorter, Comparator):
            return sorter.fn

        def by_value(a: Any, b: Any) -> int:
            return compare_values(
                resolve_cell_value(column, a), resolve_cell_value(column, b)
            )

        return by_value

    @staticmethod
    def apply(
        records: Sequence[Any],
        column: Column | None,
        direction: Direction | None,
    ) -> list:
        """Return records sorted by *column*.

        Without a sortable column or a direction the input order is kept.
        Descending order swaps the comparison arguments, so ties keep
        their input order in both directions.
        """
        if column is None or direction is None or not column.sortable:
            return list(records)
        cmp = SortEngine.comparator(column)
        if direction == "desc":
            return sorted(records, key=cmp_to_key(lambda a, b: cmp(b, a)))
        return sorted(records, key=cmp_to_key(cmp))
