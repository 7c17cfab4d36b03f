"""GridPipeline: orchestrates filter → sort → paginate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..core.column import Column
from ..core.filter_descriptor import FilterDescriptor
from ..core.paths import record_id
from .filter import FilterEngine
from .paginate import PageState, Paginator
from .sort import SortEngine, SortState


@dataclass(frozen=True)
class GridView:
    """Output of the filter and sort stages."""

    filtered_rows: tuple
    sorted_rows: tuple

    @property
    def filtered_ids(self) -> frozenset:
        return frozenset(record_id(r) for r in self.filtered_rows)

    @property
    def sorted_ids(self) -> list:
        return [record_id(r) for r in self.sorted_rows]


@dataclass(frozen=True)
class PageView:
    """Output of the paginate stage."""

    rows: tuple
    total_pages: int


class GridPipeline:
    """Runs the derived-state stages in order.

    1. Filter (every active column descriptor must match)
    2. Sort (single column, stable; unsorted keeps filter order)
    3. Paginate (slice of the sorted rows)

    Stages 1-2 and stage 3 are separate entry points so a page change
    does not re-filter or re-sort.
    """

    @staticmethod
    def view(
        records: Sequence[Any],
        columns: Sequence[Column],
        filters: Mapping[str, FilterDescriptor],
        sort: SortState,
    ) -> GridView:
        by_key = {col.key: col for col in columns}
        # --- Step 1: Filter ---
        filtered = FilterEngine.apply(records, by_key, filters)
        # --- Step 2: Sort ---
        column = by_key.get(sort.column_key) if sort.column_key else None
        ordered = SortEngine.apply(filtered, column, sort.direction)
        return GridView(filtered_rows=tuple(filtered), sorted_rows=tuple(ordered))

    @staticmethod
    def page(view: GridView, page: PageState) -> PageView:
        # --- Step 3: Paginate ---
        return PageView(
            rows=tuple(Paginator.page(view.sorted_rows, page)),
            total_pages=Paginator.total_pages(len(view.sorted_rows), page.page_size),
        )

    @staticmethod
    def run(
        records: Sequence[Any],
        columns: Sequence[Column],
        filters: Mapping[str, FilterDescriptor],
        sort: SortState,
        page: PageState,
    ) -> tuple[GridView, PageView]:
        """Run all three stages in one call."""
        view = GridPipeline.view(records, columns, filters, sort)
        return view, GridPipeline.page(view, page)
