"""GridState: centralized reactive state for one data grid."""

from __future__ import annotations

import dataclasses
import itertools
import logging
from collections.abc import Mapping
from typing import Any, Iterable

import param

from ..core.column import Column, resolve_cell_value
from ..core.compare import unique_values_sorted
from ..core.filter_descriptor import FilterDescriptor
from ..core.labels import resolve_label
from ..core.paths import record_id
from ..core.validation import validate_columns, validate_records
from ..core.values import display_value, normalize
from ..export.frame import rows_to_frame
from ..persistence.store import TABLE_STORAGE_KEY, GridPreferences
from ..transform.paginate import DEFAULT_PAGE_SIZE, PageState, Paginator, coerce_page_size
from ..transform.pipeline import GridPipeline, GridView, PageView
from ..transform.sort import SortState
from . import selection as sel
from .actions import ActionButton, ActionHandlers, Actions, parse_prefixed
from .column_filter import ColumnFilter

logger = logging.getLogger(__name__)


def merge_record(record: Any, updated: Any) -> Any:
    """Apply an edit without touching the original record.

    Mappings merge key by key, dataclasses take mapping updates through
    ``dataclasses.replace``; anything else is replaced by *updated*.
    """
    if isinstance(record, Mapping) and isinstance(updated, Mapping):
        return {**record, **updated}
    if (
        dataclasses.is_dataclass(record)
        and not isinstance(record, type)
        and isinstance(updated, Mapping)
    ):
        return dataclasses.replace(record, **updated)
    return updated


def _as_page_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class GridState(param.Parameterized):
    """Centralized reactive state for a data grid.

    Holds the records, per-column filters, sort, pagination, visible
    columns and selection, and keeps the derived view
    (filtered → sorted → page rows) current after every change. Page size
    and visible columns are written through to the preference store.

    Usage::

        grid = GridState(
            key="countries",
            columns=[Column("name", sorter="name"), Column("region")],
            store=MemoryPreferenceStore(),
        )
        grid.set_records(rows)
        grid.set_filter("region", FilterDescriptor.of(values={"Europe"}))
        grid.toggle_sort("name")
        grid.page_rows
    """

    # --- Configuration (set once at init) ---
    key = param.String(default="key", constant=True, doc="Grid key used in preference keys")
    namespace = param.String(default=TABLE_STORAGE_KEY, constant=True)
    entity = param.String(default="Items", doc="Plural name of the records shown")
    columns = param.List(default=[], item_type=Column, constant=True)
    buttons = param.List(default=[], item_type=ActionButton)
    page_size_initial = param.Integer(
        default=10, bounds=(1, None),
        doc="Page size used when no preference is stored",
    )
    enable_double_click_edit = param.Boolean(default=False)
    waiting_for_rows = param.Boolean(default=False)

    # --- Collaborators ---
    store = param.Parameter(default=None, doc="Preference store with read/write")
    translate = param.Callable(default=None, doc="Translation lookup: key -> text")
    handlers = param.ClassSelector(class_=ActionHandlers, default=None, allow_None=True)
    id_factory = param.Callable(default=None, doc="Returns ids for new records")
    scheduler = param.Parameter(default=None, doc=(
        "Debounce scheduler for column filters. The default schedules on the "
        "running asyncio loop; without one, typed filters apply on every "
        "keystroke. Synchronous hosts should pass their own timer scheduler."
    ))

    # --- Data ---
    data_original = param.List(default=[], doc="Full dataset as last supplied")
    data = param.List(default=[], doc="Dataset the view is derived from")

    # --- View state ---
    active_filters = param.Dict(default={})
    sorted_column = param.String(default=None, allow_None=True)
    sort_direction = param.Selector(default=None, objects=[None, "asc", "desc"])
    current_page = param.Integer(default=1, bounds=(1, None))
    page_size = param.Integer(default=DEFAULT_PAGE_SIZE, bounds=(1, None))
    visible_column_ids = param.Parameter(default=frozenset())
    selected = param.Parameter(default=frozenset())
    reset_filter_token = param.Integer(default=0)

    def __init__(self, records: Iterable[Any] | None = None, **params):
        super().__init__(**params)
        validate_columns(self.columns)
        self._columns_by_key: dict[str, Column] = {c.key: c for c in self.columns}
        self._prefs = GridPreferences(self.store, self.key, self.namespace)
        self._filters: dict[str, ColumnFilter] = {}
        self._id_counter = itertools.count(1)
        self._view = GridView(filtered_rows=(), sorted_rows=())
        self._page = PageView(rows=(), total_pages=1)

        self._load_preferences()
        if records is not None:
            self.set_records(records)
        else:
            self._recompute_view()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def _load_preferences(self) -> None:
        saved_size = self._prefs.read_page_size()
        saved_columns = self._prefs.read_visible_columns() or []
        known = [k for k in saved_columns if k in self._columns_by_key]
        if known:
            visible = frozenset(known)
        else:
            visible = frozenset(c.key for c in self.columns if c.visible)
        self.param.update(
            page_size=saved_size or self.page_size_initial,
            visible_column_ids=visible,
        )

    @param.depends("visible_column_ids", watch=True)
    def _persist_visible_columns(self) -> None:
        self._prefs.write_visible_columns(
            [c.key for c in self.columns if c.key in self.visible_column_ids]
        )

    @param.depends("page_size", watch=True)
    def _persist_page_size(self) -> None:
        self._prefs.write_page_size(self.page_size)

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    @property
    def sort_state(self) -> SortState:
        return SortState(self.sorted_column, self.sort_direction)

    @param.depends("data", "active_filters", "sorted_column", "sort_direction", watch=True)
    def _recompute_view(self) -> None:
        """Re-run filter and sort, re-slice the page, then reconcile selection."""
        self._view = GridPipeline.view(
            self.data, self.columns, self.active_filters, self.sort_state,
        )
        self._repaginate()
        self._reconcile_selection()

    @param.depends("current_page", "page_size", watch=True)
    def _repaginate(self) -> None:
        self._page = GridPipeline.page(
            self._view, PageState(page_size=self.page_size, current_page=self.current_page),
        )

    def _reconcile_selection(self) -> None:
        reconciled = sel.reconcile(self.selected, self._view.filtered_ids)
        if reconciled is not self.selected:
            self.selected = reconciled

    @param.depends("data", watch=True)
    def _refresh_filter_values(self) -> None:
        for column_key, unit in self._filters.items():
            unit.values = self.unique_values(column_key)

    @property
    def filtered_rows(self) -> list:
        return list(self._view.filtered_rows)

    @property
    def sorted_rows(self) -> list:
        return list(self._view.sorted_rows)

    @property
    def page_rows(self) -> list:
        return list(self._page.rows)

    @property
    def total_pages(self) -> int:
        return self._page.total_pages

    @property
    def visible_columns(self) -> list[Column]:
        return [c for c in self.columns if c.key in self.visible_column_ids]

    @property
    def has_active_filters(self) -> bool:
        return bool(self.active_filters)

    def get_column(self, column_key: str) -> Column | None:
        return self._columns_by_key.get(column_key)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def set_records(self, records: Iterable[Any] | None) -> None:
        """Replace the dataset.

        Clears the selection and returns to page 1. Filters, sort, page
        size and visible columns are view preferences and stay as they are.
        """
        records = validate_records(records)
        self.param.update(
            data_original=records,
            data=list(records),
            selected=frozenset(),
            current_page=1,
        )

    def show_only_selected(self) -> None:
        """Narrow the dataset to the selected records (no-op without a selection)."""
        if not self.selected:
            return
        keep = self.selected
        self.param.update(
            data=[r for r in self.data_original if record_id(r) in keep],
            current_page=1,
        )

    def show_all(self) -> None:
        """Undo :meth:`show_only_selected`."""
        self.param.update(data=list(self.data_original), current_page=1)

    def unique_values(self, column_key: str) -> list[str]:
        """Distinct normalized values of a column, in comparer order."""
        column = self.get_column(column_key)
        if column is None:
            return []
        return unique_values_sorted(
            normalize(resolve_cell_value(column, r)) for r in self.data
        )

    def next_record_id(self) -> Any:
        """Id for a new record: ``id_factory()`` or the next unused integer."""
        if self.id_factory is not None:
            return self.id_factory()
        used = {record_id(r) for r in self.data_original}
        candidate = next(self._id_counter)
        while candidate in used:
            candidate = next(self._id_counter)
        return candidate

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def set_filter(self, column_key: str, descriptor: FilterDescriptor | Mapping) -> None:
        """Set the filter of one column and go back to page 1.

        An empty descriptor removes the column's filter.
        """
        if column_key not in self._columns_by_key:
            logger.debug("Ignoring filter on unknown column %r", column_key)
            return
        if not isinstance(descriptor, FilterDescriptor):
            descriptor = FilterDescriptor.of(
                descriptor.get("text", ""), descriptor.get("values", ()),
            )
        filters = dict(self.active_filters)
        if descriptor.is_empty:
            filters.pop(column_key, None)
        else:
            filters[column_key] = descriptor
        self.param.update(active_filters=filters, current_page=1)

    def clear_filter(self, column_key: str) -> None:
        """Remove one column's filter, including its filter menu state."""
        unit = self._filters.get(column_key)
        if unit is not None:
            unit.clear(emit=False)
        if column_key in self.active_filters:
            filters = {k: v for k, v in self.active_filters.items() if k != column_key}
            self.param.update(active_filters=filters, current_page=1)

    def reset_all_filters(self) -> None:
        """Remove every filter and clear every column filter menu."""
        self.param.update(active_filters={}, current_page=1)
        self.reset_filter_token += 1

    @param.depends("reset_filter_token", watch=True)
    def _cascade_reset(self) -> None:
        for unit in self._filters.values():
            unit.reset_token = self.reset_filter_token

    def column_filter(self, column_key: str) -> ColumnFilter:
        """The filter menu state bound to *column_key* (created on first use)."""
        unit = self._filters.get(column_key)
        if unit is not None:
            return unit
        column = self.get_column(column_key)
        if column is None:
            raise KeyError(
                f"Column '{column_key}' not found. "
                f"Available: {list(self._columns_by_key)}"
            )
        unit = ColumnFilter(
            on_change=lambda d: self.set_filter(column_key, d),
            scheduler=self.scheduler,
            column_key=column_key,
            label=self.resolve_title(column),
            values=self.unique_values(column_key),
            hide_values=column.hide_value_selection,
            hide_search=column.hide_search_button,
            reset_token=self.reset_filter_token,
        )
        self._filters[column_key] = unit
        return unit

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def toggle_sort(self, column_key: str) -> None:
        """Cycle the sort of a column: asc → desc → unsorted → asc.

        Switching to another column starts at asc. Columns without a
        sorter are ignored.
        """
        column = self.get_column(column_key)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort on non-sortable column %r", column_key)
            return
        state = self.sort_state.toggled(column_key)
        self.param.update(
            sorted_column=state.column_key,
            sort_direction=state.direction,
            current_page=1,
        )

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def toggle_column_visibility(self, column_key: str) -> None:
        if column_key not in self._columns_by_key:
            logger.debug("Ignoring visibility toggle of unknown column %r", column_key)
            return
        self.visible_column_ids = self.visible_column_ids ^ {column_key}

    def resolve_title(self, column: Column) -> str:
        return resolve_label(column.title, self.translate)

    def display_value(self, normalized: str) -> str:
        return display_value(normalized, self.translate)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def set_page_size(self, value: Any) -> None:
        """Set the page size; invalid input falls back to the default (5)."""
        self.page_size = coerce_page_size(value)

    def first_page(self) -> None:
        self.current_page = 1

    def last_page(self) -> None:
        self.current_page = self.total_pages

    def prev_page(self) -> None:
        self.current_page = max(1, self.current_page - 1)

    def next_page(self) -> None:
        self.current_page = min(self.total_pages, self.current_page + 1)

    def go_to_page(self, value: Any) -> None:
        """Jump to a page; anything outside 1..total_pages is ignored."""
        page = _as_page_number(value)
        if page is None or not Paginator.is_valid_page(page, self.total_pages):
            logger.debug("Ignoring go_to_page(%r), total_pages=%d", value, self.total_pages)
            return
        self.current_page = page

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_row(self, rid: Any, included: bool = True) -> None:
        """Add or remove one id; ids outside the filtered rows cannot be added."""
        if included and rid not in self._view.filtered_ids:
            logger.debug("Ignoring selection of id %r outside the filtered rows", rid)
            return
        self.selected = sel.toggle(self.selected, rid, included)

    def select_all(self, checked: bool = True) -> None:
        """Select exactly the sorted (filtered) rows, or clear the selection."""
        self.selected = sel.select_all(self._view.sorted_ids, checked)

    def invert_selection(self) -> None:
        self.selected = sel.invert(self.selected, self._view.sorted_ids)

    def is_selected(self, rid: Any) -> bool:
        return rid in self.selected

    # ------------------------------------------------------------------
    # Row lifecycle (delegated to host handlers)
    # ------------------------------------------------------------------

    def _handler(self, name: str):
        fn = getattr(self.handlers, name, None) if self.handlers is not None else None
        if fn is None:
            logger.debug("No %s handler configured", name)
        return fn

    def insert(self) -> None:
        """Ask the host for a new record; append it and show the last page."""
        on_create = self._handler("on_create")
        if on_create is None:
            return

        def push(record: Any) -> None:
            records = validate_records(list(self.data_original) + [record])
            self.param.update(data_original=records, data=list(self.data) + [record])
            self.last_page()

        on_create(push)

    def delete(self, ids: Iterable[Any] | None = None) -> None:
        """Ask the host to delete *ids* (default: the selection), then drop them."""
        if ids is None:
            ids = [record_id(r) for r in self.data if record_id(r) in self.selected]
        else:
            ids = list(ids)
        if not ids:
            return
        on_delete = self._handler("on_delete")
        if on_delete is None:
            return

        def done() -> None:
            removed = set(ids)
            self.param.update(
                data_original=[r for r in self.data_original if record_id(r) not in removed],
                data=[r for r in self.data if record_id(r) not in removed],
                selected=frozenset(i for i in self.selected if i not in removed),
            )

        on_delete(ids, done)

    def edit(self, rid: Any = None) -> None:
        """Ask the host to edit one record (default: the single selected one)."""
        if rid is None:
            if len(self.selected) != 1:
                return
            rid = next(iter(self.selected))
        record = next((r for r in self.data if record_id(r) == rid), None)
        if record is None:
            return
        on_edit = self._handler("on_edit")
        if on_edit is None:
            return

        def done(updated: Any) -> None:
            # merge into the current row; the data may have been replaced meanwhile
            def swap(rows: list) -> list:
                return [merge_record(r, updated) if record_id(r) == rid else r for r in rows]

            self.param.update(data_original=swap(self.data_original), data=swap(self.data))

        on_edit(record, done)

    def activate_row(self, rid: Any) -> None:
        """Row double-click: edit the row when enabled."""
        if self.enable_double_click_edit:
            self.edit(rid)

    def refresh(self) -> None:
        """Clear the selection, ask the host to reload, and reset filters."""
        self.selected = frozenset()
        on_custom = self._handler("on_custom_action")
        if on_custom is not None:
            on_custom(Actions.RELOAD)
        self.first_page()
        self.reset_all_filters()

    # ------------------------------------------------------------------
    # Actions and buttons
    # ------------------------------------------------------------------

    def on_action(self, action: str) -> None:
        """Dispatch a menu/button action identifier."""
        logger.debug("Action triggered: %s", action)
        if action == Actions.SELECT_ALL:
            self.select_all(True)
        elif action == Actions.CLEAR_ALL:
            self.select_all(False)
        elif action == Actions.INVERT_SELECTION:
            self.invert_selection()
        elif action == Actions.CHOOSE_SELECTION:
            self.show_only_selected()
        elif action == Actions.SHOW_ALL:
            self.show_all()
        elif action == Actions.NEW:
            self.insert()
        elif action == Actions.DELETE:
            self.delete()
        elif action == Actions.EDIT:
            self.edit()
        elif action == Actions.REFRESH:
            self.refresh()
        elif action.startswith(Actions.PAGE_SIZE_PREFIX):
            self.set_page_size(parse_prefixed(action, Actions.PAGE_SIZE_PREFIX))
        elif action.startswith(Actions.TOGGLE_COLUMN_PREFIX):
            self.toggle_column_visibility(
                parse_prefixed(action, Actions.TOGGLE_COLUMN_PREFIX)
            )
        else:
            on_custom = self._handler("on_custom_action")
            if on_custom is not None:
                on_custom(action, self.selected)

    @property
    def action_buttons(self) -> list[ActionButton]:
        return [b for b in self.buttons if b.in_toolbar]

    @property
    def menu_buttons(self) -> list[ActionButton]:
        return [b for b in self.buttons if b.in_menu]

    def is_button_enabled(self, button: ActionButton) -> bool:
        return button.is_enabled(self.selected)

    def handle_button(self, button: ActionButton) -> None:
        if button.on_click is not None:
            button.on_click()
            return
        self.on_action(button.key)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_frame(self, which: str = "page", visible_only: bool = True, display: bool = False):
        """Rows of the current view as a pandas DataFrame indexed by id.

        *which* is ``"page"``, ``"sorted"`` or ``"filtered"``.
        """
        rows = {
            "page": self.page_rows,
            "sorted": self.sorted_rows,
            "filtered": self.filtered_rows,
        }.get(which)
        if rows is None:
            raise ValueError(
                f"Unknown row set '{which}'. Use 'page', 'sorted' or 'filtered'."
            )
        columns = self.visible_columns if visible_only else list(self.columns)
        return rows_to_frame(rows, columns, display=display, translate=self.translate)
