"""Reactive state: the grid controller and its column filter menus."""

from .actions import ActionButton, ActionHandlers, Actions
from .column_filter import ColumnFilter
from .debounce import AsyncioScheduler, Debouncer, ImmediateScheduler
from .grid import GridState, merge_record

__all__ = [
    "ActionButton",
    "ActionHandlers",
    "Actions",
    "ColumnFilter",
    "AsyncioScheduler",
    "Debouncer",
    "ImmediateScheduler",
    "GridState",
    "merge_record",
]
