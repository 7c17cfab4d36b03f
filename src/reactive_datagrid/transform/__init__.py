"""Pure pipeline stages: filter, sort, paginate."""

from .filter import FilterEngine
from .paginate import DEFAULT_PAGE_SIZE, PageState, Paginator, coerce_page_size
from .pipeline import GridPipeline, GridView, PageView
from .sort import SortEngine, SortState

__all__ = [
    "FilterEngine",
    "DEFAULT_PAGE_SIZE",
    "PageState",
    "Paginator",
    "coerce_page_size",
    "GridPipeline",
    "GridView",
    "PageView",
    "SortEngine",
    "SortState",
]
