"""reactive-datagrid: filtered, sorted, paginated, selectable views over records."""

from ._version import __version__
from .core import (
    Column,
    Comparator,
    Derivation,
    DictTranslator,
    FieldPath,
    FilterDescriptor,
    LabelKey,
    accent_numeric_compare,
    display_value,
    normalize,
)
from .export import frame_columns, records_from_frame, rows_to_frame
from .persistence import JsonFilePreferenceStore, MemoryPreferenceStore
from .state import ActionButton, ActionHandlers, Actions, ColumnFilter, GridState


def from_frame(df, columns=None, id_column=None, **params):
    """Build a GridState over the rows of a DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        One record per row. The index becomes the record id unless
        ``id_column`` is given.
    columns : list[Column], optional
        Column descriptors. Defaults to one sortable column per
        DataFrame column, read by exact name.
    id_column : str, optional
        Column holding the record ids.
    **params
        Further GridState parameters (``key``, ``store``, ...).
    """
    if columns is None:
        columns = frame_columns(df)
    return GridState(records_from_frame(df, id_column=id_column), columns=columns, **params)


__all__ = [
    "__version__",
    "from_frame",
    "Column",
    "Comparator",
    "Derivation",
    "DictTranslator",
    "FieldPath",
    "FilterDescriptor",
    "LabelKey",
    "accent_numeric_compare",
    "display_value",
    "normalize",
    "frame_columns",
    "records_from_frame",
    "rows_to_frame",
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "ActionButton",
    "ActionHandlers",
    "Actions",
    "ColumnFilter",
    "GridState",
]
