"""Core value types: columns, filter descriptors, normalization, ordering."""

from .column import (
    Accessor,
    Column,
    Comparator,
    Derivation,
    FieldPath,
    Sorter,
    resolve_cell_value,
)
from .compare import accent_numeric_compare, compare_values, unique_values_sorted
from .filter_descriptor import FilterDescriptor
from .labels import DictTranslator, LabelKey, Localizable, resolve_label
from .paths import create_map, get_value_by_path, record_id
from .values import (
    EMPTY,
    NULL,
    UNDEFINED,
    UNDEFINED_TOKEN,
    display_value,
    is_sentinel,
    normalize,
)

__all__ = [
    "Accessor",
    "Column",
    "Comparator",
    "Derivation",
    "FieldPath",
    "Sorter",
    "resolve_cell_value",
    "accent_numeric_compare",
    "compare_values",
    "unique_values_sorted",
    "FilterDescriptor",
    "DictTranslator",
    "LabelKey",
    "Localizable",
    "resolve_label",
    "create_map",
    "get_value_by_path",
    "record_id",
    "EMPTY",
    "NULL",
    "UNDEFINED",
    "UNDEFINED_TOKEN",
    "display_value",
    "is_sentinel",
    "normalize",
]
