"""FilterEngine: keep the records that satisfy every column filter."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..core.column import Column, resolve_cell_value
from ..core.filter_descriptor import FilterDescriptor
from ..core.values import is_sentinel, normalize


class FilterEngine:
    """Applies per-column filter descriptors to a record list.

    Descriptors are AND-ed across columns. Within one descriptor the text
    term and the value set must both match.
    """

    @staticmethod
    def matches(normalized: str, descriptor: FilterDescriptor) -> bool:
        """Check one normalized cell value against one descriptor.

        The text term never matches a sentinel (empty, null, undefined);
        those can only be picked through the value set.
        """
        text = descriptor.text
        if text and (
            is_sentinel(normalized) or text.lower() not in normalized.lower()
        ):
            return False
        return not descriptor.values or normalized in descriptor.values

    @staticmethod
    def apply(
        records: Sequence[Any],
        columns: Mapping[str, Column],
        filters: Mapping[str, FilterDescriptor],
    ) -> list:
        """Return the records matching all active filters, in input order.

        Filters on keys missing from ``columns`` are ignored.
        """
        active = [
            (columns[key], descriptor)
            for key, descriptor in filters.items()
            if key in columns and not descriptor.is_empty
        ]
        if not active:
            return list(records)
        return [
            record for record in records
            if all(
                FilterEngine.matches(
                    normalize(resolve_cell_value(column, record)), descriptor
                )
                for column, descriptor in active
            )
        ]
