"""Selection operations over immutable id sets.

All functions return a new ``frozenset``; the grid swaps its selection
parameter wholesale so watchers always see a change.
"""

from __future__ import annotations

from typing import Hashable, Iterable

Selection = frozenset


def toggle(selected: Selection, record_id: Hashable, included: bool) -> Selection:
    """Add or remove one id."""
    if included:
        return selected | {record_id}
    return selected - {record_id}


def select_all(ids: Iterable[Hashable], checked: bool = True) -> Selection:
    """Exactly *ids* when checked, otherwise nothing."""
    return frozenset(ids) if checked else frozenset()


def invert(selected: Selection, ids: Iterable[Hashable]) -> Selection:
    """Ids in *ids* that are not currently selected.

    Selected ids outside *ids* are dropped.
    """
    return frozenset(i for i in ids if i not in selected)


def reconcile(selected: Selection, visible_ids: Iterable[Hashable]) -> Selection:
    """Strike ids that are no longer in the visible (filtered) set."""
    visible = visible_ids if isinstance(visible_ids, (set, frozenset)) else set(visible_ids)
    kept = frozenset(i for i in selected if i in visible)
    return selected if len(kept) == len(selected) else kept
