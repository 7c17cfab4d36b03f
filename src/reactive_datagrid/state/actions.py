"""Action catalog, toolbar/menu buttons, and host callback handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal

from ..core.labels import Localizable


class Actions:
    """String identifiers dispatched from menus and buttons."""

    SELECT_ALL = "select-all"
    CLEAR_ALL = "clear-all"
    INVERT_SELECTION = "invert-selection"
    CHOOSE_SELECTION = "show_only_selection"
    SHOW_ALL = "show-all"
    NEW = "new"
    DELETE = "delete"
    EDIT = "edit"
    REFRESH = "refresh"
    RELOAD = "reload"
    TOGGLE_COLUMN_PREFIX = "toggle-column-"
    PAGE_SIZE_PREFIX = "page-size-"

    @staticmethod
    def toggle_column(column_key: str) -> str:
        return Actions.TOGGLE_COLUMN_PREFIX + column_key

    @staticmethod
    def page_size(size: int) -> str:
        return f"{Actions.PAGE_SIZE_PREFIX}{size}"


def parse_prefixed(action: str, prefix: str) -> str | None:
    """Return the parameter of ``<prefix><param>``, or None if not prefixed."""
    if action.startswith(prefix):
        return action[len(prefix):]
    return None


@dataclass
class ActionHandlers:
    """Host callbacks the grid delegates row lifecycle actions to.

    Each mutating callback receives a completion function; the grid
    applies the change only once the host calls it.

    - ``on_create(push)``: call ``push(record)`` to append a new record.
    - ``on_delete(ids, done)``: call ``done()`` to remove ``ids``.
    - ``on_edit(record, done)``: call ``done(updated)`` to merge changes.
    - ``on_custom_action(action, payload)``: any unrecognized action.
    """

    on_create: Callable[[Callable[[Any], None]], None] | None = None
    on_delete: Callable[[list, Callable[[], None]], None] | None = None
    on_edit: Callable[[Any, Callable[[Any], None]], None] | None = None
    on_custom_action: Callable[..., None] | None = None


ButtonPlacement = Literal["menu", "button", "both"]


@dataclass(frozen=True)
class ActionButton:
    """A toolbar button or menu entry.

    Without ``on_click`` the button dispatches its ``key`` as an action.
    ``show`` None means toolbar only.
    """

    key: str
    label: Localizable
    on_click: Callable[[], None] | None = None
    icon: str | None = None
    show: ButtonPlacement | None = None
    enabled_when: Callable[[frozenset], bool] | None = None

    @property
    def in_menu(self) -> bool:
        return self.show in ("menu", "both")

    @property
    def in_toolbar(self) -> bool:
        return self.show is None or self.show in ("button", "both")

    def is_enabled(self, selected: frozenset) -> bool:
        return self.enabled_when(selected) if self.enabled_when else True
