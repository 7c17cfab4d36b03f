"""ColumnFilter: per-column filter menu state (search text + value picks)."""

from __future__ import annotations

from typing import Callable

import param

from ..core.filter_descriptor import FilterDescriptor
from .debounce import Debouncer, Scheduler

FilterCallback = Callable[[FilterDescriptor], None]


class ColumnFilter(param.Parameterized):
    """Local state of one column's filter menu.

    Typing updates ``text`` at once but only publishes a new
    ``descriptor`` after ``delay`` seconds without further typing.
    Picking or unpicking a discrete value publishes immediately.
    Bumping ``reset_token`` clears everything and publishes an empty
    descriptor.
    """

    column_key = param.String(default="", doc="Key of the filtered column")
    label = param.String(default="", doc="Display label of the column")
    values = param.List(default=[], doc="Distinct normalized values offered")
    hide_values = param.Boolean(default=False)
    hide_search = param.Boolean(default=False)

    text = param.String(default="", doc="Raw search box contents")
    selected = param.List(default=[], doc="Picked normalized values, in pick order")
    reset_token = param.Integer(default=0)

    descriptor = param.ClassSelector(
        class_=FilterDescriptor, default=FilterDescriptor(), instantiate=False,
        doc="Last published filter descriptor (output)",
    )

    delay = param.Number(default=0.3, bounds=(0, None), doc="Debounce delay in seconds")

    def __init__(
        self,
        on_change: FilterCallback | None = None,
        scheduler: Scheduler | None = None,
        **params,
    ) -> None:
        super().__init__(**params)
        self._on_change = on_change
        self._debouncer = Debouncer(self.delay, self._publish, scheduler)

    @property
    def has_active_filters(self) -> bool:
        return bool(self.text) or bool(self.selected)

    @property
    def filtered_values(self) -> list[str]:
        """Values offered in the menu."""
        return list(self.values)

    @property
    def pending(self) -> bool:
        """True while a typed term waits for the debounce delay."""
        return self._debouncer.pending

    def set_text(self, value: str) -> None:
        """Record a keystroke; the descriptor follows after the delay."""
        self.text = value or ""
        self._debouncer(self.text)

    def toggle_value(self, value: str) -> None:
        """Pick or unpick one value and publish right away."""
        if value in self.selected:
            self.selected = [v for v in self.selected if v != value]
        else:
            self.selected = self.selected + [value]
        self._debouncer.cancel()
        self._publish(self.text)

    def clear(self, emit: bool = True) -> None:
        """Drop text and picks; publish an empty descriptor unless *emit* is False."""
        self._debouncer.cancel()
        self.param.update(text="", selected=[])
        if emit:
            self._publish("")
        else:
            self.descriptor = FilterDescriptor()

    def flush(self) -> None:
        """Publish a pending typed term immediately."""
        self._debouncer.flush()

    @param.depends("reset_token", watch=True)
    def _on_reset(self) -> None:
        self.clear()

    @param.depends("delay", watch=True)
    def _on_delay(self) -> None:
        self._debouncer.delay = self.delay

    def _publish(self, text: str) -> None:
        descriptor = FilterDescriptor.of(text, self.selected)
        self.descriptor = descriptor
        if self._on_change is not None:
            self._on_change(descriptor)
