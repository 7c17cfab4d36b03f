"""FilterDescriptor: the combined text + value-set constraint for one column."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class FilterDescriptor:
    """Free-text term plus a set of selected normalized values.

    An empty descriptor imposes no constraint. A single string passed as
    *values* is one value, not a collection of characters.
    """

    text: str = ""
    values: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if isinstance(self.values, str):
            object.__setattr__(
                self, "values", frozenset({self.values}) if self.values else frozenset(),
            )
        elif not isinstance(self.values, frozenset):
            object.__setattr__(self, "values", frozenset(self.values))

    @classmethod
    def of(cls, text: str = "", values: Iterable[str] = ()) -> FilterDescriptor:
        return cls(text=text or "", values=values)

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.values
