"""Shared test fixtures for reactive-datagrid."""

import pytest

from reactive_datagrid.core.column import Column
from reactive_datagrid.persistence.store import MemoryPreferenceStore
from reactive_datagrid.state.grid import GridState


class ManualScheduler:
    """Scheduler driven by hand: time only moves on ``advance``."""

    def __init__(self):
        self.now = 0.0
        self._timers = []

    def call_later(self, delay, fn):
        timer = _ManualTimer(self.now + delay, fn)
        self._timers.append(timer)
        return timer

    def advance(self, seconds):
        self.now += seconds
        due = [t for t in self._timers if t.when <= self.now and not t.cancelled]
        self._timers = [t for t in self._timers if t not in due and not t.cancelled]
        for timer in sorted(due, key=lambda t: t.when):
            timer.fn()

    @property
    def pending(self):
        return [t for t in self._timers if not t.cancelled]


class _ManualTimer:
    def __init__(self, when, fn):
        self.when = when
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def people():
    """Three rows from the filter-composition example."""
    return [
        {"id": 1, "name": "Ana", "region": "North"},
        {"id": 2, "name": "Ben", "region": "South"},
        {"id": 3, "name": "Cora", "region": "North"},
    ]


@pytest.fixture
def people_columns():
    return [
        Column("name", sorter="name"),
        Column("region", sorter="region"),
    ]


@pytest.fixture
def countries():
    """Twelve countries with nested fields and missing values."""
    return [
        {"id": 1, "name": "Spain", "region": "Europe", "population": 47, "capital": {"name": "Madrid"}},
        {"id": 2, "name": "France", "region": "Europe", "population": 68, "capital": {"name": "Paris"}},
        {"id": 3, "name": "Perú", "region": "Americas", "population": 34, "capital": {"name": "Lima"}},
        {"id": 4, "name": "Peru Island", "region": "", "population": None, "capital": None},
        {"id": 5, "name": "Japan", "region": "Asia", "population": 125, "capital": {"name": "Tokyo"}},
        {"id": 6, "name": "Chile", "region": "Americas", "population": 19, "capital": {"name": "Santiago"}},
        {"id": 7, "name": "Kenya", "region": "Africa", "population": 55, "capital": {"name": "Nairobi"}},
        {"id": 8, "name": "Norway", "region": "Europe", "population": 5, "capital": {"name": "Oslo"}},
        {"id": 9, "name": "Ghana", "region": "Africa", "population": 33, "capital": {"name": "Accra"}},
        {"id": 10, "name": "Nepal", "region": "Asia", "population": 30},
        {"id": 11, "name": "Ecuador", "region": "Americas", "population": 18, "capital": {"name": "Quito"}},
        {"id": 12, "name": "Italy", "region": None, "population": 59, "capital": {"name": "Rome"}},
    ]


@pytest.fixture
def country_columns():
    return [
        Column("id", title="Id", sorter="id"),
        Column("name", sorter="name"),
        Column("region", sorter="region"),
        Column("population", sorter="population"),
        Column("capital", accessor="capital.name", sorter="capital"),
        Column("notes", visible=False),
    ]


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def grid(countries, country_columns, store, scheduler):
    return GridState(
        countries,
        key="countries",
        columns=country_columns,
        store=store,
        scheduler=scheduler,
    )
