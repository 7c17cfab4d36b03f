"""Tests for GridState actions, host handlers, column filters and preferences."""

import pytest

from reactive_datagrid.core.filter_descriptor import FilterDescriptor
from reactive_datagrid.persistence.store import MemoryPreferenceStore
from reactive_datagrid.state.actions import ActionButton, ActionHandlers, Actions
from reactive_datagrid.state.grid import GridState, merge_record


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


@pytest.fixture
def custom():
    return Recorder()


@pytest.fixture
def handled_grid(countries, country_columns, store, scheduler, custom):
    return GridState(
        countries,
        key="countries",
        columns=country_columns,
        store=store,
        scheduler=scheduler,
        handlers=ActionHandlers(on_custom_action=custom),
    )


class TestOnAction:
    def test_selection_actions(self, grid):
        grid.on_action(Actions.SELECT_ALL)
        assert len(grid.selected) == 12
        grid.on_action(Actions.INVERT_SELECTION)
        assert grid.selected == frozenset()
        grid.toggle_row(3)
        grid.on_action(Actions.CLEAR_ALL)
        assert grid.selected == frozenset()

    def test_show_only_selection_and_show_all(self, grid):
        grid.toggle_row(1)
        grid.on_action("show_only_selection")
        assert len(grid.sorted_rows) == 1
        grid.on_action(Actions.SHOW_ALL)
        assert len(grid.sorted_rows) == 12

    def test_page_size_action(self, grid, store):
        grid.on_action(Actions.page_size(20))
        assert grid.page_size == 20
        assert grid.total_pages == 1
        assert store.read("app-table-countries-pageSize") == 20

    def test_toggle_column_action(self, grid, store):
        grid.on_action("toggle-column-notes")
        assert "notes" in grid.visible_column_ids
        assert store.read("app-table-countries-visibleColumns") == [
            "id", "name", "region", "population", "capital", "notes",
        ]
        grid.on_action("toggle-column-notes")
        assert "notes" not in grid.visible_column_ids

    def test_toggle_unknown_column_ignored(self, grid):
        before = grid.visible_column_ids
        grid.on_action("toggle-column-bogus")
        assert grid.visible_column_ids == before

    def test_unknown_action_forwarded(self, handled_grid, custom):
        handled_grid.toggle_row(2)
        handled_grid.on_action("export")
        assert custom.calls == [("export", frozenset({2}))]

    def test_unknown_action_without_handler(self, grid):
        grid.on_action("export")


class TestRowLifecycle:
    def test_insert_appends_and_goes_to_last_page(self, grid):
        def on_create(push):
            push({"id": grid.next_record_id(), "name": "Zambia", "region": "Africa"})

        grid.handlers = ActionHandlers(on_create=on_create)
        grid.on_action(Actions.NEW)
        assert len(grid.data_original) == 13
        assert grid.data_original[-1]["id"] == 13
        assert grid.current_page == 2
        assert grid.page_rows[-1]["name"] == "Zambia"
        assert "Zambia" in grid.column_filter("name").values

    def test_insert_waits_for_push(self, grid):
        grid.handlers = ActionHandlers(on_create=lambda push: None)
        grid.insert()
        assert len(grid.data_original) == 12

    def test_insert_duplicate_id_rejected(self, grid):
        grid.handlers = ActionHandlers(on_create=lambda push: push({"id": 1}))
        with pytest.raises(ValueError, match="unique"):
            grid.insert()

    def test_delete_selected(self, grid):
        received = []

        def on_delete(ids, done):
            received.append(ids)
            done()

        grid.handlers = ActionHandlers(on_delete=on_delete)
        grid.toggle_row(2)
        grid.toggle_row(1)
        grid.on_action(Actions.DELETE)
        assert received == [[1, 2]]
        assert len(grid.data_original) == 10
        assert grid.selected == frozenset()

    def test_delete_without_selection_does_nothing(self, grid):
        calls = []
        grid.handlers = ActionHandlers(on_delete=lambda ids, done: calls.append(ids))
        grid.delete()
        assert calls == []

    def test_delete_explicit_ids(self, grid):
        grid.handlers = ActionHandlers(on_delete=lambda ids, done: done())
        grid.delete([5])
        assert 5 not in {r["id"] for r in grid.sorted_rows}

    def test_edit_single_selected(self, grid):
        def on_edit(record, done):
            done({"name": record["name"] + " (JP)"})

        grid.handlers = ActionHandlers(on_edit=on_edit)
        grid.toggle_row(5)
        grid.on_action(Actions.EDIT)
        japan = [r for r in grid.data_original if r["id"] == 5][0]
        assert japan["name"] == "Japan (JP)"
        assert japan["region"] == "Asia"

    def test_edit_merges_into_current_row(self, people, people_columns):
        pending = []
        g = GridState(people, columns=people_columns)
        g.handlers = ActionHandlers(on_edit=lambda record, done: pending.append(done))
        g.edit(1)
        g.set_records([{"id": 1, "name": "Ana", "region": "South"}])
        pending[0]({"name": "Anna"})
        assert g.data_original == [{"id": 1, "name": "Anna", "region": "South"}]
        assert g.data == [{"id": 1, "name": "Anna", "region": "South"}]

    def test_edit_requires_single_selection(self, grid):
        calls = []
        grid.handlers = ActionHandlers(on_edit=lambda record, done: calls.append(record))
        grid.toggle_row(1)
        grid.toggle_row(2)
        grid.edit()
        assert calls == []

    def test_activate_row(self, grid):
        calls = []
        grid.handlers = ActionHandlers(on_edit=lambda record, done: calls.append(record["id"]))
        grid.activate_row(4)
        assert calls == []
        grid.enable_double_click_edit = True
        grid.activate_row(4)
        assert calls == [4]

    def test_refresh(self, handled_grid, custom):
        handled_grid.set_filter("region", FilterDescriptor.of(values={"Asia"}))
        handled_grid.toggle_row(5)
        handled_grid.on_action(Actions.REFRESH)
        assert custom.calls == [(Actions.RELOAD,)]
        assert handled_grid.selected == frozenset()
        assert handled_grid.active_filters == {}
        assert handled_grid.current_page == 1


class TestMergeRecord:
    def test_mapping(self):
        assert merge_record({"id": 1, "a": 1}, {"a": 2}) == {"id": 1, "a": 2}

    def test_replacement(self):
        assert merge_record({"id": 1}, "other") == "other"


class TestButtons:
    def test_placement(self):
        toolbar = ActionButton("a", "A")
        menu = ActionButton("b", "B", show="menu")
        both = ActionButton("c", "C", show="both")
        g = GridState(buttons=[toolbar, menu, both])
        assert g.action_buttons == [toolbar, both]
        assert g.menu_buttons == [menu, both]

    def test_enabled_when(self, grid):
        button = ActionButton("archive", "Archive", enabled_when=lambda s: len(s) == 1)
        assert not grid.is_button_enabled(button)
        grid.toggle_row(1)
        assert grid.is_button_enabled(button)

    def test_handle_button_dispatches_key(self, handled_grid, custom):
        handled_grid.handle_button(ActionButton("archive", "Archive"))
        assert custom.calls == [("archive", frozenset())]

    def test_handle_button_on_click(self, handled_grid, custom):
        clicks = []
        handled_grid.handle_button(ActionButton("x", "X", on_click=lambda: clicks.append(1)))
        assert clicks == [1]
        assert custom.calls == []


class TestColumnFilterWiring:
    def test_unit_values(self, grid):
        unit = grid.column_filter("region")
        assert unit.values == grid.unique_values("region")
        assert unit.label == "Region"

    def test_unknown_column(self, grid):
        with pytest.raises(KeyError):
            grid.column_filter("bogus")

    def test_same_unit_returned(self, grid):
        assert grid.column_filter("name") is grid.column_filter("name")

    def test_value_pick_filters_grid(self, grid):
        grid.column_filter("region").toggle_value("Asia")
        assert grid.active_filters["region"] == FilterDescriptor.of(values={"Asia"})
        assert len(grid.filtered_rows) == 2

    def test_typing_is_debounced(self, grid, scheduler):
        unit = grid.column_filter("name")
        unit.set_text("an")
        assert grid.active_filters == {}
        scheduler.advance(0.3)
        assert [r["name"] for r in grid.filtered_rows] == [
            "France", "Peru Island", "Japan", "Ghana",
        ]

    def test_reset_cascades_to_units(self, grid):
        region = grid.column_filter("region")
        name = grid.column_filter("name")
        region.toggle_value("Europe")
        name.set_text("s")
        name.flush()
        grid.reset_all_filters()
        assert region.selected == []
        assert name.text == ""
        assert grid.active_filters == {}

    def test_clear_filter_clears_unit(self, grid):
        unit = grid.column_filter("region")
        unit.toggle_value("Europe")
        grid.clear_filter("region")
        assert unit.selected == []
        assert unit.descriptor.is_empty
        assert "region" not in grid.active_filters

    def test_values_follow_data(self, grid, countries):
        unit = grid.column_filter("region")
        grid.set_records(countries[:2])
        assert unit.values == ["Europe"]


class TestPreferences:
    def test_restored_from_store(self, countries, country_columns):
        store = MemoryPreferenceStore({
            "app-table-countries-pageSize": 4,
            "app-table-countries-visibleColumns": ["name", "bogus"],
        })
        g = GridState(countries, key="countries", columns=country_columns, store=store)
        assert g.page_size == 4
        assert g.total_pages == 3
        assert [c.key for c in g.visible_columns] == ["name"]

    def test_invalid_stored_values_ignored(self, countries, country_columns):
        store = MemoryPreferenceStore({
            "app-table-countries-pageSize": "lots",
            "app-table-countries-visibleColumns": "name",
        })
        g = GridState(
            countries, key="countries", columns=country_columns,
            store=store, page_size_initial=6,
        )
        assert g.page_size == 6
        assert "notes" not in g.visible_column_ids
        assert "name" in g.visible_column_ids

    def test_grids_do_not_share_keys(self, countries, country_columns, store):
        a = GridState(countries, key="a", columns=country_columns, store=store)
        b = GridState(countries, key="b", columns=country_columns, store=store)
        a.set_page_size(3)
        assert b.page_size == 10
        assert store.read("app-table-a-pageSize") == 3

    def test_no_store(self, countries, country_columns):
        g = GridState(countries, columns=country_columns)
        g.set_page_size(7)
        assert g.page_size == 7


class TestNextRecordId:
    def test_skips_used_ids(self, grid):
        assert grid.next_record_id() == 13
        assert grid.next_record_id() == 14

    def test_id_factory(self, countries, country_columns):
        g = GridState(countries, columns=country_columns, id_factory=lambda: "new")
        assert g.next_record_id() == "new"
