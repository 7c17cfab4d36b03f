"""Tests for selection-set operations."""

from reactive_datagrid.state import selection as sel


class TestSelectionOps:
    def test_toggle(self):
        s = sel.toggle(frozenset(), 1, True)
        assert s == {1}
        assert sel.toggle(s, 1, False) == frozenset()
        assert sel.toggle(s, 2, False) == {1}

    def test_select_all(self):
        assert sel.select_all([1, 2, 3]) == {1, 2, 3}
        assert sel.select_all([1, 2, 3], checked=False) == frozenset()

    def test_invert_over_scope_only(self):
        assert sel.invert(frozenset({1, 9}), [1, 2, 3]) == {2, 3}

    def test_select_all_then_invert_is_empty(self):
        scope = [4, 5, 6]
        assert sel.invert(sel.select_all(scope), scope) == frozenset()

    def test_reconcile_drops_hidden(self):
        assert sel.reconcile(frozenset({1, 2, 3}), {2, 3, 4}) == {2, 3}

    def test_reconcile_unchanged_returns_same_object(self):
        s = frozenset({1, 2})
        assert sel.reconcile(s, [1, 2, 3]) is s
