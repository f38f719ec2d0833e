"""Tests for diff classification of merged connectivity tables."""

from __future__ import annotations

from comatrix.analyzer.diff import classify
from comatrix.analyzer.merge import merge_tables
from comatrix.analyzer.models import AElement, ConnectivityTable, DiffStatus


def table(rows: dict[tuple[str, str], set[str]], domains: dict[str, str] | None = None) -> ConnectivityTable:
    domains = domains or {}
    t = ConnectivityTable()
    for (a, interface), targets in rows.items():
        el = t.a_elements.setdefault(a, AElement(domain=domains.get(a, "")))
        el.interfaces[interface] = set(targets)
        for b in targets:
            t.b_elements.setdefault(b, domains.get(b, ""))
    return t


def diff(base: ConnectivityTable, current: ConnectivityTable):
    return classify(base, current, merge_tables(base, current))


class TestRowAndCell:
    def test_added_target_marks_row_changed(self):
        base = table({("Order System", "REST"): {"Portal"}})
        current = table({("Order System", "REST"): {"Portal", "MobileApp"}})
        ann = diff(base, current)
        assert ann.rows[("Order System", "REST")] == DiffStatus.CHANGED
        assert ann.cells[("Order System", "REST", "MobileApp")] == DiffStatus.NEW
        assert ann.cells[("Order System", "REST", "Portal")] == DiffStatus.UNCHANGED

    def test_removed_target(self):
        base = table({("A", "i"): {"X", "Y"}})
        current = table({("A", "i"): {"X"}})
        ann = diff(base, current)
        assert ann.rows[("A", "i")] == DiffStatus.CHANGED
        assert ann.cell_status("A", "i", "Y") == DiffStatus.REMOVED
        assert ann.columns["Y"] == DiffStatus.REMOVED

    def test_identical_tables_unchanged(self):
        t = table({("A", "i"): {"X"}, ("B", "j"): {"X", "Y"}})
        ann = diff(t, t)
        assert set(ann.rows.values()) == {DiffStatus.UNCHANGED}
        assert set(ann.cells.values()) == {DiffStatus.UNCHANGED}
        assert set(ann.elements.values()) == {DiffStatus.UNCHANGED}
        assert set(ann.columns.values()) == {DiffStatus.UNCHANGED}

    def test_new_and_removed_rows(self):
        base = table({("A", "old"): {"X"}})
        current = table({("A", "new"): {"X"}})
        ann = diff(base, current)
        assert ann.rows[("A", "old")] == DiffStatus.REMOVED
        assert ann.rows[("A", "new")] == DiffStatus.NEW
        assert ann.cells[("A", "old", "X")] == DiffStatus.REMOVED
        assert ann.cells[("A", "new", "X")] == DiffStatus.NEW
        assert ann.elements["A"] == DiffStatus.CHANGED

    def test_unconnected_cell_has_no_status(self):
        ann = diff(table({("A", "i"): {"X"}}), table({("A", "i"): {"X"}, ("B", "j"): {"Y"}}))
        assert ann.cell_status("A", "i", "Y") is None

    def test_cell_in_changed_row_and_column_is_changed(self):
        base = table({("A", "i"): {"X", "Y"}, ("B", "j"): {"X"}})
        current = table({("A", "i"): {"X"}, ("B", "j"): {"X", "Y"}, ("C", "k"): {"X"}})
        ann = diff(base, current)
        # row (A, i) lost Y; column X gained C/k
        assert ann.rows[("A", "i")] == DiffStatus.CHANGED
        assert ann.columns["X"] == DiffStatus.CHANGED
        assert ann.cells[("A", "i", "X")] == DiffStatus.CHANGED
        # X was already connected to (B, j); the row and column both changed
        assert ann.cells[("B", "j", "X")] == DiffStatus.CHANGED
        assert ann.cells[("B", "j", "Y")] == DiffStatus.NEW


class TestElementsAndColumns:
    def test_new_and_removed_elements(self):
        base = table({("Archive", "N/A"): {"Billing"}, ("Ledger", "N/A"): {"Billing"}})
        current = table({("Ledger", "N/A"): {"Billing"}, ("Register", "REST"): {"Order"}})
        ann = diff(base, current)
        assert ann.elements["Archive"] == DiffStatus.REMOVED
        assert ann.elements["Register"] == DiffStatus.NEW
        assert ann.elements["Ledger"] == DiffStatus.UNCHANGED
        assert ann.columns["Order"] == DiffStatus.NEW
        assert ann.columns["Billing"] == DiffStatus.CHANGED

    def test_column_membership_change_anywhere(self):
        base = table({("A", "i"): {"X"}, ("B", "j"): {"Y"}})
        current = table({("A", "i"): {"X"}, ("B", "j"): {"X", "Y"}})
        ann = diff(base, current)
        assert ann.columns["X"] == DiffStatus.CHANGED
        assert ann.columns["Y"] == DiffStatus.UNCHANGED
        # cell (A, i, X): row unchanged, column changed → unchanged
        assert ann.cells[("A", "i", "X")] == DiffStatus.UNCHANGED

    def test_element_level_status_overrides_row(self):
        base = table({("Archive", "N/A"): {"Billing"}})
        current = table({("Ledger", "N/A"): {"Billing"}})
        ann = diff(base, current)
        assert ann.row_status("Archive", "N/A") == DiffStatus.REMOVED
        assert ann.row_status("Ledger", "N/A") == DiffStatus.NEW


class TestSummaries:
    def test_counts(self):
        base = table({("Order System", "REST"): {"Portal"}})
        current = table({("Order System", "REST"): {"Portal", "MobileApp"}})
        counts = diff(base, current).counts()
        assert counts["cells"] == {"new": 1, "removed": 0, "changed": 0, "unchanged": 1}
        assert counts["rows"]["changed"] == 1

    def test_to_dict_flattens_keys(self):
        base = table({("A", "i"): {"X"}})
        current = table({("A", "i"): {"X", "Y"}})
        data = diff(base, current).to_dict()
        assert data["columns"] == {"X": "unchanged", "Y": "new"}
        assert {"element": "A", "interface": "i", "target": "Y", "status": "new"} in data["cells"]
