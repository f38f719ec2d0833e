"""Classify elements, columns, rows and cells of a merged table against
the baseline and current tables it was merged from."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from comatrix.analyzer.models import ConnectivityTable, DiffStatus

log = logging.getLogger(__name__)

RowKey = tuple[str, str]             # (A-element, interface)
CellKey = tuple[str, str, str]       # (A-element, interface, B-element)


@dataclass
class DiffAnnotations:
    """Status tags for every visual unit of a merged matrix."""
    elements: dict[str, DiffStatus] = field(default_factory=dict)   # A-elements
    columns: dict[str, DiffStatus] = field(default_factory=dict)    # B-elements
    rows: dict[RowKey, DiffStatus] = field(default_factory=dict)
    cells: dict[CellKey, DiffStatus] = field(default_factory=dict)

    def element_status(self, element: str) -> DiffStatus:
        return self.elements.get(element, DiffStatus.UNCHANGED)

    def column_status(self, column: str) -> DiffStatus:
        return self.columns.get(column, DiffStatus.UNCHANGED)

    def row_status(self, element: str, interface: str) -> DiffStatus:
        """Row tag; a new/removed element overrides the row's own status."""
        el = self.element_status(element)
        if el in (DiffStatus.NEW, DiffStatus.REMOVED):
            return el
        return self.rows.get((element, interface), DiffStatus.UNCHANGED)

    def cell_status(self, element: str, interface: str, column: str) -> DiffStatus | None:
        """Cell tag, or None when the cell is not connected in the merged table."""
        return self.cells.get((element, interface, column))

    def counts(self) -> dict[str, dict[str, int]]:
        """Per-unit status counts for report summaries."""
        result: dict[str, dict[str, int]] = {}
        for unit, tags in (
            ("elements", self.elements.values()),
            ("columns", self.columns.values()),
            ("rows", self.rows.values()),
            ("cells", self.cells.values()),
        ):
            bucket = {s.value: 0 for s in DiffStatus}
            for tag in tags:
                bucket[tag.value] += 1
            result[unit] = bucket
        return result

    def to_dict(self) -> dict:
        """JSON-friendly form with composite keys flattened into records."""
        return {
            "elements": {k: v.value for k, v in sorted(self.elements.items())},
            "columns": {k: v.value for k, v in sorted(self.columns.items())},
            "rows": [
                {"element": a, "interface": i, "status": v.value}
                for (a, i), v in sorted(self.rows.items())
            ],
            "cells": [
                {"element": a, "interface": i, "target": b, "status": v.value}
                for (a, i, b), v in sorted(self.cells.items())
            ],
        }


def _presence(in_base: bool, in_current: bool) -> DiffStatus | None:
    if in_current and not in_base:
        return DiffStatus.NEW
    if in_base and not in_current:
        return DiffStatus.REMOVED
    return None


def classify(
    base: ConnectivityTable,
    current: ConnectivityTable,
    merged: ConnectivityTable,
) -> DiffAnnotations:
    """Tag every element, column, row and connected cell of ``merged``."""
    ann = DiffAnnotations()

    # ── Rows ────────────────────────────────────────────────────────────
    for key in merged.keys():
        in_base, in_current = base.has_key(*key), current.has_key(*key)
        status = _presence(in_base, in_current)
        if status is None:
            changed = base.targets(*key) != current.targets(*key)
            status = DiffStatus.CHANGED if changed else DiffStatus.UNCHANGED
        ann.rows[key] = status

    # ── A-elements ──────────────────────────────────────────────────────
    for name in merged.a_elements:
        status = _presence(name in base.a_elements, name in current.a_elements)
        if status is None:
            same_keys = (
                set(base.a_elements[name].interfaces) == set(current.a_elements[name].interfaces)
            )
            rows_same = all(
                ann.rows[(name, i)] == DiffStatus.UNCHANGED
                for i in merged.a_elements[name].interfaces
            )
            status = DiffStatus.UNCHANGED if same_keys and rows_same else DiffStatus.CHANGED
        ann.elements[name] = status

    # ── B-element columns ───────────────────────────────────────────────
    all_keys = set(base.keys()) | set(current.keys())
    for column in merged.b_elements:
        status = _presence(column in base.b_elements, column in current.b_elements)
        if status is None:
            differs = any(
                (column in base.targets(*key)) != (column in current.targets(*key))
                for key in all_keys
            )
            status = DiffStatus.CHANGED if differs else DiffStatus.UNCHANGED
        ann.columns[column] = status

    # ── Connected cells ─────────────────────────────────────────────────
    for key in merged.keys():
        for column in merged.targets(*key):
            status = _presence(column in base.targets(*key), column in current.targets(*key))
            if status is None:
                inherited = (
                    ann.rows[key] == DiffStatus.CHANGED
                    and ann.columns.get(column) == DiffStatus.CHANGED
                )
                status = DiffStatus.CHANGED if inherited else DiffStatus.UNCHANGED
            ann.cells[(key[0], key[1], column)] = status

    log.info(
        "Diff classified: %d rows, %d cells (%d new, %d removed)",
        len(ann.rows), len(ann.cells),
        sum(1 for s in ann.cells.values() if s == DiffStatus.NEW),
        sum(1 for s in ann.cells.values() if s == DiffStatus.REMOVED),
    )
    return ann
