"""Shared helpers for render backends (markdown, PDF)."""

from __future__ import annotations

from comatrix.analyzer.models import DiffStatus, MatrixRow
from comatrix.runner import AppListResult, MatrixResult

# Prefix markers for text renderers: "+ Portal", "- Billing", "~ CRM"
STATUS_MARKERS = {
    DiffStatus.NEW: "+",
    DiffStatus.REMOVED: "-",
    DiffStatus.CHANGED: "~",
    DiffStatus.UNCHANGED: "",
}

CONNECTED = "x"


def marked(text: str, status: DiffStatus | None) -> str:
    """Prefix text with the marker for its diff status (if any)."""
    marker = STATUS_MARKERS.get(status, "") if status is not None else ""
    return f"{marker} {text}" if marker else text


def row_status(result: MatrixResult, row: MatrixRow) -> DiffStatus | None:
    if result.annotations is None:
        return None
    return result.annotations.row_status(row.element, row.interface)


def column_status(result: MatrixResult, column: str) -> DiffStatus | None:
    if result.annotations is None:
        return None
    return result.annotations.column_status(column)


def cell_value(result: MatrixResult, row: MatrixRow, column: str) -> tuple[str, DiffStatus | None]:
    """Cell text plus its status; ("", None) for an unconnected cell."""
    if column not in row.targets:
        return "", None
    if result.annotations is None:
        return CONNECTED, None
    status = result.annotations.cell_status(row.element, row.interface, column)
    if status in (DiffStatus.NEW, DiffStatus.REMOVED, DiffStatus.CHANGED):
        return STATUS_MARKERS[status], status
    return CONNECTED, status


def matrix_summary(result: MatrixResult) -> list[str]:
    """Plain-English bullets describing the matrix and, if any, the diff."""
    t = result.table
    bullets = [
        f"{len(t.a_elements)} providing application(s) offer {len(result.rows)} "
        f"interface row(s) to {len(t.b_elements)} consuming application(s).",
        f"{result.relationships} triggering relationship(s) processed in '{result.model_name}', "
        f"{t.connection_count()} connection(s) in the matrix.",
    ]
    intern = sum(1 for r in result.rows if r.intern_extern == "intern")
    extern = sum(1 for r in result.rows if r.intern_extern == "extern")
    bullets.append(f"{intern} row(s) stay within one domain, {extern} cross a domain boundary.")

    if result.annotations is not None:
        counts = result.annotations.counts()
        bullets.append(
            f"Compared with baseline '{result.baseline_name}' "
            f"({result.baseline_relationships} relationship(s))."
        )
        c = counts["cells"]
        bullets.append(
            f"Connections: {c['new']} new, {c['removed']} removed, {c['changed']} changed."
        )
        e = counts["elements"]
        col = counts["columns"]
        bullets.append(
            f"Providing applications: {e['new']} new, {e['removed']} removed, {e['changed']} changed; "
            f"consuming applications: {col['new']} new, {col['removed']} removed, {col['changed']} changed."
        )

    if result.inconsistencies:
        bullets.append(f"{len(result.inconsistencies)} model inconsistenc(ies) detected (see below).")
    return bullets


def applist_groups(result: AppListResult) -> list[tuple[str, str, list[str]]]:
    """(business area, domain, ["name (type)", ...]) in catalog order."""
    groups: list[tuple[str, str, list[str]]] = []
    for r in result.records:
        if not groups or groups[-1][0] != r.business_area or groups[-1][1] != r.domain:
            groups.append((r.business_area, r.domain, []))
        groups[-1][2].append(f"{r.name} ({r.type_tag})")
    return groups


# Unicode -> ASCII substitutions for PDF core fonts (latin-1 only).
_UNICODE_SUBS = str.maketrans({
    "\u2014": "--",   # em dash
    "\u2013": "-",    # en dash
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u2192": "->",
    "\u00a0": " ",    # non-breaking space
})


def latin1(text: str) -> str:
    """Sanitize text for latin-1 PDF core fonts (umlauts survive)."""
    result = text.translate(_UNICODE_SUBS)
    return result.encode("latin-1", errors="replace").decode("latin-1")
