"""Render matrix and catalog results as Markdown reports."""

from __future__ import annotations

from comatrix.render._helpers import (
    applist_groups,
    cell_value,
    column_status,
    marked,
    matrix_summary,
    row_status,
)
from comatrix.runner import AppListResult, MatrixResult


def _md(text: str) -> str:
    return text.replace("|", "\\|")


def render_matrix_markdown(result: MatrixResult) -> str:
    """Produce the connectivity matrix report."""
    sections: list[str] = []
    t = result.table
    columns = t.sorted_b_elements()

    # ── Title ────────────────────────────────────────────────────────────
    title = f"# Connectivity Matrix: {result.model_name}"
    if result.compare_mode:
        title += f" (baseline: {result.baseline_name})"
    sections.append(title + "\n")

    # ── Summary ──────────────────────────────────────────────────────────
    sections.append("\n".join(f"- {b}" for b in matrix_summary(result)) + "\n")
    if result.compare_mode:
        sections.append("Legend: `+` new, `-` removed, `~` changed, `x` connected.\n")

    # ── Matrix ───────────────────────────────────────────────────────────
    sections.append("## Matrix\n")
    header = ["Domain", "Application", "Offered Interface", "Intern/Extern"]
    header += [_md(marked(b, column_status(result, b))) for b in columns]
    sections.append("| " + " | ".join(header) + " |")
    sections.append("|" + "---|" * len(header))
    domain_row = ["", "", "", "*Domain*"] + [_md(t.b_elements[b]) for b in columns]
    sections.append("| " + " | ".join(domain_row) + " |")

    for row in result.rows:
        status = row_status(result, row)
        name = marked(row.element, status)
        if row.intern_extern == "intern":
            name = f"**{name}**"
        cells = [_md(row.domain), _md(name), _md(row.interface), row.intern_extern]
        cells += [cell_value(result, row, b)[0] for b in columns]
        sections.append("| " + " | ".join(cells) + " |")
    sections.append("")

    # ── Inconsistencies ──────────────────────────────────────────────────
    if result.inconsistencies:
        sections.append("## Model Inconsistencies\n")
        for finding in result.inconsistencies:
            label = "Domain conflict" if finding.kind == "domain_conflict" else "Containment cycle"
            detail = f": {finding.detail}" if finding.detail else ""
            sections.append(f"- **{label}** `{finding.element}`{detail}")
        sections.append("")

    return "\n".join(sections)


def render_applist_markdown(result: AppListResult) -> str:
    """Produce the application catalog report."""
    sections: list[str] = [f"# Applications: {result.model_name}\n"]

    total = len(result.records)
    lines = [f"- **Total applications**: {total}"]
    lines += [f"- **{tag}**: {n}" for tag, n in result.counts.items()]
    sections.append("\n".join(lines) + "\n")

    sections.append("## Catalog\n")
    sections.append("| Application | Type | Domain | Business Area |")
    sections.append("|---|---|---|---|")
    for r in result.records:
        sections.append(
            f"| {_md(r.name)} | {_md(r.type_tag)} | {_md(r.domain)} | {_md(r.business_area)} |"
        )
    sections.append("")

    sections.append("## By Business Area and Domain\n")
    for area, domain, apps in applist_groups(result):
        sections.append(f"- **{area}** / {domain}")
        sections.extend(f"  - {app}" for app in apps)
    sections.append("")

    return "\n".join(sections)
