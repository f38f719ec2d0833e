"""Render matrix and catalog results as PDF reports.

Uses fpdf2 drawing primitives. Install via: pip install comatrix[pdf]
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from comatrix.analyzer.models import DiffStatus
from comatrix.errors import CollaboratorFailure
from comatrix.render._helpers import (
    applist_groups,
    cell_value,
    column_status,
    latin1,
    marked,
    matrix_summary,
    row_status,
)
from comatrix.runner import AppListResult, MatrixResult


# ── Color palette ──────────────────────────────────────────────────────────

_STATUS_FILLS: dict[DiffStatus, tuple[int, int, int]] = {
    DiffStatus.NEW: (155, 187, 89),
    DiffStatus.REMOVED: (192, 80, 77),
    DiffStatus.CHANGED: (255, 192, 0),
}

_HEADER_GRAY = (217, 217, 217)
_CELL_BLUE = (184, 204, 228)
_BODY = (30, 30, 30)
_MUTED = (100, 100, 100)
_DIVIDER = (200, 200, 200)

# Matrix layout (landscape A4, 267 mm content width)
_LEFT_COLS = (32, 42, 36, 16)        # domain, application, interface, intern/extern
_B_COL_W = 6
_B_HEADER_H = 32
_ROW_H = 5
_CATALOG_COLS = (60, 40, 40, 40)     # total = 180


def _import_fpdf():
    try:
        from fpdf import FPDF
        from fpdf.enums import XPos, YPos
    except ImportError:
        raise ImportError(
            "PDF output requires 'fpdf2'. "
            "Install it with: pip install comatrix[pdf]"
        )
    return FPDF, XPos, YPos


def _write(pdf, output_path: Path) -> None:
    try:
        pdf.output(str(output_path))
    except OSError as exc:
        raise CollaboratorFailure("report writer", f"cannot write {output_path}: {exc}") from exc


def render_matrix_pdf(result: MatrixResult, output_path: Path) -> None:
    """Render the connectivity matrix to a landscape PDF."""
    fpdf_cls, xpos, ypos = _import_fpdf()
    report = _MatrixPDF(result, fpdf_cls, xpos, ypos)
    report.render()
    _write(report.pdf, output_path)


def render_applist_pdf(result: AppListResult, output_path: Path) -> None:
    """Render the application catalog to a portrait PDF."""
    fpdf_cls, xpos, ypos = _import_fpdf()
    report = _CatalogPDF(result, fpdf_cls, xpos, ypos)
    report.render()
    _write(report.pdf, output_path)


class _BasePDF:
    """Shared page furniture for both reports."""

    orientation = "P"
    content_w = 180.0
    page_h = 297.0

    def __init__(self, title: str, fpdf_cls, xpos_enum, ypos_enum):
        self._XPos = xpos_enum
        self._YPos = ypos_enum
        self._title = title
        self._date = date.today().isoformat()
        self.pdf = fpdf_cls(orientation=self.orientation)
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(15, 20, 15)

    def _safe(self, text: str) -> str:
        return latin1(str(text))

    def _add_page(self) -> None:
        self.pdf.add_page()
        self.pdf.set_font("Helvetica", "B", 8)
        self.pdf.set_text_color(*_MUTED)
        self.pdf.set_y(10)
        self.pdf.cell(self.content_w / 2, 5, self._safe(self._title), new_x=self._XPos.RIGHT, new_y=self._YPos.TOP)
        self.pdf.set_font("Helvetica", "", 8)
        self.pdf.cell(self.content_w / 2, 5, self._date, align="R", new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self.pdf.set_draw_color(*_DIVIDER)
        self.pdf.line(15, 16, 15 + self.content_w, 16)
        self.pdf.set_y(20)
        self._footer()

    def _footer(self) -> None:
        y = self.pdf.get_y()
        self.pdf.set_y(self.page_h - 12)
        self.pdf.set_font("Helvetica", "", 7.5)
        self.pdf.set_text_color(*_MUTED)
        self.pdf.cell(self.content_w, 5, f"Page {self.pdf.page_no()}", align="R")
        self.pdf.set_xy(15, y)

    def _ensure_space(self, needed: float) -> bool:
        """Start a new page if less than `needed` mm remain; True if it did."""
        if self.pdf.get_y() + needed > self.page_h - 20:
            self._add_page()
            return True
        return False

    def _heading(self, text: str, size: float = 14) -> None:
        self._ensure_space(size + 8)
        self.pdf.ln(4)
        self.pdf.set_font("Helvetica", "B", size)
        self.pdf.set_text_color(*_BODY)
        self.pdf.cell(self.content_w, size * 0.5, self._safe(text), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self.pdf.ln(2)

    def _bullet(self, text: str) -> None:
        self._ensure_space(6)
        self.pdf.set_font("Helvetica", "", 9)
        self.pdf.set_text_color(*_BODY)
        self.pdf.set_x(19)
        self.pdf.multi_cell(self.content_w - 4, 4.5, self._safe(f"- {text}"), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)

    def _cell(self, w: float, text: str, fill: tuple[int, int, int] | None = None,
              bold: bool = False, align: str = "L", last: bool = False) -> None:
        self.pdf.set_font("Helvetica", "B" if bold else "", 7)
        if fill is not None:
            self.pdf.set_fill_color(*fill)
        self.pdf.cell(
            w, _ROW_H, self._safe(text), border=1, fill=fill is not None, align=align,
            new_x=self._XPos.LMARGIN if last else self._XPos.RIGHT,
            new_y=self._YPos.NEXT if last else self._YPos.TOP,
        )


class _MatrixPDF(_BasePDF):
    orientation = "L"
    content_w = 267.0
    page_h = 210.0

    def __init__(self, result: MatrixResult, fpdf_cls, xpos_enum, ypos_enum):
        super().__init__(f"{result.model_name} -- Connectivity Matrix", fpdf_cls, xpos_enum, ypos_enum)
        self._result = result

    def render(self) -> None:
        self._add_page()
        self._render_title()
        columns = self._result.table.sorted_b_elements()
        per_page = max(1, int((self.content_w - sum(_LEFT_COLS)) // _B_COL_W))
        chunks = [columns[i:i + per_page] for i in range(0, len(columns), per_page)] or [[]]
        for n, chunk in enumerate(chunks, start=1):
            self._add_page()
            if len(chunks) > 1:
                self._heading(f"Matrix (part {n} of {len(chunks)})", size=11)
            self._render_matrix(chunk)
        self._render_inconsistencies()

    def _render_title(self) -> None:
        r = self._result
        self.pdf.ln(10)
        self.pdf.set_font("Helvetica", "B", 20)
        self.pdf.set_text_color(*_BODY)
        self.pdf.cell(self.content_w, 10, self._safe(r.model_name), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self.pdf.set_font("Helvetica", "", 10)
        self.pdf.set_text_color(*_MUTED)
        subtitle = "Connectivity Matrix"
        if r.compare_mode:
            subtitle += f" compared with {r.baseline_name}"
        self.pdf.cell(self.content_w, 6, self._safe(subtitle), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._heading("Summary", size=12)
        for b in matrix_summary(r):
            self._bullet(b)
        if r.compare_mode:
            self._heading("Legend", size=11)
            for status, label in ((DiffStatus.NEW, "new"), (DiffStatus.REMOVED, "removed"),
                                  (DiffStatus.CHANGED, "changed")):
                self.pdf.set_x(19)
                self._cell(8, "", fill=_STATUS_FILLS[status])
                self.pdf.set_text_color(*_BODY)
                self.pdf.cell(30, _ROW_H, f"  {label}", new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)

    def _render_header(self, columns: list[str]) -> None:
        r = self._result
        x0, y0 = 15.0, self.pdf.get_y()
        labels = ("Domain", "Application", "Offered Interface", "Int/Ext")
        self.pdf.set_text_color(*_BODY)
        self.pdf.set_xy(x0, y0 + _B_HEADER_H - _ROW_H)
        for w, label in zip(_LEFT_COLS, labels):
            self._cell(w, label, fill=_HEADER_GRAY, bold=True, align="C")

        x = x0 + sum(_LEFT_COLS)
        self.pdf.set_font("Helvetica", "", 6.5)
        for b in columns:
            fill = _STATUS_FILLS.get(column_status(r, b), _CELL_BLUE)
            self.pdf.set_fill_color(*fill)
            self.pdf.rect(x, y0, _B_COL_W, _B_HEADER_H, style="DF")
            label = self._safe(b)
            while label and self.pdf.get_string_width(label) > _B_HEADER_H - 2:
                label = label[:-1]
            tx, ty = x + _B_COL_W / 2 + 1, y0 + _B_HEADER_H - 1
            with self.pdf.rotation(90, x=tx, y=ty):
                self.pdf.text(tx, ty, label)
            x += _B_COL_W
        self.pdf.set_xy(x0, y0 + _B_HEADER_H)

        # Domain row under the column headers
        self.pdf.set_x(x0)
        self._cell(sum(_LEFT_COLS), "Domain of consuming application", fill=_HEADER_GRAY, align="R")
        for i, b in enumerate(columns):
            domain = r.table.b_elements[b]
            self._cell(_B_COL_W, domain[:2], fill=_HEADER_GRAY, align="C", last=i == len(columns) - 1)
        if not columns:
            self.pdf.ln(_ROW_H)

    def _render_matrix(self, columns: list[str]) -> None:
        r = self._result
        self._render_header(columns)
        for row in r.rows:
            if self._ensure_space(_ROW_H):
                self._render_header(columns)
            status = row_status(r, row)
            fill = _STATUS_FILLS.get(status)
            bold = row.intern_extern == "intern"
            self.pdf.set_text_color(*_BODY)
            values = (row.domain, marked(row.element, status), row.interface, row.intern_extern)
            for i, (w, v) in enumerate(zip(_LEFT_COLS, values)):
                self._cell(w, v, fill=fill, bold=bold, last=not columns and i == len(values) - 1)
            for i, b in enumerate(columns):
                text, cell_status = cell_value(r, row, b)
                cell_fill = _STATUS_FILLS.get(cell_status, _CELL_BLUE) if text else _CELL_BLUE
                self._cell(_B_COL_W, text, fill=cell_fill, bold=bool(text), align="C",
                           last=i == len(columns) - 1)

    def _render_inconsistencies(self) -> None:
        findings = self._result.inconsistencies
        if not findings:
            return
        self._heading("Model Inconsistencies", size=12)
        for f in findings:
            label = "Domain conflict" if f.kind == "domain_conflict" else "Containment cycle"
            self._bullet(f"{label}: {f.element} {f.detail}".strip())


class _CatalogPDF(_BasePDF):
    def __init__(self, result: AppListResult, fpdf_cls, xpos_enum, ypos_enum):
        super().__init__(f"{result.model_name} -- Applications", fpdf_cls, xpos_enum, ypos_enum)
        self._result = result

    def render(self) -> None:
        r = self._result
        self._add_page()
        self._heading(f"Applications: {r.model_name}", size=16)
        self._bullet(f"Total applications: {len(r.records)}")
        for tag, n in r.counts.items():
            self._bullet(f"{tag}: {n}")

        self._heading("Catalog", size=12)
        self._table_header()
        for rec in r.records:
            if self._ensure_space(_ROW_H):
                self._table_header()
            self.pdf.set_text_color(*_BODY)
            values = (rec.name, rec.type_tag, rec.domain, rec.business_area)
            for i, (w, v) in enumerate(zip(_CATALOG_COLS, values)):
                self._cell(w, v, last=i == len(values) - 1)

        self._heading("By Business Area and Domain", size=12)
        for area, domain, apps in applist_groups(r):
            self._ensure_space(10)
            self.pdf.set_font("Helvetica", "B", 9)
            self.pdf.cell(self.content_w, 5, self._safe(f"{area} / {domain}"), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
            for app in apps:
                self._bullet(app)

    def _table_header(self) -> None:
        self.pdf.set_text_color(*_BODY)
        labels = ("Application", "Type", "Domain", "Business Area")
        for i, (w, label) in enumerate(zip(_CATALOG_COLS, labels)):
            self._cell(w, label, fill=_HEADER_GRAY, bold=True, align="C", last=i == len(labels) - 1)
