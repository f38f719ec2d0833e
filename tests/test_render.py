"""Tests for the markdown and PDF report renderers."""

from __future__ import annotations

import pytest

from comatrix.model.graph import ModelGraph
from comatrix.model.nodes import ContainmentEdge, Node, TriggerEdge
from comatrix.render._helpers import cell_value, latin1, marked, matrix_summary
from comatrix.render.markdown import render_applist_markdown, render_matrix_markdown
from comatrix.analyzer.models import DiffStatus
from comatrix.runner import run_applist, run_matrix


def make_graph(name: str, with_mobile: bool = True, with_cycle: bool = False) -> ModelGraph:
    g = ModelGraph(name=name)
    g.add_node(Node(id="ba", name="Commercial", classification="BusinessArea"))
    g.add_node(Node(id="sales", name="Sales", classification="Domain"))
    g.add_node(Node(id="order", name="Order System", classification="BusinessApplication"))
    g.add_node(Node(id="portal", name="Portal", classification="BusinessApplication"))
    g.add_containment(ContainmentEdge(parent="ba", child="sales"))
    g.add_containment(ContainmentEdge(parent="sales", child="order"))
    g.add_containment(ContainmentEdge(parent="sales", child="portal"))
    g.add_trigger(TriggerEdge(id="t1", source="portal", target="order", name="NST_a",
                              properties={"Interface": ["REST"]}))
    if with_mobile:
        g.add_node(Node(id="mobile", name="MobileApp", classification="CrossCuttingApplication"))
        g.add_trigger(TriggerEdge(id="t2", source="mobile", target="order", name="NST_b",
                                  properties={"Interface": ["SOAP"]}))
    if with_cycle:
        g.add_containment(ContainmentEdge(parent="portal", child="sales"))
    return g


# ── Helpers ───────────────────────────────────────────────────────────────


def test_marked():
    assert marked("Portal", DiffStatus.NEW) == "+ Portal"
    assert marked("Portal", DiffStatus.REMOVED) == "- Portal"
    assert marked("Portal", DiffStatus.CHANGED) == "~ Portal"
    assert marked("Portal", DiffStatus.UNCHANGED) == "Portal"
    assert marked("Portal", None) == "Portal"


def test_cell_value_single_mode():
    result = run_matrix(make_graph("now"))
    row = result.rows[0]
    assert cell_value(result, row, "Portal") == ("x", None)
    assert cell_value(result, row, "MobileApp") == ("", None)


def test_cell_value_compare_mode():
    result = run_matrix(make_graph("now"), make_graph("then", with_mobile=False))
    soap = next(r for r in result.rows if r.interface == "SOAP")
    assert cell_value(result, soap, "MobileApp") == ("+", DiffStatus.NEW)


def test_summary_mentions_diff_counts():
    result = run_matrix(make_graph("now"), make_graph("then", with_mobile=False))
    bullets = matrix_summary(result)
    assert any("Compared with baseline 'then'" in b for b in bullets)
    assert any("1 new" in b for b in bullets)
    assert any("2 connection(s) in the matrix" in b for b in bullets)


def test_latin1_keeps_umlauts():
    assert latin1("Domäne — Übersicht → x") == "Domäne -- Übersicht -> x"


# ── Markdown ──────────────────────────────────────────────────────────────


def test_matrix_markdown_single_mode():
    md = render_matrix_markdown(run_matrix(make_graph("now")))
    assert md.startswith("# Connectivity Matrix: now")
    assert "| Domain | Application | Offered Interface | Intern/Extern | Portal | MobileApp |" in md
    assert "| Sales | **Order System** | REST | intern | x |  |" in md
    assert "| Sales | Order System | SOAP | extern |  | x |" in md
    assert "Legend" not in md


def test_matrix_markdown_compare_mode():
    md = render_matrix_markdown(run_matrix(make_graph("now"), make_graph("then", with_mobile=False)))
    assert "(baseline: then)" in md
    assert "Legend" in md
    assert "+ MobileApp" in md
    assert "| Sales | + Order System | SOAP | extern |  | + |" in md
    assert "| Sales | **Order System** | REST | intern | x |  |" in md


def test_matrix_markdown_inconsistencies():
    md = render_matrix_markdown(run_matrix(make_graph("now", with_cycle=True)))
    assert "## Model Inconsistencies" in md
    assert "Containment cycle" in md


def test_matrix_markdown_escapes_pipes():
    g = make_graph("now", with_mobile=False)
    g.add_trigger(TriggerEdge(id="t9", source="portal", target="order", name="NST_p",
                              properties={"Interface": ["A|B"]}))
    md = render_matrix_markdown(run_matrix(g))
    assert "A\\|B" in md


def test_applist_markdown():
    md = render_applist_markdown(run_applist(make_graph("now")))
    assert md.startswith("# Applications: now")
    assert "- **Total applications**: 3" in md
    assert "| Order System | BusinessApplication | Sales | Commercial |" in md
    assert "| MobileApp | CrossCuttingApplication | (no domain) | (no business area) |" in md
    assert "- **Commercial** / Sales" in md
    # placeholder rows come last
    assert md.index("Portal |") < md.index("| MobileApp |")


# ── PDF ───────────────────────────────────────────────────────────────────

try:
    import fpdf  # noqa: F401
    HAS_FPDF = True
except ImportError:
    HAS_FPDF = False

pdf_tests = pytest.mark.skipif(not HAS_FPDF, reason="fpdf2 not installed")


@pdf_tests
def test_matrix_pdf_smoke(tmp_path):
    from comatrix.render.pdf import render_matrix_pdf

    out = tmp_path / "matrix.pdf"
    render_matrix_pdf(run_matrix(make_graph("now"), make_graph("then", with_mobile=False)), out)
    data = out.read_bytes()
    assert len(data) > 500
    assert data[:5] == b"%PDF-"


@pdf_tests
def test_matrix_pdf_many_columns(tmp_path):
    """Column chunks spill onto several pages without errors."""
    from comatrix.render.pdf import render_matrix_pdf

    g = make_graph("wide", with_mobile=False)
    for i in range(60):
        g.add_node(Node(id=f"c{i}", name=f"Consumer {i:02d} — Ä"))
        g.add_trigger(TriggerEdge(id=f"w{i}", source=f"c{i}", target="order", name="NST_w",
                                  properties={"Interface": [f"IF{i % 7}"]}))
    out = tmp_path / "wide.pdf"
    render_matrix_pdf(run_matrix(g), out)
    assert out.read_bytes()[:5] == b"%PDF-"


@pdf_tests
def test_applist_pdf_smoke(tmp_path):
    from comatrix.render.pdf import render_applist_pdf

    out = tmp_path / "applist.pdf"
    render_applist_pdf(run_applist(make_graph("now", with_cycle=True)), out)
    assert out.read_bytes()[:5] == b"%PDF-"


@pdf_tests
def test_pdf_write_failure(tmp_path):
    from comatrix.errors import CollaboratorFailure
    from comatrix.render.pdf import render_applist_pdf

    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(CollaboratorFailure) as info:
        render_applist_pdf(run_applist(make_graph("now")), blocker / "applist.pdf")
    assert isinstance(info.value.__cause__, OSError)
