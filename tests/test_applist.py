"""Tests for the application catalog."""

from __future__ import annotations

from comatrix.analyzer.applist import build_app_catalog, count_by_type, sort_catalog
from comatrix.analyzer.models import AppRecord
from comatrix.config import Settings
from comatrix.model.graph import ModelGraph
from comatrix.model.nodes import ContainmentEdge, Node


def rec(name: str, area: str, domain: str, type_tag: str = "BusinessApplication") -> AppRecord:
    return AppRecord(name=name, type_tag=type_tag, domain=domain, business_area=area)


def make_graph() -> ModelGraph:
    g = ModelGraph(name="m")
    g.add_node(Node(id="ba", name="Commercial", classification="BusinessArea"))
    g.add_node(Node(id="sales", name="Sales", classification="Domain"))
    g.add_node(Node(id="fin", name="Finance", classification="Domain"))
    g.add_node(Node(id="app1", name="Customer Register", classification="Register"))
    g.add_node(Node(id="app2", name="Portal", classification="BusinessApplication"))
    g.add_node(Node(id="svc", name="Some Service", classification=None))
    g.add_node(Node(id="loop", name="Loop"))
    g.add_containment(ContainmentEdge(parent="ba", child="sales"))
    g.add_containment(ContainmentEdge(parent="sales", child="app1"))
    g.add_containment(ContainmentEdge(parent="fin", child="app1"))
    g.add_containment(ContainmentEdge(parent="loop", child="app2"))
    g.add_containment(ContainmentEdge(parent="loop", child="loop"))
    return g


class TestBuildCatalog:
    def test_only_application_kinds(self):
        records = build_app_catalog(make_graph())
        assert {r.name for r in records} == {"Customer Register", "Portal"}

    def test_multiple_domains_and_business_area(self):
        records = {r.name: r for r in build_app_catalog(make_graph())}
        register = records["Customer Register"]
        assert register.domain == "Finance, Sales"
        assert register.business_area == "Commercial"
        assert register.type_tag == "Register"

    def test_cycle_and_placeholders(self):
        records = {r.name: r for r in build_app_catalog(make_graph())}
        assert records["Portal"].domain == "cycle"
        assert records["Portal"].business_area == "cycle"

    def test_none_found_placeholder(self):
        g = ModelGraph()
        g.add_node(Node(id="a", name="Lonely", classification="Register"))
        s = Settings(no_domain="(keine Domäne)")
        (record,) = build_app_catalog(g, s)
        assert record.domain == "(keine Domäne)"
        assert record.business_area == s.no_business_area

    def test_no_applications(self):
        g = ModelGraph()
        g.add_node(Node(id="x", name="X"))
        assert build_app_catalog(g) == []


class TestSortCatalog:
    def test_field_priority(self):
        records = [
            rec("B", "Corporate", "Finance"),
            rec("A", "Commercial", "Sales"),
            rec("C", "Commercial", "Marketing", type_tag="Register"),
            rec("D", "Commercial", "Marketing"),
        ]
        assert [r.name for r in sort_catalog(records)] == ["D", "C", "A", "B"]

    def test_empty_business_area_sorts_last(self):
        s = Settings()
        records = [
            rec("Aaa", s.no_business_area, "Alpha"),
            rec("Zzz", "Zulu", "Zulu"),
            rec("Mmm", "Alpha", s.no_domain),
        ]
        assert [r.name for r in sort_catalog(records)] == ["Mmm", "Zzz", "Aaa"]

    def test_sentinels_sorted_among_themselves(self):
        s = Settings()
        records = [
            rec("x", s.no_business_area, "A"),
            rec("y", "cycle", "A"),
            rec("z", "Real", "A"),
        ]
        # "(no business area)" < "cycle" lexically
        assert [r.name for r in sort_catalog(records)] == ["z", "x", "y"]

    def test_domain_sentinel_after_real_domain(self):
        s = Settings()
        records = [rec("a", "Area", s.no_domain), rec("b", "Area", "Zulu")]
        assert [r.name for r in sort_catalog(records)] == ["b", "a"]


def test_count_by_type():
    records = [rec("a", "x", "y", "Register"), rec("b", "x", "y", "Register"), rec("c", "x", "y", "Other")]
    counts = count_by_type(records)
    assert counts["Register"] == 2
    assert counts["BusinessApplication"] == 0
    assert counts["CrossCuttingApplication"] == 0
    assert counts["Other"] == 1
    assert list(counts)[:3] == Settings().application_tags
