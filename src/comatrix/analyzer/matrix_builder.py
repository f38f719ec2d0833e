"""Build a connectivity table (A-elements × interfaces × B-elements)."""

from __future__ import annotations

import logging

from comatrix.analyzer.ancestors import AncestorResolver
from comatrix.analyzer.models import (
    AElement,
    ConnectivityTable,
    GraphInconsistency,
    MatrixRow,
)
from comatrix.config import Settings
from comatrix.model.graph import ModelGraph
from comatrix.model.nodes import TriggerEdge

log = logging.getLogger(__name__)


class MatrixBuilder:
    """Turn trigger edges of one model snapshot into a ConnectivityTable.

    The target of a trigger edge is the A-element (row), the source is the
    B-element (column). Every interface value of an edge yields one row key.
    """

    def __init__(self, graph: ModelGraph, settings: Settings | None = None) -> None:
        self._graph = graph
        self._settings = settings or Settings()
        self._resolver = AncestorResolver(graph)

    def build(self, trigger_edges: list[TriggerEdge] | None = None) -> ConnectivityTable:
        s = self._settings
        if trigger_edges is None:
            trigger_edges = self._graph.trigger_edges(s.trigger_prefix)

        # Per-call memo: node id → matrix domain string
        domains: dict[str, str] = {}
        table = ConnectivityTable()
        cycles_seen: set[str] = set()

        def domain_of(node_id: str) -> str:
            if node_id not in domains:
                result = self._resolver.resolve(node_id, s.domain_tag)
                if result.cycle and node_id not in cycles_seen:
                    cycles_seen.add(node_id)
                    table.inconsistencies.append(GraphInconsistency(
                        kind="containment_cycle",
                        element=self._graph.get_node(node_id).name,
                        detail=f"cycle while resolving {s.domain_tag}",
                    ))
                domains[node_id] = result.render(s.separator, "", s.cycle_sentinel)
            return domains[node_id]

        used = 0
        for edge in trigger_edges:
            if not (edge.name and edge.name.startswith(s.trigger_prefix)):
                continue
            used += 1
            a_name = self._graph.get_node(edge.target).name
            b_name = self._graph.get_node(edge.source).name
            a_domain = domain_of(edge.target)
            b_domain = domain_of(edge.source)

            interfaces = self._graph.property_values(edge, s.interface_key) or [s.missing_interface]

            a = table.a_elements.get(a_name)
            if a is None:
                a = table.a_elements[a_name] = AElement(domain=a_domain)
            elif a.domain != a_domain:
                _record_conflict(table, a_name, a.domain, a_domain)

            for interface in interfaces:
                a.interfaces.setdefault(interface, set()).add(b_name)

            if b_name not in table.b_elements:
                table.b_elements[b_name] = b_domain
            elif table.b_elements[b_name] != b_domain:
                _record_conflict(table, b_name, table.b_elements[b_name], b_domain)

        log.info(
            "Matrix built for %r: %d relationships, %d A-elements, %d B-elements",
            self._graph.name, used, len(table.a_elements), len(table.b_elements),
        )
        return table


def _record_conflict(table: ConnectivityTable, name: str, kept: str, other: str) -> None:
    detail = f"domain {kept!r} kept, {other!r} ignored"
    conflict = GraphInconsistency(kind="domain_conflict", element=name, detail=detail)
    if conflict not in table.inconsistencies:
        log.warning("Conflicting domains for element %r: %s", name, detail)
        table.inconsistencies.append(conflict)


def intern_extern(a_domain: str, target_domains: list[str], cycle_sentinel: str = "cycle") -> str:
    """Classify a row by the domains of its connected B-elements.

    Any connection outside the A-element's own (resolved, non-empty) domain
    makes the row "extern"; a row without connections is "".
    """
    if not target_domains:
        return ""
    if a_domain in ("", cycle_sentinel):
        return "extern"
    if all(d == a_domain for d in target_domains):
        return "intern"
    return "extern"


def matrix_rows(table: ConnectivityTable, settings: Settings | None = None) -> list[MatrixRow]:
    """Lay out the table as rows in presentation order."""
    s = settings or Settings()
    columns = table.sorted_b_elements()
    rows: list[MatrixRow] = []
    for name in table.sorted_a_elements():
        a = table.a_elements[name]
        for interface in table.sorted_interfaces(name):
            connected = a.interfaces[interface]
            targets = [b for b in columns if b in connected]
            rows.append(MatrixRow(
                domain=a.domain,
                element=name,
                interface=interface,
                intern_extern=intern_extern(
                    a.domain, [table.b_elements[b] for b in targets], s.cycle_sentinel,
                ),
                targets=targets,
            ))
    return rows
