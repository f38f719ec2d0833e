"""Resolve classification ancestors (domains, business areas) of a node.

Walks containment edges upward (child → parent) with an explicit stack so
deep hierarchies never hit the interpreter's recursion limit. Cycles are
detected through the active path and reported in the result, never raised.
"""

from __future__ import annotations

import logging
from typing import Iterator

from comatrix.analyzer.models import ResolvedClassification
from comatrix.model.graph import ModelGraph

log = logging.getLogger(__name__)


class AncestorResolver:
    """Depth-first upward walk over one graph snapshot."""

    def __init__(self, graph: ModelGraph) -> None:
        self._graph = graph

    def resolve(self, node_id: str, classification: str) -> ResolvedClassification:
        """Collect every node carrying ``classification`` at or above node_id.

        Matches do not stop the walk: a Domain nested in a BusinessArea is
        reached either way. A parent already on the active path marks the
        result as cyclic and is not re-entered; other branches still
        contribute names.
        """
        graph = self._graph
        start = graph.get_node(node_id)

        names: set[str] = set()
        cycle = False
        visited: set[str] = {start.id}
        path: set[str] = {start.id}
        # Each frame: (node id, iterator over its parent ids)
        stack: list[tuple[str, Iterator[str]]] = [(start.id, self._parents(start.id))]
        if start.classification == classification:
            names.add(start.name)

        while stack:
            current, parents = stack[-1]
            parent_id = next(parents, None)
            if parent_id is None:
                stack.pop()
                path.discard(current)
                continue

            if parent_id in path:
                if not cycle:
                    log.warning(
                        "Containment cycle while resolving %s for %r: %r → %r",
                        classification, start.name, current, parent_id,
                    )
                cycle = True
                continue
            if parent_id in visited:
                continue

            parent = graph.get_node(parent_id)
            visited.add(parent_id)
            path.add(parent_id)
            if parent.classification == classification:
                names.add(parent.name)
            stack.append((parent_id, self._parents(parent_id)))

        return ResolvedClassification(names=sorted(names), cycle=cycle)

    def _parents(self, node_id: str) -> Iterator[str]:
        return (edge.parent for edge in self._graph.incoming_containment_edges(node_id))


def resolve_ancestors(
    graph: ModelGraph,
    node_id: str,
    classification: str,
) -> ResolvedClassification:
    """Convenience wrapper around AncestorResolver.resolve."""
    return AncestorResolver(graph).resolve(node_id, classification)
