"""ModelGraph: read-only accessor over one model snapshot."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Union

from comatrix.errors import UnknownNodeError
from comatrix.model.nodes import ContainmentEdge, Node, TriggerEdge

CONTAINMENT_KINDS = frozenset({"aggregation", "composition"})


class ModelGraph:
    """Typed nodes with containment and trigger edges, indexed by node id."""

    def __init__(self, name: str = "", properties: dict[str, str] | None = None) -> None:
        self.name = name
        self.properties: dict[str, str] = dict(properties or {})
        self._nodes: dict[str, Node] = {}
        self._containment: list[ContainmentEdge] = []
        # Backward adjacency: child_id → list[ContainmentEdge]
        self._parents: dict[str, list[ContainmentEdge]] = defaultdict(list)
        self._triggers: list[TriggerEdge] = []

    # ── Population ──────────────────────────────────────────────────────

    def add_node(self, node: Node) -> None:
        """Add a node (idempotent by id -- later add wins on conflict)."""
        self._nodes[node.id] = node

    def add_containment(self, edge: ContainmentEdge) -> None:
        """Add a parent → child containment edge (duplicates allowed)."""
        if edge.kind not in CONTAINMENT_KINDS:
            raise ValueError(f"not a containment kind: {edge.kind!r}")
        self._containment.append(edge)
        self._parents[edge.child].append(edge)

    def add_trigger(self, edge: TriggerEdge) -> None:
        self._triggers.append(edge)

    # ── Accessors ───────────────────────────────────────────────────────

    def get_node(self, node_id: str) -> Node:
        """Return the node with this id; unknown ids are a programming error."""
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def list_nodes(self, kind: str | None = None) -> list[Node]:
        """All nodes, optionally restricted to one element type."""
        if kind is None:
            return list(self._nodes.values())
        return [n for n in self._nodes.values() if n.type == kind]

    def nodes_matching(self, pred: Callable[[Node], bool]) -> list[Node]:
        return [n for n in self._nodes.values() if pred(n)]

    def classification_of(self, node_id: str) -> str | None:
        return self.get_node(node_id).classification

    def incoming_containment_edges(self, node_id: str) -> list[ContainmentEdge]:
        """Edges where node_id is the child; the parent side is edge.parent."""
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)
        return list(self._parents.get(node_id, []))

    def trigger_edges(self, prefix: str | None = None) -> list[TriggerEdge]:
        """Trigger edges, optionally only those whose name starts with prefix."""
        if prefix is None:
            return list(self._triggers)
        return [e for e in self._triggers if e.name and e.name.startswith(prefix)]

    @staticmethod
    def property_values(item: Union[Node, TriggerEdge], key: str) -> list[str]:
        """All values for a (possibly repeated) property key, in model order."""
        return list(item.properties.get(key, []))

    def all_containment_edges(self) -> list[ContainmentEdge]:
        return list(self._containment)

    def __len__(self) -> int:
        return len(self._nodes)
