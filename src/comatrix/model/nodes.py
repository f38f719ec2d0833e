"""Node and edge dataclasses for a model snapshot -- pure data, no logic."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Node:
    id: str
    name: str
    type: str = "element"                # "application-component", "grouping", ...
    classification: str | None = None    # "Domain"|"BusinessArea"|application kind
    properties: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ContainmentEdge:
    parent: str   # Node.id of the aggregating/composing element
    child: str    # Node.id
    kind: str = "aggregation"  # "aggregation"|"composition"


@dataclass
class TriggerEdge:
    id: str
    source: str   # Node.id (becomes the B-element)
    target: str   # Node.id (becomes the A-element)
    name: str = ""
    properties: dict[str, list[str]] = field(default_factory=dict)
