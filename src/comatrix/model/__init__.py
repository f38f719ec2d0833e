"""Model snapshot package.

Provides:
    load_model(path) -> ModelGraph
"""

from __future__ import annotations

from comatrix.model.graph import ModelGraph
from comatrix.model.loader import load_model, resolve_baseline_path
from comatrix.model.nodes import ContainmentEdge, Node, TriggerEdge

__all__ = [
    "ContainmentEdge",
    "ModelGraph",
    "Node",
    "TriggerEdge",
    "load_model",
    "resolve_baseline_path",
]
