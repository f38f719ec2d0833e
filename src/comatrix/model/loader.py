"""Read a model snapshot from a YAML or JSON file into a ModelGraph."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from comatrix.errors import CollaboratorFailure
from comatrix.model.graph import ModelGraph
from comatrix.model.nodes import ContainmentEdge, Node, TriggerEdge
from comatrix.schemas.model_file import ModelFile

log = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_model(path: Path) -> ModelGraph:
    """Load and validate a model file.

    Any read, parse or validation problem is raised as CollaboratorFailure
    with the original exception chained.
    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in _YAML_SUFFIXES:
            raw = yaml.safe_load(text) or {}
        else:
            raw = json.loads(text)
        spec = ModelFile.model_validate(raw)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError, ValidationError) as exc:
        raise CollaboratorFailure("model loader", f"cannot read {path}: {exc}") from exc

    graph = graph_from_spec(spec, default_name=path.stem)
    log.info(
        "Model %r loaded from %s: %d elements, %d containment, %d triggering",
        graph.name, path, len(graph),
        len(graph.all_containment_edges()), len(graph.trigger_edges()),
    )
    return graph


def graph_from_spec(spec: ModelFile, default_name: str = "") -> ModelGraph:
    """Build a ModelGraph from an already-validated ModelFile."""
    graph = ModelGraph(name=spec.name or default_name, properties=spec.properties)

    for el in spec.elements:
        if graph.has_node(el.id):
            log.warning("Duplicate element id %r in model %r, later entry wins", el.id, graph.name)
        graph.add_node(Node(
            id=el.id,
            name=el.name,
            type=el.type,
            classification=el.classification,
            properties={k: list(v) for k, v in el.properties.items()},
        ))

    for i, rel in enumerate(spec.relationships):
        for end in (rel.source, rel.target):
            if not graph.has_node(end):
                raise CollaboratorFailure(
                    "model loader",
                    f"relationship {rel.id or i} in model {graph.name!r} "
                    f"references unknown element {end!r}",
                )
        if rel.type == "triggering":
            graph.add_trigger(TriggerEdge(
                id=rel.id or f"rel-{i}",
                source=rel.source,
                target=rel.target,
                name=rel.name,
                properties={k: list(v) for k, v in rel.properties.items()},
            ))
        else:
            graph.add_containment(ContainmentEdge(
                parent=rel.source, child=rel.target, kind=rel.type,
            ))

    return graph


def resolve_baseline_path(
    model_path: Path,
    graph: ModelGraph,
    override: Path | None = None,
    baseline_property: str = "baseline",
) -> Path | None:
    """Locate the baseline model file for compare mode.

    An explicit override wins; otherwise the model's baseline property is
    resolved relative to the model file. Returns None (single-model mode)
    when no baseline is configured or the file does not exist.
    """
    if override is not None:
        candidate = override
    else:
        value = graph.properties.get(baseline_property, "").strip()
        if not value:
            log.info("Property %r is not set in model %r, single model mode",
                     baseline_property, graph.name)
            return None
        candidate = Path(value)
        if not candidate.is_absolute():
            candidate = model_path.parent / candidate

    if not candidate.is_file():
        log.warning("Baseline model %s not found, single model mode", candidate)
        return None
    return candidate
