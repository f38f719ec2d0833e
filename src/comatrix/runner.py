"""Pipelines: connectivity matrix (single or compare mode) and app catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from comatrix.analyzer.applist import build_app_catalog, count_by_type, sort_catalog
from comatrix.analyzer.diff import DiffAnnotations, classify
from comatrix.analyzer.matrix_builder import MatrixBuilder, matrix_rows
from comatrix.analyzer.merge import merge_tables
from comatrix.analyzer.models import AppRecord, ConnectivityTable, GraphInconsistency, MatrixRow
from comatrix.config import Settings
from comatrix.model.graph import ModelGraph

log = logging.getLogger(__name__)

RunStatus = Literal["ok", "empty"]


@dataclass
class MatrixResult:
    """Everything a renderer needs to lay out the connectivity matrix."""
    status: RunStatus
    model_name: str
    table: ConnectivityTable                 # merged in compare mode
    rows: list[MatrixRow] = field(default_factory=list)
    baseline_name: str | None = None
    base: ConnectivityTable | None = None
    current: ConnectivityTable | None = None
    annotations: DiffAnnotations | None = None
    relationships: int = 0                   # trigger edges processed, current model
    baseline_relationships: int = 0

    @property
    def compare_mode(self) -> bool:
        return self.annotations is not None

    @property
    def inconsistencies(self) -> list[GraphInconsistency]:
        return self.table.inconsistencies

    def to_dict(self) -> dict:
        data: dict = {
            "status": self.status,
            "model": self.model_name,
            "baseline": self.baseline_name,
            "relationships": self.relationships,
            "baseline_relationships": self.baseline_relationships,
            "columns": [
                {"name": b, "domain": self.table.b_elements[b]}
                for b in self.table.sorted_b_elements()
            ],
            "rows": [r.model_dump(mode="json") for r in self.rows],
            "inconsistencies": [i.model_dump(mode="json") for i in self.inconsistencies],
        }
        if self.annotations is not None:
            data["diff"] = self.annotations.to_dict()
        return data


@dataclass
class AppListResult:
    status: RunStatus
    model_name: str
    records: list[AppRecord] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "model": self.model_name,
            "counts": dict(self.counts),
            "applications": [r.model_dump(mode="json") for r in self.records],
        }


def run_matrix(
    current: ModelGraph,
    baseline: ModelGraph | None = None,
    settings: Settings | None = None,
) -> MatrixResult:
    """Build the matrix for ``current``; with a baseline, merge and classify.

    Returns status "empty" (and no rows) when the current model has no
    qualifying trigger edges.
    """
    s = settings or Settings()

    current_edges = current.trigger_edges(s.trigger_prefix)
    log.info("Model %r: %d %s* triggering relationships",
             current.name, len(current_edges), s.trigger_prefix)
    current_table = MatrixBuilder(current, s).build(current_edges)

    if baseline is None:
        if not current_edges:
            log.warning("No %s* triggering relationships found in model %r",
                        s.trigger_prefix, current.name)
            return MatrixResult(status="empty", model_name=current.name, table=current_table)
        return MatrixResult(
            status="ok",
            model_name=current.name,
            table=current_table,
            rows=matrix_rows(current_table, s),
            relationships=len(current_edges),
        )

    base_edges = baseline.trigger_edges(s.trigger_prefix)
    base_table = MatrixBuilder(baseline, s).build(base_edges)
    if not current_edges:
        log.warning("No %s* triggering relationships found in model %r",
                    s.trigger_prefix, current.name)
        return MatrixResult(
            status="empty",
            model_name=current.name,
            table=current_table,
            baseline_name=baseline.name,
            base=base_table,
            current=current_table,
            baseline_relationships=len(base_edges),
        )

    merged = merge_tables(base_table, current_table)
    return MatrixResult(
        status="ok",
        model_name=current.name,
        table=merged,
        rows=matrix_rows(merged, s),
        baseline_name=baseline.name,
        base=base_table,
        current=current_table,
        annotations=classify(base_table, current_table, merged),
        relationships=len(current_edges),
        baseline_relationships=len(base_edges),
    )


def run_applist(graph: ModelGraph, settings: Settings | None = None) -> AppListResult:
    """Resolve and sort the application catalog of one model."""
    s = settings or Settings()
    records = build_app_catalog(graph, s)
    if not records:
        log.warning("No application elements tagged %s found in model %r",
                    ", ".join(s.application_tags), graph.name)
        return AppListResult(status="empty", model_name=graph.name)

    records = sort_catalog(records, s)
    return AppListResult(
        status="ok",
        model_name=graph.name,
        records=records,
        counts=count_by_type(records, s),
    )
