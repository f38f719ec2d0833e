"""Application catalog: every application node with its domain and
business-area classification."""

from __future__ import annotations

import logging
from collections import Counter

from comatrix.analyzer.ancestors import AncestorResolver
from comatrix.analyzer.models import AppRecord
from comatrix.config import Settings
from comatrix.model.graph import ModelGraph

log = logging.getLogger(__name__)


def build_app_catalog(graph: ModelGraph, settings: Settings | None = None) -> list[AppRecord]:
    """Resolve domain and business area for each application node (unsorted)."""
    s = settings or Settings()
    allowed = set(s.application_tags)
    resolver = AncestorResolver(graph)

    records: list[AppRecord] = []
    for node in graph.nodes_matching(lambda n: n.classification in allowed):
        domain = resolver.resolve(node.id, s.domain_tag)
        area = resolver.resolve(node.id, s.business_area_tag)
        records.append(AppRecord(
            name=node.name,
            type_tag=node.classification or "",
            domain=domain.render(s.separator, s.no_domain, s.cycle_sentinel),
            business_area=area.render(s.separator, s.no_business_area, s.cycle_sentinel),
        ))

    log.info("Found %d applications in model %r", len(records), graph.name)
    return records


def sort_catalog(records: list[AppRecord], settings: Settings | None = None) -> list[AppRecord]:
    """Order by business area, domain, type, name.

    Placeholder and cycle values sort after every real value of the same
    field, and lexically among themselves.
    """
    sentinels = (settings or Settings()).sentinels()

    def field_key(value: str) -> tuple[bool, str]:
        return (value in sentinels, value)

    return sorted(
        records,
        key=lambda r: (
            field_key(r.business_area),
            field_key(r.domain),
            r.type_tag,
            r.name,
        ),
    )


def count_by_type(records: list[AppRecord], settings: Settings | None = None) -> dict[str, int]:
    """Per application kind counts; configured kinds always appear."""
    s = settings or Settings()
    counts = Counter(r.type_tag for r in records)
    result = {tag: counts.get(tag, 0) for tag in s.application_tags}
    for tag, n in sorted(counts.items()):
        result.setdefault(tag, n)
    return result
