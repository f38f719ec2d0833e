"""Structural union of a baseline and a current connectivity table."""

from __future__ import annotations

import logging

from comatrix.analyzer.models import AElement, ConnectivityTable

log = logging.getLogger(__name__)


def _pick_domain(base: str, current: str) -> str:
    # Current wins when the baseline is empty or differs at all.
    if not base or base != current:
        return current
    return base


def merge_tables(base: ConnectivityTable, current: ConnectivityTable) -> ConnectivityTable:
    """Union both tables without mutating either input.

    Target sets of a shared (A-element, interface) key are unioned. Domains
    follow the current table whenever the baseline value is empty or
    different, independently for A- and B-elements.
    """
    merged = ConnectivityTable()

    for name, a in base.a_elements.items():
        merged.a_elements[name] = AElement(
            domain=a.domain,
            interfaces={i: set(t) for i, t in a.interfaces.items()},
        )

    for name, a in current.a_elements.items():
        existing = merged.a_elements.get(name)
        if existing is None:
            merged.a_elements[name] = AElement(
                domain=a.domain,
                interfaces={i: set(t) for i, t in a.interfaces.items()},
            )
            continue
        existing.domain = _pick_domain(existing.domain, a.domain)
        for interface, targets in a.interfaces.items():
            existing.interfaces.setdefault(interface, set()).update(targets)

    merged.b_elements = dict(base.b_elements)
    for name, domain in current.b_elements.items():
        merged.b_elements[name] = _pick_domain(merged.b_elements.get(name, ""), domain)

    for finding in [*base.inconsistencies, *current.inconsistencies]:
        if finding not in merged.inconsistencies:
            merged.inconsistencies.append(finding.model_copy())

    log.info(
        "Merged matrix: %d A-elements, %d B-elements",
        len(merged.a_elements), len(merged.b_elements),
    )
    return merged
