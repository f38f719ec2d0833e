"""Pydantic models for resolution results, connectivity tables and catalogs."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Literal

from pydantic import BaseModel, Field


# ── Shared ──────────────────────────────────────────────────────────────────

class GraphInconsistency(BaseModel):
    kind: Literal["domain_conflict", "containment_cycle"]
    element: str
    detail: str = ""


def sort_by_domain(domains: dict[str, str]) -> list[str]:
    """Element names ordered by domain (empty last), then by name."""
    return sorted(domains, key=lambda name: (domains[name] == "", domains[name], name))


# ── Ancestor resolution ────────────────────────────────────────────────────

class ResolvedClassification(BaseModel):
    names: list[str] = Field(default_factory=list)  # sorted, unique
    cycle: bool = False

    @property
    def found(self) -> bool:
        return bool(self.names)

    def render(self, separator: str = ", ", none_found: str = "", cycle: str = "cycle") -> str:
        """Cycle sentinel wins over names; no names gives the placeholder."""
        if self.cycle:
            return cycle
        if not self.found:
            return none_found
        return separator.join(self.names)


# ── Connectivity table ─────────────────────────────────────────────────────

class AElement(BaseModel):
    domain: str = ""
    interfaces: dict[str, set[str]] = Field(default_factory=dict)


class ConnectivityTable(BaseModel):
    a_elements: dict[str, AElement] = Field(default_factory=dict)
    b_elements: dict[str, str] = Field(default_factory=dict)  # name → domain
    inconsistencies: list[GraphInconsistency] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.a_elements

    def targets(self, element: str, interface: str) -> set[str]:
        """B-elements connected to (element, interface); empty if absent."""
        a = self.a_elements.get(element)
        if a is None:
            return set()
        return a.interfaces.get(interface, set())

    def keys(self) -> Iterator[tuple[str, str]]:
        """All (A-element, interface) keys."""
        for name, a in self.a_elements.items():
            for interface in a.interfaces:
                yield name, interface

    def has_key(self, element: str, interface: str) -> bool:
        a = self.a_elements.get(element)
        return a is not None and interface in a.interfaces

    def a_domains(self) -> dict[str, str]:
        return {name: a.domain for name, a in self.a_elements.items()}

    def sorted_a_elements(self) -> list[str]:
        return sort_by_domain(self.a_domains())

    def sorted_b_elements(self) -> list[str]:
        return sort_by_domain(self.b_elements)

    def sorted_interfaces(self, element: str) -> list[str]:
        return sorted(self.a_elements[element].interfaces)

    def connection_count(self) -> int:
        return sum(len(targets) for a in self.a_elements.values() for targets in a.interfaces.values())


class MatrixRow(BaseModel):
    domain: str
    element: str
    interface: str
    intern_extern: Literal["intern", "extern", ""] = ""
    targets: list[str] = Field(default_factory=list)  # in B-column order


# ── Diff ────────────────────────────────────────────────────────────────────

class DiffStatus(str, Enum):
    NEW = "new"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


# ── Application catalog ────────────────────────────────────────────────────

class AppRecord(BaseModel):
    name: str
    type_tag: str
    domain: str
    business_area: str
