"""Exceptions raised at the collaborator boundary.

Graph inconsistencies (cycles, conflicting domains) are never raised; they
are encoded in result values. Only failures of the model loader or the
report writers propagate as exceptions.
"""

from __future__ import annotations


class CollaboratorFailure(Exception):
    """A collaborator (model loader, report writer) failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(f"{collaborator}: {message}")
        self.collaborator = collaborator


class UnknownNodeError(KeyError):
    """Lookup of a node id that is not part of the graph snapshot."""

    def __init__(self, node_id: str) -> None:
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"unknown node id: {self.node_id!r}"
