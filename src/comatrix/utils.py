"""Shared utilities for comatrix."""

from __future__ import annotations

from pathlib import Path

from comatrix.errors import CollaboratorFailure


def write_text(path: Path, text: str) -> None:
    """Write a text report; I/O errors become CollaboratorFailure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise CollaboratorFailure("report writer", f"cannot write {path}: {exc}") from exc
