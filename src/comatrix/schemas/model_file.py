"""Pydantic model for the YAML/JSON model file read by the loader."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


def _as_multi(value: object) -> dict[str, list[str]]:
    """Normalise a property mapping so every key holds a list of strings."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("properties must be a mapping")
    result: dict[str, list[str]] = {}
    for key, raw in value.items():
        if raw is None:
            result[str(key)] = []
        elif isinstance(raw, (list, tuple)):
            result[str(key)] = [str(v) for v in raw]
        else:
            result[str(key)] = [str(raw)]
    return result


class ElementSpec(BaseModel):
    id: str
    name: str
    type: str = "element"
    classification: str | None = None
    properties: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("properties", mode="before")
    @classmethod
    def normalise_properties(cls, value: object) -> dict[str, list[str]]:
        return _as_multi(value)


class RelationshipSpec(BaseModel):
    id: str = ""
    type: Literal["aggregation", "composition", "triggering"]
    source: str
    target: str
    name: str = ""
    properties: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("properties", mode="before")
    @classmethod
    def normalise_properties(cls, value: object) -> dict[str, list[str]]:
        return _as_multi(value)


class ModelFile(BaseModel):
    name: str = ""
    properties: dict[str, str] = Field(default_factory=dict)
    elements: list[ElementSpec] = Field(default_factory=list)
    relationships: list[RelationshipSpec] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def stringify_properties(cls, value: object) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("properties must be a mapping")
        return {str(k): "" if v is None else str(v) for k, v in value.items()}
