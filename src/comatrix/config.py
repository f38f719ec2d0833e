"""Run settings: tag names, trigger prefix, placeholders.

Defaults cover the usual model conventions; a YAML file can override any
field (``comatrix --config settings.yaml ...``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from comatrix.errors import CollaboratorFailure

log = logging.getLogger(__name__)


class Settings(BaseModel):
    # Trigger edges
    trigger_prefix: str = "NST_"
    interface_key: str = "Interface"
    missing_interface: str = "N/A"

    # Classification tags
    domain_tag: str = "Domain"
    business_area_tag: str = "BusinessArea"
    application_tags: list[str] = Field(
        default_factory=lambda: ["BusinessApplication", "Register", "CrossCuttingApplication"]
    )

    # Rendering of resolution results
    separator: str = ", "
    cycle_sentinel: str = "cycle"
    no_domain: str = "(no domain)"
    no_business_area: str = "(no business area)"

    # Model-level property naming the baseline model file
    baseline_property: str = "baseline"

    def sentinels(self) -> set[str]:
        """Values that sort after every real classification name."""
        return {self.cycle_sentinel, self.no_domain, self.no_business_area}


def load_settings(path: Path | None) -> Settings:
    """Load settings from a YAML file, or return defaults when path is None."""
    if path is None:
        return Settings()
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        settings = Settings.model_validate(raw)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
        raise CollaboratorFailure("settings", f"cannot load {path}: {exc}") from exc
    log.debug("Settings loaded from %s", path)
    return settings
