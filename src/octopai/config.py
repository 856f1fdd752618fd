"""Configuration loader for Octopai."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

from octopai.atomic import atomic_write_json
from octopai.debug_log import log
from octopai.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path


class OctopaiConfig(BaseModel):
    """Root configuration model: the repository last chosen in the picker."""

    repo: str = Field(default="", description="Repository identifier, e.g. 'acme/widgets'")

    @classmethod
    def load(cls, config_path: Path | None = None) -> OctopaiConfig:
        """Load configuration from JSON, falling back to defaults."""
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            return cls()

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            return cls.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            log.warning("Ignoring unreadable config", path=str(config_path), error=str(exc))
            return cls()

    def save(self, path: Path | None = None) -> None:
        """Serialize current config to a JSON file (created if missing)."""
        if path is None:
            path = get_config_path()
        atomic_write_json(path, self.model_dump())
