from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

CONFIG_NAMES = ("name-registry.yaml", "name-registry.yml")


class RegistrySettings(BaseModel):
    separator: str = "_"
    empty_marker: str = ""

    @field_validator("separator", "empty_marker", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Optional[str]) -> str:
        # YAML `separator:` with no value loads as None
        return "" if value is None else value

    @property
    def is_degenerate(self) -> bool:
        """Anonymous names are bare numbers when both strings are empty."""
        return not self.separator and not self.empty_marker


class Settings(BaseModel):
    registry: RegistrySettings = RegistrySettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        settings = cls.model_validate(raw or {})
        logger.debug("Loaded settings from %s", path)
        if settings.registry.is_degenerate:
            logger.warning(
                "%s: separator and empty_marker are both empty; anonymous names will be bare numbers",
                path,
            )
        return settings


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> tuple[Settings, Optional[Path]]:
    """Load settings from the located config file, or defaults when there is none."""
    path = find_config(explicit_path)
    if path is None:
        logger.debug("No config file found; using defaults")
        return Settings(), None
    return Settings.load(path), path
