"""ABOUTME: Configuration loaders for process-wide slug options.
ABOUTME: Handles loading and parsing of slugging.yml configuration."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from sluggable.settings import settings


class SluggingFileConfig(BaseModel):
    """Process-wide slug options as declared in slugging.yml."""

    maximum_length: int | None = Field(default=None, gt=0)
    reserved_words: list[str] = Field(default_factory=list)

    def normalized_reserved_words(self) -> frozenset[str]:
        """Return reserved words with surrounding whitespace removed and blanks dropped."""
        return frozenset(word.strip() for word in self.reserved_words if word.strip())


def load_slugging_config(config_path: Path | None = None) -> SluggingFileConfig:
    """Load slug options from YAML file.

    Args:
        config_path: Path to the config file. Defaults to settings.slugging_config_path.

    Returns:
        Parsed SluggingFileConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is invalid.
    """
    if config_path is None:
        config_path = settings.slugging_config_path

    if not config_path.exists():
        raise FileNotFoundError(f"Slugging config not found: {config_path}")

    with config_path.open() as f:
        raw_config = yaml.safe_load(f) or {}

    return SluggingFileConfig.model_validate(raw_config)
