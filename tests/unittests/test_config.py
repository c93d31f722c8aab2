"""ABOUTME: Tests for the config module.
ABOUTME: Verifies slugging.yml loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sluggable.config import SluggingFileConfig, load_slugging_config


class TestSluggingFileConfig:
    """Tests for SluggingFileConfig class."""

    def test_defaults(self) -> None:
        """Missing keys leave the length unset and no reserved words."""
        config = SluggingFileConfig()

        assert config.maximum_length is None
        assert config.normalized_reserved_words() == frozenset()

    def test_length_must_be_positive(self) -> None:
        """A non-positive maximum length is rejected."""
        with pytest.raises(ValidationError):
            SluggingFileConfig(maximum_length=0)


class TestLoadSluggingConfig:
    """Tests for load_slugging_config function."""

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_slugging_config(tmp_path / "nonexistent.yml")

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Valid YAML config is parsed correctly."""
        config_path = tmp_path / "slugging.yml"
        config_path.write_text("""
maximum_length: 30
reserved_words:
  - new
  - edit
""")

        config = load_slugging_config(config_path)

        assert config.maximum_length == 30
        assert config.normalized_reserved_words() == frozenset({"new", "edit"})

    def test_load_empty_file(self, tmp_path: Path) -> None:
        """An empty file gives the defaults."""
        config_path = tmp_path / "slugging.yml"
        config_path.write_text("")

        assert load_slugging_config(config_path) == SluggingFileConfig()

    def test_load_invalid_config(self, tmp_path: Path) -> None:
        """Invalid values raise a validation error."""
        config_path = tmp_path / "slugging.yml"
        config_path.write_text("maximum_length: lots\n")

        with pytest.raises(ValueError):
            load_slugging_config(config_path)
