"""ABOUTME: Configuration logic and path settings for the project.
ABOUTME: Provides config file paths and the default slug length and reserved words."""

from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sluggable import __version__


def _get_project_root() -> Path:
    """Find project root by looking for pyproject.toml."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Contains settings for this project."""

    model_config = SettingsConfigDict(env_prefix="SLUGGABLE_")

    VERSION: str = __version__
    """Project version."""

    PROJECT_ROOT: Path = _get_project_root()
    """Root directory of the project."""

    SLUG_MAXIMUM_LENGTH: int = 50
    """Default maximum length of a slug before any disambiguation suffix."""

    SLUG_RESERVED_WORDS: list[str] = []
    """Default slugs that are never assigned verbatim."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def configs_dir(self) -> Path:
        """Directory containing configuration files."""
        return self.PROJECT_ROOT / "configs"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def logging_config_path(self) -> Path:
        """Path to the logging.yml configuration file."""
        return self.configs_dir / "logging.yml"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slugging_config_path(self) -> Path:
        """Path to the slugging.yml configuration file."""
        return self.configs_dir / "slugging.yml"


settings = Settings()
