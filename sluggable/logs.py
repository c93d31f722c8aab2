"""Contains logging related functionality for the slug engine and its CLI."""

import logging
import logging.config
import typing
from pathlib import Path

import yaml

from sluggable.settings import settings

LOGGER_NAME = "sluggable"


def init_logging(filepath: Path | None = None, verbose: bool = False) -> dict[str, typing.Any]:
    """Read the logging config yaml file and apply it globally.

    Falls back to a plain stderr configuration when the file is missing, so the
    CLI keeps working from an installed wheel without the `configs/` folder.

    :param filepath: Path to the logging configuration yaml file. Defaults to `settings.logging_config_path`.
    :param verbose: Lower the `sluggable` logger to DEBUG after applying the config.
    :returns: The logging configuration as dict (empty when the fallback was used).
    """
    if filepath is None:
        filepath = settings.logging_config_path

    config: dict[str, typing.Any] = {}
    if filepath.exists():
        config = yaml.safe_load(filepath.read_text(encoding="utf-8"))
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if verbose:
        logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG)
    return config
