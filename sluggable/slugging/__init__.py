"""ABOUTME: Slug assignment and resolution engine.
ABOUTME: Slugifier, source resolution, disambiguation, uniqueness, assignment and lookup."""

from sluggable.slugging.assigner import assign_slug, compute_slug, should_compute
from sluggable.slugging.disambiguate import disambiguate, random_identifier
from sluggable.slugging.normalize import slugify
from sluggable.slugging.options import (
    SluggingOptions,
    get_options,
    reset_options,
    set_maximum_length,
    set_reserved_words,
    set_slugifier,
)
from sluggable.slugging.resolver import resolve, resolve_strict
from sluggable.slugging.slug_config import SlugConfig, SlugConfigRegistry, registry, sluggable
from sluggable.slugging.sources import Candidates, Joined, NoSource, Single, parse_source, resolve_sources
from sluggable.slugging.uniqueness import UniquenessChecker

__all__ = [
    "Candidates",
    "Joined",
    "NoSource",
    "Single",
    "SlugConfig",
    "SlugConfigRegistry",
    "SluggingOptions",
    "UniquenessChecker",
    "assign_slug",
    "compute_slug",
    "disambiguate",
    "get_options",
    "parse_source",
    "random_identifier",
    "registry",
    "reset_options",
    "resolve",
    "resolve_sources",
    "resolve_strict",
    "set_maximum_length",
    "set_reserved_words",
    "set_slugifier",
    "should_compute",
    "slugify",
    "sluggable",
]
