"""Taxonomy definitions: categories, types, subcategories and module tables.

Each supported version lives in a YAML data file and is turned into an
immutable :class:`Taxonomy` value.
"""

from .taxonomy import (
    CompletenessTier,
    FieldRule,
    SiteCapabilityCheck,
    SubcategoryRule,
    Taxonomy,
)
from .loader import (
    DEFAULT_TAXONOMY_VERSION,
    available_versions,
    load_taxonomy,
    resolve_taxonomy_version,
)

__all__ = [
    "CompletenessTier",
    "FieldRule",
    "SiteCapabilityCheck",
    "SubcategoryRule",
    "Taxonomy",
    "DEFAULT_TAXONOMY_VERSION",
    "available_versions",
    "load_taxonomy",
    "resolve_taxonomy_version",
]
