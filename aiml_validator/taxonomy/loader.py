# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Loader for the taxonomy data files bundled with the package."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

import yaml

from ..exceptions import FormatVersionError, TaxonomyError
from ..utils.format_version import select_version
from .taxonomy import Taxonomy

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY_VERSION = "2.0.1"


def get_data_dir() -> Path:
    return Path(__file__).parent / "data"


def available_versions() -> List[str]:
    """List the taxonomy versions that have a data file."""
    return sorted(path.stem for path in get_data_dir().glob("*.yaml"))


def resolve_taxonomy_version(version: str) -> str:
    """Resolve a requested version to a bundled one.

    The exact version is used when it exists; otherwise the largest patch
    release with the same major and minor version.

    Raises:
        TaxonomyError: If the version is malformed or nothing matches.
    """
    try:
        return select_version(version, available_versions())
    except FormatVersionError as e:
        raise TaxonomyError(
            f"Cannot select taxonomy for version '{version}': {e}. "
            f"Available: {available_versions()}"
        ) from e


@lru_cache(maxsize=None)
def load_taxonomy(version: str = DEFAULT_TAXONOMY_VERSION) -> Taxonomy:
    """Load and build the taxonomy for the given version.

    Taxonomies are immutable, so each version is built once per process.

    Raises:
        TaxonomyError: If no data file serves the version or it cannot be parsed.
    """
    resolved = resolve_taxonomy_version(version)
    if resolved != version:
        logger.debug(f"Taxonomy version {version} resolved to {resolved}")

    data_path = get_data_dir() / f"{resolved}.yaml"
    try:
        with open(data_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TaxonomyError(f"Invalid YAML in taxonomy file {data_path}: {e}") from e

    return Taxonomy.from_mapping(data)
