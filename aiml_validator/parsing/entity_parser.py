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

"""Turn caller input (mappings, JSON text, entity files) into :class:`Entity` values."""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..exceptions import (
    EmptyInputError,
    EntityParseError,
    InvalidJsonError,
    NonObjectInputError,
    NullInputError,
)
from ..models.entity import Entity

logger = logging.getLogger(__name__)


def parse_entity(data: Any) -> Entity:
    """Parse a mapping or a serialized JSON document into an entity.

    Args:
        data: A mapping, JSON text as ``str`` / ``bytes``, or an :class:`Entity`,
            which is returned as is

    Returns:
        The parsed :class:`Entity`

    Raises:
        NullInputError: ``data`` is None
        EmptyInputError: ``data`` is an empty/blank string or an empty mapping
        InvalidJsonError: the text is not valid JSON
        NonObjectInputError: the value is not a mapping
    """
    if data is None:
        raise NullInputError("Input data is null")

    if isinstance(data, Entity):
        return data

    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidJsonError(f"Invalid JSON syntax: {e}") from e

    if isinstance(data, str):
        if not data.strip():
            raise EmptyInputError("Input data is empty")
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidJsonError(f"Invalid JSON syntax: {e.msg} (line {e.lineno}, column {e.colno})") from e
        if data is None:
            raise NullInputError("Input data is null")

    if not isinstance(data, Mapping):
        raise NonObjectInputError(
            f"Input must be a JSON object, got {type(data).__name__}"
        )

    if not data:
        raise EmptyInputError("Input data is empty")

    return Entity.from_mapping(data)


def load_entity_file(file_path: Union[str, Path]) -> Entity:
    """Load an entity from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        FileNotFoundError: If the file does not exist
        EntityParseError: If the content cannot be parsed into an entity
    """
    path = Path(file_path)
    logger.debug(f"Loading entity from: {path}")

    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        if not content.strip():
            raise EmptyInputError(f"Empty entity file: {path}")
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise EntityParseError(f"Invalid YAML syntax in {path}: {e}") from e
        return parse_entity(data)

    return parse_entity(content)
