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

"""Expected shapes of retrieved schema documents.

Only the keys the validator reads are constrained; everything else in a
document is passed through untouched.
"""

from typing import Any, Dict, Optional

import jsonschema
from jsonschema.exceptions import best_match

from ..exceptions import MalformedSchemaError


_STRING_LIST = {"type": "array", "items": {"type": "string"}}

MODULE_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "version": {"type": "string"},
        "properties": {"type": "object"},
        "dependencies": _STRING_LIST,
        "conflicts": _STRING_LIST,
        "required": _STRING_LIST,
    },
}

ENTITY_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "properties": {"type": "object"},
        "required": _STRING_LIST,
        "recommendedModules": _STRING_LIST,
    },
}

REGISTRY_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "entities": {"type": "object"},
        "modules": {"type": "object"},
    },
}

REFERENCE_DOCUMENT_SCHEMA: Dict[str, Any] = {"type": "object"}

DOCUMENT_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "module": MODULE_DOCUMENT_SCHEMA,
    "entity": ENTITY_DOCUMENT_SCHEMA,
    "registry": REGISTRY_DOCUMENT_SCHEMA,
    "reference": REFERENCE_DOCUMENT_SCHEMA,
}


def check_document(kind: str, document: Any, origin: Optional[str] = None) -> Dict[str, Any]:
    """Check a retrieved document against the shape for ``kind``.

    Args:
        kind: One of ``module``, ``entity``, ``registry``, ``reference``
        document: Parsed document
        origin: Where the document came from, for the error message

    Returns:
        The document, unchanged

    Raises:
        MalformedSchemaError: If the document does not have the expected shape
    """
    schema = DOCUMENT_SCHEMAS[kind]
    validator = jsonschema.Draft7Validator(schema)
    error = best_match(validator.iter_errors(document))
    if error is not None:
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        where = f" from {origin}" if origin else ""
        raise MalformedSchemaError(f"Invalid {kind} schema{where} at '{path}': {error.message}")
    return document
