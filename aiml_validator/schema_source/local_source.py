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

"""Schema source reading a mirrored schema tree from disk."""

import json
from pathlib import Path
from typing import Any, Union
from urllib.parse import urlparse

from ..exceptions import MalformedSchemaError, SchemaNotFoundError
from .base import DocumentSchemaSource


class LocalSchemaSource(DocumentSchemaSource):
    """Reads schema documents from a directory with the published site layout.

    Absolute URL references are mapped onto the directory by their path.
    """

    def __init__(self, root: Union[str, Path]):
        super().__init__()
        self.root = Path(root).resolve()

    def module_location(self, module_type: str) -> str:
        return str(self.root / "templates" / "module" / f"{module_type}.json")

    def entity_location(self, entity_type: str) -> str:
        return str(self.root / "entity" / f"{entity_type}.json")

    def registry_location(self) -> str:
        return str(self.root / "registry.json")

    def reference_location(self, ref: str) -> str:
        if ref.startswith(("http://", "https://")):
            ref = urlparse(ref).path
        return str(self.root / ref.lstrip("/"))

    def read_document(self, location: str) -> Any:
        path = Path(location).resolve()
        if self.root not in path.parents or not path.is_file():
            raise SchemaNotFoundError(f"Schema not found: {location}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise SchemaNotFoundError(f"Cannot read schema {path}: {e}") from e
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError both derive from ValueError.
            raise MalformedSchemaError(f"Invalid JSON in schema {path}: {e}") from e
