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

"""Schema source interface and the shared document-backed implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..exceptions import SchemaNotFoundError
from .cache import SchemaCache
from .documents import check_document

logger = logging.getLogger(__name__)


class SchemaSource(ABC):
    """Resolves module and entity type names to their declarative schema documents.

    Every fetch either returns a mapping or raises a
    :class:`~aiml_validator.exceptions.SchemaSourceError` subclass.
    """

    @abstractmethod
    def fetch_module_schema(self, module_type: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def fetch_entity_schema(self, entity_type: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def fetch_by_reference(self, ref: str) -> Dict[str, Any]:
        pass

    def fetch_registry(self) -> Dict[str, Any]:
        raise SchemaNotFoundError(f"{type(self).__name__} does not provide a schema registry")


class DocumentSchemaSource(SchemaSource):
    """Schema source reading documents from a location-addressed store.

    Subclasses map names to locations and read one raw document per location;
    this class checks document shapes and caches parsed documents by location.
    """

    def __init__(self) -> None:
        self.cache = SchemaCache()

    @abstractmethod
    def module_location(self, module_type: str) -> str:
        pass

    @abstractmethod
    def entity_location(self, entity_type: str) -> str:
        pass

    @abstractmethod
    def registry_location(self) -> str:
        pass

    @abstractmethod
    def reference_location(self, ref: str) -> str:
        pass

    @abstractmethod
    def read_document(self, location: str) -> Any:
        """Read and parse the document at ``location``."""
        pass

    def fetch_module_schema(self, module_type: str) -> Dict[str, Any]:
        return self._fetch("module", self.module_location(module_type))

    def fetch_entity_schema(self, entity_type: str) -> Dict[str, Any]:
        return self._fetch("entity", self.entity_location(entity_type))

    def fetch_by_reference(self, ref: str) -> Dict[str, Any]:
        return self._fetch("reference", self.reference_location(ref))

    def fetch_registry(self) -> Dict[str, Any]:
        return self._fetch("registry", self.registry_location())

    def _fetch(self, kind: str, location: str) -> Dict[str, Any]:
        cached = self.cache.get(location)
        if cached is not None:
            return cached

        logger.debug(f"Loading {kind} schema from {location}")
        document = check_document(kind, self.read_document(location), origin=location)
        self.cache.set(location, document)
        return document
