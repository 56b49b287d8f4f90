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

"""Schema source backed by the published schema site."""

from typing import Any, Optional

import requests

from ..exceptions import MalformedSchemaError, SchemaNetworkError, SchemaNotFoundError
from .base import DocumentSchemaSource

DEFAULT_SCHEMA_BASE_URL = "https://schemas.meta-aiml.org"
DEFAULT_REQUEST_TIMEOUT = 10.0


class HttpSchemaSource(DocumentSchemaSource):
    """Fetches schema documents over HTTP.

    Layout under the base URL:
      * ``entity/<type>.json``
      * ``templates/module/<name>.json``
      * ``registry.json``
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SCHEMA_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__()
        self._base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        # Cached documents belong to the previous site.
        self._base_url = value.rstrip("/")
        self.cache.clear()

    def module_location(self, module_type: str) -> str:
        return f"{self._base_url}/templates/module/{module_type}.json"

    def entity_location(self, entity_type: str) -> str:
        return f"{self._base_url}/entity/{entity_type}.json"

    def registry_location(self) -> str:
        return f"{self._base_url}/registry.json"

    def reference_location(self, ref: str) -> str:
        if ref.startswith("/"):
            return f"{self._base_url}{ref}"
        return ref

    def read_document(self, location: str) -> Any:
        try:
            response = self.session.get(
                location, timeout=self.timeout, headers={"Accept": "application/json"}
            )
        except requests.RequestException as e:
            raise SchemaNetworkError(f"Network error while loading schema from {location}: {e}") from e

        if response.status_code == 404:
            raise SchemaNotFoundError(f"Schema not found: {location}")
        if not response.ok:
            raise SchemaNetworkError(
                f"Failed to load schema from {location}: HTTP {response.status_code} {response.reason}"
            )

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            raise MalformedSchemaError(
                f"Schema response from {location} is not JSON (content-type: {content_type or 'missing'})"
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedSchemaError(f"Invalid JSON in schema from {location}: {e}") from e
