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

"""Retrieval of module and entity schema documents."""

from .base import DocumentSchemaSource, SchemaSource
from .cache import SchemaCache
from .documents import check_document
from .http_source import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SCHEMA_BASE_URL, HttpSchemaSource
from .local_source import LocalSchemaSource

__all__ = [
    "DocumentSchemaSource",
    "SchemaSource",
    "SchemaCache",
    "check_document",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_SCHEMA_BASE_URL",
    "HttpSchemaSource",
    "LocalSchemaSource",
]
