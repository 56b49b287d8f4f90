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

"""Helpers shared by the rule stages."""

from typing import Any, Callable, Iterable

from ..models.entity import Entity
from ..models.findings import Finding
from ..taxonomy.taxonomy import Taxonomy


# A stage inspects one entity and yields findings in a fixed order.
RuleStage = Callable[[Entity, Taxonomy], Iterable[Finding]]


def json_type_name(value: Any) -> str:
    """Name a value's type the way a JSON document author would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_blank_text(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()
