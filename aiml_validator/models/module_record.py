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

"""Resolved capability-module records and module check reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional


DEFAULT_MODULE_VERSION = "1.0.0"
UNKNOWN_MODULE_TYPE = "unknown"


@dataclass(frozen=True)
class ModuleRecord:
    module_type: str
    version: str = DEFAULT_MODULE_VERSION
    required: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)
    # Set when the reference could not be resolved.
    error: Optional[str] = None

    @property
    def ref(self) -> Optional[str]:
        return self.properties.get("$ref")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "moduleType": self.module_type,
            "version": self.version,
            "required": self.required,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class DependencyResolution:
    """Transitive dependency closure plus the lookups that failed on the way."""

    modules: FrozenSet[str]
    warnings: List[str] = field(default_factory=list)


@dataclass
class CompatibilityReport:
    compatible: bool = True
    conflicts: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compatible": self.compatible,
            "conflicts": list(self.conflicts),
            "warnings": list(self.warnings),
        }
