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

"""Validation result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .findings import Finding, FindingCounts, Severity


@dataclass(frozen=True)
class EntityInfo:
    entity_type: str
    entity_category: Optional[str] = None
    subcategory: Optional[str] = None
    modules: List[str] = field(default_factory=list)
    has_entity_capabilities: bool = False
    has_site_capabilities: bool = False

    @property
    def base_schema(self) -> Optional[str]:
        return self.entity_category

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entityType": self.entity_type,
            "entityCategory": self.entity_category,
            "subcategory": self.subcategory,
            "baseSchema": self.base_schema,
            "modules": list(self.modules),
            "hasEntityCapabilities": self.has_entity_capabilities,
            "hasSiteCapabilities": self.has_site_capabilities,
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    schema_size: int = 0
    complexity: str = "low"
    module_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaSize": self.schema_size,
            "complexity": self.complexity,
            "moduleCount": self.module_count,
        }


@dataclass
class ValidationResult:
    """Graded outcome of validating one entity.

    ``is_valid`` is true iff there are no error-severity findings; warnings
    and suggestions are advisory.
    """

    is_valid: bool
    errors: List[Finding] = field(default_factory=list)
    warnings: List[Finding] = field(default_factory=list)
    suggestions: List[Finding] = field(default_factory=list)
    entity_info: Optional[EntityInfo] = None
    score: int = 0
    completeness: int = 0
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    @classmethod
    def from_findings(
        cls,
        findings: List[Finding],
        *,
        entity_info: Optional[EntityInfo] = None,
        score: int = 0,
        completeness: int = 0,
        performance: Optional[PerformanceMetrics] = None,
    ) -> "ValidationResult":
        errors = [f for f in findings if f.severity == Severity.ERROR]
        return cls(
            is_valid=not errors,
            errors=errors,
            warnings=[f for f in findings if f.severity == Severity.WARNING],
            suggestions=[f for f in findings if f.severity == Severity.INFO],
            entity_info=entity_info,
            score=score,
            completeness=completeness,
            performance=performance or PerformanceMetrics(),
        )

    @property
    def findings(self) -> List[Finding]:
        return [*self.errors, *self.warnings, *self.suggestions]

    @property
    def counts(self) -> FindingCounts:
        return FindingCounts(len(self.errors), len(self.warnings), len(self.suggestions))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "suggestions": [f.to_dict() for f in self.suggestions],
            "entityInfo": self.entity_info.to_dict() if self.entity_info else None,
            "score": self.score,
            "completeness": self.completeness,
            "performance": self.performance.to_dict(),
        }
