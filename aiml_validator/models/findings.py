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

"""Findings reported by the rule engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


class Severity:
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def get_all(cls) -> List[str]:
        return [cls.ERROR, cls.WARNING, cls.INFO]


class Category:
    STRUCTURE = "structure"
    SCHEMA = "schema"
    SEMANTIC = "semantic"
    PERFORMANCE = "performance"
    BEST_PRACTICE = "best_practice"

    @classmethod
    def get_all(cls) -> List[str]:
        return [cls.STRUCTURE, cls.SCHEMA, cls.SEMANTIC, cls.PERFORMANCE, cls.BEST_PRACTICE]


@dataclass(frozen=True)
class Finding:
    field: str
    message: str
    severity: str
    category: str
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "field": self.field,
            "message": self.message,
            "severity": self.severity,
            "category": self.category,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


def error(field: str, message: str, category: str, suggestion: Optional[str] = None) -> Finding:
    return Finding(field, message, Severity.ERROR, category, suggestion)


def warning(field: str, message: str, category: str, suggestion: Optional[str] = None) -> Finding:
    return Finding(field, message, Severity.WARNING, category, suggestion)


def suggestion(field: str, message: str, category: str, hint: Optional[str] = None) -> Finding:
    return Finding(field, message, Severity.INFO, category, hint)


def finding(severity: str, field: str, message: str, category: str, hint: Optional[str] = None) -> Finding:
    """Build a finding whose severity comes from a taxonomy rule table."""
    if severity not in Severity.get_all():
        raise ValueError(f"Unknown severity '{severity}'")
    return Finding(field, message, severity, category, hint)


@dataclass(frozen=True)
class FindingCounts:
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0

    @classmethod
    def of(cls, findings: Iterable[Finding]) -> "FindingCounts":
        counts = {Severity.ERROR: 0, Severity.WARNING: 0, Severity.INFO: 0}
        for item in findings:
            counts[item.severity] += 1
        return cls(
            errors=counts[Severity.ERROR],
            warnings=counts[Severity.WARNING],
            suggestions=counts[Severity.INFO],
        )
