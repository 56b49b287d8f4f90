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

"""Scoring engine: quality score, field completeness and size metrics.

Score zones (evaluated in this order):
  * **excellent** - no errors and no warnings: 90 plus a tenth of the
    completeness, capped at 100.
  * **poor** - more than three errors: deductions floored at 25.
  * **good** - anything else: deductions floored at 50.

Deductions are 30 per error, 10 per warning and 5 per suggestion.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Mapping

from ..models.entity import Entity
from ..models.findings import FindingCounts
from ..models.result import PerformanceMetrics
from ..taxonomy.taxonomy import Taxonomy


ERROR_WEIGHT = 30
WARNING_WEIGHT = 10
SUGGESTION_WEIGHT = 5

EXCELLENT_BASE = 90
POOR_FLOOR = 25
GOOD_FLOOR = 50
POOR_ERROR_THRESHOLD = 3


@dataclass(frozen=True)
class ScoreCard:
    score: int
    completeness: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_percent(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


class ScoringEngine:
    """Turns an entity snapshot and its finding counts into a bounded grade."""

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy

    def score(self, entity: Entity, counts: FindingCounts) -> ScoreCard:
        completeness = self.completeness(entity)
        return ScoreCard(score=self.quality_score(counts, completeness), completeness=completeness)

    def quality_score(self, counts: FindingCounts, completeness: int) -> int:
        deductions = (
            counts.errors * ERROR_WEIGHT
            + counts.warnings * WARNING_WEIGHT
            + counts.suggestions * SUGGESTION_WEIGHT
        )
        base = max(0, 100 - deductions)

        if counts.errors == 0 and counts.warnings == 0:
            score = min(100, max(EXCELLENT_BASE, EXCELLENT_BASE + completeness * 0.1))
        elif counts.errors > POOR_ERROR_THRESHOLD:
            score = max(POOR_FLOOR, base)
        else:
            score = max(GOOD_FLOOR, base)

        return _clamp_percent(score)

    def completeness(self, entity: Entity) -> int:
        """Weighted share of populated fields, as an integer percentage."""
        total = 0.0
        for tier in self.taxonomy.completeness_tiers:
            present = sum(1 for field_name in tier.fields if self.is_present(entity, field_name))
            total += (present / len(tier.fields)) * tier.weight
        return _clamp_percent(total)

    def is_present(self, entity: Entity, field_name: str) -> bool:
        """Whether a field counts towards completeness.

        Multilingual fields need an English value (descriptions also need the
        minimum length), URLs must be http(s), capability blocks and modules
        must not be empty.
        """
        value = entity.get(field_name)
        if value is None or (isinstance(value, (str, list, Mapping)) and not value):
            return False

        if field_name in self.taxonomy.multilingual_fields:
            if not isinstance(value, Mapping):
                return False
            english = value.get("en")
            if not isinstance(english, str) or not english:
                return False
            if field_name == "description":
                return len(english) >= self.taxonomy.min_description_length
            return True

        if field_name == "url":
            return self.taxonomy.is_url(value)

        if field_name in self.taxonomy.capability_fields or field_name == "modules":
            return isinstance(value, Mapping) and len(value) > 0

        return True

    def performance(self, entity: Entity) -> PerformanceMetrics:
        schema_size = len(_compact_json(entity.to_dict()))
        module_count = len(entity.module_keys)

        complexity = "low"
        if module_count > 5 or schema_size > 5000:
            complexity = "high"
        elif module_count > 2 or schema_size > 2000:
            complexity = "medium"

        return PerformanceMetrics(schema_size=schema_size, complexity=complexity, module_count=module_count)


def _compact_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
