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

"""Rule engine: runs the ordered rule stages against one entity."""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..models.entity import Entity
from ..models.findings import Finding
from ..taxonomy.taxonomy import Taxonomy
from .best_practices import check_best_practices
from .capabilities import check_capabilities
from .common import RuleStage
from .modules import check_modules
from .multilingual import check_multilingual_fields
from .structure import check_context_and_version, check_critical_fields, check_hierarchy

logger = logging.getLogger(__name__)


# Stage order only affects the order of findings, never validity.
DEFAULT_STAGES: Sequence[RuleStage] = (
    check_critical_fields,
    check_context_and_version,
    check_hierarchy,
    check_multilingual_fields,
    check_capabilities,
    check_modules,
    check_best_practices,
)


class RuleEngine:
    """Evaluates an entity against the taxonomy rules.

    The engine holds no per-call state; every :meth:`evaluate` call builds a
    fresh finding list, so one engine can serve concurrent validations.
    Malformed entity shapes produce findings rather than exceptions.
    """

    def __init__(self, taxonomy: Taxonomy, stages: Optional[Sequence[RuleStage]] = None):
        """Initialize the rule engine.

        Args:
            taxonomy: Taxonomy the rules are checked against
            stages: Stage callables in evaluation order (defaults to DEFAULT_STAGES)
        """
        self.taxonomy = taxonomy
        self.stages = tuple(stages) if stages is not None else tuple(DEFAULT_STAGES)

    def evaluate(self, entity: Union[Entity, Mapping[str, Any]]) -> List[Finding]:
        """Run every stage in order and return the collected findings."""
        if not isinstance(entity, Entity):
            entity = Entity.from_mapping(entity)

        findings: List[Finding] = []
        for stage in self.stages:
            stage_findings = list(stage(entity, self.taxonomy))
            if stage_findings:
                logger.debug(f"{getattr(stage, '__name__', stage)}: {len(stage_findings)} finding(s)")
            findings.extend(stage_findings)
        return findings
