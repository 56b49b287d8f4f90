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

"""Validator entry points.

:class:`AimlValidator` runs the rule engine and then the scoring engine over
one entity. Module resolution is a separate entry point and never feeds the
score.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Set

from .config import ValidatorConfig
from .exceptions import EntityParseError
from .models.entity import Entity
from .models.conformance import SchemaConformanceReport
from .models.findings import Category, FindingCounts, error
from .models.module_record import CompatibilityReport, ModuleRecord
from .models.result import EntityInfo, ValidationResult
from .parsing.entity_parser import parse_entity
from .resolvers.module_resolver import ModuleResolver
from .rules.engine import RuleEngine
from .schema_source.base import SchemaSource
from .schema_source.http_source import HttpSchemaSource
from .scoring.engine import ScoringEngine
from .taxonomy.loader import load_taxonomy
from .taxonomy.taxonomy import Taxonomy

logger = logging.getLogger(__name__)


class AimlValidator:
    """Validates AIML entities and reports a graded quality assessment."""

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        taxonomy: Optional[Taxonomy] = None,
        schema_source: Optional[SchemaSource] = None,
    ):
        """Initialize the validator.

        Args:
            config: Validator configuration (defaults to ``ValidatorConfig()``)
            taxonomy: Taxonomy to validate against (defaults to the configured version)
            schema_source: Schema source for module resolution (defaults to the
                published schema site, created on first use)
        """
        self.config = config or ValidatorConfig()
        self.taxonomy = taxonomy or load_taxonomy(self.config.taxonomy_version)
        self.rule_engine = RuleEngine(self.taxonomy)
        self.scoring_engine = ScoringEngine(self.taxonomy)
        self._schema_source = schema_source
        self._module_resolver: Optional[ModuleResolver] = None

    @classmethod
    def create_production(cls, **kwargs: Any) -> 'AimlValidator':
        return cls(ValidatorConfig(strict=True), **kwargs)

    @classmethod
    def create_development(cls, **kwargs: Any) -> 'AimlValidator':
        return cls(ValidatorConfig(debug=True), **kwargs)

    # Entity validation

    def validate(self, data: Any) -> ValidationResult:
        """Validate one entity given as a mapping, as JSON text or as an :class:`Entity`.

        Never raises: unparsable input and unexpected failures both come back
        as a single structural error with score and completeness of zero.
        """
        try:
            entity = parse_entity(data)
        except EntityParseError as e:
            logger.debug(f"Rejected input: {e}")
            return self._single_error(e.field, str(e), e.suggestion)

        try:
            findings = self.rule_engine.evaluate(entity)
            card = self.scoring_engine.score(entity, FindingCounts.of(findings))
            performance = self.scoring_engine.performance(entity)
            entity_info = self._entity_info(entity)
        except Exception as e:
            logger.error(f"Unexpected error while validating entity: {e}", exc_info=self.config.debug)
            return self._single_error(
                "input",
                f"Validation failed: {e}",
                "Check the entity structure and try again",
            )

        result = ValidationResult.from_findings(
            findings,
            entity_info=entity_info,
            score=card.score,
            completeness=card.completeness,
            performance=performance,
        )
        if self.config.debug:
            counts = result.counts
            logger.debug(
                f"Validated entity {entity.get('@id')!r}: score={result.score} "
                f"completeness={result.completeness} errors={counts.errors} "
                f"warnings={counts.warnings} suggestions={counts.suggestions}"
            )
        return result

    def is_valid(self, data: Any) -> bool:
        return self.validate(data).is_valid

    def get_entity_info(self, data: Any) -> Optional[EntityInfo]:
        try:
            entity = parse_entity(data)
        except EntityParseError:
            return None
        return self._entity_info(entity)

    @staticmethod
    def _entity_info(entity: Entity) -> Optional[EntityInfo]:
        if not entity.entity_type:
            return None
        return EntityInfo(
            entity_type=entity.entity_type,
            entity_category=entity.entity_category,
            subcategory=entity.subcategory,
            modules=entity.module_keys,
            has_entity_capabilities=bool(entity.entity_capabilities),
            has_site_capabilities=bool(entity.site_capabilities),
        )

    @staticmethod
    def _single_error(field: str, message: str, suggestion: str) -> ValidationResult:
        return ValidationResult.from_findings([error(field, message, Category.STRUCTURE, suggestion)])

    # Taxonomy queries

    @property
    def categories(self) -> List[str]:
        return list(self.taxonomy.categories)

    @property
    def modules(self) -> List[str]:
        return list(self.taxonomy.modules)

    def entity_types(self) -> List[str]:
        return self.taxonomy.entity_types()

    def subcategory_names(self) -> List[str]:
        return self.taxonomy.subcategory_names()

    def required_modules(self, entity_type: Any) -> List[str]:
        return self.taxonomy.required_modules_for(entity_type)

    # Module resolution

    @property
    def schema_source(self) -> SchemaSource:
        if self._schema_source is None:
            self._schema_source = HttpSchemaSource(
                base_url=self.config.schema_base_url,
                timeout=self.config.request_timeout,
            )
        return self._schema_source

    def module_resolver(self) -> ModuleResolver:
        if self._module_resolver is None:
            self._module_resolver = ModuleResolver(
                self.schema_source, self.taxonomy, max_workers=self.config.max_workers
            )
        return self._module_resolver

    def resolve_modules(self, module_refs: Iterable[Mapping[str, Any]]) -> List[ModuleRecord]:
        return self.module_resolver().resolve(module_refs)

    def close_dependencies(self, module_types: Iterable[str]) -> Set[str]:
        return self.module_resolver().close_dependencies(module_types)

    def check_compatibility(self, module_types: Iterable[str]) -> CompatibilityReport:
        return self.module_resolver().check_compatibility(module_types)

    def validate_against_entity_schema(
        self, data: Any, entity_type: Optional[str] = None
    ) -> SchemaConformanceReport:
        """Validate an entity against the JSON schema published for its type.

        Unparsable input comes back as a report with a single structural error.
        """
        try:
            entity = parse_entity(data)
        except EntityParseError as e:
            report = SchemaConformanceReport(entity_type=entity_type)
            report.add_error(error(e.field, str(e), Category.STRUCTURE, e.suggestion))
            return report
        return self.module_resolver().validate_against_entity_schema(entity, entity_type)

    def preload_schemas(self, entity_types: Iterable[str]) -> List[str]:
        return self.module_resolver().preload_schemas(entity_types)


def validate(data: Any, **config_overrides: Any) -> ValidationResult:
    """Validate one entity with a default validator.

    Keyword arguments override :class:`ValidatorConfig` fields.
    """
    config = ValidatorConfig().with_overrides(**config_overrides)
    return AimlValidator(config).validate(data)
