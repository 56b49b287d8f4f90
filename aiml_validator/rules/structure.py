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

"""Structural stages: required fields, context/version and the category hierarchy."""

from typing import Iterable

from ..models.entity import Entity
from ..models.findings import Category, Finding, error, finding, warning
from ..taxonomy.taxonomy import Taxonomy


def check_critical_fields(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    """Critical fields are errors when missing; recommended and category fields are advisory."""
    for field_name in taxonomy.critical_fields:
        if not entity.get(field_name):
            yield error(
                field_name,
                f"Critical required field '{field_name}' is missing",
                Category.STRUCTURE,
                f"Add the {field_name} field to your schema (required for v{taxonomy.version} compliance)",
            )

    for field_name in taxonomy.recommended_fields:
        if not entity.get(field_name):
            yield warning(
                field_name,
                f"Strongly recommended field '{field_name}' is missing",
                Category.BEST_PRACTICE,
                f"Add {field_name} for better schema completeness and usability",
            )

    category = entity.entity_category
    if isinstance(category, str):
        for rule in taxonomy.category_fields.get(category, ()):
            if not entity.get(rule.field):
                yield finding(rule.severity, rule.field, rule.message, Category.SCHEMA, rule.suggestion)


def check_context_and_version(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    context = entity.context
    if not context:
        yield error(
            "@context",
            "@context is required for JSON-LD compliance",
            Category.STRUCTURE,
            f'Add "@context": "{taxonomy.context}"',
        )
    elif context != taxonomy.context:
        yield error(
            "@context",
            "Invalid @context value - must be exact",
            Category.STRUCTURE,
            f'Use exactly "{taxonomy.context}" for AIML v{taxonomy.version} schemas',
        )

    schema_version = entity.schema_version
    if not schema_version:
        yield error(
            "schemaVersion",
            f"schemaVersion is required for v{taxonomy.version} compliance",
            Category.STRUCTURE,
            f'Add "schemaVersion": "{taxonomy.version}"',
        )
    elif schema_version != taxonomy.version:
        yield error(
            "schemaVersion",
            f"Invalid schema version: {schema_version}",
            Category.SCHEMA,
            f'Must be exactly "{taxonomy.version}" for current META-AIML compliance',
        )


def check_hierarchy(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    """Category → type → subcategory consistency."""
    category = entity.entity_category
    entity_type = entity.entity_type
    subcategory = entity.subcategory

    if category and category not in taxonomy.categories:
        yield error(
            "entityCategory",
            f"Invalid entity category: {category}",
            Category.SCHEMA,
            f"Use one of: {', '.join(taxonomy.categories)}",
        )

    if entity_type and isinstance(category, str):
        valid_types = taxonomy.types_for_category(category)
        # Unknown categories were reported above.
        if valid_types and entity_type not in valid_types:
            yield error(
                "entityType",
                f"Entity type '{entity_type}' is not valid for category '{category}'",
                Category.SCHEMA,
                f"Valid types for {category}: {', '.join(valid_types)}",
            )

    if not subcategory:
        return

    known = isinstance(subcategory, str) and subcategory in taxonomy.subcategories
    if not known:
        yield warning(
            "subcategory",
            f"Subcategory '{subcategory}' might not be standard",
            Category.SCHEMA,
            f"Common subcategories: {', '.join(taxonomy.subcategory_names())}",
        )

    rule = taxonomy.subcategory_rules.get(subcategory) if isinstance(subcategory, str) else None
    if category and rule is not None and category not in rule.allowed_categories:
        yield error(
            "subcategory",
            f"Subcategory '{subcategory}' is not valid for category '{category}'",
            Category.SCHEMA,
            f"Valid categories for {subcategory}: {', '.join(rule.allowed_categories)}",
        )

    if entity_type and known:
        member_types = taxonomy.subcategories[subcategory]
        if entity_type not in member_types:
            yield error(
                "entityType",
                f"Entity type '{entity_type}' is not valid for subcategory '{subcategory}'",
                Category.SCHEMA,
                f"Valid types for {subcategory}: {', '.join(member_types)}",
            )
