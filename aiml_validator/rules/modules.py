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

"""Module declaration stage.

Required modules per entity type are checked once, as warnings.
"""

from typing import Iterable, Mapping

from ..models.entity import Entity
from ..models.findings import Category, Finding, suggestion, warning
from ..taxonomy.taxonomy import Taxonomy
from ..utils.format_version import check_format_version
from .common import json_type_name


def check_modules(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    modules = entity.modules
    if modules is not None and not isinstance(modules, Mapping):
        yield warning(
            "modules",
            f"modules must be an object keyed by module name, got {json_type_name(modules)}",
            Category.STRUCTURE,
            'Use the form {"auth": {"version": "%s", "enabled": true}}' % taxonomy.version,
        )

    entity_type = entity.entity_type
    required = taxonomy.required_modules_for(entity_type)
    present = entity.module_keys
    for module_key in required:
        if module_key not in present:
            yield warning(
                "modules",
                f"Required module '{module_key}' is missing for entity type '{entity_type}'",
                Category.SCHEMA,
                f"{entity_type} entities must include: {', '.join(required)}",
            )

    if not isinstance(modules, Mapping):
        return

    for module_key, module in modules.items():
        if not taxonomy.is_standard_module(module_key):
            yield warning(
                "modules",
                f"Module '{module_key}' is not a standard AIML module",
                Category.SCHEMA,
                f"Standard modules: {', '.join(taxonomy.modules)}",
            )

        field_name = f"modules.{module_key}"
        if not isinstance(module, Mapping):
            yield warning(
                field_name,
                f"Module configuration should be an object, got {json_type_name(module)}",
                Category.STRUCTURE,
                f'Use {{"version": "{taxonomy.version}", "enabled": true}}',
            )
            continue

        version = module.get("version")
        if not version:
            yield warning(
                field_name,
                "Module should include version field",
                Category.BEST_PRACTICE,
                f'Add version "{taxonomy.version}" for compatibility tracking',
            )

        if module.get("enabled") is None:
            yield suggestion(
                field_name,
                "Consider adding enabled field to module",
                Category.BEST_PRACTICE,
                'Add "enabled": true/false for better module management',
            )

        if version and version != taxonomy.version:
            check = check_format_version(version, taxonomy.version)
            yield warning(
                field_name,
                check.message,
                Category.SCHEMA,
                f'Consider using version "{taxonomy.version}" for latest features',
            )
