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

"""Capability block stage (``entityCapabilities`` and ``siteCapabilities``).

Missing blocks are warnings: they are strongly recommended but not part of
the critical field set. ``functionalFeatures`` values must be booleans
because they describe objectively verifiable capabilities.
"""

from typing import Iterable, Mapping

from ..models.entity import Entity
from ..models.findings import Category, Finding, error, finding, suggestion, warning
from ..taxonomy.taxonomy import Taxonomy
from .common import json_type_name

ENTITY_CAPABILITIES = "entityCapabilities"
SITE_CAPABILITIES = "siteCapabilities"


def check_capabilities(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    yield from check_entity_capabilities(entity, taxonomy)
    yield from check_site_capabilities(entity, taxonomy)


def check_entity_capabilities(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    capabilities = entity.entity_capabilities
    if not capabilities:
        yield warning(
            ENTITY_CAPABILITIES,
            f"Missing entityCapabilities - required in v{taxonomy.version} for objective business features",
            Category.SEMANTIC,
            "Add entityCapabilities with functionalFeatures, contentTypes, and businessModel",
        )
        return
    if not isinstance(capabilities, Mapping):
        yield warning(
            ENTITY_CAPABILITIES,
            f"entityCapabilities must be an object, got {json_type_name(capabilities)}",
            Category.SEMANTIC,
            "Add entityCapabilities with functionalFeatures, contentTypes, and businessModel",
        )
        return

    features = capabilities.get("functionalFeatures")
    if not features:
        yield warning(
            ENTITY_CAPABILITIES,
            "Missing functionalFeatures - these define objective business capabilities",
            Category.SEMANTIC,
            "Add functionalFeatures object with boolean values for entity capabilities",
        )
    elif not isinstance(features, Mapping):
        yield error(
            ENTITY_CAPABILITIES,
            f"functionalFeatures must be an object of boolean flags, got {json_type_name(features)}",
            Category.SEMANTIC,
            'Use an object such as {"acceptsReservations": true, "hasDelivery": false}',
        )
    else:
        for key, value in features.items():
            if not isinstance(value, bool):
                yield error(
                    ENTITY_CAPABILITIES,
                    f"functionalFeatures.{key} should be boolean, got {json_type_name(value)}",
                    Category.SEMANTIC,
                    "Use true/false values for objective, verifiable business features",
                )
        if len(features) < taxonomy.min_functional_features:
            yield suggestion(
                ENTITY_CAPABILITIES,
                "Consider adding more functionalFeatures for comprehensive business description",
                Category.SEMANTIC,
                "Add more objective capabilities like acceptsReservations, hasDelivery, acceptsCreditCards, etc.",
            )

    content_types = capabilities.get("contentTypes")
    if not isinstance(content_types, list):
        yield warning(
            ENTITY_CAPABILITIES,
            "Missing contentTypes array - define what content types are available",
            Category.SEMANTIC,
            'Add contentTypes array (e.g., ["menu", "photos", "reviews", "support"])',
        )
    elif not content_types:
        yield warning(
            ENTITY_CAPABILITIES,
            "contentTypes array is empty - add available content types",
            Category.SEMANTIC,
        )

    if not capabilities.get("businessModel"):
        yield suggestion(
            ENTITY_CAPABILITIES,
            "Consider adding businessModel for better business categorization",
            Category.SEMANTIC,
            'Add businessModel (e.g., "restaurant", "marketplace", "subscription")',
        )

    if isinstance(features, Mapping) and features.get(taxonomy.payment_feature_flag) is True:
        if not isinstance(capabilities.get("paymentMethods"), list):
            yield suggestion(
                ENTITY_CAPABILITIES,
                "Since online payments are supported, add paymentMethods array",
                Category.SEMANTIC,
                'Add paymentMethods array (e.g., ["credit_card", "paypal", "digital_wallet"])',
            )


def check_site_capabilities(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    capabilities = entity.site_capabilities
    if not capabilities:
        yield warning(
            SITE_CAPABILITIES,
            f"Missing siteCapabilities - required in v{taxonomy.version} for website interaction features",
            Category.SEMANTIC,
            "Add siteCapabilities with availableActions, interactionMethods, and supportedDevices",
        )
        return
    if not isinstance(capabilities, Mapping):
        yield warning(
            SITE_CAPABILITIES,
            f"siteCapabilities must be an object, got {json_type_name(capabilities)}",
            Category.SEMANTIC,
            "Add siteCapabilities with availableActions, interactionMethods, and supportedDevices",
        )
        return

    for check in taxonomy.site_capability_checks:
        value = capabilities.get(check.field)
        if check.require_array:
            if not isinstance(value, list):
                yield finding(check.severity, SITE_CAPABILITIES, check.message, Category.SEMANTIC, check.suggestion)
            elif not value and check.empty_message:
                yield finding(check.severity, SITE_CAPABILITIES, check.empty_message, Category.SEMANTIC)
        elif not value:
            yield finding(check.severity, SITE_CAPABILITIES, check.message, Category.SEMANTIC, check.suggestion)
