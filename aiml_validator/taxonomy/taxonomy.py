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

"""Immutable taxonomy configuration.

A :class:`Taxonomy` is built once per version and handed to the rule engine,
the scoring engine and the module resolver. Nothing in it changes after
construction, so several versions can be used side by side.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..exceptions import TaxonomyError


_SEVERITIES = ("error", "warning", "info")


@dataclass(frozen=True)
class SubcategoryRule:
    allowed_categories: Tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class FieldRule:
    """A presence rule for one entity field, reported with a fixed severity."""

    field: str
    severity: str
    message: str
    suggestion: Optional[str] = None


@dataclass(frozen=True)
class SiteCapabilityCheck:
    field: str
    severity: str
    message: str
    suggestion: Optional[str] = None
    require_array: bool = True
    empty_message: Optional[str] = None


@dataclass(frozen=True)
class CompletenessTier:
    name: str
    weight: int
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class Taxonomy:
    version: str
    context: str
    categories: Tuple[str, ...]
    category_types: Mapping[str, Tuple[str, ...]]
    subcategories: Mapping[str, Tuple[str, ...]]
    subcategory_rules: Mapping[str, SubcategoryRule]
    modules: Tuple[str, ...]
    required_modules: Mapping[str, Tuple[str, ...]]
    language_code_pattern: re.Pattern
    url_pattern: re.Pattern
    critical_fields: Tuple[str, ...]
    recommended_fields: Tuple[str, ...] = ()
    multilingual_fields: Tuple[str, ...] = ("name", "description")
    capability_fields: Tuple[str, ...] = ("entityCapabilities", "siteCapabilities")
    category_fields: Mapping[str, Tuple[FieldRule, ...]] = field(default_factory=lambda: MappingProxyType({}))
    site_capability_checks: Tuple[SiteCapabilityCheck, ...] = ()
    completeness_tiers: Tuple[CompletenessTier, ...] = ()
    fallback_recommended_modules: Tuple[str, ...] = ()
    min_description_length: int = 50
    min_functional_features: int = 3
    payment_feature_flag: str = "supportsOnlinePayments"

    # ---- queries -----------------------------------------------------------

    def types_for_category(self, category: str) -> Tuple[str, ...]:
        return self.category_types.get(category, ())

    def entity_types(self) -> List[str]:
        """All entity types across categories, sorted."""
        return sorted({t for types in self.category_types.values() for t in types})

    def subcategory_names(self) -> List[str]:
        return list(self.subcategories.keys())

    def required_modules_for(self, entity_type: Any) -> List[str]:
        if not entity_type or not isinstance(entity_type, str):
            return []
        return list(self.required_modules.get(entity_type, ()))

    def is_standard_module(self, module_key: str) -> bool:
        return module_key in self.modules

    def is_language_code(self, code: Any) -> bool:
        return isinstance(code, str) and self.language_code_pattern.match(code) is not None

    def is_url(self, value: Any) -> bool:
        return isinstance(value, str) and self.url_pattern.match(value) is not None

    # ---- construction ------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Taxonomy":
        """Build a taxonomy from a plain mapping (as loaded from a data file).

        Raises:
            TaxonomyError: If a required key is missing or the tables disagree.
        """
        if not isinstance(data, Mapping):
            raise TaxonomyError("Taxonomy data must be a mapping")

        missing = [
            key for key in (
                "version", "context", "categories", "entity_types", "subcategories",
                "modules", "language_code_pattern", "critical_fields",
            )
            if key not in data
        ]
        if missing:
            raise TaxonomyError(f"Taxonomy data is missing keys: {missing}")

        categories = tuple(data["categories"])
        category_types = {cat: tuple(types or ()) for cat, types in data["entity_types"].items()}
        unknown = [cat for cat in category_types if cat not in categories]
        if unknown:
            raise TaxonomyError(f"Entity types declared for unknown categories: {unknown}")

        subcategory_rules = {
            name: SubcategoryRule(
                allowed_categories=tuple(rule.get("allowed_categories", ())),
                description=rule.get("description", ""),
            )
            for name, rule in (data.get("subcategory_rules") or {}).items()
        }

        category_fields = {
            cat: tuple(_field_rule(rule) for rule in rules or ())
            for cat, rules in (data.get("category_fields") or {}).items()
        }

        site_checks = tuple(
            SiteCapabilityCheck(
                field=check["field"],
                severity=_severity(check.get("severity", "warning")),
                message=check["message"],
                suggestion=check.get("suggestion"),
                require_array=bool(check.get("require_array", True)),
                empty_message=check.get("empty_message"),
            )
            for check in data.get("site_capability_checks") or ()
        )

        tiers = tuple(
            CompletenessTier(name=tier["name"], weight=int(tier["weight"]), fields=tuple(tier["fields"]))
            for tier in data.get("completeness_tiers") or ()
        )
        if tiers and sum(t.weight for t in tiers) != 100:
            raise TaxonomyError("Completeness tier weights must add up to 100")
        if any(not t.fields for t in tiers):
            raise TaxonomyError("Completeness tiers must list at least one field")

        try:
            language_pattern = re.compile(data["language_code_pattern"])
            url_pattern = re.compile(data.get("url_pattern", r"^https?://.+"))
        except re.error as exc:
            raise TaxonomyError(f"Invalid pattern in taxonomy data: {exc}") from exc

        return cls(
            version=str(data["version"]),
            context=data["context"],
            categories=categories,
            category_types=MappingProxyType(category_types),
            subcategories=MappingProxyType(
                {name: tuple(types or ()) for name, types in data["subcategories"].items()}
            ),
            subcategory_rules=MappingProxyType(subcategory_rules),
            modules=tuple(data["modules"]),
            required_modules=MappingProxyType(
                {etype: tuple(mods) for etype, mods in (data.get("required_modules") or {}).items()}
            ),
            language_code_pattern=language_pattern,
            url_pattern=url_pattern,
            critical_fields=tuple(data["critical_fields"]),
            recommended_fields=tuple(data.get("recommended_fields", ())),
            multilingual_fields=tuple(data.get("multilingual_fields", ("name", "description"))),
            capability_fields=tuple(data.get("capability_fields", ("entityCapabilities", "siteCapabilities"))),
            category_fields=MappingProxyType(category_fields),
            site_capability_checks=site_checks,
            completeness_tiers=tiers,
            fallback_recommended_modules=tuple(data.get("fallback_recommended_modules", ())),
            min_description_length=int(data.get("min_description_length", 50)),
            min_functional_features=int(data.get("min_functional_features", 3)),
            payment_feature_flag=data.get("payment_feature_flag", "supportsOnlinePayments"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the taxonomy tables, for display and debugging."""
        return {
            "version": self.version,
            "context": self.context,
            "categories": list(self.categories),
            "entityTypes": {cat: list(types) for cat, types in self.category_types.items()},
            "subcategories": {name: list(types) for name, types in self.subcategories.items()},
            "modules": list(self.modules),
            "requiredModules": {etype: list(mods) for etype, mods in self.required_modules.items()},
        }


def _severity(value: str) -> str:
    if value not in _SEVERITIES:
        raise TaxonomyError(f"Unknown severity '{value}'. Expected one of {_SEVERITIES}")
    return value


def _field_rule(rule: Mapping[str, Any]) -> FieldRule:
    return FieldRule(
        field=rule["field"],
        severity=_severity(rule.get("severity", "warning")),
        message=rule["message"],
        suggestion=rule.get("suggestion"),
    )
