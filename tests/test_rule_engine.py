"""
Tests for the rule engine and its stages (aiml_validator/rules).

Run: python -m pytest tests/test_rule_engine.py -q
"""

import pytest

from aiml_validator.models.entity import Entity
from aiml_validator.models.findings import Category, Severity
from aiml_validator.rules import (
    RuleEngine,
    check_capabilities,
    check_context_and_version,
    check_critical_fields,
    check_hierarchy,
    check_modules,
    check_multilingual_fields,
)


def _by_field(findings, field, severity=None):
    return [
        f for f in findings
        if f.field == field and (severity is None or f.severity == severity)
    ]


def _errors(findings):
    return [f for f in findings if f.severity == Severity.ERROR]


def _warnings(findings):
    return [f for f in findings if f.severity == Severity.WARNING]


@pytest.fixture
def engine(taxonomy):
    return RuleEngine(taxonomy)


class TestValidEntity:

    def test_no_errors_or_warnings(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity())
        assert _errors(findings) == []
        assert _warnings(findings) == []

    def test_accepts_entity_instances(self, engine, valid_entity):
        findings = engine.evaluate(Entity.from_mapping(valid_entity()))
        assert _errors(findings) == []

    def test_unknown_keys_are_ignored(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(customField={"anything": 1}))
        assert _errors(findings) == []
        assert _warnings(findings) == []

    def test_each_call_returns_fresh_findings(self, engine, valid_entity):
        bad = valid_entity(entityCategory="unknown_category")
        first = engine.evaluate(bad)
        first.clear()
        assert _by_field(engine.evaluate(bad), "entityCategory")


class TestCriticalFields:

    @pytest.mark.parametrize(
        "field",
        ["@context", "@id", "@type", "schemaVersion", "entityType", "entityCategory", "name", "description"],
    )
    def test_missing_critical_field_is_error(self, engine, valid_entity, taxonomy, field):
        entity = valid_entity()
        del entity[field]

        errors = _errors(engine.evaluate(entity))

        missing = [f for f in errors if f.message == f"Critical required field '{field}' is missing"]
        assert len(missing) == 1
        assert missing[0].category == Category.STRUCTURE

    def test_empty_value_counts_as_missing(self, engine, valid_entity):
        errors = _errors(engine.evaluate(valid_entity(id="")))
        assert [f.field for f in errors] == ["@id"]

    def test_missing_recommended_fields_are_warnings(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(url=None, shortDescription=None))

        for field in ("url", "shortDescription"):
            found = _by_field(findings, field, Severity.WARNING)
            assert len(found) == 1
            assert found[0].category == Category.BEST_PRACTICE
        assert _errors(findings) == []

    def test_organization_requires_founding_date(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(foundingDate=None))
        found = _by_field(findings, "foundingDate", Severity.WARNING)
        assert len(found) == 1
        assert found[0].category == Category.SCHEMA

    def test_service_recommends_service_type(self, taxonomy):
        entity = {"entityCategory": "service", "entityType": "web_app"}
        findings = list(check_critical_fields(Entity.from_mapping(entity), taxonomy))
        found = _by_field(findings, "serviceType")
        assert [f.severity for f in found] == [Severity.INFO]

    def test_every_finding_has_a_suggestion(self, engine):
        findings = engine.evaluate({"name": "Plain", "modules": {"custom": {}}})
        assert findings
        assert all(f.suggestion for f in findings)


class TestContextAndVersion:

    def test_wrong_context_is_single_error(self, engine, valid_entity):
        errors = _errors(engine.evaluate(valid_entity(context="https://wrong")))

        assert len(errors) == 1
        assert errors[0].field == "@context"
        assert errors[0].category == Category.STRUCTURE
        assert errors[0].message == "Invalid @context value - must be exact"

    def test_missing_context_reports_both_checks(self, engine, valid_entity):
        errors = _errors(engine.evaluate(valid_entity(context=None)))
        assert len(errors) == 2
        assert {f.field for f in errors} == {"@context"}

    def test_wrong_schema_version_is_schema_error(self, taxonomy, valid_entity):
        entity = Entity.from_mapping(valid_entity(schemaVersion="2.0.0"))
        findings = list(check_context_and_version(entity, taxonomy))

        assert len(findings) == 1
        assert findings[0].field == "schemaVersion"
        assert findings[0].category == Category.SCHEMA
        assert findings[0].message == "Invalid schema version: 2.0.0"

    def test_context_comparison_is_exact(self, taxonomy, valid_entity):
        entity = Entity.from_mapping(valid_entity(context=taxonomy.context + "/"))
        findings = list(check_context_and_version(entity, taxonomy))
        assert [f.field for f in findings] == ["@context"]


class TestHierarchy:

    def test_unknown_category(self, taxonomy):
        entity = Entity.from_mapping({"entityCategory": "spaceship", "entityType": "restaurant"})
        findings = list(check_hierarchy(entity, taxonomy))

        assert [f.field for f in findings] == ["entityCategory"]
        assert findings[0].severity == Severity.ERROR

    def test_type_outside_category(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(entityType="hotel", entityCategory="service", subcategory=None))
        errors = _by_field(findings, "entityType", Severity.ERROR)

        assert len(errors) == 1
        assert "hotel" in errors[0].message
        assert "service" in errors[0].message

    def test_subcategory_violating_category_rule(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(subcategory="physical_product"))
        errors = _by_field(findings, "subcategory", Severity.ERROR)

        assert len(errors) == 1
        assert "organization" in errors[0].message

    def test_subcategory_member_type_mismatch(self, taxonomy):
        entity = Entity.from_mapping({
            "entityCategory": "organization",
            "entityType": "clinic",
            "subcategory": "hospitality",
        })
        findings = list(check_hierarchy(entity, taxonomy))

        assert [(f.field, f.severity) for f in findings] == [("entityType", Severity.ERROR)]

    def test_unknown_subcategory_is_warning(self, taxonomy):
        entity = Entity.from_mapping({
            "entityCategory": "organization",
            "entityType": "restaurant",
            "subcategory": "fine_dining",
        })
        findings = list(check_hierarchy(entity, taxonomy))

        assert [(f.field, f.severity) for f in findings] == [("subcategory", Severity.WARNING)]

    def test_subcategory_rule_without_category(self, taxonomy):
        entity = Entity.from_mapping({"subcategory": "physical_product"})
        assert list(check_hierarchy(entity, taxonomy)) == []

    def test_unhashable_values_do_not_raise(self, engine):
        findings = engine.evaluate({"entityCategory": ["organization"], "subcategory": {"a": 1}})
        assert _by_field(findings, "entityCategory", Severity.ERROR)
        assert _by_field(findings, "subcategory", Severity.WARNING)


class TestMultilingual:

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_plain_string_is_error(self, engine, valid_entity, field):
        findings = engine.evaluate(valid_entity(**{field: "Just a string that is long enough to pass length checks"}))
        errors = _by_field(findings, field, Severity.ERROR)

        assert len(errors) == 1
        assert field in errors[0].message

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_missing_english_is_error(self, taxonomy, field):
        entity = Entity.from_mapping({field: {"fr": "Bonjour"}})
        findings = list(check_multilingual_fields(entity, taxonomy))

        assert [(f.field, f.severity, f.category) for f in findings] == [
            (field, Severity.ERROR, Category.STRUCTURE)
        ]

    def test_short_english_description(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(description={"en": "x" * 40}))
        warnings = [f for f in _by_field(findings, "description", Severity.WARNING)]

        assert len(warnings) == 1
        assert warnings[0].category == Category.BEST_PRACTICE
        assert _errors(findings) == []

    def test_invalid_language_code(self, taxonomy):
        entity = Entity.from_mapping({"name": {"en": "Name", "english": "Name", "pt-BR": "Nome"}})
        findings = list(check_multilingual_fields(entity, taxonomy))

        assert len(findings) == 1
        assert "english" in findings[0].message
        assert findings[0].severity == Severity.WARNING

    def test_empty_translation(self, taxonomy):
        entity = Entity.from_mapping({"name": {"en": "Name", "de": ""}})
        findings = list(check_multilingual_fields(entity, taxonomy))

        assert [(f.severity, f.category) for f in findings] == [(Severity.WARNING, Category.STRUCTURE)]

    def test_non_mapping_value(self, taxonomy):
        entity = Entity.from_mapping({"name": ["Name"]})
        findings = list(check_multilingual_fields(entity, taxonomy))
        assert [f.severity for f in findings] == [Severity.ERROR]


class TestCapabilities:

    def test_missing_blocks_are_warnings(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(entityCapabilities=None, siteCapabilities=None))

        for field in ("entityCapabilities", "siteCapabilities"):
            found = _by_field(findings, field)
            assert len(found) == 1
            assert found[0].severity == Severity.WARNING
            assert found[0].category == Category.SEMANTIC
        assert _errors(findings) == []

    def test_non_boolean_features(self, taxonomy, valid_entity):
        entity = valid_entity()
        entity["entityCapabilities"]["functionalFeatures"]["hasDelivery"] = "yes"
        findings = list(check_capabilities(Entity.from_mapping(entity), taxonomy))

        errors = _errors(findings)
        assert len(errors) == 1
        assert "hasDelivery" in errors[0].message

    def test_few_features_and_missing_business_model(self, taxonomy):
        entity = Entity.from_mapping({
            "entityCapabilities": {
                "functionalFeatures": {"hasDelivery": True},
                "contentTypes": ["menu"],
            },
        })
        findings = list(check_capabilities(entity, taxonomy))
        capability_findings = _by_field(findings, "entityCapabilities")

        assert [f.severity for f in capability_findings] == [Severity.INFO, Severity.INFO]

    @pytest.mark.parametrize("content_types", [None, []])
    def test_missing_or_empty_content_types(self, taxonomy, content_types):
        block = {"functionalFeatures": {"a": True, "b": True, "c": True}, "businessModel": "retail"}
        if content_types is not None:
            block["contentTypes"] = content_types
        entity = Entity.from_mapping({"entityCapabilities": block})

        findings = _by_field(list(check_capabilities(entity, taxonomy)), "entityCapabilities")
        assert [f.severity for f in findings] == [Severity.WARNING]

    def test_online_payments_without_methods(self, taxonomy, valid_entity):
        entity = valid_entity()
        entity["entityCapabilities"]["functionalFeatures"]["supportsOnlinePayments"] = True
        findings = list(check_capabilities(Entity.from_mapping(entity), taxonomy))

        assert [f.message for f in findings] == ["Since online payments are supported, add paymentMethods array"]

    def test_site_capability_table(self, taxonomy):
        entity = Entity.from_mapping({
            "entityCapabilities": {
                "functionalFeatures": {"a": True, "b": True, "c": True},
                "contentTypes": ["menu"],
                "businessModel": "retail",
            },
            "siteCapabilities": {"availableActions": [], "languages": "en"},
        })
        findings = _by_field(list(check_capabilities(entity, taxonomy)), "siteCapabilities")
        severities = [f.severity for f in findings]

        assert severities.count(Severity.WARNING) == 4
        assert severities.count(Severity.INFO) == 2
        assert any("empty" in f.message for f in findings)


class TestModules:

    def test_required_module_missing_is_single_warning(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(modules=None))
        module_findings = _by_field(findings, "modules")

        assert len(module_findings) == 1
        assert module_findings[0].severity == Severity.WARNING
        assert module_findings[0].category == Category.SCHEMA
        assert "location" in module_findings[0].message
        assert _errors(findings) == []

    def test_hotel_lists_each_missing_module(self, taxonomy):
        entity = Entity.from_mapping({"entityType": "hotel", "modules": {"location": {"version": "2.0.1", "enabled": True}}})
        findings = list(check_modules(entity, taxonomy))

        assert [f.message for f in findings] == ["Required module 'payments' is missing for entity type 'hotel'"]

    def test_non_standard_module(self, taxonomy):
        entity = Entity.from_mapping({"modules": {"teleport": {"version": "2.0.1", "enabled": True}}})
        findings = list(check_modules(entity, taxonomy))

        assert [(f.field, f.severity) for f in findings] == [("modules", Severity.WARNING)]

    def test_module_entry_checks(self, taxonomy):
        entity = Entity.from_mapping({
            "modules": {
                "auth": {},
                "search": {"version": "1.9.0", "enabled": False},
            }
        })
        findings = list(check_modules(entity, taxonomy))

        auth = _by_field(findings, "modules.auth")
        assert [f.severity for f in auth] == [Severity.WARNING, Severity.INFO]

        search = _by_field(findings, "modules.search")
        assert len(search) == 1
        assert search[0].severity == Severity.WARNING
        assert "1.9.0" in search[0].message

    def test_non_mapping_modules(self, taxonomy):
        entity = Entity.from_mapping({"entityType": "restaurant", "modules": ["location"]})
        findings = list(check_modules(entity, taxonomy))

        assert [(f.field, f.category) for f in findings] == [
            ("modules", Category.STRUCTURE),
            ("modules", Category.SCHEMA),
        ]


class TestBestPractices:

    def test_bad_url_is_warning(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(url="www.example.com"))
        found = _by_field(findings, "url")

        assert [(f.severity, f.category) for f in found] == [(Severity.WARNING, Category.BEST_PRACTICE)]

    def test_short_description_is_suggestion(self, engine, valid_entity):
        findings = engine.evaluate(valid_entity(description={"en": "Too short"}))
        suggestions = _by_field(findings, "description", Severity.INFO)
        assert len(suggestions) == 1


class TestEngineShape:

    def test_never_raises_on_odd_shapes(self, engine):
        findings = engine.evaluate({
            "name": 42,
            "description": None,
            "modules": "auth",
            "entityCapabilities": [],
            "siteCapabilities": "all",
            "url": 7,
        })
        assert _errors(findings)

    def test_custom_stages(self, taxonomy, valid_entity):
        engine = RuleEngine(taxonomy, stages=[check_context_and_version])
        findings = engine.evaluate(valid_entity(context="https://wrong", name=None))
        assert [f.field for f in findings] == ["@context"]
