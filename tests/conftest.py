"""
Shared pytest fixtures for the AIML validator test suite.

Provides:
    - taxonomy: the bundled 2.0.1 taxonomy
    - taxonomy_data: the raw taxonomy mapping, for building variants
    - valid_entity: factory for an entity with no errors and no warnings
    - schema_source: in-memory schema source that records every lookup
"""

import copy

import pytest
import yaml

from aiml_validator.exceptions import SchemaNetworkError, SchemaNotFoundError
from aiml_validator.schema_source.base import SchemaSource
from aiml_validator.taxonomy.loader import get_data_dir, load_taxonomy


LONG_DESCRIPTION = (
    "Family-run trattoria serving handmade pasta and wood-fired pizza in the old town."
)

VALID_ENTITY = {
    "@context": "https://schemas.meta-aiml.org/v2.0.1/context.jsonld",
    "@id": "https://example.com/#restaurant",
    "@type": "Restaurant",
    "schemaVersion": "2.0.1",
    "entityType": "restaurant",
    "entityCategory": "organization",
    "subcategory": "hospitality",
    "name": {"en": "Trattoria Sole", "it": "Trattoria Sole"},
    "description": {"en": LONG_DESCRIPTION},
    "shortDescription": {"en": "Handmade pasta and pizza"},
    "url": "https://example.com",
    "logo": "https://example.com/logo.png",
    "foundingDate": "1998-05-01",
    "lastModified": "2026-01-10",
    "properties": {"cuisine": "italian"},
    "modules": {
        "location": {"version": "2.0.1", "enabled": True},
    },
    "entityCapabilities": {
        "functionalFeatures": {
            "acceptsReservations": True,
            "hasDelivery": False,
            "hasTakeaway": True,
        },
        "contentTypes": ["menu", "photos", "reviews"],
        "businessModel": "restaurant",
    },
    "siteCapabilities": {
        "availableActions": ["view_menu", "make_reservation"],
        "interactionMethods": ["online_form", "phone_call"],
        "contentAccess": ["public"],
        "supportedDevices": ["desktop", "mobile"],
        "languages": ["en", "it"],
        "realTimeFeatures": ["real_time_availability"],
    },
}


class InMemorySchemaSource(SchemaSource):
    """Schema source backed by dicts; records every lookup in ``calls``."""

    def __init__(self, modules=None, entities=None, references=None, registry=None, failing=()):
        self.modules = dict(modules or {})
        self.entities = dict(entities or {})
        self.references = dict(references or {})
        self.registry = registry
        self.failing = set(failing)
        self.calls = []

    def _lookup(self, kind, table, key):
        self.calls.append((kind, key))
        if key in self.failing:
            raise SchemaNetworkError(f"Connection refused for {key}")
        if key not in table:
            raise SchemaNotFoundError(f"Schema not found: {key}")
        return copy.deepcopy(table[key])

    def fetch_module_schema(self, module_type):
        return self._lookup("module", self.modules, module_type)

    def fetch_entity_schema(self, entity_type):
        return self._lookup("entity", self.entities, entity_type)

    def fetch_by_reference(self, ref):
        return self._lookup("reference", self.references, ref)

    def fetch_registry(self):
        self.calls.append(("registry", None))
        if self.registry is None:
            return super().fetch_registry()
        return copy.deepcopy(self.registry)

    def count(self, kind, key):
        return self.calls.count((kind, key))


@pytest.fixture
def taxonomy():
    return load_taxonomy("2.0.1")


@pytest.fixture
def taxonomy_data():
    with open(get_data_dir() / "2.0.1.yaml", "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def valid_entity():
    """Return a factory building a fresh copy of a fully valid entity.

    Keyword arguments replace top-level fields; a value of ``None`` removes
    the field.
    """
    def _make(**overrides):
        entity = copy.deepcopy(VALID_ENTITY)
        for key, value in overrides.items():
            key = {"context": "@context", "id": "@id", "type": "@type"}.get(key, key)
            if value is None:
                entity.pop(key, None)
            else:
                entity[key] = value
        return entity

    return _make


@pytest.fixture
def schema_source():
    return InMemorySchemaSource(
        modules={
            "auth": {"version": "2.1.0", "dependencies": ["security"], "required": ["provider"]},
            "security": {"version": "2.0.1", "properties": {"encryption": {"type": "string"}}},
            "payments": {"version": "2.0.1", "dependencies": ["auth", "security"]},
            "location": {"version": "2.0.1", "properties": {"address": {"type": "string"}}},
        },
        entities={
            "restaurant": {"title": "Restaurant", "recommendedModules": ["location", "payments"]},
        },
    )
