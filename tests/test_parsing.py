"""
Tests for entity input parsing (aiml_validator/parsing, aiml_validator/models/entity.py).

Run: python -m pytest tests/test_parsing.py -q
"""

import json

import pytest

from aiml_validator.exceptions import (
    EmptyInputError,
    EntityParseError,
    InvalidJsonError,
    NonObjectInputError,
    NullInputError,
)
from aiml_validator.models.entity import Entity
from aiml_validator.parsing import load_entity_file, parse_entity


class TestParseEntity:

    def test_mapping(self, valid_entity):
        entity = parse_entity(valid_entity())
        assert entity.entity_type == "restaurant"
        assert entity.context == "https://schemas.meta-aiml.org/v2.0.1/context.jsonld"

    def test_json_text(self):
        entity = parse_entity('{"entityType": "hotel", "x-rating": 4}')
        assert entity.entity_type == "hotel"
        assert entity.extra == {"x-rating": 4}

    def test_bytes(self):
        assert parse_entity(b'{"entityType": "hotel"}').entity_type == "hotel"

    def test_entity_passes_through(self, valid_entity):
        entity = Entity.from_mapping(valid_entity())
        assert parse_entity(entity) is entity

    @pytest.mark.parametrize("data,error", [
        (None, NullInputError),
        ("null", NullInputError),
        ("", EmptyInputError),
        ("  \n", EmptyInputError),
        ({}, EmptyInputError),
        ("{", InvalidJsonError),
        (b"\xff\xfe", InvalidJsonError),
        ("[]", NonObjectInputError),
        ("\"text\"", NonObjectInputError),
        (3.5, NonObjectInputError),
    ])
    def test_rejected_input(self, data, error):
        with pytest.raises(error):
            parse_entity(data)

    def test_errors_name_their_finding_field(self):
        assert InvalidJsonError.field == "JSON"
        assert NullInputError.field == "input"
        assert issubclass(NonObjectInputError, EntityParseError)


class TestEntity:

    def test_round_trip_preserves_keys_and_order(self):
        data = {"x-first": 1, "name": {"en": "A"}, "@id": "urn:a", "custom": [1, 2], "modules": {}}
        assert list(Entity.from_mapping(data).to_dict().items()) == list(data.items())

    def test_lookup_by_wire_name(self):
        entity = Entity.from_mapping({"@context": "ctx", "schemaVersion": "2.0.1", "custom": True})

        assert entity.get("@context") == "ctx"
        assert entity["schemaVersion"] == "2.0.1"
        assert entity.get("custom") is True
        assert entity.get("url", "none") == "none"
        assert entity.has("@context")
        assert not entity.has("url")

    def test_module_keys(self):
        assert Entity.from_mapping({"modules": {"auth": {}, "search": {}}}).module_keys == ["auth", "search"]
        assert Entity.from_mapping({"modules": ["auth"]}).module_keys == []
        assert Entity.from_mapping({}).module_keys == []

    def test_english_text(self):
        entity = Entity.from_mapping({"name": {"en": "Name"}, "description": "Plain"})
        assert entity.english_text("name") == "Name"
        assert entity.english_text("description") == "Plain"
        assert entity.english_text("url") is None


class TestLoadEntityFile:

    def test_json_file(self, tmp_path, valid_entity):
        path = tmp_path / "restaurant.json"
        path.write_text(json.dumps(valid_entity()), encoding="utf-8")
        assert load_entity_file(path).entity_type == "restaurant"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "hotel.yaml"
        path.write_text("entityType: hotel\nname:\n  en: Grand Hotel\n", encoding="utf-8")

        entity = load_entity_file(str(path))
        assert entity.entity_type == "hotel"
        assert entity.name == {"en": "Grand Hotel"}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("name: [unclosed\n", encoding="utf-8")
        with pytest.raises(EntityParseError):
            load_entity_file(path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(EmptyInputError):
            load_entity_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_entity_file(tmp_path / "absent.json")
