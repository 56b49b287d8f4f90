"""Input parsing for entity documents."""

from .entity_parser import load_entity_file, parse_entity

__all__ = ["load_entity_file", "parse_entity"]
