"""Validator for AIML entity documents.

Entities are checked against a versioned taxonomy and receive a graded
assessment (findings, score, completeness) rather than a pass/fail verdict.
"""

from .config import ValidatorConfig
from .exceptions import (
    AimlValidatorError,
    ConfigurationError,
    EmptyInputError,
    EntityParseError,
    FormatVersionError,
    InvalidJsonError,
    MalformedSchemaError,
    ModuleReferenceError,
    NonObjectInputError,
    NullInputError,
    SchemaNetworkError,
    SchemaNotFoundError,
    SchemaSourceError,
    TaxonomyError,
)
from .models import (
    Category,
    CompatibilityReport,
    DependencyResolution,
    Entity,
    EntityInfo,
    Finding,
    ModuleRecord,
    PerformanceMetrics,
    SchemaConformanceReport,
    Severity,
    ValidationResult,
)
from .parsing import load_entity_file, parse_entity
from .resolvers import ModuleResolver
from .rules import RuleEngine
from .schema_source import (
    HttpSchemaSource,
    LocalSchemaSource,
    SchemaCache,
    SchemaSource,
)
from .scoring import ScoringEngine
from .taxonomy import DEFAULT_TAXONOMY_VERSION as AIML_VERSION, Taxonomy, load_taxonomy
from .validator import AimlValidator, validate

__all__ = [
    "AIML_VERSION",
    "AimlValidator",
    "validate",
    "ValidatorConfig",
    "AimlValidatorError",
    "ConfigurationError",
    "EmptyInputError",
    "EntityParseError",
    "FormatVersionError",
    "InvalidJsonError",
    "MalformedSchemaError",
    "ModuleReferenceError",
    "NonObjectInputError",
    "NullInputError",
    "SchemaNetworkError",
    "SchemaNotFoundError",
    "SchemaSourceError",
    "TaxonomyError",
    "Category",
    "CompatibilityReport",
    "DependencyResolution",
    "Entity",
    "EntityInfo",
    "Finding",
    "ModuleRecord",
    "PerformanceMetrics",
    "SchemaConformanceReport",
    "Severity",
    "ValidationResult",
    "load_entity_file",
    "parse_entity",
    "ModuleResolver",
    "RuleEngine",
    "HttpSchemaSource",
    "LocalSchemaSource",
    "SchemaCache",
    "SchemaSource",
    "ScoringEngine",
    "Taxonomy",
    "load_taxonomy",
]
