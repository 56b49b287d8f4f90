"""Data model: entities, findings, results and module records."""

from .conformance import SchemaConformanceReport
from .entity import ENTITY_FIELDS, Entity
from .findings import Category, Finding, FindingCounts, Severity
from .module_record import (
    DEFAULT_MODULE_VERSION,
    CompatibilityReport,
    DependencyResolution,
    ModuleRecord,
)
from .result import EntityInfo, PerformanceMetrics, ValidationResult

__all__ = [
    "SchemaConformanceReport",
    "ENTITY_FIELDS",
    "Entity",
    "Category",
    "Finding",
    "FindingCounts",
    "Severity",
    "DEFAULT_MODULE_VERSION",
    "CompatibilityReport",
    "DependencyResolution",
    "ModuleRecord",
    "EntityInfo",
    "PerformanceMetrics",
    "ValidationResult",
]
