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

import logging
import posixpath
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from itertools import combinations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

import jsonschema

from ..exceptions import MalformedSchemaError, ModuleReferenceError, SchemaSourceError
from ..models.conformance import SchemaConformanceReport
from ..models.entity import Entity
from ..models.findings import Category, error, warning
from ..models.module_record import (
    DEFAULT_MODULE_VERSION,
    UNKNOWN_MODULE_TYPE,
    CompatibilityReport,
    DependencyResolution,
    ModuleRecord,
)
from ..schema_source.base import SchemaSource
from ..schema_source.cache import SchemaCache
from ..schema_source.documents import check_document
from ..taxonomy.taxonomy import Taxonomy

logger = logging.getLogger(__name__)


def module_type_from_ref(ref: str) -> str:
    """Module type named by a reference: last path segment without its extension.

    ``/templates/module/auth.json`` -> ``auth``; a bare name is returned as is.
    """
    segment = ref.rstrip("/").rsplit("/", 1)[-1]
    stem, _ = posixpath.splitext(segment)
    return stem or ref


def _unique(module_types: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    ordered = []
    for module_type in module_types:
        if module_type not in seen:
            seen.add(module_type)
            ordered.append(module_type)
    return ordered


def _reference_of(module_ref: Any) -> Optional[str]:
    if isinstance(module_ref, Mapping):
        ref = module_ref.get("$ref")
        if isinstance(ref, str) and ref:
            return ref
    return None


# Module document keys read by the resolver itself, not JSON Schema keywords.
_MODULE_METADATA_KEYS = ("version", "dependencies", "conflicts")


def _compile_schema(
    schema: Mapping[str, Any], origin: str, ignored: Sequence[str] = ()
) -> jsonschema.Draft7Validator:
    schema = {key: value for key, value in schema.items() if key not in ignored}
    try:
        jsonschema.Draft7Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise MalformedSchemaError(f"Invalid JSON schema in {origin}: {e.message}") from e
    return jsonschema.Draft7Validator(schema)


def _violations(validator: jsonschema.Draft7Validator, instance: Any) -> List[jsonschema.ValidationError]:
    return sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])


def _field_path(prefix: str, path: Iterable[Any]) -> str:
    parts = [str(p) for p in path]
    if prefix:
        parts.insert(0, prefix)
    return ".".join(parts) or "entity"


class ModuleResolver:
    """Resolves capability-module references and checks the module graph.

    Schema retrieval failures never propagate out of the public methods: they
    become error-flagged records, warnings on the returned reports, or
    fallback values.
    """

    def __init__(self, schema_source: SchemaSource, taxonomy: Taxonomy, max_workers: int = 1):
        """Initialize the module resolver.

        Args:
            schema_source: Where module and entity schemas are retrieved from
            taxonomy: Taxonomy providing the standard module list and fallbacks
            max_workers: Number of threads used for batch lookups (1 = sequential)
        """
        self.schema_source = schema_source
        self.taxonomy = taxonomy
        self.max_workers = max(1, int(max_workers))
        self.cache = SchemaCache()

    # Reference resolution

    def resolve(self, module_refs: Iterable[Any]) -> List[ModuleRecord]:
        """Resolve module references into records, preserving input order.

        Each distinct ``$ref`` in the batch is looked up once. A failed lookup is
        logged once and flags every record that uses it; it does not abort the
        batch.
        """
        refs = list(module_refs)
        schemas = self._load_references(refs)
        return [self._resolve_safely(ref, schemas) for ref in refs]

    def resolve_one(self, module_ref: Mapping[str, Any]) -> ModuleRecord:
        """Resolve a single reference.

        Raises:
            ModuleReferenceError: If the reference names neither ``$ref`` nor ``moduleType``
            SchemaSourceError: If the referenced schema cannot be retrieved
        """
        return self._resolve_record(module_ref, {})

    def _resolve_record(self, module_ref: Any, schemas: Mapping[str, Any]) -> ModuleRecord:
        if not isinstance(module_ref, Mapping):
            raise ModuleReferenceError(f"Module reference must be an object, got {type(module_ref).__name__}")

        ref = _reference_of(module_ref)
        if ref is not None:
            schema = schemas[ref] if ref in schemas else self.load_reference(ref)
            if isinstance(schema, SchemaSourceError):
                raise schema
            return self._merge_indirect(ref, module_ref, schema)

        module_type = module_ref.get("moduleType")
        if isinstance(module_type, str) and module_type:
            return ModuleRecord(
                module_type=module_type,
                version=module_ref.get("version") or DEFAULT_MODULE_VERSION,
                required=bool(module_ref.get("required", False)),
                properties=dict(self._inline_properties(module_ref)),
            )

        raise ModuleReferenceError("Module must have either $ref or moduleType property")

    def _merge_indirect(self, ref: str, module_ref: Mapping[str, Any], schema: Mapping[str, Any]) -> ModuleRecord:
        properties: Dict[str, Any] = {}
        schema_properties = schema.get("properties")
        if isinstance(schema_properties, Mapping):
            properties.update(schema_properties)
        properties.update(self._inline_properties(module_ref))
        properties["$ref"] = ref

        return ModuleRecord(
            module_type=module_type_from_ref(ref),
            version=module_ref.get("version") or schema.get("version") or DEFAULT_MODULE_VERSION,
            required=bool(module_ref.get("required", False)),
            properties=properties,
        )

    @staticmethod
    def _inline_properties(module_ref: Mapping[str, Any]) -> Mapping[str, Any]:
        properties = module_ref.get("properties")
        return properties if isinstance(properties, Mapping) else {}

    def _load_references(self, module_refs: List[Any]) -> Dict[str, Any]:
        """Load every distinct ``$ref`` of a batch; failed lookups are kept as their exception."""
        refs = _unique(ref for ref in map(_reference_of, module_refs) if ref is not None)
        if self.max_workers > 1 and len(refs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(self._try_load_reference, refs))
        else:
            outcomes = [self._try_load_reference(ref) for ref in refs]
        return dict(zip(refs, outcomes))

    def _try_load_reference(self, ref: str) -> Any:
        try:
            return self.load_reference(ref)
        except SchemaSourceError as e:
            logger.warning(f"Failed to load module reference {ref}: {e}")
            return e

    def _resolve_safely(self, module_ref: Any, schemas: Mapping[str, Any]) -> ModuleRecord:
        try:
            return self._resolve_record(module_ref, schemas)
        except ModuleReferenceError as e:
            logger.warning(f"Failed to process module {module_ref!r}: {e}")
            return self._error_record(module_ref, str(e))
        except SchemaSourceError as e:
            # Already logged when the batch references were loaded.
            return self._error_record(module_ref, str(e))

    @staticmethod
    def _error_record(module_ref: Any, message: str) -> ModuleRecord:
        original = dict(module_ref) if isinstance(module_ref, Mapping) else {"value": module_ref}
        module_type = original.get("moduleType")
        version = original.get("version")
        return ModuleRecord(
            module_type=module_type if isinstance(module_type, str) and module_type else UNKNOWN_MODULE_TYPE,
            version=version if isinstance(version, str) and version else DEFAULT_MODULE_VERSION,
            required=False,
            properties={**original, "_error": message},
            error=message,
        )

    def load_reference(self, ref: str) -> Dict[str, Any]:
        """Module schema for a reference, cached by the reference string.

        ``/...`` paths and bare names are looked up by module name, ``http...``
        references by URL.
        """
        cached = self.cache.get(ref)
        if cached is not None:
            return cached

        if ref.startswith("/"):
            document = self.schema_source.fetch_module_schema(module_type_from_ref(ref))
        elif ref.startswith("http"):
            document = self.schema_source.fetch_by_reference(ref)
        else:
            document = self.schema_source.fetch_module_schema(ref)

        schema = check_document("module", document, origin=ref)
        self.cache.set(ref, schema)
        return schema

    def load_module_schema(self, module_type: str) -> Dict[str, Any]:
        """Module schema by module name, cached per resolver."""
        key = f"module:{module_type}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        schema = check_document("module", self.schema_source.fetch_module_schema(module_type), origin=module_type)
        self.cache.set(key, schema)
        return schema

    def load_entity_schema(self, entity_type: str) -> Dict[str, Any]:
        """Entity schema by entity type, cached per resolver."""
        key = f"entity:{entity_type}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        schema = check_document("entity", self.schema_source.fetch_entity_schema(entity_type), origin=entity_type)
        self.cache.set(key, schema)
        return schema

    def preload_schemas(self, entity_types: Iterable[str]) -> List[str]:
        """Load entity schemas into the cache ahead of use.

        Returns:
            The entity types whose schema is now cached; failures are logged and skipped
        """
        types = _unique(entity_types)
        if self.max_workers > 1 and len(types) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                loaded = list(executor.map(self._try_load_entity_schema, types))
        else:
            loaded = [self._try_load_entity_schema(entity_type) for entity_type in types]
        return [entity_type for entity_type, ok in zip(types, loaded) if ok]

    def _try_load_entity_schema(self, entity_type: str) -> bool:
        try:
            self.load_entity_schema(entity_type)
        except SchemaSourceError as e:
            logger.warning(f"Failed to preload schema for {entity_type}: {e}")
            return False
        return True

    # Schema conformance

    def validate_against_entity_schema(
        self, entity: Any, entity_type: Optional[str] = None
    ) -> SchemaConformanceReport:
        """Validate an entity against the JSON schema published for its type.

        Modules given by ``$ref`` are also validated against their module
        schema; a module whose schema cannot be loaded is reported as a
        warning.

        Args:
            entity: Entity or entity mapping
            entity_type: Schema to validate against (defaults to the entity's ``entityType``)
        """
        document = entity.to_dict() if isinstance(entity, Entity) else entity
        if entity_type is None and isinstance(document, Mapping):
            entity_type = document.get("entityType")

        if not isinstance(entity_type, str) or not entity_type:
            report = SchemaConformanceReport()
            report.add_error(error(
                "entityType",
                "Cannot determine the entity type to validate against",
                Category.SCHEMA,
                "Set entityType or pass the entity type explicitly",
            ))
            return report

        report = SchemaConformanceReport(entity_type=entity_type)
        try:
            validator = _compile_schema(self.load_entity_schema(entity_type), origin=f"entity schema {entity_type}")
        except SchemaSourceError as e:
            logger.warning(f"Cannot validate against schema for {entity_type}: {e}")
            report.add_error(error("entity", f"Schema validation error: {e}", Category.SCHEMA))
            return report

        for violation in _violations(validator, document):
            report.add_error(error(_field_path("", violation.absolute_path), violation.message, Category.SCHEMA))

        if isinstance(document, Mapping):
            self._validate_module_references(document.get("modules"), report)
        return report

    def _validate_module_references(self, modules: Any, report: SchemaConformanceReport) -> None:
        if isinstance(modules, Mapping):
            entries = [(str(key), value) for key, value in modules.items()]
        elif isinstance(modules, list):
            entries = [(str(index), value) for index, value in enumerate(modules)]
        else:
            return

        for key, module in entries:
            ref = _reference_of(module)
            if ref is None:
                continue
            try:
                validator = _compile_schema(self.load_reference(ref), origin=ref, ignored=_MODULE_METADATA_KEYS)
            except SchemaSourceError as e:
                logger.warning(f"Could not validate module {ref}: {e}")
                report.add_warning(warning(
                    "modules",
                    f"Could not validate module: {ref}",
                    Category.SCHEMA,
                    "Check if module reference is valid",
                ))
                continue

            for violation in _violations(validator, module):
                report.add_error(error(
                    _field_path(f"modules.{key}", violation.absolute_path), violation.message, Category.SCHEMA
                ))

    # Module graph

    def dependency_report(self, module_types: Iterable[str]) -> DependencyResolution:
        """Breadth-first transitive closure over declared dependencies.

        Each module is marked visited before its dependencies are enqueued, so
        cycles terminate and every module is looked up at most once.
        """
        visited: Set[str] = set()
        warnings: List[str] = []
        queue = deque()

        for module_type in module_types:
            if module_type not in visited:
                visited.add(module_type)
                queue.append(module_type)

        while queue:
            current = queue.popleft()
            try:
                dependencies = self.load_module_schema(current).get("dependencies") or []
            except SchemaSourceError as e:
                message = f"Failed to resolve dependencies for module {current}: {e}"
                logger.warning(message)
                warnings.append(message)
                continue

            for dependency in dependencies:
                if dependency not in visited:
                    visited.add(dependency)
                    queue.append(dependency)

        return DependencyResolution(modules=frozenset(visited), warnings=warnings)

    def close_dependencies(self, module_types: Iterable[str]) -> Set[str]:
        return set(self.dependency_report(module_types).modules)

    def check_compatibility(self, module_types: Iterable[str]) -> CompatibilityReport:
        """Check every unordered pair of modules for declared conflicts.

        Both sides of a pair are consulted, so the result does not depend on
        the input order. Modules whose schema cannot be loaded are reported as
        warnings; their own conflict lists are then unknown.
        """
        report = CompatibilityReport()
        modules = _unique(module_types)

        conflicts: Dict[str, List[str]] = {}
        for module_type in modules:
            try:
                conflicts[module_type] = list(self.load_module_schema(module_type).get("conflicts") or [])
            except SchemaSourceError as e:
                logger.warning(f"Could not load schema for module {module_type}: {e}")
                report.warnings.append(f"Could not load schema for module: {module_type}")

        for module_a, module_b in combinations(modules, 2):
            if module_b in conflicts.get(module_a, ()):
                report.conflicts.append(f"{module_a} conflicts with {module_b}")
                report.compatible = False
            if module_a in conflicts.get(module_b, ()):
                report.conflicts.append(f"{module_b} conflicts with {module_a}")
                report.compatible = False

        return report

    # Schema-backed queries

    def module_dependencies(self, module_type: str) -> List[str]:
        try:
            return list(self.load_module_schema(module_type).get("dependencies") or [])
        except SchemaSourceError as e:
            logger.debug(f"No dependencies for module {module_type}: {e}")
            return []

    def validate_module_config(self, module_type: str, config: Optional[Mapping[str, Any]]) -> bool:
        """Whether ``config`` carries every field the module schema requires."""
        if not self.taxonomy.is_standard_module(module_type):
            return False
        try:
            schema = self.load_module_schema(module_type)
        except SchemaSourceError as e:
            logger.debug(f"Cannot validate config for module {module_type}: {e}")
            return False

        config = config if isinstance(config, Mapping) else {}
        return all(field_name in config for field_name in schema.get("required") or [])

    def recommended_modules(self, entity_type: str) -> List[str]:
        try:
            schema = self.load_entity_schema(entity_type)
        except SchemaSourceError as e:
            logger.debug(f"Using fallback module recommendations for {entity_type}: {e}")
            return list(self.taxonomy.fallback_recommended_modules)
        return list(schema.get("recommendedModules") or [])

    def available_modules(self) -> List[str]:
        registry = self._registry()
        if registry is None:
            return list(self.taxonomy.modules)
        modules = registry.get("modules")
        return list(modules) if isinstance(modules, Mapping) else []

    def available_entity_types(self) -> List[str]:
        registry = self._registry()
        if registry is None:
            return self.taxonomy.entity_types()
        entities = registry.get("entities")
        return list(entities) if isinstance(entities, Mapping) else []

    def _registry(self) -> Optional[Dict[str, Any]]:
        try:
            return check_document("registry", self.schema_source.fetch_registry(), origin="registry")
        except SchemaSourceError as e:
            logger.debug(f"Schema registry unavailable, using taxonomy: {e}")
            return None

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_size(self) -> int:
        return self.cache.size()
