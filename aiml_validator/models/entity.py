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

"""Entity record: recognized fields plus an open mapping for everything else."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple


# wire name -> attribute name
ENTITY_FIELDS: Dict[str, str] = {
    "@context": "context",
    "@id": "id",
    "@type": "type",
    "schemaVersion": "schema_version",
    "entityType": "entity_type",
    "entityCategory": "entity_category",
    "subcategory": "subcategory",
    "name": "name",
    "description": "description",
    "shortDescription": "short_description",
    "url": "url",
    "logo": "logo",
    "properties": "properties",
    "modules": "modules",
    "entityCapabilities": "entity_capabilities",
    "siteCapabilities": "site_capabilities",
    "foundingDate": "founding_date",
    "lastModified": "last_modified",
    "serviceType": "service_type",
}


@dataclass
class Entity:
    """A caller-supplied entity.

    Values are kept exactly as given; wrong types are reported by the rule
    engine, not rejected here. A field is *present* when its value is not None.
    """

    context: Any = None
    id: Any = None
    type: Any = None
    schema_version: Any = None
    entity_type: Any = None
    entity_category: Any = None
    subcategory: Any = None
    name: Any = None
    description: Any = None
    short_description: Any = None
    url: Any = None
    logo: Any = None
    properties: Any = None
    modules: Any = None
    entity_capabilities: Any = None
    site_capabilities: Any = None
    founding_date: Any = None
    last_modified: Any = None
    service_type: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)
    # Original key order, used by to_dict().
    declared_keys: Tuple[str, ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Entity":
        recognized: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            attr = ENTITY_FIELDS.get(key)
            if attr is None:
                extra[key] = value
            else:
                recognized[attr] = value
        return cls(**recognized, extra=extra, declared_keys=tuple(data.keys()))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a field by its wire name (e.g. ``@context`` or ``entityType``)."""
        attr = ENTITY_FIELDS.get(key)
        if attr is None:
            return self.extra.get(key, default)
        value = getattr(self, attr)
        return default if value is None else value

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    @property
    def module_keys(self) -> List[str]:
        if isinstance(self.modules, Mapping):
            return [str(key) for key in self.modules.keys()]
        return []

    def english_text(self, key: str) -> Optional[str]:
        """Return the "en" value of a multilingual field, or a plain string value."""
        value = self.get(key)
        if isinstance(value, str):
            return value
        if isinstance(value, Mapping):
            text = value.get("en")
            return text if isinstance(text, str) else None
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Rebuild the wire mapping, keeping the original key order."""
        result: Dict[str, Any] = {}
        attr_to_key = {attr: key for key, attr in ENTITY_FIELDS.items()}
        keys = list(self.declared_keys)
        # Fields assigned after construction come last.
        for f in fields(self):
            key = attr_to_key.get(f.name)
            if key is not None and key not in keys and getattr(self, f.name) is not None:
                keys.append(key)
        keys.extend(key for key in self.extra if key not in keys)

        for key in keys:
            attr = ENTITY_FIELDS.get(key)
            if attr is None:
                if key in self.extra:
                    result[key] = self.extra[key]
            else:
                result[key] = getattr(self, attr)
        return result
