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

"""Multilingual field stage (``name`` and ``description``).

Both fields must be mappings from language code to text and must contain an
English ("en") entry.
"""

from typing import Any, Iterable, Mapping

from ..models.entity import Entity
from ..models.findings import Category, Finding, error, warning
from ..taxonomy.taxonomy import Taxonomy
from .common import is_blank_text, json_type_name


def check_multilingual_fields(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    for field_name in taxonomy.multilingual_fields:
        value = entity.get(field_name)
        if not value:
            # Reported by the critical field stage.
            continue
        yield from _check_multilingual_value(field_name, value, taxonomy)


def _check_multilingual_value(field_name: str, value: Any, taxonomy: Taxonomy) -> Iterable[Finding]:
    if isinstance(value, str):
        yield error(
            field_name,
            f"{field_name} must be a multilingual object in v{taxonomy.version}",
            Category.STRUCTURE,
            f'Convert to object format: {{"en": "{value[:40]}"}}',
        )
        return

    if not isinstance(value, Mapping):
        yield error(
            field_name,
            f"{field_name} must be a multilingual object, got {json_type_name(value)}",
            Category.STRUCTURE,
            'Use an object mapping language codes to text, e.g. {"en": "..."}',
        )
        return

    english = value.get("en")
    if is_blank_text(english):
        yield error(
            field_name,
            f"English {field_name} (en) is required in multilingual {field_name}s",
            Category.STRUCTURE,
            f'Add "en" field - English {field_name} is mandatory for international compatibility',
        )
    elif field_name == "description" and len(english) < taxonomy.min_description_length:
        yield warning(
            field_name,
            f"English description should be at least {taxonomy.min_description_length} characters",
            Category.BEST_PRACTICE,
            "Provide detailed description for better understanding and SEO",
        )

    for lang, text in value.items():
        if not taxonomy.is_language_code(lang):
            yield warning(
                field_name,
                f"Language code '{lang}' might not be valid ISO 639-1 format",
                Category.BEST_PRACTICE,
                'Use ISO 639-1 language codes (e.g., "en", "es", "fr", "en-US")',
            )
        if is_blank_text(text):
            yield warning(
                field_name,
                f"Empty {field_name} value for language '{lang}'",
                Category.STRUCTURE,
                f"Provide meaningful {field_name}s for all declared languages",
            )
