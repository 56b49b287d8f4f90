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

"""Best practice stage: URL shape and description length."""

from typing import Iterable

from ..models.entity import Entity
from ..models.findings import Category, Finding, suggestion, warning
from ..taxonomy.taxonomy import Taxonomy


def check_best_practices(entity: Entity, taxonomy: Taxonomy) -> Iterable[Finding]:
    url = entity.url
    if url and not taxonomy.is_url(url):
        yield warning("url", "URL should start with http:// or https://", Category.BEST_PRACTICE)

    text = entity.english_text("description")
    if text and len(text) < taxonomy.min_description_length:
        yield suggestion(
            "description",
            "Description is quite short, consider adding more detail",
            Category.BEST_PRACTICE,
            "Aim for at least 50-100 characters for better SEO and understanding",
        )
