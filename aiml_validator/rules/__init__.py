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

"""Rule engine and the individual rule stages."""

from .engine import DEFAULT_STAGES, RuleEngine
from .best_practices import check_best_practices
from .capabilities import check_capabilities, check_entity_capabilities, check_site_capabilities
from .modules import check_modules
from .multilingual import check_multilingual_fields
from .structure import check_context_and_version, check_critical_fields, check_hierarchy

__all__ = [
    "DEFAULT_STAGES",
    "RuleEngine",
    "check_best_practices",
    "check_capabilities",
    "check_entity_capabilities",
    "check_site_capabilities",
    "check_modules",
    "check_multilingual_fields",
    "check_context_and_version",
    "check_critical_fields",
    "check_hierarchy",
]
